"""ManifestClient — fetches a build manifest over HTTP."""

from __future__ import annotations

import logging

import httpx

from buildpick.core.models import Manifest  # noqa: TC001
from buildpick.errors import ManifestFetchError
from buildpick.manifest.loader import MANIFEST_SUFFIXES, manifest_format, parse_manifest
from buildpick.utils.telemetry import fetch_span, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

DEFAULT_MANIFEST_PATH = "polymer.json"


class ManifestClient:
    """Fetches manifests relative to a site's base URL.

    Usage::

        async with ManifestClient("https://app.example.com/") as client:
            manifest = await client.fetch()
    """

    def __init__(self, base_url: str, *, timeout: float = 10.0) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> ManifestClient:
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "ManifestClient must be used as an async context manager"
            raise RuntimeError(msg)
        return self._client

    async def fetch(self, path: str = DEFAULT_MANIFEST_PATH) -> Manifest:
        """GET *path* and parse it into a :class:`Manifest`.

        Raises:
            ManifestFetchError: On connection errors, timeouts and non-2xx responses.
            ManifestError: If the body is not a valid manifest.
        """
        url = f"{self._base_url.rstrip('/')}/{path.lstrip('/')}"
        with fetch_span(_tracer, url):
            try:
                response = await self._http().get(path)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise ManifestFetchError(url, str(exc)) from exc

        logger.debug("Fetched manifest from %s", url)
        return parse_manifest(response.text, format=manifest_format(httpx.URL(path).path))


def split_manifest_url(url: str) -> tuple[str, str]:
    """Split ``https://host/app/polymer.json`` into base URL and manifest path.

    A URL whose path does not name a manifest file is taken as the base URL.
    A query string stays with the manifest path; fragments are dropped.

    Raises:
        ManifestFetchError: If *url* cannot be parsed.
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ManifestFetchError(url, str(exc)) from exc
    location = url.split("#", 1)[0].split("?", 1)[0]
    if parsed.path.endswith(MANIFEST_SUFFIXES):
        base, _, name = location.rpartition("/")
        if parsed.query:
            name += "?" + parsed.query.decode("ascii")
        return base + "/", name
    return location.rstrip("/") + "/", DEFAULT_MANIFEST_PATH


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))
