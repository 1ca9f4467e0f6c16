"""Redirect assembly — compose fetch, detect and select into a destination URL.

This is the thin outer layer around the selection core: it turns the
chosen build into a URL on the current origin.  Performing the navigation
itself is left to the caller (an HTTP 302, a ``<meta refresh>``, a
``location.assign`` in a generated page, ...).
"""

from __future__ import annotations

import logging

import httpx

from buildpick.core.detector import CapabilityDetector
from buildpick.core.matrix import CapabilityMatrix  # noqa: TC001
from buildpick.core.matrix_data import DEFAULT_MATRIX
from buildpick.core.models import BuildSelection, Manifest  # noqa: TC001
from buildpick.core.selector import choose_build
from buildpick.core.useragent import DEFAULT_PARSER, UserAgentParser
from buildpick.manifest.client import DEFAULT_MANIFEST_PATH, ManifestClient  # noqa: TC001

logger = logging.getLogger(__name__)


def redirect_path(selection: BuildSelection) -> str:
    """Return the absolute path a selection is served under.

    The base path gets a leading ``/`` when it lacks one; an empty base path
    falls back to ``/<name>``.
    """
    if selection.base_path:
        if selection.base_path.startswith("/"):
            return selection.base_path
        return "/" + selection.base_path
    return "/" + selection.name


def build_redirect_url(current_url: str, selection: BuildSelection) -> str:
    """Combine the current origin (scheme, host, port) with the build path.

    The current path, query, fragment and any credentials are dropped.

    Raises:
        ValueError: If *current_url* is not absolute.
    """
    try:
        url = httpx.URL(current_url)
    except httpx.InvalidURL as exc:
        msg = f"invalid current URL {current_url!r}: {exc}"
        raise ValueError(msg) from exc
    if not url.scheme or not url.host:
        msg = f"current URL must be absolute, got {current_url!r}"
        raise ValueError(msg)
    return f"{url.scheme}://{url.netloc.decode('ascii')}{redirect_path(selection)}"


class Redirector:
    """Decides where a client should be sent for a given manifest."""

    def __init__(
        self,
        detector: CapabilityDetector | None = None,
        *,
        matrix: CapabilityMatrix | None = None,
        parser: UserAgentParser | None = None,
    ) -> None:
        if detector is None:
            detector = CapabilityDetector(
                DEFAULT_MATRIX if matrix is None else matrix,
                DEFAULT_PARSER if parser is None else parser,
            )
        elif matrix is not None or parser is not None:
            msg = "pass either a detector or matrix/parser, not both"
            raise TypeError(msg)
        self.detector = detector

    def choose(self, manifest: Manifest, user_agent: str | None) -> BuildSelection | None:
        capabilities = self.detector.capabilities(user_agent)
        return choose_build(manifest.builds, capabilities)

    def resolve(self, manifest: Manifest, user_agent: str | None, current_url: str) -> str | None:
        """Return the destination URL, or ``None`` when no build qualifies.

        On ``None`` the caller decides what to do, typically staying on the
        current page.
        """
        selection = self.choose(manifest, user_agent)
        if selection is None:
            return None
        destination = build_redirect_url(current_url, selection)
        logger.info("Redirecting to %s", destination)
        return destination

    async def fetch_and_resolve(
        self,
        client: ManifestClient,
        user_agent: str | None,
        current_url: str,
        *,
        path: str = DEFAULT_MANIFEST_PATH,
    ) -> str | None:
        """Fetch the manifest through *client* and resolve the destination."""
        manifest = await client.fetch(path)
        return self.resolve(manifest, user_agent, current_url)
