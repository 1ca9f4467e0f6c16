"""Error types raised around the selection core.

The core itself (version parsing, detection, selection) never raises; these
cover the collaborators that read manifests, matrices and settings.
"""

from __future__ import annotations


class BuildPickError(Exception):
    """Base error for all buildpick failures."""


class ManifestError(BuildPickError):
    """A build manifest could not be read, parsed or validated."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Invalid manifest" + (f": {detail}" if detail else ""))


class ManifestFetchError(ManifestError):
    """Fetching a manifest over HTTP failed."""

    def __init__(self, url: str, detail: str = "") -> None:
        self.url = url
        super().__init__(f"cannot fetch {url}" + (f" ({detail})" if detail else ""))


class MatrixConfigError(BuildPickError):
    """A capability matrix override file is malformed."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid capability matrix: {detail}")


class ConfigError(BuildPickError):
    """A settings file failed parsing or validation."""


class NoMatchingBuildError(BuildPickError):
    """No build in the manifest can be served to the client."""

    def __init__(self, build_count: int) -> None:
        self.build_count = build_count
        super().__init__(f"No servable build among {build_count} candidate(s)")
