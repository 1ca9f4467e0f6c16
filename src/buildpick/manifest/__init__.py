"""Manifest collaborators: local files and HTTP fetching."""

from buildpick.manifest.client import ManifestClient
from buildpick.manifest.loader import load_manifest, manifest_from_data, parse_manifest

__all__ = [
    "ManifestClient",
    "load_manifest",
    "manifest_from_data",
    "parse_manifest",
]
