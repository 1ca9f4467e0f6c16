"""Build manifest loading from JSON or YAML.

Typical usage::

    manifest = load_manifest(Path("build/polymer.json"))
    selection = choose_build(manifest.builds, capabilities)
"""

from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003
from typing import Any

import yaml
from pydantic import ValidationError

from buildpick.core.models import Manifest
from buildpick.errors import ManifestError

MANIFEST_SUFFIXES = (".json", ".yaml", ".yml")


def manifest_format(name: str) -> str:
    """Return ``"yaml"`` for ``.yaml``/``.yml`` names, ``"json"`` otherwise."""
    return "yaml" if name.endswith((".yaml", ".yml")) else "json"


def manifest_from_data(data: Any) -> Manifest:
    """Validate already-decoded manifest data.

    Raises:
        ManifestError: If *data* is not a mapping or fails validation.
    """
    if not isinstance(data, dict):
        raise ManifestError("manifest must be a mapping with a 'builds' list")
    try:
        return Manifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(str(exc)) from exc


def parse_manifest(raw: str | bytes, *, format: str = "json") -> Manifest:
    """Parse a raw string into a validated :class:`Manifest`.

    Args:
        raw: The raw file contents.
        format: ``"json"`` (default) or ``"yaml"``.
    """
    try:
        data = yaml.safe_load(raw) if format == "yaml" else json.loads(raw)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        raise ManifestError(f"{format.upper()} parse error: {exc}") from exc
    return manifest_from_data(data)


def load_manifest(path: Path) -> Manifest:
    """Read and parse a manifest file; the format follows the suffix."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"cannot read {path}: {exc}") from exc
    return parse_manifest(raw, format=manifest_format(path.name))
