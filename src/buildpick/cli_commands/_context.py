"""Helpers shared by commands: settings, matrix and manifest resolution."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from buildpick.config import Settings
from buildpick.core.matrix import CapabilityMatrix, load_matrix
from buildpick.core.matrix_data import DEFAULT_MATRIX
from buildpick.core.models import Manifest  # noqa: TC001
from buildpick.manifest.client import ManifestClient, is_remote, split_manifest_url
from buildpick.manifest.loader import load_manifest

matrix_option = click.option(
    "--matrix",
    "matrix_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Capability matrix override file (YAML or JSON).",
)


def current_settings() -> Settings:
    ctx = click.get_current_context()
    obj = ctx.find_object(Settings)
    return obj if obj is not None else Settings()


def resolve_matrix(matrix_file: str | None) -> CapabilityMatrix:
    """Default matrix, layered with the option's or the settings' override file."""
    path = matrix_file or current_settings().matrix
    if not path:
        return DEFAULT_MATRIX
    return load_matrix(Path(path), base=DEFAULT_MATRIX)


def resolve_manifest(location: str | None) -> Manifest:
    """Load a manifest from a local path or fetch it from an http(s) URL."""
    settings = current_settings()
    location = location or settings.manifest
    if not is_remote(location):
        return load_manifest(Path(location))

    base_url, path = split_manifest_url(location)

    async def _fetch() -> Manifest:
        async with ManifestClient(base_url, timeout=settings.fetch_timeout) as client:
            return await client.fetch(path)

    return asyncio.run(_fetch())
