"""``buildpick choose`` — pick a build from a manifest for a user agent."""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from buildpick.cli_commands._context import matrix_option, resolve_manifest, resolve_matrix
from buildpick.cli_commands._output import console, print_selection
from buildpick.core.detector import detect
from buildpick.core.selector import choose_build
from buildpick.errors import BuildPickError


@click.command()
@click.argument("manifest", required=False)
@click.option("--user-agent", "-u", required=True, help="Client user-agent string.")
@matrix_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def choose(manifest: str | None, user_agent: str, matrix_file: str | None, as_json: bool) -> None:
    """Choose the build to serve from MANIFEST.

    MANIFEST is a local JSON/YAML file or an http(s) URL; it defaults to the
    configured manifest.  Exits with status 1 when no build qualifies.
    """
    try:
        matrix = resolve_matrix(matrix_file)
        loaded = resolve_manifest(manifest)
    except BuildPickError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    detection = detect(user_agent, matrix=matrix)
    selection = choose_build(loaded.builds, detection.capabilities)
    if selection is None:
        console.print(f"[yellow]No servable build among {len(loaded.builds)} candidate(s).[/yellow]")
        sys.exit(1)

    print_selection(selection, detection, as_json=as_json)
