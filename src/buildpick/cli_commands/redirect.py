"""``buildpick redirect`` — print the redirect destination for a client."""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from buildpick.cli_commands._context import matrix_option, resolve_manifest, resolve_matrix
from buildpick.cli_commands._output import console
from buildpick.core.detector import CapabilityDetector
from buildpick.errors import BuildPickError
from buildpick.serve.redirect import Redirector


@click.command()
@click.argument("manifest", required=False)
@click.option("--user-agent", "-u", required=True, help="Client user-agent string.")
@click.option("--url", "current_url", required=True, help="URL of the page being redirected from.")
@matrix_option
def redirect(manifest: str | None, user_agent: str, current_url: str, matrix_file: str | None) -> None:
    """Print the URL a client on CURRENT_URL should be sent to."""
    try:
        redirector = Redirector(CapabilityDetector(resolve_matrix(matrix_file)))
        destination = redirector.resolve(resolve_manifest(manifest), user_agent, current_url)
    except (BuildPickError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    if destination is None:
        console.print("[yellow]No servable build; stay on the current page.[/yellow]")
        sys.exit(1)

    click.echo(destination)
