"""``buildpick detect`` — show what a user agent is capable of."""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from buildpick.cli_commands._context import matrix_option, resolve_matrix
from buildpick.cli_commands._output import console, print_detection
from buildpick.core.detector import detect
from buildpick.errors import BuildPickError


@click.command("detect")
@click.argument("user_agent")
@matrix_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def detect_cmd(user_agent: str, matrix_file: str | None, as_json: bool) -> None:
    """Print the browser signature and capabilities of USER_AGENT."""
    try:
        matrix = resolve_matrix(matrix_file)
    except BuildPickError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    print_detection(detect(user_agent, matrix=matrix), as_json=as_json)
