"""``buildpick matrix`` — display the capability matrix in effect."""

from __future__ import annotations

import sys

import click
from rich.markup import escape

from buildpick.cli_commands._context import matrix_option, resolve_matrix
from buildpick.cli_commands._output import console, matrix_data, print_json, print_matrix_table
from buildpick.errors import BuildPickError


@click.command("matrix")
@matrix_option
@click.option("--family", default=None, help="Show only one browser family.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def matrix_cmd(matrix_file: str | None, family: str | None, as_json: bool) -> None:
    """Show per-family capability rules, including any overrides."""
    try:
        matrix = resolve_matrix(matrix_file)
    except BuildPickError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    if family and family not in matrix:
        console.print(f"[yellow]Unknown family: {escape(family)}[/yellow]")
        sys.exit(1)

    if as_json:
        print_json(matrix_data(matrix, family))
    else:
        print_matrix_table(matrix, family)
