"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from buildpick.cli_commands.choose import choose
    from buildpick.cli_commands.detect import detect_cmd
    from buildpick.cli_commands.matrix import matrix_cmd
    from buildpick.cli_commands.redirect import redirect

    cli.add_command(detect_cmd)
    cli.add_command(choose)
    cli.add_command(redirect)
    cli.add_command(matrix_cmd)
