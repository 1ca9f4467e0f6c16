"""buildpick CLI entrypoint."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from buildpick import __version__
from buildpick.config import Settings, SettingsLoader
from buildpick.errors import ConfigError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="buildpick")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings YAML file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log detection and selection decisions.")
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool, telemetry: bool) -> None:
    """buildpick — serve each browser the most capable build it supports."""
    from buildpick.cli_commands._output import console

    settings = Settings()
    if config_path:
        try:
            settings = SettingsLoader(Path(config_path)).load()
        except ConfigError as exc:
            console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
            sys.exit(1)

    _configure_logging("DEBUG" if verbose else settings.log_level)

    if telemetry or settings.telemetry.enabled:
        from buildpick.utils.telemetry import configure_telemetry

        configure_telemetry(settings.telemetry)

    ctx.obj = settings


# Register subcommands
from buildpick.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
