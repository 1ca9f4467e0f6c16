"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from buildpick.core.capabilities import Capability
from buildpick.core.detector import Detection  # noqa: TC001
from buildpick.core.matrix import CapabilityMatrix  # noqa: TC001
from buildpick.core.models import BuildSelection  # noqa: TC001

console = Console()


def print_json(data: Any) -> None:
    """Emit plain, unwrapped JSON so the output stays machine-readable."""
    click.echo(json.dumps(data, indent=2, default=str))


def detection_data(detection: Detection) -> dict[str, Any]:
    return {
        "browser": detection.signature.model_dump(),
        "capabilities": sorted(c.value for c in detection.capabilities),
    }


def print_detection(detection: Detection, *, as_json: bool = False) -> None:
    """Pretty-print a detection result."""
    if as_json:
        print_json(detection_data(detection))
        return

    sig = detection.signature
    console.print(f"[bold]Browser:[/bold] {sig.browser_name or '(unknown)'} {sig.browser_version}")
    console.print(f"[bold]OS:[/bold] {sig.os_name or '(unknown)'} {sig.os_version}")
    caps = ", ".join(sorted(c.value for c in detection.capabilities))
    console.print(f"[bold]Capabilities:[/bold] {caps or '(none)'}")


def print_selection(
    selection: BuildSelection,
    detection: Detection,
    *,
    as_json: bool = False,
) -> None:
    """Pretty-print the chosen build."""
    if as_json:
        print_json({"build": selection.model_dump(), **detection_data(detection)})
        return

    console.print(f"[green]Selected build:[/green] {selection.name}")
    if selection.base_path:
        console.print(f"  Base path: {selection.base_path}")


def matrix_data(matrix: CapabilityMatrix, family: str | None = None) -> dict[str, dict[str, str]]:
    families = [family] if family else list(matrix.families)
    return {
        name: {cap.value: str(pred) for cap, pred in matrix.predicates_for(name).items()}
        for name in families
    }


def print_matrix_table(matrix: CapabilityMatrix, family: str | None = None) -> None:
    """Pretty-print the matrix, one row per family."""
    if family:
        table = Table(title=f"Capabilities: {family}")
        table.add_column("Capability", style="cyan")
        table.add_column("Rule")
        for cap, pred in matrix.predicates_for(family).items():
            table.add_row(cap.value, str(pred))
        console.print(table)
        return

    table = Table(title="Capability Matrix")
    table.add_column("Family", style="cyan")
    capabilities = list(Capability)
    for cap in capabilities:
        table.add_column(cap.value)

    for name in matrix.families:
        predicates = matrix.predicates_for(name)
        table.add_row(name, *(str(predicates[cap]) if cap in predicates else "-" for cap in capabilities))

    console.print(table)
    if matrix.aliases:
        aliases = ", ".join(f"{alias} -> {target}" for alias, target in matrix.aliases.items())
        console.print(f"Aliases: {aliases}")
