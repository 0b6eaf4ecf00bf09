"""Rich output formatting helpers for the Pinpoint CLI.

Text output goes through a shared ``rich`` console; ``--format json``
output is plain ``click.echo`` so it stays machine-readable.
"""

from __future__ import annotations

import json
from typing import Any

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pinpoint.core.catalog import VersionCatalog
from pinpoint.core.release_train import ReleaseTrainTable
from pinpoint.core.resolver import ResolutionResult

console = Console()


def print_resolution(result: ResolutionResult, package_name: str, mode: str) -> None:
    """Print a resolved package/runtime pair."""
    body = Text.assemble(
        (f"{package_name} ", "bold"), (str(result.package_version), "bold green"),
        ("  runtime ", "bold"), (result.runtime_version or "-", "cyan"),
    )
    console.print(Panel(body, title="Resolved", subtitle=f"{mode} install"))


def print_catalogs(catalogs: list[tuple[str, VersionCatalog]], package_name: str) -> None:
    """Print one row per catalog with its available versions."""
    if not catalogs:
        console.print("[dim]No catalogs available.[/dim]")
        return
    table = Table(title=f"Available {package_name} versions", show_header=True, header_style="bold")
    table.add_column("Runtime", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Versions")
    for runtime_id, catalog in catalogs:
        versions = catalog.available_versions()
        table.add_row(
            runtime_id or "-",
            str(len(versions)),
            ", ".join(str(v) for v in versions) or "[dim]none[/dim]",
        )
    console.print(table)


def print_trains(table: ReleaseTrainTable, package_name: str) -> None:
    """Print the release-train table."""
    out = Table(title=f"{table.platform_name} release trains", show_header=True, header_style="bold")
    out.add_column("Train", style="bold")
    out.add_column(f"Minimum {package_name}", justify="right")
    out.add_column("Runtime", style="cyan")
    for entry in table:
        out.add_row(f"{entry.train_id}.x", str(entry.min_package_version), entry.runtime_hint)
    console.print(out)


def catalogs_to_json(catalogs: list[tuple[str, VersionCatalog]]) -> list[dict[str, Any]]:
    return [
        {
            "runtime_version": runtime_id,
            "path": str(catalog.path) if getattr(catalog, "path", None) else None,
            "versions": [str(v) for v in catalog.available_versions()],
        }
        for runtime_id, catalog in catalogs
    ]


def trains_to_json(table: ReleaseTrainTable) -> list[dict[str, str]]:
    return [
        {
            "train": entry.train_id,
            "min_version": str(entry.min_package_version),
            "runtime": entry.runtime_hint,
        }
        for entry in table
    ]


def print_json(data: Any) -> None:
    """Print data as indented JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


def print_error(message: str, output_format: str) -> None:
    """Report a failure in the requested output format."""
    if output_format == "json":
        print_json({"error": message})
    else:
        click.echo(f"Error: {message}")
