"""``pinpoint trains`` -- Show the platform release-train table."""

from __future__ import annotations

import click

from pinpoint.cli.context import CliContext
from pinpoint.cli.output import print_json, print_trains, trains_to_json


@click.command("trains")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.pass_obj
def trains_command(ctx: CliContext, output_format: str) -> None:
    """List platform release trains and their minimum package versions."""
    resolver = ctx.get_resolver()
    if output_format == "json":
        print_json(trains_to_json(resolver.release_trains))
    else:
        print_trains(resolver.release_trains, resolver.package_name)
