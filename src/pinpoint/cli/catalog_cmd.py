"""``pinpoint catalog`` -- List the releases the resolver can choose from.

In an offline install one row is shown per installed runtime; otherwise the
remote index is fetched and shown under the default runtime.

Usage::

    pinpoint catalog
    pinpoint catalog --runtime 2.4.3 --format json
"""

from __future__ import annotations

import sys

import click

from pinpoint.cli.context import CliContext
from pinpoint.cli.output import catalogs_to_json, print_catalogs, print_error, print_json
from pinpoint.exceptions import CatalogUnavailable


@click.command("catalog")
@click.option("--runtime", "runtime_id", default=None, help="Only show this runtime's catalog.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.pass_obj
def catalog_command(ctx: CliContext, runtime_id: str | None, output_format: str) -> None:
    """Show available package versions per runtime."""
    resolver = ctx.get_resolver()
    try:
        catalogs = resolver.catalogs()
    except CatalogUnavailable as exc:
        print_error(str(exc), output_format)
        sys.exit(1)

    if runtime_id is not None:
        catalogs = [(rid, c) for rid, c in catalogs if rid == runtime_id]
        if not catalogs:
            print_error(f"Runtime {runtime_id} is not available.", output_format)
            sys.exit(1)

    if output_format == "json":
        print_json(catalogs_to_json(catalogs))
    else:
        print_catalogs(catalogs, resolver.package_name)
