"""``pinpoint resolve`` -- Pick the package release and runtime to activate.

Resolution precedence:
    1. ``--puppet-version`` (or ``$PINPOINT_PUPPET_VERSION``): exact release,
       falling back to the latest Z-release of the same series.
    2. ``--pe-version`` (or ``$PINPOINT_PE_VERSION``): newest release on the
       platform release's train.
    3. ``--metadata`` (default ``./metadata.json``): the module's declared
       requirement.
    4. The newest release available.

Exit Codes:
    0 -- Resolved.
    1 -- No matching release, unknown platform release or index unavailable.
    2 -- Malformed version, requirement or module descriptor.

Usage::

    pinpoint resolve --puppet-version 5.3.1
    pinpoint resolve --pe-version 2017.3.1 --format json
    pinpoint resolve --metadata ./my-module/metadata.json
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from pinpoint.cli.context import CliContext
from pinpoint.cli.output import print_error, print_json, print_resolution
from pinpoint.core.metadata import METADATA_FILENAME, ModuleMetadata
from pinpoint.exceptions import (
    CatalogUnavailable,
    InvalidVersionFormat,
    MetadataError,
    NoMatchingVersion,
    UnknownPlatformRelease,
)


@click.command("resolve")
@click.option(
    "--puppet-version", envvar="PINPOINT_PUPPET_VERSION", default=None,
    help="Exact package release to use (X.Y.Z).",
)
@click.option(
    "--pe-version", envvar="PINPOINT_PE_VERSION", default=None,
    help="Platform release to target (X.Y.Z).",
)
@click.option(
    "--pinned", is_flag=True,
    help="With --pe-version, use the train's own release instead of its newest.",
)
@click.option(
    "--metadata", "metadata_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=f"Module descriptor to read (default: ./{METADATA_FILENAME}).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@click.pass_obj
def resolve_command(
    ctx: CliContext,
    puppet_version: str | None,
    pe_version: str | None,
    pinned: bool,
    metadata_path: Path | None,
    output_format: str,
) -> None:
    """Resolve the package release and companion runtime to activate."""
    resolver = ctx.get_resolver()
    try:
        metadata = None
        if puppet_version is None and pe_version is None:
            metadata = ModuleMetadata.from_file(metadata_path or Path(METADATA_FILENAME))
        result = resolver.select(puppet_version, pe_version, metadata, pinned=pinned)
    except (InvalidVersionFormat, MetadataError) as exc:
        print_error(str(exc), output_format)
        sys.exit(2)
    except (NoMatchingVersion, UnknownPlatformRelease, CatalogUnavailable) as exc:
        print_error(str(exc), output_format)
        sys.exit(1)

    if output_format == "json":
        print_json({
            "package": resolver.package_name,
            "install_mode": resolver.install_mode.value,
            **result.as_dict(),
        })
    else:
        print_resolution(result, resolver.package_name, resolver.install_mode.value)
