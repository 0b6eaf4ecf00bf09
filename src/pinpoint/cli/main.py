"""Pinpoint CLI -- package and runtime version resolution.

Entry point for the ``pinpoint`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    resolve  -- Resolve the package release and runtime to activate.
    catalog  -- List available releases per catalog.
    trains   -- Show the platform release-train table.

Usage::

    pinpoint resolve --puppet-version 5.3.1
    pinpoint resolve --pe-version 2017.3.1
    pinpoint --install-mode remote catalog
    pinpoint trains --format json
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from pinpoint import __version__
from pinpoint.cli.catalog_cmd import catalog_command
from pinpoint.cli.context import CliContext
from pinpoint.cli.resolve_cmd import resolve_command
from pinpoint.cli.trains_cmd import trains_command
from pinpoint.config import load_settings
from pinpoint.core.resolver import InstallMode
from pinpoint.exceptions import ConfigError


def configure_logging(debug: bool) -> None:
    """Send ``pinpoint`` log records to stderr through rich."""
    logger = logging.getLogger("pinpoint")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML settings file (default: $PINPOINT_CONFIG or ~/.pinpoint/config.yaml).",
)
@click.option(
    "--install-mode",
    type=click.Choice([m.value for m in InstallMode]),
    default=None,
    help="Force offline (bundled runtimes) or remote (release index) resolution.",
)
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    install_mode: str | None,
    debug: bool,
) -> None:
    """Pinpoint: resolve which package release and runtime to activate.

    Searches the runtimes bundled with an offline install, or the remote
    release index, for the release matching an exact version, a platform
    release train or a module's declared requirement.
    """
    configure_logging(debug)
    if isinstance(ctx.obj, CliContext):
        return
    try:
        settings = load_settings(config_path)
    except ConfigError as exc:
        click.echo(f"Error: {exc}")
        sys.exit(2)
    if install_mode is not None:
        settings.install_mode = InstallMode(install_mode)
    ctx.obj = CliContext(settings)


# Register all subcommands
cli.add_command(resolve_command)
cli.add_command(catalog_command)
cli.add_command(trains_command)
