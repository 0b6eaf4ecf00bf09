"""Wire a ``VersionResolver`` to the production capabilities.

Offline installs get a ``RuntimeCatalogRegistry`` over the package install's
runtime directories; everything else gets the RubyGems-backed remote catalog.
"""

from __future__ import annotations

from pinpoint.config import Settings
from pinpoint.core.catalog import (
    FilesystemRuntimeProbe,
    RemoteCatalogProvider,
    RuntimeCatalogRegistry,
)
from pinpoint.core.release_train import DEFAULT_RELEASE_TRAINS
from pinpoint.core.resolver import InstallMode, VersionResolver
from pinpoint.registry.rubygems import RubyGemsFetcher


def default_resolver(settings: Settings) -> VersionResolver:
    """Create a resolver for the install described by *settings*."""
    mode = settings.resolved_install_mode()
    trains = DEFAULT_RELEASE_TRAINS.with_overrides(settings.release_trains)

    if mode is InstallMode.OFFLINE:
        probe = FilesystemRuntimeProbe(settings.package_basedir, settings.package_name)
        return VersionResolver(
            mode,
            runtimes=RuntimeCatalogRegistry(probe),
            default_runtime=settings.default_runtime,
            release_trains=trains,
            package_name=settings.package_name,
        )

    fetcher = RubyGemsFetcher(settings.index_url, timeout=settings.request_timeout)
    return VersionResolver(
        mode,
        remote=RemoteCatalogProvider(fetcher, settings.package_name),
        default_runtime=settings.default_runtime,
        release_trains=trains,
        package_name=settings.package_name,
    )
