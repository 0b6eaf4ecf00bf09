"""Shared catalog data and resolver builders for pinpoint tests."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pinpoint.core.catalog import (
    RemoteCatalogProvider,
    RuntimeCatalogRegistry,
    StaticReleaseFetcher,
    StaticRuntimeProbe,
)
from pinpoint.core.release_train import DEFAULT_RELEASE_TRAINS, ReleaseTrainTable
from pinpoint.core.resolver import InstallMode, VersionResolver

DEFAULT_RUNTIME = "2.5.9"

# Releases bundled with a package install.
CACHE_VERSIONS = ["5.4.0", "5.3.5", "4.10.10", "4.8.1", "4.9.4", "4.7.0", "4.5.3", "4.4.2"]

# Full remote release history.
RUBYGEMS_VERSIONS = """
    5.4.0
    5.3.5 5.3.4 5.3.3 5.3.2 5.3.1 5.3.0
    5.2.0
    5.1.0
    5.0.1 5.0.0
    4.10.10 4.10.9 4.10.8 4.10.7 4.10.6 4.10.5 4.10.4 4.10.1 4.10.0
    4.9.4 4.9.3 4.9.2 4.9.1 4.9.0
    4.8.2 4.8.1 4.8.0
    4.7.1 4.7.0
    4.6.2 4.6.1 4.6.0
    4.5.3 4.5.2 4.5.1 4.5.0
    4.4.2 4.4.1 4.4.0
    4.3.2 4.3.1 4.3.0
    4.2.3 4.2.2 4.2.1 4.2.0
""".split()

# 4.x releases run on 2.1.9, everything newer on 2.4.3.
BUNDLED_RUNTIMES: dict[str, list[str]] = {
    "2.1.9": [v for v in CACHE_VERSIONS if v.startswith("4")],
    "2.4.3": [v for v in CACHE_VERSIONS if not v.startswith("4")],
}


def make_offline_resolver(
    runtimes: Mapping[str, Iterable[str]] | None = None,
    release_trains: ReleaseTrainTable = DEFAULT_RELEASE_TRAINS,
) -> VersionResolver:
    """Offline resolver over in-memory runtime catalogs."""
    probe = StaticRuntimeProbe(BUNDLED_RUNTIMES if runtimes is None else runtimes)
    return VersionResolver(
        InstallMode.OFFLINE,
        runtimes=RuntimeCatalogRegistry(probe),
        default_runtime=DEFAULT_RUNTIME,
        release_trains=release_trains,
    )


def make_remote_resolver(
    versions: Iterable[str] | None = None,
    release_trains: ReleaseTrainTable = DEFAULT_RELEASE_TRAINS,
) -> VersionResolver:
    """Remote resolver over an in-memory release index."""
    fetcher = StaticReleaseFetcher(RUBYGEMS_VERSIONS if versions is None else versions)
    return VersionResolver(
        InstallMode.REMOTE,
        remote=RemoteCatalogProvider(fetcher, "puppet"),
        default_runtime=DEFAULT_RUNTIME,
        release_trains=release_trains,
    )
