"""Shared fixtures for pinpoint tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from pinpoint.core.catalog import (
    RemoteCatalogProvider,
    RuntimeCatalogRegistry,
    StaticReleaseFetcher,
    StaticRuntimeProbe,
)
from pinpoint.core.resolver import InstallMode, VersionResolver
from tests.helpers import BUNDLED_RUNTIMES, DEFAULT_RUNTIME, RUBYGEMS_VERSIONS


@pytest.fixture
def runtime_probe() -> StaticRuntimeProbe:
    """Two bundled runtimes, 4.x releases on 2.1.9 and 5.x on 2.4.3."""
    return StaticRuntimeProbe(BUNDLED_RUNTIMES)


@pytest.fixture
def release_fetcher() -> StaticReleaseFetcher:
    return StaticReleaseFetcher(RUBYGEMS_VERSIONS)


@pytest.fixture
def runtime_registry(runtime_probe: StaticRuntimeProbe) -> Iterator[RuntimeCatalogRegistry]:
    registry = RuntimeCatalogRegistry(runtime_probe)
    yield registry
    registry.reset()


@pytest.fixture
def remote_provider(release_fetcher: StaticReleaseFetcher) -> Iterator[RemoteCatalogProvider]:
    provider = RemoteCatalogProvider(release_fetcher, "puppet")
    yield provider
    provider.reset()


@pytest.fixture
def offline_resolver(runtime_registry: RuntimeCatalogRegistry) -> VersionResolver:
    """Resolver for a package install backed by ``runtime_probe``."""
    return VersionResolver(
        InstallMode.OFFLINE,
        runtimes=runtime_registry,
        default_runtime=DEFAULT_RUNTIME,
    )


@pytest.fixture
def remote_resolver(remote_provider: RemoteCatalogProvider) -> VersionResolver:
    """Resolver backed by the full remote release history."""
    return VersionResolver(
        InstallMode.REMOTE,
        remote=remote_provider,
        default_runtime=DEFAULT_RUNTIME,
    )
