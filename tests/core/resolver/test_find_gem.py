"""Tests for requirement resolution, module descriptors and ``select``."""

from __future__ import annotations

import pytest

from pinpoint.core.catalog import RemoteCatalogProvider, StaticReleaseFetcher
from pinpoint.core.metadata import ModuleMetadata
from pinpoint.core.resolver import InstallMode, ResolutionResult, VersionResolver
from pinpoint.core.version import ConstraintSet
from pinpoint.exceptions import (
    CatalogUnavailable,
    ConflictingVersionOptions,
    InvalidVersionFormat,
    NoMatchingVersion,
)
from tests.helpers import DEFAULT_RUNTIME, make_offline_resolver


def _pair(result: ResolutionResult) -> tuple[str, str]:
    return str(result.package_version), result.runtime_version


def _metadata(requirement: str | None) -> ModuleMetadata:
    entry: dict[str, str] = {"name": "puppet"}
    if requirement is not None:
        entry["version_requirement"] = requirement
    return ModuleMetadata({"name": "example-module", "requirements": [entry]})


class TestFindGem:

    def test_highest_across_runtimes(self, offline_resolver: VersionResolver) -> None:
        assert _pair(offline_resolver.find_gem(">= 4.7.0")) == ("5.4.0", "2.4.3")

    def test_upper_bound(self, offline_resolver: VersionResolver) -> None:
        assert _pair(offline_resolver.find_gem(">=4.7.0,<5.0.0")) == ("4.10.10", "2.1.9")

    def test_accepts_parsed_requirement(self, offline_resolver: VersionResolver) -> None:
        requirement = ConstraintSet.of((">", "4.8.1"), ("<=", "4.10.0"))
        assert _pair(offline_resolver.find_gem(requirement)) == ("4.9.4", "2.1.9")

    def test_exact_requirement_has_no_fallback(self, offline_resolver: VersionResolver) -> None:
        with pytest.raises(NoMatchingVersion, match="Unable to find a puppet version matching '5.3.1'"):
            offline_resolver.find_gem("5.3.1")

    def test_unsatisfiable(self, remote_resolver: VersionResolver) -> None:
        with pytest.raises(NoMatchingVersion):
            remote_resolver.find_gem(">= 6.0.0")

    def test_remote_reports_default_runtime(self, remote_resolver: VersionResolver) -> None:
        assert _pair(remote_resolver.find_gem("< 4.3.0")) == ("4.2.3", DEFAULT_RUNTIME)

    def test_malformed_requirement(self, offline_resolver: VersionResolver) -> None:
        with pytest.raises(InvalidVersionFormat):
            offline_resolver.find_gem("~> 4.7")

    def test_tie_goes_to_first_registered_runtime(self) -> None:
        resolver = make_offline_resolver(runtimes={"2.4.3": ["5.3.5"], "2.1.9": ["5.3.5", "4.10.10"]})
        assert _pair(resolver.find_gem(">= 5.0.0")) == ("5.3.5", "2.4.3")

    def test_latest_available(self, offline_resolver: VersionResolver) -> None:
        assert _pair(offline_resolver.latest_available()) == ("5.4.0", "2.4.3")

    def test_latest_available_with_no_runtimes(self) -> None:
        with pytest.raises(NoMatchingVersion):
            make_offline_resolver(runtimes={}).latest_available()


class TestModuleMetadata:

    def test_declared_requirement(self, offline_resolver: VersionResolver) -> None:
        result = offline_resolver.from_module_metadata(_metadata(">= 4.7.0 < 5.0.0"))
        assert _pair(result) == ("4.10.10", "2.1.9")

    def test_missing_entry_uses_default_range(self, offline_resolver: VersionResolver) -> None:
        metadata = ModuleMetadata({"name": "example-module", "requirements": []})
        assert _pair(offline_resolver.from_module_metadata(metadata)) == ("5.4.0", "2.4.3")

    def test_no_descriptor_uses_default_range(self, remote_resolver: VersionResolver) -> None:
        assert _pair(remote_resolver.from_module_metadata()) == ("5.4.0", DEFAULT_RUNTIME)

    def test_default_range_excludes_older_releases(self) -> None:
        resolver = make_offline_resolver(runtimes={"2.1.9": ["4.5.3", "4.4.2"]})
        with pytest.raises(NoMatchingVersion):
            resolver.from_module_metadata(ModuleMetadata())

    def test_entry_without_requirement_uses_default(self, offline_resolver: VersionResolver) -> None:
        assert _pair(offline_resolver.from_module_metadata(_metadata(None))) == ("5.4.0", "2.4.3")

    def test_empty_requirement_is_invalid(self, offline_resolver: VersionResolver) -> None:
        with pytest.raises(InvalidVersionFormat):
            offline_resolver.from_module_metadata(_metadata(""))

    def test_exact_requirement(self, offline_resolver: VersionResolver) -> None:
        assert _pair(offline_resolver.from_module_metadata(_metadata("4.8.1"))) == ("4.8.1", "2.1.9")


class TestSelect:
    """Precedence: package version, platform version, descriptor, latest."""

    def test_package_version_first(self, offline_resolver: VersionResolver) -> None:
        result = offline_resolver.select("4.9.4", None, _metadata(">= 5.0.0"))
        assert _pair(result) == ("4.9.4", "2.1.9")

    def test_platform_version(self, offline_resolver: VersionResolver) -> None:
        assert _pair(offline_resolver.select(platform_version="2017.2.1")) == ("4.10.10", "2.1.9")

    def test_platform_version_pinned(self, offline_resolver: VersionResolver) -> None:
        result = offline_resolver.select(platform_version="2017.3.1", pinned=True)
        assert _pair(result) == ("5.3.5", "2.4.3")

    def test_metadata(self, offline_resolver: VersionResolver) -> None:
        result = offline_resolver.select(metadata=_metadata("< 4.9.0"))
        assert _pair(result) == ("4.8.1", "2.1.9")

    def test_empty_metadata_means_latest(self, offline_resolver: VersionResolver) -> None:
        assert _pair(offline_resolver.select(metadata=ModuleMetadata())) == ("5.4.0", "2.4.3")

    def test_nothing_supplied(self, remote_resolver: VersionResolver) -> None:
        assert _pair(remote_resolver.select()) == ("5.4.0", DEFAULT_RUNTIME)

    def test_both_versions_conflict(self, offline_resolver: VersionResolver) -> None:
        with pytest.raises(ConflictingVersionOptions):
            offline_resolver.select("5.3.5", "2017.3.1")

    def test_conflict_is_an_invalid_format(self, offline_resolver: VersionResolver) -> None:
        with pytest.raises(InvalidVersionFormat):
            offline_resolver.select("5.3.5", "2017.3.1")

    def test_empty_package_version_is_invalid(self, offline_resolver: VersionResolver) -> None:
        """An empty explicit version fails instead of falling through to latest."""
        with pytest.raises(InvalidVersionFormat):
            offline_resolver.select(package_version="")

    def test_empty_platform_version_is_invalid(self, offline_resolver: VersionResolver) -> None:
        with pytest.raises(InvalidVersionFormat):
            offline_resolver.select(platform_version="", metadata=_metadata(">= 4.7.0"))

    def test_empty_versions_still_conflict(self, offline_resolver: VersionResolver) -> None:
        with pytest.raises(ConflictingVersionOptions):
            offline_resolver.select("", "")


class TestResolverWiring:

    def test_unavailable_index_propagates(self) -> None:
        resolver = VersionResolver(
            InstallMode.REMOTE,
            remote=RemoteCatalogProvider(StaticReleaseFetcher(error="index down"), "puppet"),
            default_runtime=DEFAULT_RUNTIME,
        )
        with pytest.raises(CatalogUnavailable):
            resolver.find_gem_for("5.3.5")
        with pytest.raises(CatalogUnavailable):
            resolver.latest_available()

    def test_offline_needs_runtimes(self) -> None:
        with pytest.raises(ValueError):
            VersionResolver(InstallMode.OFFLINE)

    def test_remote_needs_provider(self) -> None:
        with pytest.raises(ValueError):
            VersionResolver(InstallMode.REMOTE)

    def test_catalogs_offline(self, offline_resolver: VersionResolver) -> None:
        assert [rid for rid, _ in offline_resolver.catalogs()] == ["2.1.9", "2.4.3"]

    def test_catalogs_remote(self, remote_resolver: VersionResolver) -> None:
        [(runtime_id, catalog)] = remote_resolver.catalogs()
        assert runtime_id == DEFAULT_RUNTIME
        assert len(catalog) == len(set(catalog.available_versions()))
