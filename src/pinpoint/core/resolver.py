"""Version resolution across runtime-bundled and remote catalogs.

``VersionResolver`` answers one question: which package release, and which
companion runtime, should be activated for a requested version expression.

Catalog source depends on the install mode:

- **offline** -- every installed runtime's ``RuntimeCatalog`` is searched and
  the best match across all of them wins; the result names the runtime
  whose catalog produced it.
- **remote** -- the single ``RemoteCatalog`` is searched; the result names
  the environment's default runtime.

Tie-break rule: the numerically highest version wins; equal versions found
under several runtimes go to the runtime searched first (registration
order).

Every entry point returns a complete ``ResolutionResult`` or raises exactly
one of ``InvalidVersionFormat``, ``NoMatchingVersion``,
``UnknownPlatformRelease`` or ``CatalogUnavailable``; descriptor-based
resolution may also raise ``MetadataError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pinpoint.core.catalog import RemoteCatalogProvider, RuntimeCatalogRegistry, VersionCatalog
from pinpoint.core.metadata import MetadataRequirementAdapter, ModuleMetadata
from pinpoint.core.release_train import DEFAULT_RELEASE_TRAINS, ReleaseTrainTable
from pinpoint.core.version import (
    ANY_VERSION,
    ConstraintSet,
    ExactRequirement,
    Requirement,
    SemanticVersion,
    parse_exact,
    parse_requirement,
)
from pinpoint.exceptions import ConflictingVersionOptions, NoMatchingVersion

logger = logging.getLogger(__name__)


class InstallMode(Enum):
    """Where candidate package releases come from."""

    OFFLINE = "offline"
    REMOTE = "remote"


@dataclass(frozen=True)
class ResolutionResult:
    """The package release and companion runtime to activate.

    Attributes:
        package_version: Resolved package release.
        runtime_version: Runtime id the release runs under.
    """

    package_version: SemanticVersion
    runtime_version: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "package_version": str(self.package_version),
            "runtime_version": self.runtime_version,
        }


class VersionResolver:
    """Resolve version expressions to a ``ResolutionResult``.

    Args:
        install_mode: Selects runtime catalogs (offline) or the remote
            catalog (remote).
        runtimes: Runtime catalog registry; required in offline mode.
        remote: Remote catalog provider; required in remote mode.
        default_runtime: Runtime id reported for remote-mode results.
        release_trains: Platform release-train table.
        package_name: Name of the package being resolved.
        metadata_adapter: Extracts requirements from module descriptors.
    """

    def __init__(
        self,
        install_mode: InstallMode,
        *,
        runtimes: RuntimeCatalogRegistry | None = None,
        remote: RemoteCatalogProvider | None = None,
        default_runtime: str = "",
        release_trains: ReleaseTrainTable = DEFAULT_RELEASE_TRAINS,
        package_name: str = "puppet",
        metadata_adapter: MetadataRequirementAdapter | None = None,
    ) -> None:
        if install_mode is InstallMode.OFFLINE and runtimes is None:
            raise ValueError("Offline resolution needs a runtime catalog registry")
        if install_mode is InstallMode.REMOTE and remote is None:
            raise ValueError("Remote resolution needs a remote catalog provider")
        self.install_mode = install_mode
        self.package_name = package_name
        self.default_runtime = default_runtime
        self.release_trains = release_trains
        self._runtimes = runtimes
        self._remote = remote
        self._metadata_adapter = metadata_adapter or MetadataRequirementAdapter(package_name)

    # -- entry points -------------------------------------------------------

    def find_gem_for(self, version: str) -> ResolutionResult:
        """Resolve an exact version, falling back to the latest Z-release.

        If *version* is not in any searched catalog, the highest patch
        release of the same ``major.minor`` series is used instead and an
        informational notice is logged.

        Raises:
            InvalidVersionFormat: If *version* is not ``major.minor.patch``.
            NoMatchingVersion: If no release of the series exists.
        """
        requested = parse_exact(version)
        return self._exact_or_latest_z(requested, self._candidates())

    def from_pe_version(self, version: str, *, pinned: bool = False) -> ResolutionResult:
        """Resolve the package release for a platform release.

        The platform version's train gives a floor; the highest release
        satisfying ``>= floor, < next major`` is returned. In offline mode
        only the catalog of the train's runtime hint is searched when that
        runtime is installed.

        With *pinned*, the floor itself is resolved as in ``find_gem_for``.

        Raises:
            InvalidVersionFormat: If *version* is not ``major.minor.patch``.
            UnknownPlatformRelease: If the train is not in the table.
            NoMatchingVersion: If the searched catalog has no match.
        """
        platform_version = parse_exact(version)
        entry = self.release_trains.lookup(platform_version)
        candidates = self._candidates(runtime_hint=entry.runtime_hint)
        if pinned:
            return self._exact_or_latest_z(entry.min_package_version, candidates)
        return self._require(candidates, ConstraintSet.major_train(entry.min_package_version))

    def find_gem(self, requirement: Requirement | str) -> ResolutionResult:
        """Return the highest release satisfying *requirement*.

        Raises:
            InvalidVersionFormat: If *requirement* is an unparseable string.
            NoMatchingVersion: If nothing satisfies it.
        """
        if isinstance(requirement, str):
            requirement = parse_requirement(requirement)
        return self._require(self._candidates(), requirement)

    def from_module_metadata(self, metadata: ModuleMetadata | None = None) -> ResolutionResult:
        """Resolve the requirement a module descriptor declares for the package."""
        requirement = self._metadata_adapter.requirement_for(metadata or ModuleMetadata())
        return self.find_gem(requirement)

    def latest_available(self) -> ResolutionResult:
        """Return the newest release in the mode-appropriate catalogs."""
        return self.find_gem(ANY_VERSION)

    def select(
        self,
        package_version: str | None = None,
        platform_version: str | None = None,
        metadata: ModuleMetadata | None = None,
        *,
        pinned: bool = False,
    ) -> ResolutionResult:
        """Pick a release from whatever the caller supplied.

        Precedence: explicit package version, explicit platform version,
        module descriptor, then the latest available release. A version
        passed as an empty string counts as given.

        Raises:
            ConflictingVersionOptions: If both explicit versions are given.
            InvalidVersionFormat: If a given version is malformed or empty.
        """
        if package_version is not None and platform_version is not None:
            raise ConflictingVersionOptions(
                f"Specify either a {self.package_name} version or a "
                f"{self.release_trains.platform_name} version, not both."
            )
        if package_version is not None:
            return self.find_gem_for(package_version)
        if platform_version is not None:
            return self.from_pe_version(platform_version, pinned=pinned)
        if metadata is not None and metadata.data:
            return self.from_module_metadata(metadata)
        return self.latest_available()

    def catalogs(self) -> list[tuple[str, VersionCatalog]]:
        """``(runtime_id, catalog)`` pairs searched in the current install mode."""
        return self._candidates()

    # -- search -------------------------------------------------------------

    def _candidates(self, runtime_hint: str | None = None) -> list[tuple[str, VersionCatalog]]:
        """``(runtime_id, catalog)`` pairs to search, in tie-break order."""
        if self.install_mode is InstallMode.REMOTE:
            return [(self.default_runtime, self._remote.instance())]

        runtime_ids = self._runtimes.known_runtime_ids()
        if runtime_hint is not None:
            if runtime_hint in runtime_ids:
                runtime_ids = (runtime_hint,)
            else:
                logger.debug(
                    "Runtime %s is not installed, searching all runtimes", runtime_hint
                )
        return [(rid, self._runtimes.for_runtime(rid)) for rid in runtime_ids]

    @staticmethod
    def _best(
        candidates: list[tuple[str, VersionCatalog]],
        requirement: Requirement,
    ) -> ResolutionResult | None:
        best: ResolutionResult | None = None
        for runtime_id, catalog in candidates:
            # Catalogs are newest first: the first hit is this catalog's maximum.
            for version in catalog.available_versions():
                if requirement.satisfies(version):
                    if best is None or version > best.package_version:
                        best = ResolutionResult(version, runtime_id)
                    break
        return best

    def _require(
        self,
        candidates: list[tuple[str, VersionCatalog]],
        requirement: Requirement,
    ) -> ResolutionResult:
        result = self._best(candidates, requirement)
        if result is None:
            raise NoMatchingVersion(
                f"Unable to find a {self.package_name} version matching '{requirement}'."
            )
        return result

    def _exact_or_latest_z(
        self,
        requested: SemanticVersion,
        candidates: list[tuple[str, VersionCatalog]],
    ) -> ResolutionResult:
        exact = self._best(candidates, ExactRequirement(requested))
        if exact is not None:
            return exact

        series = ConstraintSet.of(
            (">=", SemanticVersion(requested.major, requested.minor, 0)),
            ("<", SemanticVersion(requested.major, requested.minor + 1, 0)),
        )
        latest = self._best(candidates, series)
        if latest is None:
            raise NoMatchingVersion(
                f"Unable to find a {self.package_name} version matching "
                f"{requested.major}.{requested.minor}.x (requested {requested})."
            )
        logger.info(
            "Unable to find %s %s, using %s instead.",
            self.package_name, requested, latest.package_version,
        )
        return latest
