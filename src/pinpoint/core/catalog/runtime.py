"""Runtime-bundled catalogs for offline (package) installs.

An offline install ships one or more companion runtime builds, each with its
own cache of bundled package releases. ``RuntimeCatalogRegistry`` owns one
lazily built ``RuntimeCatalog`` per runtime id and keeps it for the life of
the process; the only way to drop the cache is the test-only ``reset()``.

Discovery is delegated to a ``RuntimeProbe``. ``FilesystemRuntimeProbe``
reads the on-disk layout of a package install::

    <basedir>/private/ruby/<runtime_id>/lib/ruby/gems/<api>/specifications/<pkg>-X.Y.Z.gemspec
    <basedir>/share/cache/ruby/<api>/specifications/<pkg>-X.Y.Z.gemspec

where ``<api>`` is ``major.minor.0`` of the runtime id.
"""

from __future__ import annotations

import logging
import re
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from pathlib import Path

from pinpoint.core.catalog.base import VersionCatalog, sorted_unique
from pinpoint.core.version import SemanticVersion

logger = logging.getLogger(__name__)

_RUNTIME_ID_RE = re.compile(r"[0-9]+(?:\.[0-9]+)*")

# Version part of a spec file stem: X.Y.Z, optionally followed by a platform
# such as "java" or "x64-mingw32". Prerelease tags like ".rc1" never match.
_SPEC_VERSION_RE = re.compile(
    r"(?P<version>[0-9]+\.[0-9]+\.[0-9]+)"
    r"(?:-(?:java|[A-Za-z0-9_]+(?:-[A-Za-z0-9_]+)+))?"
)


def _runtime_sort_key(runtime_id: str) -> tuple[int, ...]:
    return tuple(int(part) for part in runtime_id.split("."))


# ---------------------------------------------------------------------------
# Probes
# ---------------------------------------------------------------------------


class RuntimeProbe(ABC):
    """Enumerates installed runtimes and the package releases each bundles."""

    @abstractmethod
    def known_runtime_ids(self) -> tuple[str, ...]:
        """Installed runtime ids in registration (search) order.

        An empty tuple is valid and simply yields no candidates.
        """

    @abstractmethod
    def bundled_versions(self, runtime_id: str) -> Iterable[SemanticVersion]:
        """Package releases available to *runtime_id*, in any order."""

    def install_path(self, runtime_id: str) -> Path | None:
        """Filesystem location of *runtime_id*, if it has one."""
        return None


class FilesystemRuntimeProbe(RuntimeProbe):
    """Probe the runtime layout of a package install under *basedir*.

    Args:
        basedir: Root of the package install (e.g. ``/opt/puppetlabs/pdk``).
        package_name: Name of the bundled package whose releases are listed.
    """

    def __init__(self, basedir: Path, package_name: str) -> None:
        self._basedir = Path(basedir)
        self._package_name = package_name

    @property
    def runtime_root(self) -> Path:
        return self._basedir / "private" / "ruby"

    def known_runtime_ids(self) -> tuple[str, ...]:
        root = self.runtime_root
        if not root.is_dir():
            logger.debug("No runtime directory at %s", root)
            return ()
        ids = [
            p.name for p in root.iterdir()
            if p.is_dir() and _RUNTIME_ID_RE.fullmatch(p.name)
        ]
        return tuple(sorted(ids, key=_runtime_sort_key, reverse=True))

    def install_path(self, runtime_id: str) -> Path | None:
        return self.runtime_root / runtime_id

    def spec_dirs(self, runtime_id: str) -> list[Path]:
        """Directories searched for bundled package spec files."""
        parts = runtime_id.split(".")
        api = f"{parts[0]}.{parts[1] if len(parts) > 1 else '0'}.0"
        return [
            self.runtime_root / runtime_id / "lib" / "ruby" / "gems" / api / "specifications",
            self._basedir / "share" / "cache" / "ruby" / api / "specifications",
        ]

    def bundled_versions(self, runtime_id: str) -> list[SemanticVersion]:
        prefix = f"{self._package_name}-"
        versions: list[SemanticVersion] = []
        for spec_dir in self.spec_dirs(runtime_id):
            if not spec_dir.is_dir():
                continue
            for spec in spec_dir.glob(f"{prefix}*.gemspec"):
                m = _SPEC_VERSION_RE.fullmatch(spec.stem[len(prefix):])
                if m:
                    versions.append(SemanticVersion.parse(m.group("version")))
                else:
                    logger.debug("Skipping non-release spec %s", spec.name)
        return versions


class StaticRuntimeProbe(RuntimeProbe):
    """In-memory probe over a ``{runtime_id: versions}`` mapping.

    Registration order is the mapping's iteration order. ``probe_count``
    records how many times each runtime was scanned.
    """

    def __init__(self, runtimes: Mapping[str, Iterable[SemanticVersion | str]]) -> None:
        self._runtimes = {
            rid: [
                v if isinstance(v, SemanticVersion) else SemanticVersion.parse(v)
                for v in versions
            ]
            for rid, versions in runtimes.items()
        }
        self.probe_count: dict[str, int] = {}

    def known_runtime_ids(self) -> tuple[str, ...]:
        return tuple(self._runtimes)

    def bundled_versions(self, runtime_id: str) -> list[SemanticVersion]:
        self.probe_count[runtime_id] = self.probe_count.get(runtime_id, 0) + 1
        return list(self._runtimes.get(runtime_id, []))


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------


class RuntimeCatalog(VersionCatalog):
    """Package releases bundled with one companion runtime build.

    Attributes:
        runtime_id: Identifier of the runtime build (e.g. ``"2.4.3"``).
        path: Install location of the runtime, or None for in-memory probes.
    """

    def __init__(
        self,
        runtime_id: str,
        versions: Iterable[SemanticVersion],
        path: Path | None = None,
    ) -> None:
        self.runtime_id = runtime_id
        self.path = path
        self._versions = sorted_unique(versions)

    def available_versions(self) -> tuple[SemanticVersion, ...]:
        return self._versions

    def __repr__(self) -> str:
        return f"RuntimeCatalog({self.runtime_id!r}, {len(self._versions)} versions)"


class RuntimeCatalogRegistry:
    """Lazily built, process-lifetime cache of ``RuntimeCatalog`` objects.

    The first caller for a runtime id scans it and publishes the catalog;
    concurrent callers block on the lock and then observe the same instance.
    A scan that raises publishes nothing.
    """

    def __init__(self, probe: RuntimeProbe) -> None:
        self._probe = probe
        self._lock = threading.Lock()
        self._catalogs: dict[str, RuntimeCatalog] = {}
        self._runtime_ids: tuple[str, ...] | None = None

    def known_runtime_ids(self) -> tuple[str, ...]:
        """Installed runtime ids in registration order (memoized)."""
        ids = self._runtime_ids
        if ids is not None:
            return ids
        with self._lock:
            if self._runtime_ids is None:
                self._runtime_ids = tuple(self._probe.known_runtime_ids())
                logger.debug("Discovered runtimes: %s", ", ".join(self._runtime_ids) or "none")
            return self._runtime_ids

    def for_runtime(self, runtime_id: str) -> RuntimeCatalog:
        """Return the cached catalog for *runtime_id*, building it on first access."""
        catalog = self._catalogs.get(runtime_id)
        if catalog is not None:
            return catalog
        with self._lock:
            catalog = self._catalogs.get(runtime_id)
            if catalog is None:
                catalog = RuntimeCatalog(
                    runtime_id,
                    self._probe.bundled_versions(runtime_id),
                    path=self._probe.install_path(runtime_id),
                )
                logger.debug(
                    "Built catalog for runtime %s with %d versions",
                    runtime_id, len(catalog),
                )
                self._catalogs[runtime_id] = catalog
            return catalog

    def catalogs(self) -> list[RuntimeCatalog]:
        """Catalogs for every known runtime, in registration order."""
        return [self.for_runtime(rid) for rid in self.known_runtime_ids()]

    def reset(self) -> None:
        """Drop every cached catalog. Test harnesses only."""
        with self._lock:
            self._catalogs.clear()
            self._runtime_ids = None
