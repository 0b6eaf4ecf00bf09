"""The remote catalog: every published release of the package.

``RemoteCatalogProvider`` owns the process-wide ``RemoteCatalog``. The first
call to ``instance()`` asks the ``ReleaseFetcher`` for the released versions
and memoizes the result; a failed fetch propagates as ``CatalogUnavailable``
and leaves nothing cached, so a later call fetches again.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable

from pinpoint.core.catalog.base import VersionCatalog, sorted_unique
from pinpoint.core.version import SemanticVersion
from pinpoint.exceptions import CatalogUnavailable

logger = logging.getLogger(__name__)


class ReleaseFetcher(ABC):
    """Fetch capability for a remote release index."""

    @abstractmethod
    def fetch_released_versions(self, package_name: str) -> list[SemanticVersion]:
        """Return released versions of *package_name*, newest first.

        Raises:
            CatalogUnavailable: If the index cannot be reached or read.
        """


class StaticReleaseFetcher(ReleaseFetcher):
    """Fetcher over a fixed version list, or one that always fails.

    Args:
        versions: Releases to return.
        error: If given, every fetch raises ``CatalogUnavailable(error)``.
    """

    def __init__(
        self,
        versions: Iterable[SemanticVersion | str] = (),
        *,
        error: str | None = None,
    ) -> None:
        self._versions = sorted_unique(
            v if isinstance(v, SemanticVersion) else SemanticVersion.parse(v)
            for v in versions
        )
        self._error = error
        self.fetch_count = 0

    def fetch_released_versions(self, package_name: str) -> list[SemanticVersion]:
        self.fetch_count += 1
        if self._error is not None:
            raise CatalogUnavailable(self._error)
        return list(self._versions)


class RemoteCatalog(VersionCatalog):
    """All published releases of *package_name*."""

    def __init__(self, package_name: str, versions: Iterable[SemanticVersion]) -> None:
        self.package_name = package_name
        self._versions = sorted_unique(versions)

    def available_versions(self) -> tuple[SemanticVersion, ...]:
        return self._versions

    def __repr__(self) -> str:
        return f"RemoteCatalog({self.package_name!r}, {len(self._versions)} versions)"


class RemoteCatalogProvider:
    """Initialize-once holder for the process-wide ``RemoteCatalog``."""

    def __init__(self, fetcher: ReleaseFetcher, package_name: str) -> None:
        self._fetcher = fetcher
        self._package_name = package_name
        self._lock = threading.Lock()
        self._catalog: RemoteCatalog | None = None

    def instance(self) -> RemoteCatalog:
        """Return the memoized catalog, fetching it on first call.

        Raises:
            CatalogUnavailable: If the fetch fails. Nothing is cached.
        """
        catalog = self._catalog
        if catalog is not None:
            return catalog
        with self._lock:
            if self._catalog is None:
                versions = self._fetcher.fetch_released_versions(self._package_name)
                self._catalog = RemoteCatalog(self._package_name, versions)
                logger.debug(
                    "Fetched %d released versions of %s",
                    len(self._catalog), self._package_name,
                )
            return self._catalog

    def reset(self) -> None:
        """Forget the memoized catalog. Test harnesses only."""
        with self._lock:
            self._catalog = None
