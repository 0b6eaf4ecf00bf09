"""Release catalogs: runtime-bundled sets for offline installs and the remote index.

Public API::

    from pinpoint.core.catalog import VersionCatalog, StaticCatalog
    from pinpoint.core.catalog import RuntimeCatalogRegistry, FilesystemRuntimeProbe
    from pinpoint.core.catalog import RemoteCatalogProvider, ReleaseFetcher
"""

from __future__ import annotations

from pinpoint.core.catalog.base import StaticCatalog, VersionCatalog, sorted_unique
from pinpoint.core.catalog.remote import (
    ReleaseFetcher,
    RemoteCatalog,
    RemoteCatalogProvider,
    StaticReleaseFetcher,
)
from pinpoint.core.catalog.runtime import (
    FilesystemRuntimeProbe,
    RuntimeCatalog,
    RuntimeCatalogRegistry,
    RuntimeProbe,
    StaticRuntimeProbe,
)

__all__ = [
    "FilesystemRuntimeProbe",
    "ReleaseFetcher",
    "RemoteCatalog",
    "RemoteCatalogProvider",
    "RuntimeCatalog",
    "RuntimeCatalogRegistry",
    "RuntimeProbe",
    "StaticCatalog",
    "StaticReleaseFetcher",
    "StaticRuntimeProbe",
    "VersionCatalog",
    "sorted_unique",
]
