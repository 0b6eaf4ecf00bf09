"""Catalog interface shared by runtime-bundled and remote release sets.

A catalog exposes one capability, ``available_versions()``: the known
package releases, newest first, without duplicates. Catalogs are built once
and never mutated afterwards, so the resolver can read them freely.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from pinpoint.core.version import SemanticVersion


def sorted_unique(versions: Iterable[SemanticVersion]) -> tuple[SemanticVersion, ...]:
    """Deduplicate *versions* and order them newest first."""
    return tuple(sorted(set(versions), reverse=True))


class VersionCatalog(ABC):
    """A read-only set of package releases."""

    @abstractmethod
    def available_versions(self) -> tuple[SemanticVersion, ...]:
        """Known releases in descending order, deduplicated."""

    def __contains__(self, version: object) -> bool:
        return version in self.available_versions()

    def __len__(self) -> int:
        return len(self.available_versions())


class StaticCatalog(VersionCatalog):
    """In-memory catalog over a fixed list of versions.

    Accepts ``SemanticVersion`` objects or strict version strings in any
    order; duplicates collapse.
    """

    def __init__(self, versions: Iterable[SemanticVersion | str]) -> None:
        self._versions = sorted_unique(
            v if isinstance(v, SemanticVersion) else SemanticVersion.parse(v)
            for v in versions
        )

    def available_versions(self) -> tuple[SemanticVersion, ...]:
        return self._versions

    def __repr__(self) -> str:
        return f"StaticCatalog({[str(v) for v in self._versions]!r})"
