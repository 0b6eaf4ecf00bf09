"""Platform release trains and the package versions they ship with.

A release train is a platform vendor's ``major.minor`` release line (for
example Puppet Enterprise 2017.3.x). Each train maps to the minimum package
version compatible with it and, for offline installs, the companion runtime
whose catalog holds that package line.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from pinpoint.core.version import SemanticVersion
from pinpoint.exceptions import ConfigError, InvalidVersionFormat, UnknownPlatformRelease


def _train_key(train_id: str) -> tuple[int, int]:
    major, _, minor = train_id.partition(".")
    return int(major), int(minor)


@dataclass(frozen=True)
class ReleaseTrainEntry:
    """One row of the release-train table.

    Attributes:
        train_id: ``major.minor`` of the platform release (e.g. ``"2017.3"``).
        min_package_version: Oldest package release shipped on this train.
        runtime_hint: Runtime id whose catalog carries this package line;
            consulted in offline mode only.
    """

    train_id: str
    min_package_version: SemanticVersion
    runtime_hint: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ReleaseTrainEntry:
        """Build an entry from a ``{train, min_version, runtime}`` mapping.

        Raises:
            ConfigError: If a key is missing or a value is malformed.
        """
        try:
            train_id = str(data["train"])
            min_version = SemanticVersion.parse(str(data["min_version"]))
            runtime = str(data["runtime"])
            _train_key(train_id)
        except KeyError as exc:
            raise ConfigError(f"Release train entry is missing {exc.args[0]!r}: {dict(data)}") from exc
        except (InvalidVersionFormat, ValueError) as exc:
            raise ConfigError(f"Invalid release train entry {dict(data)}: {exc}") from exc
        return cls(train_id, min_version, runtime)


class ReleaseTrainTable:
    """Read-only lookup from a platform release to its train entry.

    Entries are held ordered by train id, newest first.
    """

    def __init__(
        self,
        entries: Iterable[ReleaseTrainEntry],
        platform_name: str = "Puppet Enterprise",
    ) -> None:
        by_train = {e.train_id: e for e in entries}
        self._entries = tuple(
            sorted(by_train.values(), key=lambda e: _train_key(e.train_id), reverse=True)
        )
        self.platform_name = platform_name

    @property
    def entries(self) -> tuple[ReleaseTrainEntry, ...]:
        return self._entries

    def lookup(self, platform_version: SemanticVersion) -> ReleaseTrainEntry:
        """Return the entry for the train *platform_version* belongs to.

        Raises:
            UnknownPlatformRelease: If no train matches.
        """
        train_id = f"{platform_version.major}.{platform_version.minor}"
        for entry in self._entries:
            if entry.train_id == train_id:
                return entry
        raise UnknownPlatformRelease(
            f"Unable to map {self.platform_name} version {platform_version} "
            "to a known release train."
        )

    def with_overrides(self, entries: Iterable[ReleaseTrainEntry]) -> ReleaseTrainTable:
        """Return a new table where *entries* replace or extend this one's."""
        return ReleaseTrainTable([*self._entries, *entries], self.platform_name)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ReleaseTrainEntry]:
        return iter(self._entries)


def _entry(train: str, min_version: str, runtime: str) -> ReleaseTrainEntry:
    return ReleaseTrainEntry(train, SemanticVersion.parse(min_version), runtime)


DEFAULT_RELEASE_TRAINS = ReleaseTrainTable([
    _entry("2017.3", "5.3.2", "2.4.3"),
    _entry("2017.2", "4.10.1", "2.1.9"),
    _entry("2017.1", "4.9.4", "2.1.9"),
    _entry("2016.5", "4.8.1", "2.1.9"),
    _entry("2016.4", "4.7.0", "2.1.9"),
    _entry("2016.2", "4.5.2", "2.1.9"),
    _entry("2016.1", "4.4.1", "2.1.9"),
])
