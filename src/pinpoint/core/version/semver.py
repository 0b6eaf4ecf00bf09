"""Three-part release versions.

A ``SemanticVersion`` is an immutable ``(major, minor, patch)`` triple with a
total order given by lexicographic comparison of its components. Only strict
``major.minor.patch`` strings with all-numeric components are accepted;
pre-release tags, build metadata, two-part versions and surrounding
whitespace are rejected rather than coerced.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pinpoint.exceptions import InvalidVersionFormat

_EXACT_RE = re.compile(r"(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)")


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """An ordered ``(major, minor, patch)`` release version.

    Attributes:
        major: Major release number.
        minor: Minor release number.
        patch: Patch ("Z") release number.
    """

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, version: str) -> SemanticVersion:
        """Parse a strict ``major.minor.patch`` string.

        Raises:
            InvalidVersionFormat: If *version* is not three dot-separated
                numeric components.
        """
        m = _EXACT_RE.fullmatch(version) if isinstance(version, str) else None
        if not m:
            raise InvalidVersionFormat(f"{version!r} is not a valid version number.")
        return cls(int(m.group("major")), int(m.group("minor")), int(m.group("patch")))

    @property
    def series(self) -> tuple[int, int]:
        """The ``(major, minor)`` release series this version belongs to."""
        return self.major, self.minor

    def next_major(self) -> SemanticVersion:
        """Return ``(major + 1).0.0``."""
        return SemanticVersion(self.major + 1, 0, 0)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __repr__(self) -> str:
        return f"SemanticVersion('{self}')"


def parse_exact(version: str) -> SemanticVersion:
    """Parse *version* as an exact release; see ``SemanticVersion.parse``."""
    return SemanticVersion.parse(version)


def is_exact(version: str) -> bool:
    """Return True if *version* is a strict ``major.minor.patch`` string."""
    return isinstance(version, str) and _EXACT_RE.fullmatch(version) is not None
