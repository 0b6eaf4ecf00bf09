"""Version requirements: exact pins and comparator sets.

A requirement is either an ``ExactRequirement`` (a bare ``X.Y.Z`` string) or
a ``ConstraintSet`` of comparator atoms that must all hold (conjunction
semantics). Atoms may be separated by commas or whitespace, so both
``">=4.7.0,<6.0.0"`` and the module descriptor form ``">= 4.7.0 < 6.0.0"``
parse to the same requirement.

Supported operators: ``>=``, ``>``, ``<=``, ``<``, ``=``.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from pinpoint.core.version.semver import SemanticVersion, is_exact
from pinpoint.exceptions import InvalidVersionFormat

# A single comparator atom, anchored at the current scan position.
_ATOM_RE = re.compile(
    r"\s*(?P<op>>=|<=|=|>|<)\s*(?P<ver>[0-9]+\.[0-9]+\.[0-9]+)\s*"
)


class Operator(Enum):
    """Comparison operator of a single constraint atom."""

    GE = ">="
    GT = ">"
    LE = "<="
    LT = "<"
    EQ = "="

    def compare(self, version: SemanticVersion, target: SemanticVersion) -> bool:
        """Evaluate ``version <op> target``."""
        if self is Operator.GE:
            return version >= target
        if self is Operator.GT:
            return version > target
        if self is Operator.LE:
            return version <= target
        if self is Operator.LT:
            return version < target
        return version == target


@dataclass(frozen=True)
class Constraint:
    """One ``<operator> <version>`` atom."""

    operator: Operator
    version: SemanticVersion

    def satisfies(self, version: SemanticVersion) -> bool:
        return self.operator.compare(version, self.version)

    def __str__(self) -> str:
        return f"{self.operator.value} {self.version}"


class Requirement(ABC):
    """A predicate over ``SemanticVersion`` values."""

    @abstractmethod
    def satisfies(self, version: SemanticVersion) -> bool:
        """Return True if *version* meets this requirement."""


@dataclass(frozen=True)
class ExactRequirement(Requirement):
    """Matches exactly one version."""

    version: SemanticVersion

    def satisfies(self, version: SemanticVersion) -> bool:
        return version == self.version

    def __str__(self) -> str:
        return str(self.version)


@dataclass(frozen=True)
class ConstraintSet(Requirement):
    """Conjunction of comparator atoms; a version must satisfy every one.

    Attributes:
        constraints: The atoms, in the order they were written.
    """

    constraints: tuple[Constraint, ...]

    def __post_init__(self) -> None:
        if not self.constraints:
            raise InvalidVersionFormat("A constraint set needs at least one constraint.")

    @classmethod
    def of(cls, *atoms: tuple[str, SemanticVersion | str]) -> ConstraintSet:
        """Build a set from ``(operator, version)`` pairs, e.g. ``(">=", "4.7.0")``."""
        constraints = []
        for op, ver in atoms:
            if isinstance(ver, str):
                ver = SemanticVersion.parse(ver)
            constraints.append(Constraint(Operator(op), ver))
        return cls(tuple(constraints))

    @classmethod
    def major_train(cls, floor: SemanticVersion) -> ConstraintSet:
        """``>= floor, < (floor.major + 1).0.0``."""
        return cls((
            Constraint(Operator.GE, floor),
            Constraint(Operator.LT, floor.next_major()),
        ))

    def satisfies(self, version: SemanticVersion) -> bool:
        return all(c.satisfies(version) for c in self.constraints)

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.constraints)


# Matches every release; used when asking for the newest version available.
ANY_VERSION: ConstraintSet = ConstraintSet((
    Constraint(Operator.GE, SemanticVersion(0, 0, 0)),
))


def parse_requirement(requirement: str) -> Requirement:
    """Parse an exact version or a comparator-set requirement string.

    Args:
        requirement: ``"4.10.10"``, ``">= 4.7.0"``, ``">=4.7.0,<6.0.0"`` or
            ``">= 4.7.0 < 6.0.0"``.

    Returns:
        An ``ExactRequirement`` for a bare version, otherwise a
        ``ConstraintSet``.

    Raises:
        InvalidVersionFormat: If *requirement* is empty or contains anything
            other than comparator atoms.
    """
    if not isinstance(requirement, str) or not requirement.strip():
        raise InvalidVersionFormat(f"{requirement!r} is not a valid version requirement.")

    stripped = requirement.strip()
    if is_exact(stripped):
        return ExactRequirement(SemanticVersion.parse(stripped))

    constraints: list[Constraint] = []
    for chunk in stripped.split(","):
        if not chunk.strip():
            raise InvalidVersionFormat(f"{requirement!r} is not a valid version requirement.")
        pos = 0
        while pos < len(chunk):
            m = _ATOM_RE.match(chunk, pos)
            if not m:
                raise InvalidVersionFormat(
                    f"{requirement!r} is not a valid version requirement."
                )
            constraints.append(
                Constraint(Operator(m.group("op")), SemanticVersion.parse(m.group("ver")))
            )
            pos = m.end()
    return ConstraintSet(tuple(constraints))


def satisfies(version: SemanticVersion, requirement: Requirement) -> bool:
    """Pure predicate: does *version* meet *requirement*?"""
    return requirement.satisfies(version)
