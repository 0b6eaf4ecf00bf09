"""Version value types: ``SemanticVersion`` and requirements over it.

All public names are re-exported here, so callers can write
``from pinpoint.core.version import SemanticVersion, parse_requirement``.
"""

from pinpoint.core.version.semver import (
    SemanticVersion,
    is_exact,
    parse_exact,
)
from pinpoint.core.version.constraints import (
    ANY_VERSION,
    Constraint,
    ConstraintSet,
    ExactRequirement,
    Operator,
    Requirement,
    parse_requirement,
    satisfies,
)

__all__ = [
    "ANY_VERSION",
    "Constraint",
    "ConstraintSet",
    "ExactRequirement",
    "Operator",
    "Requirement",
    "SemanticVersion",
    "is_exact",
    "parse_exact",
    "parse_requirement",
    "satisfies",
]
