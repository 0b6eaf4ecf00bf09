"""Module descriptor reading and requirement extraction.

A module descriptor (``metadata.json``) lists the platform packages a module
supports::

    {
      "name": "example-module",
      "requirements": [
        {"name": "puppet", "version_requirement": ">= 4.7.0 < 6.0.0"}
      ]
    }

``MetadataRequirementAdapter`` turns the entry for the target package into a
``Requirement``. A descriptor without such an entry gets the default range.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pinpoint.core.version import ConstraintSet, Requirement, parse_requirement
from pinpoint.exceptions import InvalidVersionFormat, MetadataError

logger = logging.getLogger(__name__)

METADATA_FILENAME = "metadata.json"

DEFAULT_REQUIREMENT: ConstraintSet = ConstraintSet.of((">=", "4.7.0"), ("<", "6.0.0"))


@dataclass
class ModuleMetadata:
    """Parsed module descriptor data.

    Attributes:
        data: The raw descriptor mapping.
        source_path: File the data was read from, if any.
    """

    data: dict[str, Any] = field(default_factory=dict)
    source_path: Path | None = None

    @classmethod
    def from_file(cls, path: Path) -> ModuleMetadata:
        """Read a descriptor from *path*; a missing file yields an empty one.

        Raises:
            MetadataError: If the file exists but is not a JSON object.
        """
        path = Path(path)
        if not path.is_file():
            logger.debug("No module descriptor at %s", path)
            return cls(source_path=path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MetadataError(f"Unable to read module descriptor {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise MetadataError(f"Module descriptor {path} must contain a JSON object.")
        return cls(data=data, source_path=path)

    @property
    def requirements(self) -> list[dict[str, Any]]:
        """The ``requirements`` list, empty when the key is absent or null.

        Raises:
            MetadataError: If ``requirements`` is not a list of objects.
        """
        reqs = self.data.get("requirements")
        if reqs is None:
            return []
        where = self.source_path or "module descriptor"
        if not isinstance(reqs, list):
            raise MetadataError(f"{where}: \"requirements\" must be a list, got {type(reqs).__name__}.")
        for entry in reqs:
            if not isinstance(entry, dict):
                raise MetadataError(f"{where}: requirement entries must be objects, got {entry!r}.")
        return reqs

    def requirement_entry(self, name: str) -> dict[str, Any] | None:
        """Return the requirements entry named *name*, if present."""
        for entry in self.requirements:
            if entry.get("name") == name:
                return entry
        return None


class MetadataRequirementAdapter:
    """Extract the version requirement for *package_name* from a descriptor.

    Args:
        package_name: The ``name`` looked up in the requirements list.
        default: Requirement used when the descriptor has no entry.
    """

    def __init__(
        self,
        package_name: str = "puppet",
        default: Requirement = DEFAULT_REQUIREMENT,
    ) -> None:
        self.package_name = package_name
        self.default = default

    def requirement_for(self, metadata: ModuleMetadata) -> Requirement:
        """Return the requirement declared in *metadata*.

        Raises:
            InvalidVersionFormat: If the entry's ``version_requirement`` is
                present but empty or unparseable.
            MetadataError: If the descriptor's ``requirements`` is malformed.
        """
        entry = metadata.requirement_entry(self.package_name)
        if entry is None or "version_requirement" not in entry:
            logger.debug(
                "No %s requirement in module descriptor, using %s",
                self.package_name, self.default,
            )
            return self.default
        raw = entry["version_requirement"]
        if not isinstance(raw, str):
            raise InvalidVersionFormat(
                f"{raw!r} is not a valid version requirement for {self.package_name}."
            )
        return parse_requirement(raw)
