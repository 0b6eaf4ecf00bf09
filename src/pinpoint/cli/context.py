"""Per-invocation state shared by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass

from pinpoint.config import Settings
from pinpoint.core.resolver import VersionResolver
from pinpoint.factory import default_resolver


@dataclass
class CliContext:
    """Settings plus the resolver built from them on first use.

    Attributes:
        settings: Loaded configuration.
        resolver: Pre-built resolver; created from *settings* when None.
    """

    settings: Settings
    resolver: VersionResolver | None = None

    def get_resolver(self) -> VersionResolver:
        if self.resolver is None:
            self.resolver = default_resolver(self.settings)
        return self.resolver
