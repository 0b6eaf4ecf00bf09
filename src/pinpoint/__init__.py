"""Pinpoint: package and companion-runtime version resolution for module tooling."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
