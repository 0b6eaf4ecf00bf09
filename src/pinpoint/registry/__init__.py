"""Remote release indexes.

Public API::

    from pinpoint.registry import RubyGemsFetcher
"""

from __future__ import annotations

from pinpoint.registry.rubygems import RubyGemsFetcher

__all__ = ["RubyGemsFetcher"]
