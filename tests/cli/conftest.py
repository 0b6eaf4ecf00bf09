"""CLI fixtures: a runner and pre-wired contexts that skip settings discovery."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from pinpoint.cli.context import CliContext
from pinpoint.config import Settings
from tests.helpers import make_offline_resolver, make_remote_resolver


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def offline_obj() -> CliContext:
    return CliContext(Settings(), resolver=make_offline_resolver())


@pytest.fixture
def remote_obj() -> CliContext:
    return CliContext(Settings(), resolver=make_remote_resolver())
