"""Shared pytest configuration."""
from __future__ import annotations

import pytest

from mp_tables.observability.logging import reset_warnings

pytest_plugins = ["mp_tables.testing.fixtures"]


@pytest.fixture(autouse=True)
def _fresh_warnings():
    reset_warnings()
    yield
    reset_warnings()
