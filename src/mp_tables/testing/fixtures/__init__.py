"""Testing fixtures – pytest fixtures for fake doubles.

Register in ``conftest.py``::

    pytest_plugins = ["mp_tables.testing.fixtures"]
"""
from mp_tables.testing.fixtures.table import location_store, scripted_fetcher

__all__ = ["location_store", "scripted_fetcher"]
