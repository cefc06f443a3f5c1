"""Testing support – fakes, fixtures and generators.

Import in your ``conftest.py``::

    pytest_plugins = ["mp_tables.testing.fixtures"]
"""

from mp_tables.testing.fakes import InMemoryFetcher, InMemoryLocationStore, ScriptedFetcher

__all__ = ["InMemoryFetcher", "InMemoryLocationStore", "ScriptedFetcher"]
