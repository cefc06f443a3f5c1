"""Testing fakes – in-memory doubles for table ports."""
from mp_tables.application.table.location import InMemoryLocationStore
from mp_tables.testing.fakes.fetcher import InMemoryFetcher, ScriptedFetcher

__all__ = ["InMemoryFetcher", "InMemoryLocationStore", "ScriptedFetcher"]
