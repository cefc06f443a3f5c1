"""Unit tests for the Hypothesis strategies."""

from __future__ import annotations

from hypothesis import given, settings

from mp_tables.application.pagination import Filter, FilterOperator, Sort
from mp_tables.testing.generators import filter_list_strategy, filter_strategy, sort_strategy


class TestStrategies:
    @given(sort_strategy())
    def test_sort(self, sorter: Sort) -> None:
        assert isinstance(sorter, Sort)
        assert sorter.order is not None

    @given(sort_strategy(fields=("only",)))
    def test_sort_custom_fields(self, sorter: Sort) -> None:
        assert sorter.field == "only"

    @given(filter_strategy())
    def test_filter_is_plain(self, entry: Filter) -> None:
        assert not entry.is_conditional
        assert isinstance(entry.operator, FilterOperator)
        assert entry.value

    @settings(max_examples=50)
    @given(filter_list_strategy(max_size=4))
    def test_filter_list_unique(self, entries: list[Filter]) -> None:
        assert len(entries) <= 4
        assert len({f.identity for f in entries}) == len(entries)
