"""Testing generators – property-based strategies."""
from mp_tables.testing.generators.strategies import (
    filter_list_strategy,
    filter_strategy,
    sort_strategy,
)

__all__ = ["filter_list_strategy", "filter_strategy", "sort_strategy"]
