"""Application – list-state building blocks (framework-agnostic)."""

from mp_tables.application.pagination import (
    CursorDirection,
    CursorTokens,
    Filter,
    FilterOperator,
    ListRequest,
    ListResult,
    PaginationMode,
    Sort,
    SortOrder,
)
from mp_tables.application.table import (
    FilterBehavior,
    FilterOptions,
    InMemoryLocationStore,
    PaginationOptions,
    SorterOptions,
    TableController,
    TableOptions,
)

__all__ = [
    "CursorDirection",
    "CursorTokens",
    "Filter",
    "FilterBehavior",
    "FilterOperator",
    "FilterOptions",
    "InMemoryLocationStore",
    "ListRequest",
    "ListResult",
    "PaginationMode",
    "PaginationOptions",
    "Sort",
    "SortOrder",
    "SorterOptions",
    "TableController",
    "TableOptions",
]
