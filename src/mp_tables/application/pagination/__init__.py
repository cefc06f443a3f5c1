"""Application pagination – sort/filter/request/result primitives."""
from mp_tables.application.pagination.page_request import (
    CursorDirection,
    Filter,
    FilterOperator,
    ListRequest,
    PaginationMode,
    PaginationRequest,
    Sort,
    SortOrder,
)
from mp_tables.application.pagination.page import EMPTY_RESULT, CursorTokens, ListResult

__all__ = [
    "EMPTY_RESULT",
    "CursorDirection",
    "CursorTokens",
    "Filter",
    "FilterOperator",
    "ListRequest",
    "ListResult",
    "PaginationMode",
    "PaginationRequest",
    "Sort",
    "SortOrder",
]
