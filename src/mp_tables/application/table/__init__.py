"""Application table – list-state controller with location sync.

Components, leaves first: :mod:`codec` (query-string parse/project),
:mod:`merge` (filter/sorter unions), :mod:`cursor` (cursor navigation) and
:mod:`controller` (:class:`TableController`).
"""
from mp_tables.application.table.codec import (
    LocationParams,
    build_location,
    parse_query,
    parse_table_params,
    project_table_params,
    stringify_query,
)
from mp_tables.application.table.controller import StateListener, TableController, TableState
from mp_tables.application.table.cursor import CursorState, CursorTracker
from mp_tables.application.table.location import InMemoryLocationStore
from mp_tables.application.table.merge import (
    FilterBehavior,
    difference,
    initial_filters,
    initial_sorters,
    union_filters,
    union_sorters,
)
from mp_tables.application.table.options import (
    FilterOptions,
    PaginationOptions,
    ProcessingMode,
    SorterOptions,
    TableOptions,
)
from mp_tables.application.table.ports import Fetcher, LocationStore, NavigationMode

__all__ = [
    "CursorState",
    "CursorTracker",
    "Fetcher",
    "FilterBehavior",
    "FilterOptions",
    "InMemoryLocationStore",
    "LocationParams",
    "LocationStore",
    "NavigationMode",
    "PaginationOptions",
    "ProcessingMode",
    "SorterOptions",
    "StateListener",
    "TableController",
    "TableOptions",
    "TableState",
    "build_location",
    "difference",
    "initial_filters",
    "initial_sorters",
    "parse_query",
    "parse_table_params",
    "project_table_params",
    "stringify_query",
    "union_filters",
    "union_sorters",
]
