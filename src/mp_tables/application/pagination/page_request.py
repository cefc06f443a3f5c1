"""Application pagination – Sort, Filter, PaginationMode, ListRequest."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Hashable


class PaginationMode(str, Enum):
    OFFSET = "offset"
    CURSOR = "cursor"
    OFF = "off"


class CursorDirection(str, Enum):
    AFTER = "after"
    BEFORE = "before"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class FilterOperator(str, Enum):
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    GT = "gt"
    LTE = "lte"
    GTE = "gte"
    IN = "in"
    NIN = "nin"
    INA = "ina"
    NINA = "nina"
    CONTAINS = "contains"
    NCONTAINS = "ncontains"
    CONTAINSS = "containss"
    NCONTAINSS = "ncontainss"
    BETWEEN = "between"
    NBETWEEN = "nbetween"
    NULL = "null"
    NNULL = "nnull"
    STARTSWITH = "startswith"
    NSTARTSWITH = "nstartswith"
    STARTSWITHS = "startswiths"
    NSTARTSWITHS = "nstartswiths"
    ENDSWITH = "endswith"
    NENDSWITH = "nendswith"
    ENDSWITHS = "endswiths"
    NENDSWITHS = "nendswiths"
    OR = "or"
    AND = "and"

    @property
    def is_conditional(self) -> bool:
        return self in (FilterOperator.OR, FilterOperator.AND)


@dataclasses.dataclass(frozen=True)
class Sort:
    """Single sort criterion.

    ``order=None`` asks the merger to drop any sorter on *field*.
    """
    field: str
    order: SortOrder | None = SortOrder.ASC

    def __post_init__(self) -> None:
        if isinstance(self.order, str) and not isinstance(self.order, SortOrder):
            object.__setattr__(self, "order", SortOrder(self.order.lower()))

    @property
    def identity(self) -> Hashable:
        return self.field


@dataclasses.dataclass(frozen=True)
class Filter:
    """Field filter, or a conditional (``or``/``and``) group of filters.

    Two filters with the same identity replace each other when merged.  The
    identity is ``(field, operator)``, or ``(key, operator)`` when an explicit
    *key* is given.  ``value=None`` asks the merger to drop the filter.
    List values (``in``, ``between``, conditional groups) are stored as tuples
    so a filter restored from a location compares equal to the original.
    """
    field: str | None
    operator: FilterOperator
    value: Any
    key: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.operator, FilterOperator):
            object.__setattr__(self, "operator", FilterOperator(self.operator))
        if isinstance(self.value, list):
            object.__setattr__(self, "value", tuple(self.value))

    @property
    def is_conditional(self) -> bool:
        return self.operator.is_conditional

    @property
    def identity(self) -> Hashable:
        if self.key is not None:
            return ("key", self.key, self.operator)
        return ("field", self.field, self.operator)

    @classmethod
    def conditional(
        cls,
        operator: FilterOperator | str,
        filters: list["Filter"] | tuple["Filter", ...],
        key: str | None = None,
    ) -> "Filter":
        """Build an ``or``/``and`` group."""
        return cls(field=None, operator=FilterOperator(operator), value=tuple(filters), key=key)


@dataclasses.dataclass(frozen=True)
class PaginationRequest:
    """Pagination part of a :class:`ListRequest`.

    ``current_page`` is ``None`` in cursor mode.
    """
    mode: PaginationMode
    page_size: int
    current_page: int | None = None


@dataclasses.dataclass(frozen=True)
class ListRequest:
    """Parameters handed to a :class:`~mp_tables.application.table.ports.Fetcher`.

    ``filters`` / ``sorters`` are ``None`` when that concern is handled
    client-side.  In cursor mode ``meta["cursor"]`` holds
    ``{"current": token, "direction": "after" | "before"}``.
    """
    resource: str
    pagination: PaginationRequest
    filters: tuple[Filter, ...] | None = None
    sorters: tuple[Sort, ...] | None = None
    meta: dict[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def cursor(self) -> dict[str, Any] | None:
        return self.meta.get("cursor")


__all__ = [
    "CursorDirection",
    "Filter",
    "FilterOperator",
    "ListRequest",
    "PaginationMode",
    "PaginationRequest",
    "Sort",
    "SortOrder",
]
