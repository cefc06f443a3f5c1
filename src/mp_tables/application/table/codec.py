"""Table – query-string codec for the serialized view state.

Nested values use bracket notation with numeric list indices::

    currentPage=2&pageSize=10&sorters[0][field]=id&sorters[0][order]=desc
    &filters[0][field]=status&filters[0][operator]=eq&filters[0][value]=open

Parsing never raises: malformed pieces are dropped and the caller falls back
to the next source of defaults.
"""
from __future__ import annotations

import dataclasses
import re
from enum import Enum
from typing import Any, Iterator, Mapping, Sequence
from urllib.parse import parse_qsl, quote

from mp_tables.application.pagination import (
    CursorDirection,
    Filter,
    FilterOperator,
    PaginationMode,
    Sort,
    SortOrder,
)
from mp_tables.application.table.merge import difference

__all__ = [
    "CONTROLLED_KEYS",
    "LocationParams",
    "build_location",
    "filter_to_params",
    "parse_filters",
    "parse_query",
    "parse_sorters",
    "parse_table_params",
    "project_table_params",
    "sorter_to_params",
    "stringify_query",
]

CONTROLLED_KEYS = frozenset({"currentPage", "pageSize", "sorters", "filters", "after", "before"})

_KEY_RE = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")
# Longer digit runs are neither page numbers nor list indices.
_MAX_DIGITS = 18


@dataclasses.dataclass(frozen=True)
class LocationParams:
    """Structured view of a serialized location.

    ``extra`` holds the query keys this package does not own; they are passed
    through untouched whenever the location is rewritten.
    """

    search: str = ""
    pathname: str = ""
    current_page: int | None = None
    page_size: int | None = None
    sorters: tuple[Sort, ...] = ()
    filters: tuple[Filter, ...] = ()
    after: Any = None
    before: Any = None
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.search == ""


# ---------------------------------------------------------------------------
# Generic nested query strings
# ---------------------------------------------------------------------------


def _split_key(key: str) -> list[str]:
    match = _KEY_RE.match(key)
    if match is None:
        return [key]
    return [match.group(1), *_SEGMENT_RE.findall(match.group(2))]


def _assign(node: dict[str, Any], path: list[str], value: str) -> None:
    for segment in path[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            return
        node = child
    leaf = path[-1]
    if leaf == "":
        leaf = str(len(node))
    existing = node.get(leaf)
    if existing is None:
        node[leaf] = value
    elif isinstance(existing, list):
        existing.append(value)
    elif isinstance(existing, str):
        node[leaf] = [existing, value]


def _is_decimal(text: str) -> bool:
    return text.isascii() and text.isdecimal() and len(text) <= _MAX_DIGITS


def _listify(value: Any) -> Any:
    if isinstance(value, list):
        return [_listify(v) for v in value]
    if not isinstance(value, dict):
        return value
    converted = {k: _listify(v) for k, v in value.items()}
    if converted and all(_is_decimal(k) for k in converted):
        return [converted[k] for k in sorted(converted, key=int)]
    return converted


def parse_query(search: str) -> dict[str, Any]:
    """Decode a (possibly ``?``-prefixed) query string into nested dicts/lists."""
    root: dict[str, Any] = {}
    for key, value in parse_qsl(search.lstrip("?"), keep_blank_values=True):
        _assign(root, _split_key(key), value)
    return {k: _listify(v) for k, v in root.items()}


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _flatten(prefix: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for k, v in value.items():
            yield from _flatten(f"{prefix}[{k}]", v)
    elif isinstance(value, (list, tuple)):
        for i, v in enumerate(value):
            yield from _flatten(f"{prefix}[{i}]", v)
    else:
        yield prefix, _scalar(value)


def stringify_query(params: Mapping[str, Any]) -> str:
    """Encode *params* as a query string (no leading ``?``); ``None`` is skipped."""
    parts = [
        f"{quote(key, safe='[]')}={quote(value, safe='')}"
        for name, value in params.items()
        for key, value in _flatten(name, value)
    ]
    return "&".join(parts)


def build_location(params: Mapping[str, Any], pathname: str = "") -> str:
    query = stringify_query(params)
    return f"{pathname}?{query}" if query else pathname


# ---------------------------------------------------------------------------
# Table params
# ---------------------------------------------------------------------------


def _positive_int(raw: Any) -> int | None:
    if not isinstance(raw, str) or not _is_decimal(raw):
        return None
    value = int(raw)
    return value if value >= 1 else None


def _present(raw: Any) -> Any:
    return None if raw is None or raw == "" else raw


def parse_sorters(raw: Any) -> list[Sort]:
    if not isinstance(raw, list):
        return []
    sorters: list[Sort] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        field, order = item.get("field"), item.get("order")
        if not isinstance(field, str) or not field or not isinstance(order, str):
            continue
        try:
            sorters.append(Sort(field=field, order=SortOrder(order.lower())))
        except ValueError:
            continue
    return sorters


def _parse_filter(item: Any) -> Filter | None:
    if not isinstance(item, dict) or "value" not in item:
        return None
    try:
        operator = FilterOperator(item.get("operator"))
    except ValueError:
        return None
    key = item.get("key") if isinstance(item.get("key"), str) else None
    if operator.is_conditional:
        nested = parse_filters(item["value"])
        if not nested:
            return None
        return Filter.conditional(operator, nested, key=key)
    field = item.get("field")
    if not isinstance(field, str) or not field:
        return None
    return Filter(field=field, operator=operator, value=item["value"], key=key)


def parse_filters(raw: Any) -> list[Filter]:
    if not isinstance(raw, list):
        return []
    return [f for f in (_parse_filter(item) for item in raw) if f is not None]


def parse_table_params(search: str, pathname: str = "") -> LocationParams:
    """Parse a serialized location; unknown or malformed fields are ignored."""
    query = parse_query(search)
    return LocationParams(
        search=search.lstrip("?"),
        pathname=pathname,
        current_page=_positive_int(query.get("currentPage")),
        page_size=_positive_int(query.get("pageSize")),
        sorters=tuple(parse_sorters(query.get("sorters"))),
        filters=tuple(parse_filters(query.get("filters"))),
        after=_present(query.get("after")),
        before=_present(query.get("before")),
        extra={k: v for k, v in query.items() if k not in CONTROLLED_KEYS},
    )


def sorter_to_params(sorter: Sort) -> dict[str, Any]:
    return {"field": sorter.field, "order": sorter.order}


def filter_to_params(entry: Filter) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if entry.field is not None:
        params["field"] = entry.field
    params["operator"] = entry.operator
    if entry.is_conditional:
        params["value"] = [filter_to_params(f) for f in entry.value]
    else:
        params["value"] = entry.value
    if entry.key is not None:
        params["key"] = entry.key
    return params


def project_table_params(
    *,
    mode: PaginationMode,
    current_page: int,
    page_size: int,
    sorters: Sequence[Sort],
    filters: Sequence[Filter],
    permanent_sorters: Sequence[Sort] = (),
    permanent_filters: Sequence[Filter] = (),
    cursor_current: Any = None,
    cursor_direction: CursorDirection = CursorDirection.AFTER,
) -> dict[str, Any]:
    """Project view state into query params.

    A key mapped to ``None`` means "remove from the location".  Permanent
    sorters/filters are never emitted.
    """
    params: dict[str, Any] = {}
    if mode is PaginationMode.OFFSET:
        params["currentPage"] = current_page
        params["pageSize"] = page_size
    elif mode is PaginationMode.CURSOR:
        params["after"] = None
        params["before"] = None
        if cursor_current is not None:
            params[CursorDirection(cursor_direction).value] = cursor_current
    params["sorters"] = [sorter_to_params(s) for s in difference(sorters, permanent_sorters)] or None
    params["filters"] = [filter_to_params(f) for f in difference(filters, permanent_filters)] or None
    return params
