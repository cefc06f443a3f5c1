"""Table – union of permanent, incoming and previous filter/sorter sets.

Entries are matched by their ``identity`` (see :class:`Filter` and
:class:`Sort`).  The merged sequence always starts with the permanent entries,
unmodified and in their given order.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Hashable, Iterable, Sequence, TypeVar

from mp_tables.application.pagination import Filter, Sort
from mp_tables.observability.logging import get_logger, warn_once

__all__ = [
    "FilterBehavior",
    "difference",
    "initial_filters",
    "initial_sorters",
    "union_filters",
    "union_sorters",
]

E = TypeVar("E", Filter, Sort)

_log = get_logger(__name__)


class FilterBehavior(str, Enum):
    MERGE = "merge"
    REPLACE = "replace"


def _union(
    permanent: Sequence[E],
    incoming: Sequence[E],
    previous: Sequence[E],
    is_removal: Callable[[E], bool],
) -> list[E]:
    taken: set[Hashable] = {entry.identity for entry in permanent}
    latest: dict[Hashable, E] = {}
    for entry in incoming:
        latest[entry.identity] = entry

    merged: list[E] = list(permanent)
    for entry in (*incoming, *previous):
        identity = entry.identity
        if identity in taken:
            continue
        taken.add(identity)
        chosen = latest.get(identity, entry)
        if not is_removal(chosen):
            merged.append(chosen)
    return merged


def _is_removed_filter(entry: Filter) -> bool:
    if entry.value is None:
        return True
    return entry.is_conditional and len(entry.value) == 0


def _is_removed_sorter(entry: Sort) -> bool:
    return entry.order is None


def union_filters(
    permanent: Sequence[Filter],
    incoming: Sequence[Filter],
    previous: Sequence[Filter] = (),
) -> list[Filter]:
    """Merge *incoming* filters over *previous* ones, keeping *permanent* first.

    Pass no *previous* for replace semantics.  An incoming filter with a
    ``None`` value (or an empty conditional group) removes the matching
    previous filter.
    """
    unkeyed = [f for f in incoming if f.is_conditional and f.key is None]
    warn_once(
        _log,
        len(unkeyed) > 1,
        "multiple top-level conditional filters without a key collapse into one; give each a key",
    )
    return _union(permanent, incoming, previous, _is_removed_filter)


def union_sorters(permanent: Sequence[Sort], incoming: Sequence[Sort]) -> list[Sort]:
    """Return *permanent* sorters followed by *incoming* ones on other fields."""
    return _union(permanent, incoming, (), _is_removed_sorter)


def initial_filters(permanent: Sequence[Filter], defaults: Iterable[Filter] | None) -> list[Filter]:
    return union_filters(permanent, list(defaults or ()))


def initial_sorters(permanent: Sequence[Sort], defaults: Iterable[Sort] | None) -> list[Sort]:
    return union_sorters(permanent, list(defaults or ()))


def difference(entries: Iterable[E], permanent: Sequence[E]) -> list[E]:
    """Entries that are not equal to any permanent entry."""
    return [entry for entry in entries if entry not in permanent]
