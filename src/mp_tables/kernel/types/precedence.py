"""Precedence helpers: resolve a value from an ordered list of optional sources."""

from __future__ import annotations

from typing import Callable, TypeVar

T = TypeVar("T")


def first_present(*sources: T | None, default: T | None = None) -> T | None:
    """Return the first source that is not ``None``.

    Sources are given highest priority first.  Falsy values such as ``0``,
    ``""`` or ``[]`` count as present; only ``None`` means absent.

    Example::

        page = first_present(parsed.current_page, options.current_page, default=1)
    """
    for source in sources:
        if source is not None:
            return source
    return default


def first_matching(
    predicate: Callable[[T], bool],
    *sources: T | None,
    default: T | None = None,
) -> T | None:
    """Like :func:`first_present` but also skips present values failing *predicate*."""
    for source in sources:
        if source is not None and predicate(source):
            return source
    return default


__all__ = ["first_matching", "first_present"]
