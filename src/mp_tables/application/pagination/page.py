"""Application pagination – ListResult, CursorTokens."""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Generic, Mapping, TypeVar

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class CursorTokens:
    """Opaque continuation tokens returned by a cursor-aware backend."""

    next: Any = None
    prev: Any = None


@dataclasses.dataclass(frozen=True)
class ListResult(Generic[T]):
    """Normalized list response.

    ``total`` may be ``None`` for backends that do not count; ``cursor`` is
    ``None`` for backends that are not cursor-aware.
    """

    data: tuple[T, ...] = ()
    total: int | None = None
    cursor: CursorTokens | None = None

    def page_count(self, page_size: int) -> int:
        if not page_size:
            return 1
        return math.ceil((self.total or 0) / page_size)

    @classmethod
    def coerce(cls, raw: "ListResult[T] | Mapping[str, Any]") -> "ListResult[T]":
        """Accept a :class:`ListResult` or a ``{"data", "total", "cursor"}`` mapping."""
        if isinstance(raw, ListResult):
            return raw
        cursor = raw.get("cursor")
        if isinstance(cursor, Mapping):
            cursor = CursorTokens(next=cursor.get("next"), prev=cursor.get("prev"))
        return cls(
            data=tuple(raw.get("data") or ()),
            total=raw.get("total"),
            cursor=cursor,
        )


EMPTY_RESULT: ListResult[Any] = ListResult()

__all__ = ["EMPTY_RESULT", "CursorTokens", "ListResult"]
