"""Table – cursor navigation with client-side history fallback.

Backends fall in two groups: bidirectional ones return both a ``next`` and a
``prev`` token, forward-only ones return just ``next``.  For the latter the
tracker remembers every cursor it left so it can walk back on its own.

Tokens are opaque and may be of any type; absence is ``None`` only.
"""
from __future__ import annotations

import dataclasses
from typing import Any

from mp_tables.application.pagination import CursorDirection, CursorTokens

__all__ = ["CursorState", "CursorTracker"]


@dataclasses.dataclass(frozen=True)
class CursorState:
    """Snapshot of the cursor position.

    ``history`` grows only on forward navigation and shrinks only when
    :meth:`go_to_previous` falls back to it.
    """

    current: Any = None
    direction: CursorDirection = CursorDirection.AFTER
    next: Any = None
    prev: Any = None
    history: tuple[Any, ...] = ()

    @property
    def has_next(self) -> bool:
        return self.next is not None

    @property
    def has_previous(self) -> bool:
        return self.prev is not None or bool(self.history) or self.current is not None

    @property
    def tokens(self) -> CursorTokens:
        return CursorTokens(next=self.next, prev=self.prev)

    def go_to_next(self) -> "CursorState":
        if self.next is None:
            return self
        return CursorState(
            current=self.next,
            direction=CursorDirection.AFTER,
            history=(*self.history, self.current),
        )

    def go_to_previous(self) -> "CursorState":
        # bidirectional backend
        if self.prev is not None:
            return CursorState(
                current=self.prev,
                direction=CursorDirection.BEFORE,
                history=self.history,
            )
        # forward-only backend
        if self.history:
            return CursorState(
                current=self.history[-1],
                direction=CursorDirection.AFTER,
                history=self.history[:-1],
            )
        if self.current is not None:
            return CursorState()
        return self

    def with_tokens(self, tokens: CursorTokens | None) -> "CursorState":
        tokens = tokens or CursorTokens()
        return dataclasses.replace(self, next=tokens.next, prev=tokens.prev)


class CursorTracker:
    """Mutable holder around :class:`CursorState` transitions.

    Each navigation method returns ``True`` when the position changed.

    Example::

        tracker = CursorTracker()
        tracker.apply_tokens(CursorTokens(next="abc"))
        tracker.go_to_next()      # current == "abc", history == (None,)
        tracker.go_to_previous()  # current is None again
    """

    def __init__(self, initial: CursorState | None = None) -> None:
        self._state = initial or CursorState()

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def current(self) -> Any:
        return self._state.current

    @property
    def direction(self) -> CursorDirection:
        return self._state.direction

    @property
    def history(self) -> tuple[Any, ...]:
        return self._state.history

    @property
    def has_next(self) -> bool:
        return self._state.has_next

    @property
    def has_previous(self) -> bool:
        return self._state.has_previous

    def _move(self, new: CursorState) -> bool:
        changed = new != self._state
        self._state = new
        return changed

    def go_to_next(self) -> bool:
        return self._move(self._state.go_to_next())

    def go_to_previous(self) -> bool:
        return self._move(self._state.go_to_previous())

    def apply_tokens(self, tokens: CursorTokens | None) -> bool:
        return self._move(self._state.with_tokens(tokens))

    def reset(self, current: Any = None, direction: CursorDirection = CursorDirection.AFTER) -> bool:
        return self._move(CursorState(current=current, direction=direction))

    def __repr__(self) -> str:
        return f"CursorTracker({self._state!r})"
