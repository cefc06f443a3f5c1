"""Unit tests for cursor navigation."""

from __future__ import annotations

import pytest

from mp_tables.application.pagination import CursorDirection, CursorTokens
from mp_tables.application.table.cursor import CursorState, CursorTracker


# ---------------------------------------------------------------------------
# Forward navigation
# ---------------------------------------------------------------------------


class TestGoToNext:
    def test_moves_to_next_and_records_history(self) -> None:
        state = CursorState(current="a", next="b", prev="z").go_to_next()
        assert state.current == "b"
        assert state.direction is CursorDirection.AFTER
        assert state.history == ("a",)
        assert state.next is None and state.prev is None

    def test_first_page_pushes_absent_cursor(self) -> None:
        state = CursorState(next="abc").go_to_next()
        assert state.history == (None,)

    def test_no_next_is_noop(self) -> None:
        state = CursorState(current="a", history=("x",))
        assert state.go_to_next() is state

    def test_falsy_token_counts_as_present(self) -> None:
        assert CursorState(next=0).go_to_next().current == 0


# ---------------------------------------------------------------------------
# Backward navigation
# ---------------------------------------------------------------------------


class TestGoToPrevious:
    def test_prefers_api_prev_and_ignores_history(self) -> None:
        state = CursorState(current="c", prev="p", history=("h1", "h2"))
        moved = state.go_to_previous()
        assert moved.current == "p"
        assert moved.direction is CursorDirection.BEFORE
        assert moved.history == ("h1", "h2")

    def test_falls_back_to_history(self) -> None:
        moved = CursorState(current="c", history=("h1", "h2")).go_to_previous()
        assert moved.current == "h2"
        assert moved.history == ("h1",)
        assert moved.direction is CursorDirection.AFTER

    def test_returns_to_start_when_history_empty(self) -> None:
        moved = CursorState(current="c", next="n").go_to_previous()
        assert moved.current is None
        assert moved.history == ()
        assert moved.next is None

    def test_at_start_is_noop(self) -> None:
        state = CursorState()
        assert state.go_to_previous() is state

    def test_clears_tokens(self) -> None:
        moved = CursorState(current="c", next="n", prev="p").go_to_previous()
        assert moved.next is None and moved.prev is None


# ---------------------------------------------------------------------------
# Derived flags and tokens
# ---------------------------------------------------------------------------


class TestFlags:
    @pytest.mark.parametrize(
        ("state", "expected"),
        [
            (CursorState(), False),
            (CursorState(prev="p"), True),
            (CursorState(history=(None,)), True),
            (CursorState(current="c"), True),
        ],
    )
    def test_has_previous(self, state: CursorState, expected: bool) -> None:
        assert state.has_previous is expected

    def test_has_next(self) -> None:
        assert CursorState(next="n").has_next
        assert not CursorState().has_next

    def test_with_tokens_overwrites(self) -> None:
        state = CursorState(next="old", prev="old").with_tokens(CursorTokens(next="new"))
        assert state.next == "new"
        assert state.prev is None

    def test_with_missing_tokens_clears(self) -> None:
        state = CursorState(next="old").with_tokens(None)
        assert state.next is None

    def test_structured_tokens(self) -> None:
        token = {"id": 5, "ts": "2024-01-01"}
        state = CursorState().with_tokens(CursorTokens(next=token)).go_to_next()
        assert state.current == token


# ---------------------------------------------------------------------------
# CursorTracker
# ---------------------------------------------------------------------------


class TestCursorTracker:
    def test_forward_only_round_trip(self) -> None:
        tracker = CursorTracker()
        tracker.apply_tokens(CursorTokens(next="abc"))
        assert tracker.go_to_next() is True
        tracker.apply_tokens(CursorTokens(next="def"))
        assert tracker.has_previous
        assert tracker.go_to_previous() is True
        assert tracker.current is None
        assert tracker.history == ()

    def test_noop_returns_false(self) -> None:
        tracker = CursorTracker()
        assert tracker.go_to_next() is False
        assert tracker.go_to_previous() is False

    def test_reset(self) -> None:
        tracker = CursorTracker(CursorState(current="x", history=("a",)))
        assert tracker.reset() is True
        assert tracker.state == CursorState()

    def test_reset_to_position(self) -> None:
        tracker = CursorTracker()
        tracker.reset("tok", CursorDirection.BEFORE)
        assert tracker.current == "tok"
        assert tracker.direction is CursorDirection.BEFORE

    def test_history_walk(self) -> None:
        tracker = CursorTracker()
        for token in ("p2", "p3", "p4"):
            tracker.apply_tokens(CursorTokens(next=token))
            tracker.go_to_next()
        assert tracker.history == (None, "p2", "p3")
        tracker.go_to_previous()
        assert tracker.current == "p3"
        tracker.go_to_previous()
        assert tracker.current == "p2"
        tracker.go_to_previous()
        assert tracker.current is None
        assert not tracker.has_previous
