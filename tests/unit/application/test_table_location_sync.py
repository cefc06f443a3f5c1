"""Unit tests for two-way sync between TableController and a location store."""

from __future__ import annotations

import asyncio

from mp_tables.application.pagination import Filter, Sort
from mp_tables.application.table import (
    FilterOptions,
    NavigationMode,
    PaginationOptions,
    TableController,
    TableOptions,
    parse_table_params,
)
from mp_tables.testing import InMemoryFetcher, InMemoryLocationStore, ScriptedFetcher

STATUS_OPEN = Filter("status", "eq", "open")
AUTHOR_ALICE = Filter("author", "eq", "alice")

SYNCED = TableOptions(sync_with_location=True)
CURSOR_SYNCED = TableOptions(
    pagination=PaginationOptions(mode="cursor", page_size=5), sync_with_location=True
)


def _synced(store: InMemoryLocationStore, options: TableOptions = SYNCED, fetcher=None) -> TableController:
    return TableController(fetcher or ScriptedFetcher(), resource="posts", location=store, options=options)


# ---------------------------------------------------------------------------
# InMemoryLocationStore
# ---------------------------------------------------------------------------


class TestInMemoryLocationStore:
    def test_strips_question_mark(self) -> None:
        assert InMemoryLocationStore("?a=1").search == "a=1"

    def test_push_and_replace(self) -> None:
        store = InMemoryLocationStore("a=1")
        store.navigate(mode=NavigationMode.PUSH, params={"a": 2})
        store.navigate(mode=NavigationMode.REPLACE, params={"a": 3})
        assert store.history == ["a=1", "a=3"]
        assert store.search == "a=3"

    def test_navigate_skips_none(self) -> None:
        store = InMemoryLocationStore()
        assert store.navigate(mode="replace", params={"a": 1, "b": None}) == "a=1"

    def test_listeners_notified(self) -> None:
        store = InMemoryLocationStore()
        seen: list[str] = []
        unsubscribe = store.subscribe(seen.append)
        store.visit("?x=1")
        unsubscribe()
        store.visit("x=2")
        assert seen == ["x=1"]

    def test_current_params(self) -> None:
        store = InMemoryLocationStore("currentPage=2&tab=a", pathname="/posts", resource="posts")
        params = store.get_current_params()
        assert params.current_page == 2
        assert params.pathname == "/posts"
        assert params.extra == {"tab": "a"}
        assert store.get_resource() == "posts"


# ---------------------------------------------------------------------------
# Sync-out
# ---------------------------------------------------------------------------


class TestSyncOut:
    def test_initial_state_written(self) -> None:
        store = InMemoryLocationStore()
        _synced(store)
        assert store.search == "currentPage=1&pageSize=10"
        assert store.history == ["currentPage=1&pageSize=10"]

    def test_nothing_written_when_not_synced(self) -> None:
        store = InMemoryLocationStore()
        table = TableController(ScriptedFetcher(), resource="posts", location=store)
        table.set_current_page(3)
        assert store.search == ""

    def test_setter_uses_replace(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store)
        table.set_current_page(2)
        table.set_page_size(20)
        assert store.search == "currentPage=2&pageSize=20"
        assert len(store.history) == 1

    def test_passthrough_keys_preserved(self) -> None:
        store = InMemoryLocationStore("tab=archived&currentPage=2")
        table = _synced(store)
        table.set_current_page(3)
        assert store.search == "currentPage=3&pageSize=10&tab=archived"

    def test_filters_and_sorters_written(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store)
        table.set_filters([STATUS_OPEN])
        table.set_sorters([Sort("id", "desc")])
        params = parse_table_params(store.search)
        assert params.filters == (STATUS_OPEN,)
        assert params.sorters == (Sort("id", "desc"),)

    def test_permanent_filters_not_written(self) -> None:
        store = InMemoryLocationStore()
        options = TableOptions(filters=FilterOptions(permanent=[STATUS_OPEN]), sync_with_location=True)
        table = _synced(store, options)
        assert "filters" not in store.search
        table.set_filters([AUTHOR_ALICE])
        assert parse_table_params(store.search).filters == (AUTHOR_ALICE,)

    def test_cleared_filters_removed(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store)
        table.set_filters([STATUS_OPEN])
        table.set_filters([], "replace")
        assert store.search == "currentPage=1&pageSize=10"

    def test_refresh_does_not_rewrite(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store, fetcher=ScriptedFetcher([{"data": [1], "total": 1}]))
        seen: list[str] = []
        store.subscribe(seen.append)
        asyncio.run(table.refresh())
        assert seen == []

    def test_off_mode_writes_no_page_keys(self) -> None:
        store = InMemoryLocationStore()
        options = TableOptions(pagination=PaginationOptions(mode="off"), sync_with_location=True)
        table = _synced(store, options)
        table.set_sorters([Sort("id")])
        assert "currentPage" not in store.search
        assert "pageSize" not in store.search


# ---------------------------------------------------------------------------
# Sync-in
# ---------------------------------------------------------------------------


class TestSyncIn:
    def test_mount_state_from_location(self) -> None:
        store = InMemoryLocationStore(
            "currentPage=2&pageSize=20&filters[0][field]=status&filters[0][operator]=eq&filters[0][value]=open"
        )
        table = _synced(store)
        assert table.current_page == 2
        assert table.page_size == 20
        assert table.filters == [STATUS_OPEN]

    def test_location_filters_follow_permanent(self) -> None:
        store = InMemoryLocationStore(
            "filters[0][field]=author&filters[0][operator]=eq&filters[0][value]=alice"
        )
        options = TableOptions(filters=FilterOptions(permanent=[STATUS_OPEN]), sync_with_location=True)
        table = _synced(store, options)
        assert table.filters == [STATUS_OPEN, AUTHOR_ALICE]

    def test_reset_on_empty_location(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store)
        table.set_current_page(4)
        table.set_filters([STATUS_OPEN])
        store.visit("")
        assert table.current_page == 1
        assert table.filters == []
        assert store.search == "currentPage=1&pageSize=10"

    def test_reset_returns_to_mount_defaults(self) -> None:
        store = InMemoryLocationStore("currentPage=2")
        table = _synced(store)
        table.set_current_page(6)
        store.visit("")
        assert table.current_page == 2

    def test_external_navigation_adopted(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store)
        store.visit("currentPage=5&pageSize=20&tab=x")
        assert table.current_page == 5
        assert table.page_size == 20
        assert store.search == "currentPage=5&pageSize=20&tab=x"

    def test_no_feedback_loop(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store)
        commits: list[int] = []
        table.subscribe(lambda old, new: commits.append(new.current_page))
        table.set_current_page(2)
        assert commits == [2]
        assert store.history == ["currentPage=2&pageSize=10"]

    def test_mounts_on_malformed_location(self) -> None:
        store = InMemoryLocationStore("currentPage=%C2%B2&pageSize=%C2%B2&filters[%C2%B2][field]=a")
        table = _synced(store)
        assert table.current_page == 1
        assert table.page_size == 10
        assert table.filters == []

    def test_malformed_external_navigation_falls_back(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store)
        table.set_current_page(3)
        store.visit("currentPage=%C2%B2&pageSize=20")
        assert table.current_page == 1
        assert table.page_size == 20

    def test_closed_controller_ignores_location(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store)
        table.close()
        store.visit("currentPage=9")
        assert table.current_page == 1


# ---------------------------------------------------------------------------
# Cursor mode
# ---------------------------------------------------------------------------


class TestCursorSync:
    def test_cursor_seeded_from_after(self) -> None:
        table = _synced(InMemoryLocationStore("after=abc"), CURSOR_SYNCED)
        assert table.build_request().cursor == {"current": "abc", "direction": "after"}

    def test_cursor_seeded_from_before(self) -> None:
        table = _synced(InMemoryLocationStore("before=xyz"), CURSOR_SYNCED)
        assert table.build_request().cursor == {"current": "xyz", "direction": "before"}

    def test_navigation_swaps_after_and_before(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store, CURSOR_SYNCED, fetcher=InMemoryFetcher(range(12), bidirectional=True))
        asyncio.run(table.refresh())
        table.go_to_next_page()
        assert store.search == "after=5"
        asyncio.run(table.refresh())
        table.go_to_previous_page()
        assert store.search == "before=5"

    def test_back_to_start_clears_cursor_keys(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store, CURSOR_SYNCED, fetcher=ScriptedFetcher([{"data": [], "cursor": {"next": "abc"}}]))
        asyncio.run(table.refresh())
        table.go_to_next_page()
        assert store.search == "after=abc"
        table.go_to_previous_page()
        assert store.search == ""

    def test_external_cursor_adopted(self) -> None:
        store = InMemoryLocationStore()
        table = _synced(store, CURSOR_SYNCED)
        store.visit("after=7")
        assert table.state.cursor.current == "7"


# ---------------------------------------------------------------------------
# build_location_link
# ---------------------------------------------------------------------------


class TestBuildLocationLink:
    def test_hypothetical_page(self) -> None:
        store = InMemoryLocationStore("tab=x", pathname="/posts")
        table = TableController(ScriptedFetcher(), resource="posts", location=store)
        assert table.build_location_link(current_page=4) == "/posts?currentPage=4&pageSize=10&tab=x"
        assert table.current_page == 1

    def test_sorters_override(self) -> None:
        store = InMemoryLocationStore(pathname="/posts")
        table = TableController(ScriptedFetcher(), resource="posts", location=store)
        link = table.build_location_link(sorters=[Sort("id", "desc")])
        assert link == "/posts?currentPage=1&pageSize=10&sorters[0][field]=id&sorters[0][order]=desc"

    def test_current_filters_used_by_default(self) -> None:
        table = TableController(ScriptedFetcher(), resource="posts")
        table.set_filters([STATUS_OPEN])
        link = table.build_location_link(page_size=5)
        params = parse_table_params(link.split("?", 1)[1])
        assert params.page_size == 5
        assert params.filters == (STATUS_OPEN,)

    def test_permanent_excluded(self) -> None:
        options = TableOptions(filters=FilterOptions(permanent=[STATUS_OPEN]))
        table = TableController(ScriptedFetcher(), resource="posts", options=options)
        assert table.build_location_link() == "?currentPage=1&pageSize=10"

    def test_pagination_off_omits_page_keys(self) -> None:
        options = TableOptions(pagination=PaginationOptions(mode="off"))
        table = TableController(ScriptedFetcher(), resource="posts", options=options)
        assert table.build_location_link(current_page=3) == ""
