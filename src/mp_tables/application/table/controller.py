"""Table – TableController.

Owns the page/cursor/sorter/filter state of one list view, shapes the
requests sent to a :class:`Fetcher` and keeps the state in sync with a
:class:`LocationStore`.

State lives in immutable :class:`TableState` snapshots.  Every change is
committed first and then announced to listeners as ``(old, new)``; the
location sync is one of those listeners.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Generic, Iterable, Mapping, Sequence, TypeVar

from mp_tables.application.pagination import (
    EMPTY_RESULT,
    CursorDirection,
    CursorTokens,
    Filter,
    ListRequest,
    ListResult,
    PaginationMode,
    PaginationRequest,
    Sort,
)
from mp_tables.application.table.codec import (
    LocationParams,
    build_location,
    project_table_params,
    stringify_query,
)
from mp_tables.application.table.cursor import CursorState, CursorTracker
from mp_tables.application.table.merge import (
    FilterBehavior,
    initial_filters,
    initial_sorters,
    union_filters,
    union_sorters,
)
from mp_tables.application.table.options import ProcessingMode, TableOptions
from mp_tables.application.table.ports import Fetcher, LocationStore, NavigationMode
from mp_tables.config.settings import TableSettings
from mp_tables.kernel.errors import ControllerClosedError
from mp_tables.kernel.types import first_matching, first_present
from mp_tables.observability.logging import get_logger, warn_once

__all__ = ["StateListener", "TableController", "TableState"]

T = TypeVar("T")

logger = get_logger(__name__)

FiltersUpdater = Callable[[list[Filter]], Iterable[Filter]]


@dataclasses.dataclass(frozen=True)
class TableState:
    current_page: int
    page_size: int
    sorters: tuple[Sort, ...] = ()
    filters: tuple[Filter, ...] = ()
    cursor: CursorState = dataclasses.field(default_factory=CursorState)


StateListener = Callable[[TableState, TableState], None]


def _positive(value: int) -> bool:
    return value >= 1


class TableController(Generic[T]):
    """List-state controller.

    Parameters
    ----------
    fetcher:
        Remote list endpoint; only called from :meth:`refresh`.
    resource:
        Resource identity.  Falls back to ``location.get_resource()``; when
        neither is known a warning is logged and nothing is fetched.
    location:
        Router holding the serialized view state.  Required for
        ``sync_with_location``.
    options:
        Pagination, sorter and filter configuration.
    settings:
        Process-wide defaults (``sync_with_location``, page size, filter
        behavior) used where *options* leave a value unset.
    meta:
        Extra metadata copied into every :class:`ListRequest`.

    Example::

        table = TableController(fetcher, resource="posts", location=store,
                                options=TableOptions(sync_with_location=True))
        await table.refresh()
        table.set_filters([Filter("status", "eq", "open")])
        await table.refresh()
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        resource: str | None = None,
        location: LocationStore | None = None,
        options: TableOptions | None = None,
        settings: TableSettings | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._location = location
        self._options = options or TableOptions()
        self._settings = settings or TableSettings()
        self._meta = dict(meta or {})
        self._pagination = self._options.pagination
        self._permanent_filters = tuple(self._options.filters.permanent)
        self._permanent_sorters = tuple(self._options.sorters.permanent)
        self._filter_behavior = FilterBehavior(
            first_present(self._options.filters.default_behavior, self._settings.default_filter_behavior)
        )

        sync = bool(first_present(self._options.sync_with_location, self._settings.sync_with_location))
        if sync and location is None:
            warn_once(logger, True, "table.sync_disabled: sync_with_location needs a location store")
            sync = False
        self._sync = sync

        self._resource = first_present(resource, location.get_resource() if location is not None else None)
        warn_once(logger, self._resource is None, "table.resource_undefined: no resource given or found in location")

        parsed = location.get_current_params() if self._sync and location is not None else None
        self._defaults = self._resolve_state(parsed)
        self._cursor = CursorTracker(self._defaults.cursor)
        self._state = self._defaults
        self._result: ListResult[T] = EMPTY_RESULT
        self._listeners: list[StateListener] = []
        self._generation = 0
        self._closed = False
        self._writing = False
        self._last_written: str | None = None
        self._unsubscribe_location: Callable[[], None] | None = None

        if self._sync and location is not None and parsed is not None:
            self._last_written = parsed.search
            self._unsubscribe_location = location.subscribe(self._on_location_change)
            self._listeners.append(self._sync_to_location)
            self._sync_to_location(self._state, self._state)

    # ------------------------------------------------------------------
    # Initial state
    # ------------------------------------------------------------------

    def _resolve_state(self, parsed: LocationParams | None) -> TableState:
        """Build state from (highest first) *parsed* location, options, hard defaults."""
        pagination = self._pagination
        if parsed is None:
            parsed = LocationParams()
        cursor = CursorState()
        if pagination.is_cursor and parsed.after is not None:
            cursor = CursorState(current=parsed.after, direction=CursorDirection.AFTER)
        elif pagination.is_cursor and parsed.before is not None:
            cursor = CursorState(current=parsed.before, direction=CursorDirection.BEFORE)

        return TableState(
            current_page=first_matching(_positive, parsed.current_page, pagination.current_page, default=1),
            page_size=first_matching(
                _positive, parsed.page_size, pagination.page_size, default=self._settings.default_page_size
            ),
            sorters=tuple(
                initial_sorters(
                    self._permanent_sorters,
                    first_present(parsed.sorters or None, self._options.sorters.initial),
                )
            ),
            filters=tuple(
                initial_filters(
                    self._permanent_filters,
                    first_present(parsed.filters or None, self._options.filters.initial),
                )
            ),
            cursor=cursor,
        )

    # ------------------------------------------------------------------
    # State container
    # ------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call *listener(old, new)* after every committed change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, *, force: bool = False, **changes: Any) -> None:
        old = self._state
        new = dataclasses.replace(old, cursor=self._cursor.state, **changes)
        if new == old and not force:
            return
        self._state = new
        logger.debug(
            "table.state_changed",
            resource=self._resource,
            current_page=new.current_page,
            page_size=new.page_size,
            cursor=new.cursor.current,
        )
        for listener in list(self._listeners):
            listener(old, new)

    def _ensure_open(self) -> None:
        if self._closed:
            raise ControllerClosedError(resource=self._resource)

    # ------------------------------------------------------------------
    # Location sync
    # ------------------------------------------------------------------

    def _location_params(self, state: TableState) -> dict[str, Any]:
        return project_table_params(
            mode=self._pagination.mode,
            current_page=state.current_page,
            page_size=state.page_size,
            sorters=state.sorters,
            filters=state.filters,
            permanent_sorters=self._permanent_sorters,
            permanent_filters=self._permanent_filters,
            cursor_current=state.cursor.current,
            cursor_direction=state.cursor.direction,
        )

    def _sync_to_location(self, old: TableState, new: TableState) -> None:  # noqa: ARG002
        if self._location is None or self._closed:
            return
        current = self._location.get_current_params()
        params = self._location_params(new)
        for key, value in current.extra.items():
            params.setdefault(key, value)
        if stringify_query(params) == current.search:
            return
        self._writing = True
        try:
            self._last_written = self._location.navigate(mode=NavigationMode.REPLACE, params=params)
        finally:
            self._writing = False
        logger.debug("table.location_written", resource=self._resource, search=self._last_written)

    def _on_location_change(self, search: str) -> None:
        if self._writing or self._closed or search == self._last_written:
            return
        self._last_written = search
        if search == "":
            logger.debug("table.location_cleared", resource=self._resource)
            self._apply(self._defaults)
            return
        logger.debug("table.location_adopted", resource=self._resource, search=search)
        if self._location is not None:
            self._apply(self._resolve_state(self._location.get_current_params()))

    def _apply(self, target: TableState) -> None:
        position = (target.cursor.current, target.cursor.direction)
        if position != (self._cursor.current, self._cursor.direction):
            self._cursor.reset(*position)
        self._commit(
            current_page=target.current_page,
            page_size=target.page_size,
            sorters=target.sorters,
            filters=target.filters,
        )

    def build_location_link(
        self,
        *,
        current_page: int | None = None,
        page_size: int | None = None,
        sorters: Sequence[Sort] | None = None,
        filters: Sequence[Filter] | None = None,
    ) -> str:
        """Render a shareable link for a hypothetical state; nothing is mutated.

        Omitted arguments take the current value.
        """
        state = self._state
        params = project_table_params(
            mode=PaginationMode.OFFSET if self._pagination.is_enabled else PaginationMode.OFF,
            current_page=first_present(current_page, state.current_page),
            page_size=first_present(page_size, state.page_size),
            sorters=tuple(first_present(sorters, state.sorters)),
            filters=tuple(first_present(filters, state.filters)),
            permanent_sorters=self._permanent_sorters,
            permanent_filters=self._permanent_filters,
        )
        pathname = ""
        if self._location is not None:
            current = self._location.get_current_params()
            pathname = current.pathname
            for key, value in current.extra.items():
                params.setdefault(key, value)
        return build_location(params, pathname)

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_filters(
        self,
        filters: Sequence[Filter] | FiltersUpdater,
        behavior: FilterBehavior | str | None = None,
    ) -> None:
        """Merge or replace filters; permanent filters always survive.

        *filters* may also be a callable receiving the previous filters; its
        result replaces every non-permanent filter.
        """
        self._ensure_open()
        if callable(filters):
            merged = union_filters(self._permanent_filters, list(filters(list(self._state.filters))))
        elif FilterBehavior(first_present(behavior, self._filter_behavior)) is FilterBehavior.REPLACE:
            merged = union_filters(self._permanent_filters, list(filters))
        else:
            merged = union_filters(self._permanent_filters, list(filters), self._state.filters)
        self._commit(filters=tuple(merged))

    def set_sorters(self, sorters: Sequence[Sort]) -> None:
        self._ensure_open()
        self._commit(sorters=tuple(union_sorters(self._permanent_sorters, list(sorters))))

    def set_current_page(self, current_page: int) -> None:
        self._ensure_open()
        self._commit(current_page=current_page)

    def set_page_size(self, page_size: int) -> None:
        self._ensure_open()
        self._commit(page_size=page_size)

    def go_to_next_page(self) -> None:
        self._ensure_open()
        if not self._pagination.is_cursor:
            self._commit(current_page=self._state.current_page + 1)
        elif self._cursor.go_to_next():
            self._commit()

    def go_to_previous_page(self) -> None:
        self._ensure_open()
        if not self._pagination.is_cursor:
            self._commit(current_page=max(1, self._state.current_page - 1))
        elif self._cursor.go_to_previous():
            self._commit()

    def set_pagination_mode(self, mode: PaginationMode | str) -> None:
        """Switch pagination paradigm; in-flight responses are discarded."""
        self._ensure_open()
        mode = PaginationMode(mode)
        if mode is self._pagination.mode:
            return
        self._pagination = dataclasses.replace(self._pagination, mode=mode)
        self._generation += 1
        self._cursor.reset()
        self._commit(force=True)

    def set_resource(self, resource: str) -> None:
        """Point the controller at another resource; results and cursor are cleared."""
        self._ensure_open()
        if resource == self._resource:
            return
        self._resource = resource
        self._generation += 1
        self._result = EMPTY_RESULT
        self._cursor.reset()
        self._commit(force=True)

    def close(self) -> None:
        """Detach from the location and drop every pending response."""
        if self._closed:
            return
        self._closed = True
        self._generation += 1
        if self._unsubscribe_location is not None:
            self._unsubscribe_location()
            self._unsubscribe_location = None
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def build_request(self) -> ListRequest:
        state = self._state
        is_cursor = self._pagination.is_cursor
        meta = dict(self._meta)
        if is_cursor:
            meta["cursor"] = {"current": state.cursor.current, "direction": state.cursor.direction.value}
        return ListRequest(
            resource=self._resource or "",
            pagination=PaginationRequest(
                mode=self._pagination.mode,
                page_size=state.page_size,
                current_page=None if is_cursor else state.current_page,
            ),
            filters=(
                tuple(union_filters(self._permanent_filters, state.filters))
                if self._options.filters.mode is ProcessingMode.SERVER
                else None
            ),
            sorters=(
                tuple(union_sorters(self._permanent_sorters, state.sorters))
                if self._options.sorters.mode is ProcessingMode.SERVER
                else None
            ),
            meta=meta,
        )

    async def refresh(self) -> ListResult[T]:
        """Fetch the current page and apply the response.

        A response is dropped when the controller was closed, the mode or
        resource changed, or the state moved on while it was in flight.
        Fetcher errors propagate unchanged.
        """
        self._ensure_open()
        if self._resource is None:
            warn_once(logger, True, "table.resource_undefined: no resource given or found in location")
            return self._result
        request = self.build_request()
        generation = self._generation
        logger.debug("table.fetch", resource=request.resource, mode=request.pagination.mode.value)
        raw = await self._fetcher.fetch_list(request)
        if self._closed or generation != self._generation or request != self.build_request():
            logger.debug("table.fetch_discarded", resource=request.resource)
            return self._result
        self._result = ListResult.coerce(raw)
        if self._pagination.is_cursor:
            self._cursor.apply_tokens(self._result.cursor)
        self._commit(force=True)
        return self._result

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def state(self) -> TableState:
        return self._state

    @property
    def resource(self) -> str | None:
        return self._resource

    @property
    def pagination_mode(self) -> PaginationMode:
        return self._pagination.mode

    @property
    def sync_with_location(self) -> bool:
        return self._sync

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def filters(self) -> list[Filter]:
        return list(self._state.filters)

    @property
    def sorters(self) -> list[Sort]:
        return list(self._state.sorters)

    @property
    def current_page(self) -> int:
        return self._state.current_page

    @property
    def page_size(self) -> int:
        return self._state.page_size

    @property
    def page_count(self) -> int:
        return self._result.page_count(self._state.page_size)

    @property
    def result(self) -> ListResult[T]:
        return self._result

    @property
    def cursor(self) -> CursorTokens:
        return self._cursor.state.tokens

    @property
    def has_next_page(self) -> bool:
        if self._pagination.is_cursor:
            return self._cursor.has_next
        return self._state.current_page < self.page_count

    @property
    def has_previous_page(self) -> bool:
        if self._pagination.is_cursor:
            return self._cursor.has_previous
        return self._state.current_page > 1
