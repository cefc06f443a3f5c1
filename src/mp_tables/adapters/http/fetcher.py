"""HTTP adapter – RestListFetcher."""
from __future__ import annotations

from typing import Any, Callable, Sequence

from mp_tables.adapters.http.client import HttpxHttpClient
from mp_tables.application.pagination import (
    CursorTokens,
    Filter,
    ListRequest,
    ListResult,
    PaginationMode,
    Sort,
)
from mp_tables.kernel.errors import SerializationError
from mp_tables.observability.logging import get_logger

logger = get_logger(__name__)

#: Derives a forward-only cursor from the records of a page.
NextCursorFn = Callable[[Sequence[Any]], Any]


def last_item_cursor(key: str) -> NextCursorFn:
    """Use ``items[-1][key]`` as the next cursor (``None`` for an empty page)."""

    def _next(items: Sequence[Any]) -> Any:
        if not items or not isinstance(items[-1], dict):
            return None
        return items[-1].get(key)

    return _next


class RestListFetcher:
    """:class:`~mp_tables.application.table.ports.Fetcher` for plain REST list endpoints.

    Requests ``GET {base_url}/{resource}`` with:

    * ``per_page`` always, ``page`` in offset/off mode;
    * ``after`` or ``before`` in cursor mode when a cursor is set;
    * ``sort=field:order,...`` for sorters;
    * ``field[operator]=value`` for plain filters (lists comma-joined).

    The body may be a JSON list or an object with ``data``, ``total`` and
    ``cursor`` keys; an ``x-total-count`` header fills a missing total.  When
    the body carries no cursor, *next_cursor* (if given) derives one from the
    page, which suits forward-only feeds.

    Example::

        fetcher = RestListFetcher(
            "https://api.github.com/repos/acme/app",
            next_cursor=last_item_cursor("created_at"),
        )
    """

    def __init__(
        self,
        base_url: str,
        client: HttpxHttpClient | None = None,
        *,
        next_cursor: NextCursorFn | None = None,
        total_header: str = "x-total-count",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client or HttpxHttpClient()
        self._next_cursor = next_cursor
        self._total_header = total_header

    async def fetch_list(self, request: ListRequest) -> ListResult[Any]:
        url = f"{self._base_url}/{request.resource}"
        response = await self._client.get(url, params=self.build_query(request))
        try:
            body = response.json()
        except ValueError as exc:
            raise SerializationError(
                f"Response from {url} is not JSON", payload_type=response.headers.get("content-type")
            ) from exc
        return self._to_result(body, response.headers.get(self._total_header))

    def build_query(self, request: ListRequest) -> list[tuple[str, str]]:
        pagination = request.pagination
        query: list[tuple[str, str]] = [("per_page", str(pagination.page_size))]
        if pagination.mode is PaginationMode.CURSOR:
            cursor = request.cursor or {}
            if cursor.get("current") is not None:
                query.append((cursor.get("direction", "after"), str(cursor["current"])))
        elif pagination.current_page is not None:
            query.append(("page", str(pagination.current_page)))
        if request.sorters:
            query.append(("sort", _sort_param(request.sorters)))
        for entry in request.filters or ():
            if entry.is_conditional:
                logger.debug("rest_fetcher.conditional_filter_skipped", key=entry.key)
                continue
            query.append(_filter_param(entry))
        return query

    def _to_result(self, body: Any, total_header: str | None) -> ListResult[Any]:
        if isinstance(body, list):
            data, total, cursor = body, None, None
        elif isinstance(body, dict):
            data = body.get("data") or []
            total = body.get("total")
            raw_cursor = body.get("cursor")
            cursor = (
                CursorTokens(next=raw_cursor.get("next"), prev=raw_cursor.get("prev"))
                if isinstance(raw_cursor, dict)
                else None
            )
        else:
            raise SerializationError("Unexpected list payload", payload_type=type(body).__name__)
        if total is None and total_header is not None and total_header.isascii() and total_header.isdecimal():
            total = int(total_header)
        if cursor is None and self._next_cursor is not None:
            cursor = CursorTokens(next=self._next_cursor(data))
        return ListResult(data=tuple(data), total=total, cursor=cursor)


def _sort_param(sorters: Sequence[Sort]) -> str:
    return ",".join(f"{s.field}:{s.order.value}" for s in sorters if s.order is not None)


def _filter_param(entry: Filter) -> tuple[str, str]:
    value = entry.value
    if isinstance(value, (list, tuple)):
        value = ",".join(str(v) for v in value)
    elif isinstance(value, bool):
        value = "true" if value else "false"
    return f"{entry.field}[{entry.operator.value}]", str(value)


__all__ = ["NextCursorFn", "RestListFetcher", "last_item_cursor"]
