"""Table – InMemoryLocationStore."""
from __future__ import annotations

from typing import Any, Callable, Mapping

from mp_tables.application.table.codec import LocationParams, parse_table_params, stringify_query
from mp_tables.application.table.ports import LocationListener, NavigationMode

__all__ = ["InMemoryLocationStore"]


class InMemoryLocationStore:
    """Location store backed by a search string and a navigation history.

    Suitable for headless use (CLIs, server-side rendering, tests).
    Subscribers are notified synchronously after every change.
    """

    def __init__(self, search: str = "", *, pathname: str = "", resource: str | None = None) -> None:
        self._search = search.lstrip("?")
        self._pathname = pathname
        self._resource = resource
        self._history: list[str] = [self._search]
        self._listeners: list[LocationListener] = []

    @property
    def search(self) -> str:
        return self._search

    @property
    def pathname(self) -> str:
        return self._pathname

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def get_current_params(self) -> LocationParams:
        return parse_table_params(self._search, self._pathname)

    def get_resource(self) -> str | None:
        return self._resource

    def navigate(self, *, mode: NavigationMode, params: Mapping[str, Any]) -> str:
        self._go(stringify_query(params), NavigationMode(mode))
        return self._search

    def visit(self, search: str, *, mode: NavigationMode = NavigationMode.PUSH) -> None:
        """Navigate from outside the controller (user edited the address)."""
        self._go(search.lstrip("?"), mode)

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _go(self, search: str, mode: NavigationMode) -> None:
        if mode is NavigationMode.PUSH:
            self._history.append(search)
        else:
            self._history[-1] = search
        self._search = search
        for listener in list(self._listeners):
            listener(search)
