"""Table – ports consumed by :class:`TableController`."""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Mapping, Protocol

from mp_tables.application.pagination import ListRequest, ListResult
from mp_tables.application.table.codec import LocationParams

#: Called with the new search string after every navigation.
LocationListener = Callable[[str], None]


class NavigationMode(str, Enum):
    PUSH = "push"
    REPLACE = "replace"


class Fetcher(Protocol):
    """Port: remote list endpoint.

    Implementations own transport, caching and de-duplication.  The returned
    ``cursor`` may be missing entirely for backends without cursor support.
    """

    async def fetch_list(self, request: ListRequest) -> ListResult[Any] | Mapping[str, Any]: ...


class LocationStore(Protocol):
    """Port: router holding the serialized view state.

    ``navigate`` replaces the whole query with *params* (``None`` values are
    dropped) and returns the resulting search string.
    """

    def get_current_params(self) -> LocationParams: ...

    def get_resource(self) -> str | None: ...

    def navigate(self, *, mode: NavigationMode, params: Mapping[str, Any]) -> str: ...

    def subscribe(self, listener: LocationListener) -> Callable[[], None]: ...


__all__ = ["Fetcher", "LocationListener", "LocationStore", "NavigationMode"]
