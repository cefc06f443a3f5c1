"""HTTP adapter – async HTTP client and REST list fetcher."""
from mp_tables.adapters.http.client import HttpClient, HttpxHttpClient
from mp_tables.adapters.http.fetcher import NextCursorFn, RestListFetcher, last_item_cursor

__all__ = ["HttpClient", "HttpxHttpClient", "NextCursorFn", "RestListFetcher", "last_item_cursor"]
