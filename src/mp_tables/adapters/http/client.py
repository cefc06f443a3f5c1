"""HTTP adapter – HttpxHttpClient."""
from __future__ import annotations

from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from mp_tables.kernel.errors import ExternalServiceError, InfrastructureError
from mp_tables.kernel.errors import TimeoutError as InfraTimeoutError
from mp_tables.observability.logging import get_logger

logger = get_logger(__name__)


class HttpxHttpClient:
    """Thin async httpx wrapper with structured error mapping.

    Timeouts raise :class:`~mp_tables.kernel.errors.TimeoutError`; error
    statuses and transport failures raise
    :class:`~mp_tables.kernel.errors.ExternalServiceError`.  With
    ``max_attempts > 1`` transient failures (timeouts, transport errors and
    5xx responses) are retried with exponential backoff.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        *,
        max_attempts: int = 1,
        backoff: float = 0.1,
        **kwargs: Any,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, **kwargs)
        self._max_attempts = max(1, max_attempts)
        self._backoff = backoff

    async def __aenter__(self) -> "HttpxHttpClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("GET", url, **kwargs)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._backoff, max=5),
            retry=retry_if_exception_type(_Transient),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await self._send(method, url, **kwargs)
        except _Transient as exc:
            raise exc.error from exc.__cause__
        raise AssertionError("unreachable")  # pragma: no cover

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPError as exc:
            error = _map_error(exc, method, url)
            if error.retryable:
                logger.debug("http.transient_error", method=method, url=url, code=error.code)
                raise _Transient(error) from exc
            raise error from exc


def _map_error(exc: httpx.HTTPError, method: str, url: str) -> InfrastructureError:
    if isinstance(exc, httpx.TimeoutException):
        return InfraTimeoutError(f"HTTP request timed out: {method} {url}")
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return ExternalServiceError(service=url, message=f"HTTP {status} from {method} {url}", status_code=status)
    return ExternalServiceError(service=url, message=str(exc) or type(exc).__name__)


class _Transient(Exception):
    """Carries a retryable error through tenacity."""

    def __init__(self, error: Exception) -> None:
        super().__init__(str(error))
        self.error = error


HttpClient = HttpxHttpClient

__all__ = ["HttpClient", "HttpxHttpClient"]
