"""Infrastructure errors raised by the HTTP adapter.

``retryable`` tells :class:`~mp_tables.adapters.http.HttpxHttpClient` whether
the same call may succeed when repeated.
"""

from __future__ import annotations

from typing import Any

from mp_tables.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Failure while talking to a remote list endpoint."""

    default_code = "infrastructure_error"

    @property
    def retryable(self) -> bool:
        return False


class TimeoutError(InfrastructureError):  # noqa: A001
    """The endpoint did not answer before the client timeout."""

    default_code = "infrastructure_timeout"

    @property
    def retryable(self) -> bool:
        return True


class SerializationError(InfrastructureError):
    """The endpoint answered with a body that is not a list payload."""

    default_code = "serialization_error"

    def __init__(self, message: str, *, payload_type: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type
        self._add_detail(payload_type=payload_type)


class ExternalServiceError(InfrastructureError):
    """The endpoint returned an error status or the transport broke.

    Without a ``status_code`` (connection reset, DNS failure) and for 5xx
    statuses the failure is considered transient.
    """

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Request to '{service}' failed", **kwargs)
        self.service = service
        self.status_code = status_code
        self._add_detail(service=service, status_code=status_code)

    @property
    def retryable(self) -> bool:
        return self.status_code is None or self.status_code >= 500


__all__ = [
    "ExternalServiceError",
    "InfrastructureError",
    "SerializationError",
    "TimeoutError",
]
