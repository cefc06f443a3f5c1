"""Application errors raised by the table controller."""

from __future__ import annotations

from typing import Any

from mp_tables.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Misuse of the package or invalid configuration."""

    default_code = "application_error"


class ControllerClosedError(ApplicationError):
    """A mutating call reached a controller after :meth:`close`."""

    default_code = "controller_closed"

    def __init__(
        self,
        message: str = "Table controller is closed",
        *,
        resource: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.resource = resource
        self._add_detail(resource=resource)


__all__ = [
    "ApplicationError",
    "ControllerClosedError",
]
