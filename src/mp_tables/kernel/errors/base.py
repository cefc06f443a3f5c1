"""Root of the mp-tables error hierarchy."""

from __future__ import annotations

import json
from typing import Any, ClassVar


class BaseError(Exception):
    """Error with a stable machine-readable ``code``.

    Subclasses pick their ``default_code``.  ``detail`` holds JSON-friendly
    context (resource, HTTP status, offending setting) and ``cause`` the
    low-level exception, which is also chained as ``__cause__``.

    ``str(error)`` is a one-line JSON document so the error can be logged as
    a single structured field.
    """

    default_code: ClassVar[str] = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def _add_detail(self, **context: Any) -> None:
        for key, value in context.items():
            if value is not None:
                self.detail.setdefault(key, value)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


__all__ = ["BaseError"]
