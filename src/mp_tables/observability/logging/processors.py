"""Observability – get_logger helper and structlog processors."""
from __future__ import annotations

from typing import Any

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


class TableContextProcessor:
    """structlog processor that tags events emitted by table controllers.

    Adds ``component="mp_tables"`` so table events can be filtered out of a
    shared application log stream.

    Usage::

        structlog.configure(processors=[TableContextProcessor(), ...])
    """

    def __init__(self, component: str = "mp_tables") -> None:
        self._component = component

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        event_dict.setdefault("component", self._component)
        return event_dict


__all__ = ["TableContextProcessor", "get_logger"]
