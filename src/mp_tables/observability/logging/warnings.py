"""Observability – one-shot warnings."""
from __future__ import annotations

import threading
from typing import Any

_seen: set[str] = set()
_lock = threading.Lock()


def warn_once(logger: Any, condition: bool, message: str, **kw: Any) -> bool:
    """Log *message* at warning level the first time *condition* holds.

    Returns ``True`` when the warning was emitted by this call.
    """
    if not condition:
        return False
    with _lock:
        if message in _seen:
            return False
        _seen.add(message)
    logger.warning(message, **kw)
    return True


def reset_warnings() -> None:
    """Forget emitted warnings (tests)."""
    with _lock:
        _seen.clear()


__all__ = ["reset_warnings", "warn_once"]
