"""Observability – structured logging helpers."""
from mp_tables.observability.logging.factory import JsonLoggerFactory
from mp_tables.observability.logging.processors import TableContextProcessor, get_logger
from mp_tables.observability.logging.warnings import reset_warnings, warn_once

__all__ = [
    "JsonLoggerFactory",
    "TableContextProcessor",
    "get_logger",
    "reset_warnings",
    "warn_once",
]
