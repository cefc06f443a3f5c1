"""Kernel – framework-agnostic building blocks."""

from mp_tables.kernel.errors import (
    ApplicationError,
    BaseError,
    ControllerClosedError,
    ExternalServiceError,
    InfrastructureError,
    SerializationError,
    TimeoutError,
)
from mp_tables.kernel.types import first_matching, first_present

__all__ = [
    "ApplicationError",
    "BaseError",
    "ControllerClosedError",
    "ExternalServiceError",
    "InfrastructureError",
    "SerializationError",
    "TimeoutError",
    "first_matching",
    "first_present",
]
