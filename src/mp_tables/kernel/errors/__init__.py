"""Kernel error hierarchy, public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    │   ├── ControllerClosedError
    │   └── ConfigError      (mp_tables.config.validation)
    └── InfrastructureError  (infrastructure.py)
        ├── TimeoutError
        ├── SerializationError
        └── ExternalServiceError
"""

from mp_tables.kernel.errors.application import ApplicationError, ControllerClosedError
from mp_tables.kernel.errors.base import BaseError
from mp_tables.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
    SerializationError,
    TimeoutError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ControllerClosedError",
    "ExternalServiceError",
    "InfrastructureError",
    "SerializationError",
    "TimeoutError",
]
