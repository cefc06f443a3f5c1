"""Config settings – Settings base class and TableSettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from mp_tables.config.validation.errors import InvalidSettingValueError

_FILTER_BEHAVIORS = ("merge", "replace")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class TableSettings(Settings):
    """Process-wide defaults for table controllers.

    Per-controller :class:`~mp_tables.application.table.options.TableOptions`
    override these.  Read from ``MP_TABLES_*`` environment variables by
    :class:`~mp_tables.config.settings.loaders.EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "MP_TABLES"

    sync_with_location: bool = False
    default_page_size: int = 10
    default_filter_behavior: str = "merge"
    log_level: str = "INFO"

    def _validate(self) -> None:
        if self.default_page_size < 1:
            raise InvalidSettingValueError(
                "default_page_size", self.default_page_size, "must be >= 1"
            )
        if self.default_filter_behavior not in _FILTER_BEHAVIORS:
            raise InvalidSettingValueError(
                "default_filter_behavior",
                self.default_filter_behavior,
                f"must be one of {', '.join(_FILTER_BEHAVIORS)}",
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level.upper())


__all__ = ["Settings", "TableSettings"]
