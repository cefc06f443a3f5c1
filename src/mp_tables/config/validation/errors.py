"""Config validation – errors raised while loading or checking settings."""
from __future__ import annotations

from mp_tables.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded or are inconsistent."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """The variable backing a field without a default is unset."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"{setting_name} must be set", detail={"setting": setting_name})
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A value parsed fine but is outside the accepted range."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"{setting_name}={value!r} {reason}",
            detail={"setting": setting_name, "value": value, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
