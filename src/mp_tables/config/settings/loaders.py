"""Config settings – EnvSettingsLoader, DotenvSettingsLoader.

Field names map to ``{PREFIX}_{FIELD}`` variables, upper-cased::

    MP_TABLES_SYNC_WITH_LOCATION=true
    MP_TABLES_DEFAULT_PAGE_SIZE=25
"""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from typing import Any, Mapping, TypeVar

from dotenv import dotenv_values

from mp_tables.config.settings.base import Settings
from mp_tables.config.validation import ConfigError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"expected a boolean, got {raw!r}")


def _parse_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


_PARSERS: dict[Any, Any] = {bool: _parse_bool, int: int, float: float, str: str}


class EnvSettingsLoader(SettingsLoader):
    """Build a settings dataclass from environment variables.

    *environ* defaults to :data:`os.environ`.  Fields without a variable keep
    their default; fields without a default raise
    :class:`MissingRequiredSettingError`.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = getattr(settings_class, "_prefix", "")
        hints = typing.get_type_hints(settings_class)
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)
            if raw is None:
                if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                    raise MissingRequiredSettingError(env_key)
                continue
            try:
                kwargs[field.name] = self._coerce(raw, hints.get(field.name, str))
            except ValueError as exc:
                raise ConfigError(f"Cannot parse {env_key}={raw!r}: {exc}", cause=exc) from exc

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Failed to load {settings_class.__name__}: {exc}", cause=exc) from exc

    def _coerce(self, raw: str, hint: Any) -> Any:
        if typing.get_origin(hint) is list:
            return _parse_list(raw)
        return _PARSERS.get(hint, str)(raw)


class DotenvSettingsLoader(SettingsLoader):
    """Read a ``.env`` file on top of the environment.

    The process environment is not modified.  Real environment variables win
    over the file unless *override* is set.  A missing file is ignored.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        from_file = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        if self._override:
            environ = {**os.environ, **from_file}
        else:
            environ = {**from_file, **os.environ}
        return EnvSettingsLoader(environ).load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
