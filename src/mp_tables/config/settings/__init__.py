"""Config settings – 12-factor env-based configuration."""
from mp_tables.config.settings.base import Settings, TableSettings
from mp_tables.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader", "TableSettings"]
