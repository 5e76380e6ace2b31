"""Settings store the indicator reads mode configuration from."""

from .store import (
    ConfigurationChange,
    DEFAULT_NAMESPACE,
    SettingsError,
    SettingsStore,
    load_settings_file,
    mode_key,
)

__all__ = [
    "ConfigurationChange",
    "DEFAULT_NAMESPACE",
    "SettingsError",
    "SettingsStore",
    "load_settings_file",
    "mode_key",
]
