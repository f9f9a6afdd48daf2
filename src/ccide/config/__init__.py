"""Configuration APIs."""

from ccide.config.settings import (
    AppSettings,
    LLMSettings,
    RuntimeSettings,
    SettingsError,
    load_settings,
    provider_config_from_settings,
    resolve_env_secret,
    settings_summary,
)

__all__ = [
    "AppSettings",
    "LLMSettings",
    "RuntimeSettings",
    "SettingsError",
    "load_settings",
    "provider_config_from_settings",
    "resolve_env_secret",
    "settings_summary",
]
