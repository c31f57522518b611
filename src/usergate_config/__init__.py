"""Shared application configuration package."""

from .settings import (
    DiagnosticLevel,
    Settings,
    clear_settings_cache,
    get_config_dir,
    get_settings,
)

__all__ = [
    "DiagnosticLevel",
    "Settings",
    "clear_settings_cache",
    "get_config_dir",
    "get_settings",
]
