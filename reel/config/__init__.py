"""Configuration models, sanitizers and the settings loader."""

from .loader import load_app_settings, load_app_settings_or_default
from .models import DEFAULT_CONFIG, AppSettings, LoggingSettings, ReelConfig
from .sanitize import (
    sanitize_config,
    sanitize_duration_ms,
    sanitize_history_size,
    sanitize_jitter_ms,
)

__all__ = [
    "AppSettings",
    "DEFAULT_CONFIG",
    "LoggingSettings",
    "ReelConfig",
    "load_app_settings",
    "load_app_settings_or_default",
    "sanitize_config",
    "sanitize_duration_ms",
    "sanitize_history_size",
    "sanitize_jitter_ms",
]
