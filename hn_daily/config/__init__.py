"""Configuration module - settings and environment management."""

from hn_daily.config.settings import (
    ConfigurationError,
    NORMALIZATION_POLICIES,
    Settings,
    load_settings,
)

__all__ = [
    "ConfigurationError",
    "NORMALIZATION_POLICIES",
    "Settings",
    "load_settings",
]
