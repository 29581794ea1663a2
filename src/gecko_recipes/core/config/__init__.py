"""Configuration module with YAML and environment variable support."""

from .settings import (
    ApiSettings,
    AppSettings,
    DatabaseSettings,
    LoggingSettings,
    MetricsSettings,
    ObservabilitySettings,
    ServerSettings,
    Settings,
    get_settings,
)


__all__ = [
    "ApiSettings",
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "MetricsSettings",
    "ObservabilitySettings",
    "ServerSettings",
    "Settings",
    "get_settings",
]
