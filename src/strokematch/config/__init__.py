"""Configuration management for strokematch.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- EncoderConfig: Precision and minimum-size constants for encoding
- WeightsConfig: Per-representation scoring weights
- LibraryConfig: Libraries created on startup
- LoggingConfig: Logging settings
- StrokeMatchSettings: Main application settings
"""

from strokematch.config.settings import (
    EncoderConfig,
    LibraryConfig,
    LoggingConfig,
    StrokeMatchSettings,
    WeightsConfig,
    get_default_settings,
)

__all__ = [
    "EncoderConfig",
    "LibraryConfig",
    "LoggingConfig",
    "StrokeMatchSettings",
    "WeightsConfig",
    "get_default_settings",
]
