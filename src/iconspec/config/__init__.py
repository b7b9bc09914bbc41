"""Configuration management for iconspec.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ExpandConfig: Default preset expansion flags
- ValidationConfig: Validation tolerances
- OutputConfig: Artifact writing settings
- ProcessingConfig: Batch build settings
- LoggingConfig: Logging settings
- IconSpecSettings: Main application settings
"""

from iconspec.config.settings import (
    ExpandConfig,
    IconSpecSettings,
    LoggingConfig,
    OutputConfig,
    ProcessingConfig,
    ValidationConfig,
    get_default_settings,
)

__all__ = [
    "ExpandConfig",
    "IconSpecSettings",
    "LoggingConfig",
    "OutputConfig",
    "ProcessingConfig",
    "ValidationConfig",
    "get_default_settings",
]
