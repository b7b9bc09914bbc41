"""Utility functions for iconspec.

This module provides utility functions including:

- Logging setup and configuration
- Build statistics tracking
"""

from iconspec.utils.logging import (
    BuildLogger,
    BuildStats,
    configure_logging,
    reset_logging,
)

__all__ = [
    "BuildLogger",
    "BuildStats",
    "configure_logging",
    "reset_logging",
]
