"""Utility functions for strokematch.

This module provides utility functions including:

- Logging setup and configuration
- Recognition event logging and statistics
"""

from strokematch.utils.logging import (
    RecognitionLogger,
    RecognitionStats,
    configure_logging,
)

__all__ = [
    "RecognitionLogger",
    "RecognitionStats",
    "configure_logging",
]
