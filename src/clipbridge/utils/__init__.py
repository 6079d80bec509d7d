"""Utility functions for clipbridge.

This module provides utility functions including:

- Logging setup and configuration
- Operation statistics and call logging
"""

from clipbridge.utils.logging import (
    OperationLogger,
    OperationStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
    "get_logger",
]
