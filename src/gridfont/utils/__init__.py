"""Utility functions for gridfont.

This module provides utility functions including:

- Logging setup and configuration
- Build statistics and progress reporting helpers
"""

from gridfont.utils.logging import (
    BuildLogger,
    BuildStats,
    WeightOutput,
    configure_logging,
)

__all__ = [
    "BuildLogger",
    "BuildStats",
    "WeightOutput",
    "configure_logging",
]
