"""Configuration management for gridfont.

This module provides configuration management using Pydantic models.
Configuration can be loaded from a font-config JSON file, given via CLI
arguments, or left at its defaults.

Key classes:
- FontInfoConfig: Family name and naming metadata
- GridConfig: Raster width, height and baseline row
- MetricsConfig: Pixel size and vertical metrics
- CorpusConfig: Glyph directories and required codepoint range
- GridfontSettings: Main application settings
"""

from gridfont.config.settings import (
    CorpusConfig,
    FontInfoConfig,
    GridConfig,
    GridfontSettings,
    LoggingConfig,
    MetricsConfig,
    ProcessingConfig,
    WeightsConfig,
    get_default_settings,
    load_settings,
)

__all__ = [
    "CorpusConfig",
    "FontInfoConfig",
    "GridConfig",
    "GridfontSettings",
    "LoggingConfig",
    "MetricsConfig",
    "ProcessingConfig",
    "WeightsConfig",
    "get_default_settings",
    "load_settings",
]
