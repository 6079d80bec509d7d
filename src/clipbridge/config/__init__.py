"""Configuration management for clipbridge.

This module provides configuration management using Pydantic models.
Every option the engine recognizes is enumerated here with its default,
and the facade applies these defaults at the call boundary.

Key classes:
- BooleanOptions: Boolean operation settings
- OffsetOptions: Path offsetting settings
- RectClipOptions: Rectangle clipping settings
- EngineConfig: Native library location
- LoggingConfig: Logging settings
- ClipBridgeSettings: Main application settings
"""

from clipbridge.config.settings import (
    MAX_PRECISION,
    MIN_PRECISION,
    BooleanOptions,
    BufferConfig,
    ClipBridgeSettings,
    EngineConfig,
    LoggingConfig,
    OffsetOptions,
    RectClipOptions,
    get_default_settings,
)

__all__ = [
    "MAX_PRECISION",
    "MIN_PRECISION",
    "BooleanOptions",
    "BufferConfig",
    "ClipBridgeSettings",
    "EngineConfig",
    "LoggingConfig",
    "OffsetOptions",
    "RectClipOptions",
    "get_default_settings",
]
