"""Configuration management for msdfkit.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, keyword arguments or defaults.

Key classes:
- ColoringConfig: Corner classification and edge coloring settings
- FieldConfig: Output raster size, channels, range and framing
- GeometryConfig: Contour validation tolerances
- ProcessingConfig: Parallel sampling settings
- LoggingConfig: Logging settings
- MsdfSettings: Main application settings
"""

from msdfkit.config.settings import (
    ColoringConfig,
    FieldConfig,
    GeometryConfig,
    LoggingConfig,
    MsdfSettings,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "ColoringConfig",
    "FieldConfig",
    "GeometryConfig",
    "LoggingConfig",
    "MsdfSettings",
    "ProcessingConfig",
    "get_default_settings",
]
