"""Configuration management for glyphsdf.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- EvaluatorConfig: Tie epsilon, segment cap and degeneracy threshold
- CompositorConfig: Distance-to-color mapping
- FontConfig: Outline extraction settings
- RasterConfig: Surface and worker settings
- LoggingConfig: Logging settings
- GlyphSDFSettings: Main application settings
"""

from glyphsdf.config.settings import (
    CompositeMode,
    CompositorConfig,
    EvaluatorConfig,
    FontConfig,
    GlyphSDFSettings,
    LoggingConfig,
    RasterConfig,
    get_default_settings,
)

__all__ = [
    "CompositeMode",
    "CompositorConfig",
    "EvaluatorConfig",
    "FontConfig",
    "GlyphSDFSettings",
    "LoggingConfig",
    "RasterConfig",
    "get_default_settings",
]
