"""Configuration settings for glyphsdf."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$"


class CompositeMode(str, Enum):
    """How an aggregated signed distance becomes a color."""

    SMOOTH = "smooth"
    THRESHOLD = "threshold"


class EvaluatorConfig(BaseModel):
    """Configuration for distance evaluation and aggregation.

    Distances are measured in the glyph's normalized unit box, so the
    tolerances below are relative to the glyph size, not to pixels.
    """

    tie_epsilon: float = Field(
        default=1e-4,
        gt=0.0,
        le=1e-1,
        description="Distances closer than this are tie-broken by orthogonality",
    )
    max_quadratic_segments: int = Field(
        default=500,
        ge=1,
        description="Instances referencing more quadratics render the diagnostic color",
    )
    degenerate_epsilon: float = Field(
        default=1e-9,
        gt=0.0,
        le=1e-3,
        description="Quadratics whose |A - 2B + C|^2 is below this fraction of the control polygon size are evaluated as lines",
    )


class CompositorConfig(BaseModel):
    """Configuration for mapping distances to colors."""

    mode: CompositeMode = Field(
        default=CompositeMode.SMOOTH,
        description="smooth lerps foreground to background, threshold picks one",
    )
    sharpness: float = Field(
        default=100.0,
        gt=0.0,
        description="Distance multiplier used as the lerp factor in smooth mode",
    )
    threshold: float = Field(
        default=0.01,
        description="Distances below this select the foreground in threshold mode",
    )
    diagnostic_color: str = Field(
        default="#808080",
        pattern=HEX_COLOR_PATTERN,
        description="Fill for instances rejected by the quadratic segment cap",
    )


class FontConfig(BaseModel):
    """Configuration for outline extraction."""

    cubic_tolerance: float = Field(
        default=1.0,
        ge=0.01,
        le=50.0,
        description="Max error in font units when converting cubics to quadratics",
    )


class RasterConfig(BaseModel):
    """Configuration for CPU rasterization of a text line."""

    font_size: float = Field(
        default=64.0,
        ge=4.0,
        le=2048.0,
        description="Pixels per em",
    )
    margin: int = Field(
        default=8,
        ge=0,
        le=1024,
        description="Empty border around the rendered line in pixels",
    )
    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto, 1 = in-process)",
    )
    foreground: str = Field(default="#000000", pattern=HEX_COLOR_PATTERN)
    background: str = Field(default="#ffffff", pattern=HEX_COLOR_PATTERN)
    clear_color: str = Field(
        default="#00000000",
        pattern=HEX_COLOR_PATTERN,
        description="Surface color where no instance is drawn",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphSDFSettings(BaseModel):
    """Main application settings."""

    evaluator: EvaluatorConfig = Field(default_factory=EvaluatorConfig)
    compositor: CompositorConfig = Field(default_factory=CompositorConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    raster: RasterConfig = Field(default_factory=RasterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphSDFSettings:
    """Get default application settings."""
    return GlyphSDFSettings()
