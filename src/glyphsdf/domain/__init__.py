"""Domain models for glyphsdf.

This module contains the data the renderer reads: control points and the
shared curve buffers, per-frame glyph instances, colors, and the glyph
outlines and atlas entries produced by the font module. Models are:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel rasterization)
- Independent of fonttools implementation details

Key classes:
- ControlPoint: A 2D point in glyph-local shape space
- CurveRange: ``(offset, count)`` handle into one curve buffer
- GlyphCurveStore: Line, quadratic and cubic buffers of one atlas
- GlyphInstance: One glyph placed for one frame
- GlyphEntry: A cached glyph's ranges and metrics
- Surface: RGBA8 frame buffer the rasterizer composites tiles onto
"""

from glyphsdf.domain.curves import (
    EMPTY_RANGE,
    ControlPoint,
    CurveBuffer,
    CurveDegree,
    CurveRange,
    CurveRanges,
    GlyphCurveStore,
)
from glyphsdf.domain.glyph import GlyphEntry, GlyphMetrics, GlyphOutline, Segment
from glyphsdf.domain.instance import Color, GlobalTransform, GlyphInstance
from glyphsdf.domain.surface import Surface, Tile

__all__: list[str] = [
    "EMPTY_RANGE",
    # Enums
    "CurveDegree",
    # Curve storage
    "ControlPoint",
    "CurveBuffer",
    "CurveRange",
    "CurveRanges",
    "GlyphCurveStore",
    # Per-frame records
    "Color",
    "GlobalTransform",
    "GlyphInstance",
    # Glyphs
    "GlyphEntry",
    "GlyphMetrics",
    "GlyphOutline",
    "Segment",
    # Output
    "Surface",
    "Tile",
]
