"""Glyph outlines and cached atlas entries.

This module defines the glyph-level models produced by the font module:
an outline flattened into line and quadratic segments, and the atlas entry
that records where that outline lives in the shared curve store.
"""

from dataclasses import dataclass, field
from typing import Any

from glyphsdf.domain.curves import ControlPoint, CurveRange, CurveRanges

Segment = tuple[ControlPoint, ...]


@dataclass(frozen=True)
class GlyphMetrics:
    """Glyph placement in em units.

    Attributes:
        advance: Horizontal advance
        offset_x: Left edge of the outline box relative to the pen
        offset_y: Bottom edge of the outline box relative to the baseline
        width: Width of the outline box
        height: Height of the outline box
    """

    advance: float
    offset_x: float = 0.0
    offset_y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "advance": self.advance,
            "offset": [self.offset_x, self.offset_y],
            "size": [self.width, self.height],
        }


@dataclass
class GlyphOutline:
    """A glyph's closed contours as line and quadratic segments.

    Control points are in the glyph's unit box: the outline's control
    bounds map to [0, 1] on both axes.

    Attributes:
        name: Glyph name
        lines: Line segments as (A, B)
        quadratics: Quadratic segments as (A, B, C)
        bounds: Control bounds (xmin, ymin, xmax, ymax) in font units
        advance_width: Advance in font units
    """

    name: str
    lines: list[Segment] = field(default_factory=list)
    quadratics: list[Segment] = field(default_factory=list)
    bounds: tuple[float, float, float, float] | None = None
    advance_width: int = 0

    def is_empty(self) -> bool:
        """Check if the glyph has no outline (e.g. a space)."""
        return not self.lines and not self.quadratics

    @property
    def segment_count(self) -> int:
        return len(self.lines) + len(self.quadratics)


@dataclass(frozen=True)
class GlyphEntry:
    """A glyph cached in the atlas.

    Attributes:
        name: Glyph name
        ranges: Where the outline lives in the shared store
        metrics: Placement metrics in em units
    """

    name: str
    ranges: CurveRanges
    metrics: GlyphMetrics

    @property
    def line_range(self) -> CurveRange:
        return self.ranges.lines

    @property
    def quadratic_range(self) -> CurveRange:
        return self.ranges.quadratics

    def has_outline(self) -> bool:
        return not (self.ranges.lines.is_empty() and self.ranges.quadratics.is_empty())
