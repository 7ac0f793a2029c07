"""Conversion from fonttools glyphs to line and quadratic segments.

The renderer evaluates only lines and quadratics, so outlines are reduced
to those two kinds here:
- TrueType implied on-curve points are decomposed by BasePen
- Cubic segments (CFF) are approximated with quadratic splines via cu2qu
- Every contour is closed explicitly; zero-length lines are dropped

Winding is normalized so outer contours run counter-clockwise, which makes
interior points evaluate to negative distances. TrueType outlines wind the
other way and have every segment reversed.
"""

from typing import Any

from fontTools.cu2qu import curve_to_quadratic
from fontTools.pens.basePen import BasePen, decomposeQuadraticSegment
from fontTools.ttLib import TTFont

from glyphsdf.domain import ControlPoint, GlyphOutline, Segment

Point2 = tuple[float, float]


class SegmentPen(BasePen):
    """Pen collecting raw line and quadratic segments in font units.

    Example:
        pen = SegmentPen(glyph_set, cubic_tolerance=1.0)
        glyph_set["a"].draw(pen)
        pen.lines, pen.quadratics
    """

    def __init__(self, glyph_set: Any = None, cubic_tolerance: float = 1.0) -> None:
        super().__init__(glyph_set)
        self.cubic_tolerance = cubic_tolerance
        self.lines: list[tuple[Point2, Point2]] = []
        self.quadratics: list[tuple[Point2, Point2, Point2]] = []
        self._contour_start: Point2 | None = None

    def _moveTo(self, pt: Point2) -> None:
        self._contour_start = pt

    def _lineTo(self, pt: Point2) -> None:
        start = self._getCurrentPoint()
        if start != pt:
            self.lines.append((start, pt))

    def _qCurveToOne(self, pt1: Point2, pt2: Point2) -> None:
        self.quadratics.append((self._getCurrentPoint(), pt1, pt2))

    def _curveToOne(self, pt1: Point2, pt2: Point2, pt3: Point2) -> None:
        start = self._getCurrentPoint()
        spline = curve_to_quadratic([start, pt1, pt2, pt3], self.cubic_tolerance)
        for off_curve, on_curve in decomposeQuadraticSegment(spline[1:]):
            self.quadratics.append((start, off_curve, on_curve))
            start = on_curve

    def _closePath(self) -> None:
        current = self._getCurrentPoint()
        if self._contour_start is not None and current is not None and current != self._contour_start:
            self.lines.append((current, self._contour_start))
        self._contour_start = None

    # Open contours are closed as well; a partial outline breaks the sign.
    _endPath = _closePath


def fonttools_glyph_to_outline(
    name: str,
    fonttools_glyph: Any,
    font: TTFont,
    cubic_tolerance: float = 1.0,
) -> GlyphOutline:
    """Convert a fonttools glyph to a normalized GlyphOutline.

    Args:
        name: Name of the glyph
        fonttools_glyph: The fonttools glyph object from GlyphSet
        font: The TTFont object for accessing metadata
        cubic_tolerance: Max error in font units for cubic conversion

    Returns:
        GlyphOutline with control points in the glyph's unit box
    """
    pen = SegmentPen(font.getGlyphSet(), cubic_tolerance=cubic_tolerance)
    fonttools_glyph.draw(pen)

    lines = pen.lines
    quadratics = pen.quadratics

    # TrueType outer contours are clockwise; flip to counter-clockwise.
    if "glyf" in font:
        lines = [(b, a) for a, b in lines]
        quadratics = [(c, b, a) for a, b, c in quadratics]

    hmtx = font.get("hmtx")
    advance_width = 0
    if hmtx and name in hmtx.metrics:
        advance_width = hmtx.metrics[name][0]

    bounds = _control_bounds(lines, quadratics)
    if bounds is None:
        return GlyphOutline(name=name, advance_width=advance_width)

    return GlyphOutline(
        name=name,
        lines=[_normalize(segment, bounds) for segment in lines],
        quadratics=[_normalize(segment, bounds) for segment in quadratics],
        bounds=bounds,
        advance_width=advance_width,
    )


def _control_bounds(
    lines: list[tuple[Point2, Point2]],
    quadratics: list[tuple[Point2, Point2, Point2]],
) -> tuple[float, float, float, float] | None:
    """Bounding box of every control point, or None for an empty or flat outline."""
    points = [pt for segment in lines for pt in segment]
    points.extend(pt for segment in quadratics for pt in segment)
    if not points:
        return None

    xs = [pt[0] for pt in points]
    ys = [pt[1] for pt in points]
    bounds = (min(xs), min(ys), max(xs), max(ys))
    if bounds[2] <= bounds[0] or bounds[3] <= bounds[1]:
        return None
    return bounds


def _normalize(
    segment: tuple[Point2, ...],
    bounds: tuple[float, float, float, float],
) -> Segment:
    """Map font-unit points into the unit box of ``bounds``."""
    x_min, y_min, x_max, y_max = bounds
    width = x_max - x_min
    height = y_max - y_min
    return tuple(
        ControlPoint((x - x_min) / width, (y - y_min) / height) for x, y in segment
    )
