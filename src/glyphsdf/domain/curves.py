"""Control points and the shared, append-only curve buffers.

This module defines the storage every glyph instance in a draw batch reads
from:
- ControlPoint: A 2D coordinate in glyph-local shape space
- CurveDegree: Enum for the segment kinds a buffer holds
- CurveRange: An ``(offset, count)`` handle into one buffer
- CurveBuffer: A flat sequence of control points for one degree
- GlyphCurveStore: The line, quadratic and cubic buffers of one font atlas

Buffers only ever grow. Ranges handed out by ``append`` stay valid until the
whole store is rebuilt, so instances hold non-owning views and never copy
control points.
"""

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from glyphsdf.exceptions import CurveRangeError, CurveStoreError


@dataclass(frozen=True, slots=True)
class ControlPoint:
    """A point in glyph-local shape space.

    Control points share their coordinate space with the per-pixel query
    coordinate, so distances can be evaluated without another transform.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def __add__(self, other: "ControlPoint") -> "ControlPoint":
        return ControlPoint(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "ControlPoint") -> "ControlPoint":
        return ControlPoint(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "ControlPoint":
        return ControlPoint(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def dot(self, other: "ControlPoint") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: "ControlPoint") -> float:
        """Z component of the 2D cross product ``self x other``."""
        return self.x * other.y - self.y * other.x

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "ControlPoint":
        """Unit vector in the same direction (zero vector stays zero)."""
        length = self.length()
        if length == 0.0:
            return ControlPoint(0.0, 0.0)
        return ControlPoint(self.x / length, self.y / length)

    def lerp(self, other: "ControlPoint", t: float) -> "ControlPoint":
        """Linear interpolation from self (t=0) to other (t=1)."""
        return ControlPoint(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


class CurveDegree(Enum):
    """Segment kind stored in a curve buffer.

    The value is the Bezier degree; a segment of degree n is stored as
    n + 1 consecutive control points.
    """

    LINE = 1
    QUADRATIC = 2
    CUBIC = 3

    @property
    def points_per_curve(self) -> int:
        return self.value + 1


@dataclass(frozen=True, slots=True)
class CurveRange:
    """Contiguous run of curves in one buffer, counted in curve units.

    Attributes:
        offset: Index of the first curve
        count: Number of curves
    """

    offset: int = 0
    count: int = 0

    @property
    def end(self) -> int:
        return self.offset + self.count

    def is_empty(self) -> bool:
        return self.count == 0

    def to_tuple(self) -> tuple[int, int]:
        return (self.offset, self.count)

    @classmethod
    def from_tuple(cls, data: Sequence[int]) -> "CurveRange":
        return cls(offset=int(data[0]), count=int(data[1]))


EMPTY_RANGE = CurveRange(0, 0)


@dataclass(frozen=True, slots=True)
class CurveRanges:
    """The three ranges one glyph occupies in a GlyphCurveStore."""

    lines: CurveRange = EMPTY_RANGE
    quadratics: CurveRange = EMPTY_RANGE
    cubics: CurveRange = EMPTY_RANGE


@dataclass
class CurveBuffer:
    """Flat, append-only control points for one curve degree.

    Attributes:
        degree: Degree of every curve in the buffer
        points: Control points, ``degree.points_per_curve`` per curve
    """

    degree: CurveDegree
    points: list[ControlPoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points) // self.degree.points_per_curve

    def append(self, curves: Sequence[Sequence[ControlPoint]]) -> CurveRange:
        """Append curves and return the range they occupy.

        Args:
            curves: Curves, each a sequence of ``points_per_curve`` points

        Returns:
            Range covering the appended curves

        Raises:
            CurveStoreError: If a curve has the wrong number of points
        """
        width = self.degree.points_per_curve
        for curve in curves:
            if len(curve) != width:
                raise CurveStoreError(
                    f"{self.degree.name.lower()} curve needs {width} points, got {len(curve)}"
                )

        offset = len(self)
        for curve in curves:
            self.points.extend(curve)
        return CurveRange(offset=offset, count=len(curves))

    def contains(self, curve_range: CurveRange) -> bool:
        """Check that a range lies inside the buffer."""
        return (
            curve_range.offset >= 0
            and curve_range.count >= 0
            and curve_range.end <= len(self)
        )

    def validate(self, curve_range: CurveRange) -> None:
        """Raise CurveRangeError if the range does not fit the buffer."""
        if not self.contains(curve_range):
            raise CurveRangeError(
                curve_range.offset,
                curve_range.count,
                len(self),
                self.degree.name.lower(),
            )

    def curve(self, index: int) -> tuple[ControlPoint, ...]:
        """Control points of the curve at ``index``."""
        width = self.degree.points_per_curve
        start = index * width
        return tuple(self.points[start : start + width])

    def curves(self, curve_range: CurveRange) -> Iterator[tuple[ControlPoint, ...]]:
        """Iterate the curves of a range.

        The range is not validated here; callers check ranges once when
        building instances.
        """
        for index in range(curve_range.offset, curve_range.end):
            yield self.curve(index)

    def to_list(self) -> list[tuple[float, float]]:
        return [p.to_tuple() for p in self.points]

    @classmethod
    def from_list(cls, degree: CurveDegree, data: Sequence[Sequence[float]]) -> "CurveBuffer":
        return cls(degree=degree, points=[ControlPoint(x, y) for x, y in data])


class GlyphCurveStore:
    """One line, quadratic and cubic buffer shared by a whole draw batch.

    The store is built once per font atlas. Outlines are appended as glyphs
    are first cached; a font change invalidates everything at once through
    ``clear``.

    Example:
        store = GlyphCurveStore()
        ranges = store.append_outline(lines=[(a, b), (b, c), (c, a)])
        for a, b in store.lines.curves(ranges.lines):
            ...
    """

    def __init__(
        self,
        lines: CurveBuffer | None = None,
        quadratics: CurveBuffer | None = None,
        cubics: CurveBuffer | None = None,
    ) -> None:
        self.lines = lines if lines is not None else CurveBuffer(CurveDegree.LINE)
        self.quadratics = (
            quadratics if quadratics is not None else CurveBuffer(CurveDegree.QUADRATIC)
        )
        # Reserved: no evaluator consumes cubics, outlines are converted upstream.
        self.cubics = cubics if cubics is not None else CurveBuffer(CurveDegree.CUBIC)

    def buffer(self, degree: CurveDegree) -> CurveBuffer:
        """Get the buffer holding curves of ``degree``."""
        if degree is CurveDegree.LINE:
            return self.lines
        if degree is CurveDegree.QUADRATIC:
            return self.quadratics
        return self.cubics

    def append_outline(
        self,
        lines: Sequence[Sequence[ControlPoint]] = (),
        quadratics: Sequence[Sequence[ControlPoint]] = (),
        cubics: Sequence[Sequence[ControlPoint]] = (),
    ) -> CurveRanges:
        """Append one glyph's complete, closed outline.

        Args:
            lines: Line segments as (A, B) pairs
            quadratics: Quadratic segments as (A, B, C) triples
            cubics: Cubic segments as (A, B, C, D) quadruples

        Returns:
            The ranges the outline occupies in each buffer
        """
        return CurveRanges(
            lines=self.lines.append(lines),
            quadratics=self.quadratics.append(quadratics),
            cubics=self.cubics.append(cubics),
        )

    def validate(self, ranges: CurveRanges) -> None:
        """Raise CurveRangeError if any range exceeds its buffer."""
        self.lines.validate(ranges.lines)
        self.quadratics.validate(ranges.quadratics)
        self.cubics.validate(ranges.cubics)

    @property
    def curve_count(self) -> int:
        return len(self.lines) + len(self.quadratics) + len(self.cubics)

    def clear(self) -> None:
        """Drop every curve, invalidating all ranges handed out so far."""
        self.lines.points.clear()
        self.quadratics.points.clear()
        self.cubics.points.clear()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary of flat point lists per degree
        """
        return {
            "lines": self.lines.to_list(),
            "quadratics": self.quadratics.to_list(),
            "cubics": self.cubics.to_list(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphCurveStore":
        """Deserialize from dictionary.

        Args:
            data: Dictionary produced by ``to_dict``

        Returns:
            GlyphCurveStore instance
        """
        return cls(
            lines=CurveBuffer.from_list(CurveDegree.LINE, data["lines"]),
            quadratics=CurveBuffer.from_list(CurveDegree.QUADRATIC, data["quadratics"]),
            cubics=CurveBuffer.from_list(CurveDegree.CUBIC, data.get("cubics", [])),
        )
