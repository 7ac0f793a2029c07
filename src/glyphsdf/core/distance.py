"""Closed-form signed distance from a point to line and quadratic segments.

Each evaluator returns the signed distance to the nearest point of one
segment together with an orthogonality score:

- The sign is ``sign(cross(tangent, closest - query))``. For outlines whose
  outer contours wind counter-clockwise, interior points come out negative.
- The orthogonality score is only computed when the nearest point was
  clamped to a segment endpoint. It measures how perpendicular the query
  direction is to the segment there, and is used to break ties between
  segments that meet at that endpoint. Unclamped results carry ``+inf``.

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from glyphsdf.domain import ControlPoint

# Relative threshold on |A - 2B + C|^2 below which a quadratic is a line.
DEGENERATE_EPSILON = 1e-9

_SQRT_3 = math.sqrt(3.0)


@dataclass(frozen=True, slots=True)
class SegmentDistance:
    """Signed distance from a query point to one segment.

    Attributes:
        distance: Signed distance, negative inside
        orthogonality: Endpoint tie-break score, ``+inf`` when not clamped
    """

    distance: float
    orthogonality: float = math.inf

    def is_inside(self) -> bool:
        return self.distance < 0.0


def _sign(value: float) -> float:
    """Sign with zero counted as positive, so boundary points are outside."""
    return -1.0 if value < 0.0 else 1.0


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def _cbrt(value: float) -> float:
    return math.copysign(abs(value) ** (1.0 / 3.0), value)


def line_signed_distance(p: ControlPoint, a: ControlPoint, b: ControlPoint) -> SegmentDistance:
    """Signed distance from ``p`` to the line segment ``a -> b``.

    Args:
        p: Query point
        a: Segment start
        b: Segment end

    Returns:
        SegmentDistance for the closest point on the segment

    Examples:
        >>> a, b = ControlPoint(0.0, 0.0), ControlPoint(1.0, 0.0)
        >>> line_signed_distance(ControlPoint(0.5, 1.0), a, b).distance
        -1.0
    """
    ab = b - a
    length_sq = ab.length_squared()

    # A zero-length segment is its start point.
    t_raw = (p - a).dot(ab) / length_sq if length_sq > 0.0 else -1.0
    t = _clamp01(t_raw)
    closest = a.lerp(b, t)

    to_closest = closest - p
    distance = to_closest.length()
    signed = distance * _sign(ab.cross(to_closest))

    orthogonality = math.inf
    if t != t_raw and distance > 0.0:
        orthogonality = ab.normalized().cross((p - closest).normalized())

    return SegmentDistance(signed, orthogonality)


def quadratic_signed_distance(
    p: ControlPoint,
    a: ControlPoint,
    b: ControlPoint,
    c: ControlPoint,
    degenerate_epsilon: float = DEGENERATE_EPSILON,
) -> SegmentDistance:
    """Signed distance from ``p`` to the quadratic Bezier ``a, b, c``.

    The nearest point solves a cubic in ``t``. After normalizing it to the
    depressed form, a non-negative discriminant gives a single real root
    (Cardano); a negative one gives three real roots (trigonometric form),
    of which the middle root is a local maximum of the distance and is
    skipped.

    When ``|a - 2b + c|^2`` is negligible against the size of the control
    polygon the curve is the straight segment ``a -> c`` and is evaluated
    as a line.

    Args:
        p: Query point
        a: Start point
        b: Control point
        c: End point
        degenerate_epsilon: Relative threshold for the straight-line fallback

    Returns:
        SegmentDistance for the closest point on the curve
    """
    va = b - a
    vb = a - b * 2.0 + c
    bb = vb.length_squared()

    scale = va.length_squared() + (c - a).length_squared()
    if bb <= degenerate_epsilon * scale:
        return line_signed_distance(p, a, c)

    vc = va * 2.0
    vd = a - p

    k = 1.0 / bb
    kx = k * va.dot(vb)
    ky = k * (2.0 * va.dot(va) + vd.dot(vb)) / 3.0
    kz = k * vd.dot(va)

    pp = ky - kx * kx
    q = kx * (2.0 * kx * kx - 3.0 * ky) + kz
    h = q * q + 4.0 * pp * pp * pp

    if h >= 0.0:
        h = math.sqrt(h)
        t_raw = _cbrt((h - q) / 2.0) + _cbrt((-h - q) / 2.0) - kx
        if not math.isfinite(t_raw):
            return line_signed_distance(p, a, c)
        t = _clamp01(t_raw)
    else:
        z = math.sqrt(-pp)
        v = math.acos(min(max(q / (pp * z * 2.0), -1.0), 1.0)) / 3.0
        m = math.cos(v)
        n = math.sin(v) * _SQRT_3
        t_raw = (m + m) * z - kx
        t_alt_raw = (-n - m) * z - kx
        if not (math.isfinite(t_raw) and math.isfinite(t_alt_raw)):
            return line_signed_distance(p, a, c)

        t = _clamp01(t_raw)
        t_alt = _clamp01(t_alt_raw)
        dist_sq = (vd + (vc + vb * t) * t).length_squared()
        dist_alt_sq = (vd + (vc + vb * t_alt) * t_alt).length_squared()
        if dist_alt_sq < dist_sq:
            t, t_raw = t_alt, t_alt_raw

    to_closest = vd + (vc + vb * t) * t
    tangent = vc + vb * (2.0 * t)
    distance = to_closest.length()
    signed = distance * _sign(tangent.cross(to_closest))

    orthogonality = math.inf
    if t != t_raw and distance > 0.0:
        orthogonality = tangent.normalized().cross(to_closest.normalized())

    return SegmentDistance(signed, orthogonality)


class SignedDistanceEvaluator:
    """Dispatches segments to the line or quadratic evaluator.

    Example:
        evaluator = SignedDistanceEvaluator()
        result = evaluator.evaluate(point, (a, b, c))
    """

    def __init__(self, degenerate_epsilon: float = DEGENERATE_EPSILON) -> None:
        self.degenerate_epsilon = degenerate_epsilon

    def line(self, p: ControlPoint, a: ControlPoint, b: ControlPoint) -> SegmentDistance:
        return line_signed_distance(p, a, b)

    def quadratic(
        self, p: ControlPoint, a: ControlPoint, b: ControlPoint, c: ControlPoint
    ) -> SegmentDistance:
        return quadratic_signed_distance(p, a, b, c, self.degenerate_epsilon)

    def evaluate(self, p: ControlPoint, segment: Sequence[ControlPoint]) -> SegmentDistance:
        """Evaluate a line (2 points) or quadratic (3 points) segment.

        Raises:
            ValueError: For any other number of control points
        """
        if len(segment) == 2:
            return self.line(p, segment[0], segment[1])
        if len(segment) == 3:
            return self.quadratic(p, segment[0], segment[1], segment[2])
        raise ValueError(f"Cannot evaluate a segment with {len(segment)} control points")
