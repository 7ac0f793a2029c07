"""Reduction of per-segment distances to one signed distance per glyph.

The nearest segment decides inside versus outside. Where two segments are
equally near, which happens at every shared contour corner, the sign of
either may be wrong for the query point, so the winner is the one whose
tangent is most perpendicular to the query direction.
"""

import math
from collections.abc import Iterable, Iterator

from glyphsdf.core.distance import (
    DEGENERATE_EPSILON,
    SegmentDistance,
    SignedDistanceEvaluator,
)
from glyphsdf.domain import ControlPoint, GlyphCurveStore, GlyphInstance

TIE_EPSILON = 1e-4

NO_SEGMENT = SegmentDistance(math.inf, -math.inf)


def _tie_key(candidate: SegmentDistance) -> tuple[float, float, float, float]:
    # Larger |orthogonality| first; remaining fields make the order total.
    return (
        -abs(candidate.orthogonality),
        abs(candidate.distance),
        candidate.distance,
        candidate.orthogonality,
    )


class DistanceAggregator:
    """Picks the winning segment distance for a glyph.

    Candidates whose absolute distances differ by less than ``tie_epsilon``
    are ranked by absolute orthogonality; otherwise the smaller absolute
    distance wins. The preference between any two candidates does not
    depend on the order they are visited in.

    Example:
        aggregator = DistanceAggregator()
        result = aggregator.glyph_distance(point, instance, store)
        inside = result.is_inside()
    """

    def __init__(
        self,
        tie_epsilon: float = TIE_EPSILON,
        evaluator: SignedDistanceEvaluator | None = None,
    ) -> None:
        self.tie_epsilon = tie_epsilon
        self.evaluator = evaluator or SignedDistanceEvaluator(DEGENERATE_EPSILON)

    def prefer(self, best: SegmentDistance, candidate: SegmentDistance) -> SegmentDistance:
        """Return the preferred of two candidates."""
        if abs(abs(candidate.distance) - abs(best.distance)) < self.tie_epsilon:
            return candidate if _tie_key(candidate) < _tie_key(best) else best
        return candidate if abs(candidate.distance) < abs(best.distance) else best

    def reduce(self, candidates: Iterable[SegmentDistance]) -> SegmentDistance:
        """Reduce candidates to the winner.

        Returns:
            The winning candidate, or ``NO_SEGMENT`` (+inf, -inf) if empty
        """
        best = NO_SEGMENT
        for candidate in candidates:
            best = self.prefer(best, candidate)
        return best

    def segment_distances(
        self,
        point: ControlPoint,
        instance: GlyphInstance,
        store: GlyphCurveStore,
    ) -> Iterator[SegmentDistance]:
        """Evaluate every line and quadratic segment the instance references.

        The cubic range is never read.
        """
        for a, b in store.lines.curves(instance.line_range):
            yield self.evaluator.line(point, a, b)
        for a, b, c in store.quadratics.curves(instance.quadratic_range):
            yield self.evaluator.quadratic(point, a, b, c)

    def glyph_distance(
        self,
        point: ControlPoint,
        instance: GlyphInstance,
        store: GlyphCurveStore,
    ) -> SegmentDistance:
        """Signed distance from a local point to the instance's whole outline.

        Args:
            point: Query point in glyph-local space
            instance: Instance whose ranges select the segments
            store: Shared curve buffers

        Returns:
            Winning SegmentDistance, negative inside
        """
        return self.reduce(self.segment_distances(point, instance, store))
