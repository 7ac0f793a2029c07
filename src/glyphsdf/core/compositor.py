"""Mapping of aggregated signed distances to output colors.

Two variants are supported:
- smooth: ``lerp(foreground, background, distance * sharpness)``, with the
  factor clamped to [0, 1]. Edges get a narrow ramp but no real coverage
  estimate.
- threshold: foreground when ``distance < threshold``, else background.

``Compositor.shade`` is the per-pixel entry point. It applies the segment cap
before any evaluation and paints instances without segments as solid boxes.
"""

from glyphsdf.config import CompositeMode, CompositorConfig, EvaluatorConfig
from glyphsdf.core.aggregator import TIE_EPSILON, DistanceAggregator
from glyphsdf.core.distance import SignedDistanceEvaluator
from glyphsdf.domain import Color, ControlPoint, GlyphCurveStore, GlyphInstance

DIAGNOSTIC_GRAY = Color.from_hex("#808080")
MAX_QUADRATIC_SEGMENTS = 500


class Compositor:
    """Turns a glyph's signed distance at a pixel into a color.

    Example:
        compositor = Compositor(mode=CompositeMode.THRESHOLD)
        color = compositor.shade(local_point, instance, store)
    """

    def __init__(
        self,
        mode: CompositeMode = CompositeMode.SMOOTH,
        sharpness: float = 100.0,
        threshold: float = 0.01,
        diagnostic_color: Color = DIAGNOSTIC_GRAY,
        max_quadratic_segments: int = MAX_QUADRATIC_SEGMENTS,
        aggregator: DistanceAggregator | None = None,
    ) -> None:
        self.mode = mode
        self.sharpness = sharpness
        self.threshold = threshold
        self.diagnostic_color = diagnostic_color
        self.max_quadratic_segments = max_quadratic_segments
        self.aggregator = aggregator or DistanceAggregator(TIE_EPSILON)

    @classmethod
    def from_config(
        cls,
        compositor_config: CompositorConfig,
        evaluator_config: EvaluatorConfig,
    ) -> "Compositor":
        """Build a compositor and its aggregator from settings sections."""
        evaluator = SignedDistanceEvaluator(evaluator_config.degenerate_epsilon)
        return cls(
            mode=compositor_config.mode,
            sharpness=compositor_config.sharpness,
            threshold=compositor_config.threshold,
            diagnostic_color=Color.from_hex(compositor_config.diagnostic_color),
            max_quadratic_segments=evaluator_config.max_quadratic_segments,
            aggregator=DistanceAggregator(evaluator_config.tie_epsilon, evaluator),
        )

    def composite(self, signed_distance: float, instance: GlyphInstance) -> Color:
        """Color for an aggregated signed distance."""
        if self.mode is CompositeMode.THRESHOLD:
            if signed_distance < self.threshold:
                return instance.foreground
            return instance.background

        t = min(max(signed_distance * self.sharpness, 0.0), 1.0)
        return instance.foreground.lerp(instance.background, t)

    def is_capped(self, instance: GlyphInstance) -> bool:
        """Check if the instance exceeds the quadratic segment cap."""
        return instance.quadratic_range.count > self.max_quadratic_segments

    def shade(
        self,
        point: ControlPoint,
        instance: GlyphInstance,
        store: GlyphCurveStore,
    ) -> Color:
        """Final color of one pixel.

        Args:
            point: Pixel center in glyph-local space
            instance: Instance covering the pixel
            store: Shared curve buffers

        Returns:
            Output color
        """
        if self.is_capped(instance):
            return self.diagnostic_color
        if not instance.has_segments():
            return instance.foreground

        result = self.aggregator.glyph_distance(point, instance, store)
        return self.composite(result.distance, instance)
