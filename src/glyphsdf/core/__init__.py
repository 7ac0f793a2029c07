"""Core rendering algorithms for glyphsdf.

This module contains the per-pixel pipeline and its orchestration:

- Transform stage (instance quad to screen, and the inverse per pixel)
- Signed distance evaluation for line and quadratic segments
- Aggregation of per-segment distances into one glyph distance
- Compositing of a distance into a color
- Layout of text runs into glyph instances
- Data-parallel rasterization and end-to-end rendering

Evaluation functions are pure and safe to use in worker processes.

Key functions:
- line_signed_distance: Signed distance and orthogonality to a line
- quadratic_signed_distance: Same for a quadratic Bezier segment
- transform_vertex: Map a unit-quad vertex to screen space
- rasterize_instance: Shade the pixels of one instance

Key classes:
- SignedDistanceEvaluator: Per-segment evaluation entry point
- DistanceAggregator: Tie-broken minimum over a glyph's segments
- Compositor: Distance-to-color mapping with the segment cap
- InstanceBuilder: Lays out TextRun, Space and Box renderables
- Rasterizer: Parallel rasterization onto a Surface
- TextRenderer: Font to image orchestration
"""

from glyphsdf.core.aggregator import NO_SEGMENT, TIE_EPSILON, DistanceAggregator
from glyphsdf.core.compositor import DIAGNOSTIC_GRAY, MAX_QUADRATIC_SEGMENTS, Compositor
from glyphsdf.core.distance import (
    DEGENERATE_EPSILON,
    SegmentDistance,
    SignedDistanceEvaluator,
    line_signed_distance,
    quadratic_signed_distance,
)
from glyphsdf.core.layout import Box, InstanceBuilder, Renderable, Space, TextRun
from glyphsdf.core.rasterizer import Rasterizer, rasterize_instance, rasterize_task
from glyphsdf.core.renderer import FrameGeometry, TextRenderer, frame_geometry
from glyphsdf.core.transform import (
    UNIT_QUAD,
    UNIT_QUAD_INDICES,
    VertexOutput,
    screen_bounds,
    screen_to_local,
    transform_vertex,
)

__all__ = [
    "DEGENERATE_EPSILON",
    "DIAGNOSTIC_GRAY",
    "MAX_QUADRATIC_SEGMENTS",
    "NO_SEGMENT",
    "TIE_EPSILON",
    "UNIT_QUAD",
    "UNIT_QUAD_INDICES",
    # Layout
    "Box",
    "InstanceBuilder",
    "Renderable",
    "Space",
    "TextRun",
    # Pipeline stages
    "Compositor",
    "DistanceAggregator",
    "SegmentDistance",
    "SignedDistanceEvaluator",
    "VertexOutput",
    # Orchestration
    "FrameGeometry",
    "Rasterizer",
    "TextRenderer",
    # Functions
    "frame_geometry",
    "line_signed_distance",
    "quadratic_signed_distance",
    "rasterize_instance",
    "rasterize_task",
    "screen_bounds",
    "screen_to_local",
    "transform_vertex",
]
