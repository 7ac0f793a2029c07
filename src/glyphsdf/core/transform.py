"""Vertex transform from the unit quad to screen space.

Every glyph instance is drawn as the unit quad ``[0, 1]^2``. A vertex is
placed by the instance and then by the global transform:

    screen = (vertex * instance.scale + instance.position) * global.scale + global.translate

The vertex itself is forwarded unchanged as the local coordinate at which
signed distances are evaluated. The CPU rasterizer runs this map backwards
to find the local coordinate of each pixel center.
"""

from dataclasses import dataclass

from glyphsdf.domain import ControlPoint, GlobalTransform, GlyphInstance

UNIT_QUAD: tuple[ControlPoint, ...] = (
    ControlPoint(0.0, 0.0),
    ControlPoint(1.0, 0.0),
    ControlPoint(1.0, 1.0),
    ControlPoint(0.0, 1.0),
)
UNIT_QUAD_INDICES: tuple[int, ...] = (0, 1, 3, 3, 1, 2)


@dataclass(frozen=True, slots=True)
class VertexOutput:
    """A transformed vertex.

    Attributes:
        position: Screen position
        local: Glyph-local query coordinate
    """

    position: ControlPoint
    local: ControlPoint


def transform_vertex(
    vertex: ControlPoint,
    instance: GlyphInstance,
    transform: GlobalTransform,
) -> VertexOutput:
    """Place a unit-quad vertex on screen.

    Args:
        vertex: Vertex of the unit quad
        instance: Glyph instance supplying position and scale
        transform: Global screen transform

    Returns:
        VertexOutput with screen position and pass-through local coordinate
    """
    x = (vertex.x * instance.scale[0] + instance.position[0]) * transform.scale[0]
    y = (vertex.y * instance.scale[1] + instance.position[1]) * transform.scale[1]
    return VertexOutput(
        position=ControlPoint(x + transform.translate[0], y + transform.translate[1]),
        local=vertex,
    )


def screen_to_local(
    point: ControlPoint,
    instance: GlyphInstance,
    transform: GlobalTransform,
) -> ControlPoint | None:
    """Invert ``transform_vertex`` for a screen point.

    Returns:
        The local coordinate, or None when a scale component is zero and the
        instance covers no area
    """
    sx = instance.scale[0] * transform.scale[0]
    sy = instance.scale[1] * transform.scale[1]
    if sx == 0.0 or sy == 0.0:
        return None

    x = (point.x - transform.translate[0]) / transform.scale[0] - instance.position[0]
    y = (point.y - transform.translate[1]) / transform.scale[1] - instance.position[1]
    return ControlPoint(x / instance.scale[0], y / instance.scale[1])


def screen_bounds(
    instance: GlyphInstance,
    transform: GlobalTransform,
) -> tuple[float, float, float, float]:
    """Screen-space bounding box of an instance's quad.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y)
    """
    corners = [transform_vertex(v, instance, transform).position for v in UNIT_QUAD]
    xs = [c.x for c in corners]
    ys = [c.y for c in corners]
    return (min(xs), min(ys), max(xs), max(ys))
