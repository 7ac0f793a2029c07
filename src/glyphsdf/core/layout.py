"""Instance builder: turns renderables into per-frame glyph instances.

Layout works in em units with y pointing down and the baseline at 0. A pen
advances left to right; each glyph with an outline becomes one quad whose
local unit square covers the glyph's control bounds. Font outlines are
y-up, so glyph quads carry a negative y scale.

Key components:
- TextRun, Space, Box: Renderable items
- InstanceBuilder: Lays renderables out against a GlyphAtlas
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from glyphsdf.domain import EMPTY_RANGE, Color, GlyphEntry, GlyphInstance
from glyphsdf.exceptions import GlyphNotFoundError
from glyphsdf.utils import RenderLogger

if TYPE_CHECKING:
    from glyphsdf.io.atlas import GlyphAtlas


@dataclass(frozen=True)
class TextRun:
    """A run of characters drawn with one pair of colors."""

    text: str
    foreground: Color
    background: Color


@dataclass(frozen=True)
class Space:
    """Horizontal gap in em units."""

    width: float


@dataclass(frozen=True)
class Box:
    """A solid rectangle sitting on the baseline.

    Attributes:
        foreground: Fill color
        background: Unused by the fill, carried on the instance
        width: Box width in em units
        height: Box height in em units
        skip: Pen advance after the box (may differ from the width)
    """

    foreground: Color
    background: Color
    width: float
    height: float
    skip: float


Renderable = TextRun | Space | Box


class InstanceBuilder:
    """Lays out renderables as GlyphInstances referencing an atlas.

    Example:
        builder = InstanceBuilder(atlas)
        instances, advance = builder.build([TextRun("Hi", fg, bg)])
    """

    def __init__(
        self,
        atlas: "GlyphAtlas",
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.atlas = atlas
        self.logger = logger or structlog.get_logger("glyphsdf.layout")
        self.render_logger = RenderLogger(self.logger)

    def build(
        self,
        renderables: Sequence[Renderable],
        initial_skip: float = 0.0,
    ) -> tuple[list[GlyphInstance], float]:
        """Lay out renderables starting at ``initial_skip``.

        Args:
            renderables: Items in drawing order
            initial_skip: Starting pen position in em units

        Returns:
            Tuple of (instances, final pen position)

        Raises:
            CurveRangeError: If an emitted range does not fit the atlas store
        """
        instances: list[GlyphInstance] = []
        skip = initial_skip

        for item in renderables:
            if isinstance(item, TextRun):
                skip = self._layout_text(item, skip, instances)
            elif isinstance(item, Space):
                skip += item.width
            elif isinstance(item, Box):
                instances.append(
                    GlyphInstance(
                        position=(skip, 0.0),
                        scale=(item.width, -item.height),
                        foreground=item.foreground,
                        background=item.background,
                    )
                )
                skip += item.skip
            else:
                raise TypeError(f"Unsupported renderable: {type(item).__name__}")

        for instance in instances:
            self.atlas.store.validate(instance.ranges)

        self.logger.debug(
            "Layout built",
            instances=len(instances),
            advance=round(skip - initial_skip, 4),
            skipped=self.render_logger.stats.skipped_count,
        )
        return instances, skip

    def _layout_text(self, run: TextRun, skip: float, instances: list[GlyphInstance]) -> float:
        previous: str | None = None

        for char in run.text:
            try:
                entry = self.atlas.entry_for(char)
            except GlyphNotFoundError:
                self.render_logger.log_glyph_skipped(char, "not in font")
                previous = None
                continue

            if previous is not None:
                skip += self.atlas.kerning(previous, entry.name)
            previous = entry.name

            if not entry.has_outline():
                self.render_logger.log_glyph_skipped(char, "no outline")
            else:
                instances.append(self._glyph_instance(entry, skip, run))
            skip += entry.metrics.advance

        return skip

    @staticmethod
    def _glyph_instance(entry: GlyphEntry, skip: float, run: TextRun) -> GlyphInstance:
        metrics = entry.metrics
        return GlyphInstance(
            position=(skip + metrics.offset_x, -metrics.offset_y),
            scale=(metrics.width, -metrics.height),
            foreground=run.foreground,
            background=run.background,
            line_range=entry.line_range,
            quadratic_range=entry.quadratic_range,
            cubic_range=EMPTY_RANGE,
        )
