"""End-to-end text rendering.

This module coordinates the full pipeline for one frame: font loading, glyph
atlas population, instance layout and data-parallel rasterization, then
writes the surface as an image.

Key components:
- FrameGeometry: Surface size and global transform for a laid-out line
- TextRenderer: Main orchestrator class
"""

import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from glyphsdf.config import GlyphSDFSettings, get_default_settings
from glyphsdf.core.layout import InstanceBuilder, Renderable, TextRun
from glyphsdf.core.rasterizer import Rasterizer
from glyphsdf.domain import Color, GlobalTransform, Surface
from glyphsdf.exceptions import FontLoadError
from glyphsdf.io import FontReader, GlyphAtlas, ImageWriter
from glyphsdf.utils import RenderStats, configure_logging


@dataclass(frozen=True)
class FrameGeometry:
    """Pixel size of the surface and the em-to-pixel transform."""

    width: int
    height: int
    transform: GlobalTransform


def frame_geometry(
    advance: float,
    ascent: float,
    descent: float,
    font_size: float,
    margin: int,
) -> FrameGeometry:
    """Fit one line of text into a surface.

    Args:
        advance: Line width in em units
        ascent: Ascender in em units
        descent: Descender in em units (usually negative)
        font_size: Pixels per em
        margin: Empty pixels around the line

    Returns:
        FrameGeometry with the baseline ``ascent * font_size`` below the top margin
    """
    width = max(1, math.ceil(advance * font_size + 2 * margin))
    height = max(1, math.ceil((ascent - descent) * font_size + 2 * margin))
    transform = GlobalTransform(
        scale=(font_size, font_size),
        translate=(margin, margin + ascent * font_size),
    )
    return FrameGeometry(width, height, transform)


class TextRenderer:
    """Renders text from a font file into an image.

    Manages the complete workflow:
    1. Load font file
    2. Lay out renderables, caching glyph outlines in the atlas
    3. Rasterize instances in parallel worker processes
    4. Save the surface

    Example:
        settings = GlyphSDFSettings()
        renderer = TextRenderer(settings)
        stats = renderer.render(
            font_path=Path("font.ttf"),
            text="Hello",
            output_path=Path("hello.png"),
        )
    """

    def __init__(self, config: GlyphSDFSettings | None = None) -> None:
        """Initialize the renderer with configuration.

        Args:
            config: Settings for evaluation, compositing, fonts and output
                (defaults when None)
        """
        config = config if config is not None else get_default_settings()
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )

    def render(
        self,
        font_path: Path,
        text: str,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> RenderStats:
        """Render one line of text with the configured colors.

        Args:
            font_path: Path to input font file (TTF or OTF)
            text: Characters to draw
            output_path: Image path (auto-generated if None)
            max_workers: Maximum worker processes (None = use config)
            progress_callback: Optional callback(completed, total)

        Returns:
            RenderStats with counts, timing, and error details

        Raises:
            FontLoadError: If the font cannot be read
            RenderCancelledError: If rendering is cancelled by user
        """
        run = TextRun(
            text=text,
            foreground=Color.from_hex(self.config.raster.foreground),
            background=Color.from_hex(self.config.raster.background),
        )
        return self.render_renderables(
            font_path,
            [run],
            output_path=output_path,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )

    def render_renderables(
        self,
        font_path: Path,
        renderables: Sequence[Renderable],
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> RenderStats:
        """Render a sequence of text runs, spaces and boxes.

        Raises:
            FontLoadError: If the font cannot be read
            RenderCancelledError: If rendering is cancelled by user
        """
        if output_path is None:
            output_path = ImageWriter.get_render_path(font_path)

        surface, stats = self.render_surface(
            font_path,
            renderables,
            max_workers=max_workers,
            progress_callback=progress_callback,
        )

        ImageWriter(surface, output_path).save()
        self.logger.info(
            "Image saved",
            output=str(output_path),
            size=(surface.width, surface.height),
        )
        return stats

    def render_surface(
        self,
        font_path: Path,
        renderables: Sequence[Renderable],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> tuple[Surface, RenderStats]:
        """Render renderables into a new surface without writing it.

        Returns:
            Tuple of (surface, stats)

        Raises:
            FontLoadError: If the font cannot be read
            RenderCancelledError: If rendering is cancelled by user
        """
        start_time = time.time()
        if max_workers is None:
            max_workers = self.config.raster.max_workers

        self.logger.info(
            "Starting render",
            font=str(font_path),
            renderables=len(renderables),
            max_workers=max_workers,
        )

        reader = FontReader(font_path, cubic_tolerance=self.config.font.cubic_tolerance)
        try:
            reader.load()
        except Exception as e:
            raise FontLoadError(str(font_path), str(e)) from e

        try:
            self.logger.info(
                "Font loaded",
                format=reader.format,
                upm=reader.units_per_em,
                glyph_count=reader.glyph_count,
            )

            atlas = GlyphAtlas(reader, logger=self.logger)
            builder = InstanceBuilder(atlas, logger=self.logger)
            instances, advance = builder.build(renderables)

            raster = self.config.raster
            geometry = frame_geometry(
                advance=advance,
                ascent=atlas.ascent,
                descent=atlas.descent,
                font_size=raster.font_size,
                margin=raster.margin,
            )
            surface = Surface(
                geometry.width,
                geometry.height,
                clear=Color.from_hex(raster.clear_color),
            )

            rasterizer = Rasterizer(
                compositor_config=self.config.compositor,
                evaluator_config=self.config.evaluator,
                max_workers=max_workers,
                logger=self.logger,
            )
            stats = rasterizer.render(
                instances,
                atlas.store,
                surface,
                geometry.transform,
                progress_callback=progress_callback,
            )
        finally:
            reader.close()

        stats.skipped_count += builder.render_logger.stats.skipped_count
        stats.start_time = start_time

        self.logger.info(
            "Render complete",
            instances=stats.instances_rendered,
            skipped=stats.skipped_count,
            capped=stats.capped_instances,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )
        return surface, stats
