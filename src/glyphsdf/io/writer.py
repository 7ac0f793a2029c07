"""Image writer for rendered surfaces.

This module provides the ImageWriter class for saving rasterized surfaces
as PNG files with Pillow.
"""

from pathlib import Path

from PIL import Image

from glyphsdf.domain import Surface


def surface_to_image(surface: Surface) -> Image.Image:
    """Wrap a surface's RGBA8 pixels in a Pillow image."""
    return Image.frombytes("RGBA", (surface.width, surface.height), bytes(surface.pixels))


class ImageWriter:
    """Writes rendered surfaces to image files.

    Example:
        writer = ImageWriter(surface, Path("hello.png"))
        writer.save()
    """

    def __init__(self, surface: Surface, output_path: Path) -> None:
        """Initialize the image writer.

        Args:
            surface: Rendered surface to write
            output_path: Path where the image will be saved
        """
        self._surface = surface
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        return self._output_path

    def save(self) -> None:
        """Save the surface, creating parent directories as needed."""
        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        surface_to_image(self._surface).save(self._output_path)

    @staticmethod
    def get_render_path(font_path: Path) -> Path:
        """Generate default output path for a font's rendering.

        Args:
            font_path: Path of the rendered font

        Returns:
            Path like ``{font stem}-render.png`` next to the font
        """
        return font_path.with_name(f"{font_path.stem}-render.png")
