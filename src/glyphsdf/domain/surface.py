"""Frame buffer and per-instance tiles produced by the rasterizer."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from glyphsdf.domain.instance import Color


@dataclass(frozen=True)
class Tile:
    """Shaded pixels of one instance.

    Attributes:
        x0: Left column on the surface
        y0: Top row on the surface
        width: Tile width
        height: Tile height
        pixels: RGBA8 values, row-major
        mask: One byte per pixel, non-zero where the quad covers the pixel
    """

    x0: int
    y0: int
    width: int
    height: int
    pixels: bytes
    mask: bytes

    @property
    def covered(self) -> int:
        return sum(1 for m in self.mask if m)

    def to_dict(self) -> dict[str, Any]:
        return {
            "origin": (self.x0, self.y0),
            "size": (self.width, self.height),
            "pixels": self.pixels,
            "mask": self.mask,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tile":
        x0, y0 = data["origin"]
        width, height = data["size"]
        return cls(x0, y0, width, height, data["pixels"], data["mask"])


class Surface:
    """An RGBA8 frame buffer.

    Example:
        surface = Surface(320, 80, clear=Color.from_hex("#ffffff"))
        surface.blit(tile)
    """

    def __init__(self, width: int, height: int, clear: Color | None = None) -> None:
        self.width = width
        self.height = height
        clear_rgba = (clear or Color(0.0, 0.0, 0.0, 0.0)).to_rgba8()
        self.pixels = bytearray(bytes(clear_rgba) * (width * height))

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        i = (y * self.width + x) * 4
        return tuple(self.pixels[i : i + 4])  # type: ignore[return-value]

    def set_pixel(self, x: int, y: int, rgba: Sequence[int]) -> None:
        i = (y * self.width + x) * 4
        self.pixels[i : i + 4] = bytes(rgba)

    def blit(self, tile: Tile) -> None:
        """Copy a tile's covered pixels onto the surface."""
        for row in range(tile.height):
            for col in range(tile.width):
                j = row * tile.width + col
                if tile.mask[j]:
                    self.set_pixel(tile.x0 + col, tile.y0 + row, tile.pixels[j * 4 : j * 4 + 4])
