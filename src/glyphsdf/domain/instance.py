"""Per-draw records: colors, glyph instances and the global transform.

A GlyphInstance lives for one frame. It places the unit quad on screen,
carries its two colors, and references the glyph's curves through ranges
into the shared GlyphCurveStore. It never owns or mutates curve data.
"""

from dataclasses import dataclass
from typing import Any

from glyphsdf.domain.curves import EMPTY_RANGE, CurveRange, CurveRanges


@dataclass(frozen=True, slots=True)
class Color:
    """An RGBA color with float channels in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#rrggbb`` or ``#rrggbbaa``.

        Raises:
            ValueError: If the string is not a hex color
        """
        digits = value.lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value!r}")
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        if len(channels) == 3:
            channels.append(255)
        return cls.from_rgba8(*channels)

    @classmethod
    def from_rgba8(cls, r: int, g: int, b: int, a: int = 255) -> "Color":
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    @classmethod
    def from_u32(cls, packed: int) -> "Color":
        """Unpack a little-endian ``Unorm8x4`` value (red in the low byte)."""
        return cls.from_rgba8(
            packed & 0xFF,
            (packed >> 8) & 0xFF,
            (packed >> 16) & 0xFF,
            (packed >> 24) & 0xFF,
        )

    def to_u32(self) -> int:
        r, g, b, a = self.to_rgba8()
        return r | (g << 8) | (b << 16) | (a << 24)

    def to_rgba8(self) -> tuple[int, int, int, int]:
        """Quantize to 8-bit channels, saturating out-of-range values."""
        return tuple(  # type: ignore[return-value]
            int(round(min(max(c, 0.0), 1.0) * 255.0)) for c in (self.r, self.g, self.b, self.a)
        )

    def to_hex(self) -> str:
        return "#" + "".join(f"{c:02x}" for c in self.to_rgba8())

    def lerp(self, other: "Color", t: float) -> "Color":
        """Interpolate from self (t=0) to other (t=1)."""
        return Color(
            self.r + (other.r - self.r) * t,
            self.g + (other.g - self.g) * t,
            self.b + (other.b - self.b) * t,
            self.a + (other.a - self.a) * t,
        )


@dataclass(frozen=True, slots=True)
class GlobalTransform:
    """Screen-wide scale and translation applied after instance placement."""

    scale: tuple[float, float] = (1.0, 1.0)
    translate: tuple[float, float] = (0.0, 0.0)

    def to_dict(self) -> dict[str, Any]:
        return {"scale": list(self.scale), "translate": list(self.translate)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlobalTransform":
        return cls(scale=tuple(data["scale"]), translate=tuple(data["translate"]))  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class GlyphInstance:
    """One rendered glyph for one frame.

    Attributes:
        position: Placement of the quad's local origin
        scale: Size of the quad (a negative component mirrors that axis)
        foreground: Color inside the outline
        background: Color outside the outline
        line_range: Line segments of the glyph
        quadratic_range: Quadratic segments of the glyph
        cubic_range: Reserved, never evaluated
    """

    position: tuple[float, float]
    scale: tuple[float, float]
    foreground: Color
    background: Color
    line_range: CurveRange = EMPTY_RANGE
    quadratic_range: CurveRange = EMPTY_RANGE
    cubic_range: CurveRange = EMPTY_RANGE

    @property
    def ranges(self) -> CurveRanges:
        return CurveRanges(self.line_range, self.quadratic_range, self.cubic_range)

    def has_segments(self) -> bool:
        """Check if the instance references any evaluable segment.

        Instances without segments are solid boxes.
        """
        return not (self.line_range.is_empty() and self.quadratic_range.is_empty())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with placement, packed colors and range tuples
        """
        return {
            "position": list(self.position),
            "scale": list(self.scale),
            "fg": self.foreground.to_u32(),
            "bg": self.background.to_u32(),
            "lines": self.line_range.to_tuple(),
            "quadratics": self.quadratic_range.to_tuple(),
            "cubics": self.cubic_range.to_tuple(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GlyphInstance":
        """Deserialize from dictionary.

        Args:
            data: Dictionary produced by ``to_dict``

        Returns:
            GlyphInstance
        """
        return cls(
            position=tuple(data["position"]),  # type: ignore[arg-type]
            scale=tuple(data["scale"]),  # type: ignore[arg-type]
            foreground=Color.from_u32(data["fg"]),
            background=Color.from_u32(data["bg"]),
            line_range=CurveRange.from_tuple(data["lines"]),
            quadratic_range=CurveRange.from_tuple(data["quadratics"]),
            cubic_range=CurveRange.from_tuple(data.get("cubics", (0, 0))),
        )
