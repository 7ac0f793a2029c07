"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class for loading font files and
extracting glyph outlines and metrics.
"""

from collections.abc import Iterator
from pathlib import Path

from fontTools.ttLib import TTFont

from glyphsdf.domain import GlyphOutline
from glyphsdf.io.converter import fonttools_glyph_to_outline


class FontReader:
    """Loads TTF/OTF fonts and extracts glyph outlines.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            name = reader.glyph_name_for("A")
            outline = reader.get_outline(name)
    """

    def __init__(self, font_path: Path, cubic_tolerance: float = 1.0) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
            cubic_tolerance: Max error in font units for cubic conversion
        """
        self._font_path = font_path
        self._cubic_tolerance = cubic_tolerance
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path))
        self._cmap = self._font.getBestCmap() or {}

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def path(self) -> Path:
        return self._font_path

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["maxp"].numGlyphs

    @property
    def ascent(self) -> int:
        """Return the hhea ascender in font units."""
        return self._require_font()["hhea"].ascent  # type: ignore[attr-defined]

    @property
    def descent(self) -> int:
        """Return the hhea descender in font units (usually negative)."""
        return self._require_font()["hhea"].descent  # type: ignore[attr-defined]

    def glyph_name_for(self, char: str) -> str | None:
        """Map a character to its glyph name through the best cmap.

        Returns:
            Glyph name, or None if the font does not encode the character
        """
        self._require_font()
        return self._cmap.get(ord(char))

    def advance_width(self, name: str) -> int:
        """Return a glyph's advance width in font units."""
        hmtx = self._require_font().get("hmtx")
        if hmtx and name in hmtx.metrics:
            return hmtx.metrics[name][0]
        return 0

    def kerning(self, left: str, right: str) -> int:
        """Return the legacy ``kern`` table adjustment for a glyph pair.

        GPOS kerning is not applied.
        """
        font = self._require_font()
        if "kern" not in font:
            return 0
        for table in font["kern"].kernTables:  # type: ignore[attr-defined]
            value = getattr(table, "kernTable", {}).get((left, right))
            if value is not None:
                return value
        return 0

    def iter_outlines(self) -> Iterator[GlyphOutline]:
        """Iterate over all glyph outlines in glyph order.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        for glyph_name in self._require_font().getGlyphOrder():
            outline = self.get_outline(glyph_name)
            if outline is not None:
                yield outline

    def get_outline(self, name: str) -> GlyphOutline | None:
        """Get a specific glyph's outline by name.

        Args:
            name: Name of the glyph to retrieve

        Returns:
            GlyphOutline, or None if the glyph is not in the font

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        glyph_set = font.getGlyphSet()
        if name not in glyph_set:
            return None

        return fonttools_glyph_to_outline(
            name=name,
            fonttools_glyph=glyph_set[name],
            font=font,
            cubic_tolerance=self._cubic_tolerance,
        )

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._cmap = {}

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
