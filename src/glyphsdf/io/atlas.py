"""Glyph atlas: the cache that fills the shared curve store.

The first request for a glyph converts its outline and appends it to the
GlyphCurveStore; later requests return the cached entry. Entries and
their ranges never change until ``rebuild`` drops the whole store.
"""

import structlog

from glyphsdf.domain import CurveRanges, GlyphCurveStore, GlyphEntry, GlyphMetrics
from glyphsdf.exceptions import GlyphNotFoundError
from glyphsdf.io.reader import FontReader


class GlyphAtlas:
    """Caches glyph outlines of one font in a shared GlyphCurveStore.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            atlas = GlyphAtlas(reader)
            entry = atlas.entry_for("A")
            instance_ranges = entry.ranges
    """

    def __init__(
        self,
        reader: FontReader,
        store: GlyphCurveStore | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.reader = reader
        self.store = store if store is not None else GlyphCurveStore()
        self.logger = logger or structlog.get_logger("glyphsdf.atlas")
        self._entries: dict[str, GlyphEntry] = {}

    @property
    def units_per_em(self) -> int:
        return self.reader.units_per_em

    @property
    def ascent(self) -> float:
        """Ascender in em units."""
        return self.reader.ascent / self.units_per_em

    @property
    def descent(self) -> float:
        """Descender in em units (usually negative)."""
        return self.reader.descent / self.units_per_em

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def glyph_name_for(self, char: str) -> str:
        """Glyph name for a character.

        Raises:
            GlyphNotFoundError: If the font does not encode the character
        """
        name = self.reader.glyph_name_for(char)
        if name is None:
            raise GlyphNotFoundError(char)
        return name

    def entry_for(self, char: str) -> GlyphEntry:
        """Cached entry for a character.

        Raises:
            GlyphNotFoundError: If the font does not encode the character
        """
        return self.entry(self.glyph_name_for(char))

    def entry(self, name: str) -> GlyphEntry:
        """Cached entry for a glyph name, converting it on first use.

        Raises:
            GlyphNotFoundError: If the glyph is not in the font
        """
        cached = self._entries.get(name)
        if cached is not None:
            return cached

        outline = self.reader.get_outline(name)
        if outline is None:
            raise GlyphNotFoundError(name)

        upm = self.units_per_em
        if outline.is_empty() or outline.bounds is None:
            entry = GlyphEntry(
                name=name,
                ranges=CurveRanges(),
                metrics=GlyphMetrics(advance=outline.advance_width / upm),
            )
        else:
            x_min, y_min, x_max, y_max = outline.bounds
            entry = GlyphEntry(
                name=name,
                ranges=self.store.append_outline(
                    lines=outline.lines,
                    quadratics=outline.quadratics,
                ),
                metrics=GlyphMetrics(
                    advance=outline.advance_width / upm,
                    offset_x=x_min / upm,
                    offset_y=y_min / upm,
                    width=(x_max - x_min) / upm,
                    height=(y_max - y_min) / upm,
                ),
            )

        self._entries[name] = entry
        self.logger.debug(
            "Glyph cached",
            glyph=name,
            lines=entry.line_range.count,
            quadratics=entry.quadratic_range.count,
        )
        return entry

    def kerning(self, left: str, right: str) -> float:
        """Kerning between two glyph names in em units."""
        return self.reader.kerning(left, right) / self.units_per_em

    def rebuild(self) -> None:
        """Invalidate every entry and clear the shared store together."""
        self.logger.info("Rebuilding glyph atlas", cached=len(self._entries))
        self._entries.clear()
        self.store.clear()
