"""Font and image I/O for glyphsdf.

This module reads fonts with fonttools, reduces glyph outlines to line and
quadratic segments, caches them in a shared curve store, and writes
rendered surfaces as images.

Key classes:
- FontReader: Loads fonts and extracts outlines and metrics
- GlyphAtlas: Caches glyph outlines in a GlyphCurveStore
- ImageWriter: Saves surfaces as PNG files
"""

from glyphsdf.io.atlas import GlyphAtlas
from glyphsdf.io.converter import SegmentPen, fonttools_glyph_to_outline
from glyphsdf.io.reader import FontReader
from glyphsdf.io.writer import ImageWriter, surface_to_image

__all__ = [
    "FontReader",
    "GlyphAtlas",
    "ImageWriter",
    "SegmentPen",
    "fonttools_glyph_to_outline",
    "surface_to_image",
]
