"""Shared fixtures: small fonts generated with fontTools' FontBuilder.

The TrueType font maps:
- "A" to a 500x700 square (lines only, clockwise as TrueType expects)
- "O" to a ring whose outer contour has only off-curve points and whose
  counter-clockwise inner contour is built from quadratics
- " " to an empty glyph

The CFF font maps "A" to the same square and "O" to a disc drawn with
cubic curves, counter-clockwise as PostScript outlines expect.
"""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.t2CharStringPen import T2CharStringPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import newTable
from fontTools.ttLib.tables._k_e_r_n import KernTable_format_0

from glyphsdf.domain import (
    Color,
    ControlPoint,
    GlyphCurveStore,
    GlyphInstance,
)

UPM = 1000
ASCENT = 800
DESCENT = -200

CMAP = {ord(" "): "space", ord("A"): "square", ord("O"): "ring"}
GLYPH_ORDER = [".notdef", "space", "square", "ring"]
ADVANCES = {".notdef": 500, "space": 250, "square": 700, "ring": 700}
LEFT_SIDE_BEARINGS = {".notdef": 50, "space": 0, "square": 100, "ring": 50}

BLACK = Color.from_hex("#000000")
WHITE = Color.from_hex("#ffffff")


def _draw_notdef(pen) -> None:
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((450, 700))
    pen.lineTo((450, 0))
    pen.closePath()


def _draw_square_cw(pen) -> None:
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((600, 700))
    pen.lineTo((600, 0))
    pen.closePath()


def _draw_square_ccw(pen) -> None:
    pen.moveTo((100, 0))
    pen.lineTo((600, 0))
    pen.lineTo((600, 700))
    pen.lineTo((100, 700))
    pen.closePath()


def _draw_ring(pen) -> None:
    # Outer contour: four off-curve points, implied on-curve midpoints.
    pen.qCurveTo((50, 50), (50, 650), (650, 650), (650, 50), None)
    pen.closePath()
    # Inner contour, counter-clockwise.
    pen.moveTo((350, 200))
    pen.qCurveTo((500, 200), (500, 350))
    pen.qCurveTo((500, 500), (350, 500))
    pen.qCurveTo((200, 500), (200, 350))
    pen.qCurveTo((200, 200), (350, 200))
    pen.closePath()


def _draw_disc(pen) -> None:
    k = 0.5523 * 300
    pen.moveTo((350, 50))
    pen.curveTo((350 + k, 50), (650, 350 - k), (650, 350))
    pen.curveTo((650, 350 + k), (350 + k, 650), (350, 650))
    pen.curveTo((350 - k, 650), (50, 350 + k), (50, 350))
    pen.curveTo((50, 350 - k), (350 - k, 50), (350, 50))
    pen.closePath()


def _finish(fb: FontBuilder, path: Path) -> Path:
    fb.setupHorizontalMetrics(
        {name: (ADVANCES[name], LEFT_SIDE_BEARINGS[name]) for name in GLYPH_ORDER}
    )
    fb.setupHorizontalHeader(ascent=ASCENT, descent=DESCENT)
    fb.setupNameTable({"familyName": "GlyphSDF Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=ASCENT, usWinAscent=ASCENT, usWinDescent=-DESCENT)
    fb.setupPost()
    fb.save(str(path))
    return path


def build_truetype_font(path: Path, kerning: dict[tuple[str, str], int] | None = None) -> Path:
    """Write the quadratic TrueType test font to ``path``."""
    fb = FontBuilder(UPM, isTTF=True)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupCharacterMap(CMAP)

    glyphs = {}
    for name, draw in (
        (".notdef", _draw_notdef),
        ("space", None),
        ("square", _draw_square_cw),
        ("ring", _draw_ring),
    ):
        pen = TTGlyphPen(None)
        if draw is not None:
            draw(pen)
        glyphs[name] = pen.glyph()
    fb.setupGlyf(glyphs)

    if kerning:
        kern = newTable("kern")
        kern.version = 0
        subtable = KernTable_format_0()
        subtable.coverage = 1
        subtable.kernTable = dict(kerning)
        kern.kernTables = [subtable]
        fb.font["kern"] = kern

    return _finish(fb, path)


def build_cff_font(path: Path) -> Path:
    """Write the cubic CFF test font to ``path``."""
    fb = FontBuilder(UPM, isTTF=False)
    fb.setupGlyphOrder(GLYPH_ORDER)
    fb.setupCharacterMap(CMAP)

    charstrings = {}
    for name, draw in (
        (".notdef", _draw_notdef),
        ("space", None),
        ("square", _draw_square_ccw),
        ("ring", _draw_disc),
    ):
        pen = T2CharStringPen(ADVANCES[name], None)
        if draw is not None:
            draw(pen)
        charstrings[name] = pen.getCharString()

    fb.setupCFF("GlyphSDFTest-Regular", {"FullName": "GlyphSDF Test"}, charstrings, {})
    return _finish(fb, path)


@pytest.fixture
def ttf_path(tmp_path: Path) -> Path:
    return build_truetype_font(tmp_path / "test.ttf")


@pytest.fixture
def kerned_ttf_path(tmp_path: Path) -> Path:
    return build_truetype_font(tmp_path / "kerned.ttf", kerning={("square", "ring"): -100})


@pytest.fixture
def otf_path(tmp_path: Path) -> Path:
    return build_cff_font(tmp_path / "test.otf")


@pytest.fixture
def unit_square_lines() -> list[tuple[ControlPoint, ControlPoint]]:
    """Counter-clockwise unit square as line segments."""
    corners = [
        ControlPoint(0.0, 0.0),
        ControlPoint(1.0, 0.0),
        ControlPoint(1.0, 1.0),
        ControlPoint(0.0, 1.0),
    ]
    return [(corners[i], corners[(i + 1) % 4]) for i in range(4)]


@pytest.fixture
def square_store(
    unit_square_lines: list[tuple[ControlPoint, ControlPoint]],
) -> tuple[GlyphCurveStore, GlyphInstance]:
    """A store holding one CCW unit square and an instance referencing it."""
    store = GlyphCurveStore()
    ranges = store.append_outline(lines=unit_square_lines)
    instance = GlyphInstance(
        position=(0.0, 0.0),
        scale=(1.0, 1.0),
        foreground=BLACK,
        background=WHITE,
        line_range=ranges.lines,
        quadratic_range=ranges.quadratics,
    )
    return store, instance
