"""Unit tests for the instance builder."""

import pytest

from glyphsdf.core.layout import Box, InstanceBuilder, Space, TextRun
from glyphsdf.domain import Color, CurveRange, CurveRanges, GlyphEntry, GlyphMetrics
from glyphsdf.exceptions import CurveRangeError
from glyphsdf.io import FontReader, GlyphAtlas

FG = Color.from_hex("#112233")
BG = Color.from_hex("#ffffff")


@pytest.fixture
def atlas(ttf_path):
    with FontReader(ttf_path) as reader:
        yield GlyphAtlas(reader)


@pytest.fixture
def kerned_atlas(kerned_ttf_path):
    with FontReader(kerned_ttf_path) as reader:
        yield GlyphAtlas(reader)


class TestTextLayout:
    """Tests for text runs."""

    def test_glyph_quad_covers_control_bounds(self, atlas) -> None:
        """The square's outline box sits on the baseline, y pointing down."""
        instances, advance = InstanceBuilder(atlas).build([TextRun("A", FG, BG)])

        assert len(instances) == 1
        instance = instances[0]
        assert instance.position == pytest.approx((0.1, 0.0))
        assert instance.scale == pytest.approx((0.5, -0.7))
        assert instance.foreground == FG
        assert instance.background == BG
        assert instance.line_range.count == 4
        assert instance.cubic_range.is_empty()
        assert advance == pytest.approx(0.7)

    def test_pen_advances_between_glyphs(self, atlas) -> None:
        instances, advance = InstanceBuilder(atlas).build([TextRun("AOA", FG, BG)])

        assert [i.position[0] for i in instances] == pytest.approx([0.1, 0.75, 1.5])
        # The ring's box starts 50 units above the baseline.
        assert instances[1].position[1] == pytest.approx(-0.05)
        assert advance == pytest.approx(2.1)

    def test_repeated_glyphs_share_ranges(self, atlas) -> None:
        instances, _ = InstanceBuilder(atlas).build([TextRun("AA", FG, BG)])
        assert instances[0].line_range == instances[1].line_range
        assert len(atlas) == 1

    def test_space_only_advances(self, atlas) -> None:
        instances, advance = InstanceBuilder(atlas).build([TextRun("A A", FG, BG)])
        assert len(instances) == 2
        assert instances[1].position[0] == pytest.approx(0.7 + 0.25 + 0.1)
        assert advance == pytest.approx(1.65)

    def test_missing_character_is_skipped(self, atlas) -> None:
        builder = InstanceBuilder(atlas)
        instances, advance = builder.build([TextRun("AZ", FG, BG)])
        assert len(instances) == 1
        assert advance == pytest.approx(0.7)
        assert builder.render_logger.stats.skipped_count == 1

    def test_initial_skip(self, atlas) -> None:
        instances, advance = InstanceBuilder(atlas).build([TextRun("A", FG, BG)], initial_skip=2.0)
        assert instances[0].position[0] == pytest.approx(2.1)
        assert advance == pytest.approx(2.7)

    def test_kerning_moves_the_pen(self, kerned_atlas) -> None:
        instances, advance = InstanceBuilder(kerned_atlas).build([TextRun("AO", FG, BG)])
        assert instances[1].position[0] == pytest.approx(0.7 - 0.1 + 0.05)
        assert advance == pytest.approx(0.7 - 0.1 + 0.7)

    def test_kerning_does_not_cross_runs(self, kerned_atlas) -> None:
        _, advance = InstanceBuilder(kerned_atlas).build(
            [TextRun("A", FG, BG), TextRun("O", BG, FG)]
        )
        assert advance == pytest.approx(1.4)


class TestSpacesAndBoxes:
    """Tests for the non-text renderables."""

    def test_space_renderable(self, atlas) -> None:
        instances, advance = InstanceBuilder(atlas).build([Space(0.5)])
        assert instances == []
        assert advance == pytest.approx(0.5)

    def test_box_has_no_segments(self, atlas) -> None:
        box = Box(foreground=FG, background=BG, width=0.4, height=0.6, skip=0.5)
        instances, advance = InstanceBuilder(atlas).build([Space(0.25), box, TextRun("A", FG, BG)])

        quad = instances[0]
        assert quad.position == pytest.approx((0.25, 0.0))
        assert quad.scale == pytest.approx((0.4, -0.6))
        assert not quad.has_segments()
        assert instances[1].position[0] == pytest.approx(0.25 + 0.5 + 0.1)
        assert advance == pytest.approx(0.25 + 0.5 + 0.7)

    def test_unsupported_renderable(self, atlas) -> None:
        with pytest.raises(TypeError, match="Unsupported renderable"):
            InstanceBuilder(atlas).build(["text"])  # type: ignore[list-item]


class TestRangeValidation:
    """Every emitted range must fit the atlas store."""

    def test_out_of_range_entry_is_rejected(self, atlas) -> None:
        atlas.entry_for("A")
        stale = GlyphEntry(
            name="square",
            ranges=CurveRanges(lines=CurveRange(offset=2, count=4)),
            metrics=GlyphMetrics(advance=0.7, width=0.5, height=0.7),
        )
        atlas._entries["square"] = stale

        with pytest.raises(CurveRangeError) as exc_info:
            InstanceBuilder(atlas).build([TextRun("A", FG, BG)])
        assert exc_info.value.buffer_length == 4
