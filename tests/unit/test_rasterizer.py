"""Unit tests for rasterization and surfaces."""

from unittest.mock import MagicMock

import pytest

from glyphsdf.config import CompositeMode, CompositorConfig
from glyphsdf.core.compositor import Compositor
from glyphsdf.core.rasterizer import Rasterizer, rasterize_instance
from glyphsdf.domain import (
    Color,
    CurveRange,
    GlobalTransform,
    GlyphInstance,
    Surface,
    Tile,
)
from glyphsdf.exceptions import RenderCancelledError

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)
CLEAR = (0, 0, 0, 0)


def placed(instance: GlyphInstance, position, scale) -> GlyphInstance:
    return GlyphInstance(
        position=position,
        scale=scale,
        foreground=instance.foreground,
        background=instance.background,
        line_range=instance.line_range,
        quadratic_range=instance.quadratic_range,
    )


class TestSurface:
    """Tests for the RGBA8 frame buffer."""

    def test_clear_color(self) -> None:
        surface = Surface(3, 2, clear=Color.from_hex("#ff000080"))
        assert len(surface.pixels) == 3 * 2 * 4
        assert surface.get_pixel(2, 1) == (255, 0, 0, 128)

    def test_default_clear_is_transparent(self) -> None:
        assert Surface(1, 1).get_pixel(0, 0) == CLEAR

    def test_blit_respects_mask(self) -> None:
        surface = Surface(2, 1)
        tile = Tile(0, 0, 2, 1, pixels=bytes([1, 2, 3, 4, 5, 6, 7, 8]), mask=bytes([0, 1]))
        surface.blit(tile)
        assert surface.get_pixel(0, 0) == CLEAR
        assert surface.get_pixel(1, 0) == (5, 6, 7, 8)

    def test_tile_serialization(self) -> None:
        tile = Tile(1, 2, 1, 1, pixels=bytes([9, 9, 9, 9]), mask=bytes([1]))
        assert Tile.from_dict(tile.to_dict()) == tile
        assert tile.covered == 1


class TestRasterizeInstance:
    """Tests for the per-instance pixel loop."""

    def test_square_fills_interior(self, square_store) -> None:
        """A square scaled to 10x10 pixels is foreground inside its quad."""
        store, instance = square_store
        instance = placed(instance, position=(1.0, 1.0), scale=(1.0, 1.0))
        transform = GlobalTransform(scale=(10.0, 10.0))
        compositor = Compositor(mode=CompositeMode.THRESHOLD)

        tile = rasterize_instance(instance, store, compositor, transform, (30, 30))

        assert tile is not None
        assert (tile.x0, tile.y0, tile.width, tile.height) == (10, 10, 10, 10)
        assert tile.covered == 100
        assert tile.pixels[:4] == bytes(BLACK)
        center = (5 * tile.width + 5) * 4
        assert tile.pixels[center : center + 4] == bytes(BLACK)

    def test_off_surface_returns_none(self, square_store) -> None:
        store, instance = square_store
        instance = placed(instance, position=(10.0, 10.0), scale=(1.0, 1.0))
        tile = rasterize_instance(instance, store, Compositor(), GlobalTransform(), (5, 5))
        assert tile is None

    def test_zero_area_returns_none(self, square_store) -> None:
        store, instance = square_store
        instance = placed(instance, position=(1.0, 1.0), scale=(0.0, 1.0))
        tile = rasterize_instance(instance, store, Compositor(), GlobalTransform(), (5, 5))
        assert tile is None

    def test_flipped_quad_covers_same_pixels(self, square_store) -> None:
        """A negative y scale mirrors the quad about its position."""
        store, instance = square_store
        up = placed(instance, position=(0.0, 2.0), scale=(1.0, -1.0))
        transform = GlobalTransform(scale=(4.0, 4.0))
        tile = rasterize_instance(up, store, Compositor(), transform, (8, 8))
        assert tile is not None
        assert (tile.x0, tile.y0, tile.width, tile.height) == (0, 4, 4, 4)

    def test_capped_instance_is_gray(self, square_store) -> None:
        store, instance = square_store
        capped = GlyphInstance(
            position=(0.0, 0.0),
            scale=(1.0, 1.0),
            foreground=instance.foreground,
            background=instance.background,
            quadratic_range=CurveRange(0, 501),
        )
        tile = rasterize_instance(capped, store, Compositor(), GlobalTransform(scale=(2.0, 2.0)), (2, 2))
        assert tile is not None
        assert tile.pixels == bytes((128, 128, 128, 255)) * 4


class TestRasterizer:
    """Tests for the orchestrating Rasterizer."""

    def _scene(self, square_store):
        store, instance = square_store
        instances = [
            placed(instance, position=(0.0, 0.0), scale=(1.0, 1.0)),
            placed(instance, position=(1.2, 0.1), scale=(0.8, 0.9)),
            # Overlaps the first; drawn later, so it wins where both cover.
            GlyphInstance(
                position=(0.5, 0.5),
                scale=(0.5, 0.5),
                foreground=Color.from_hex("#ff0000"),
                background=Color.from_hex("#00ff00"),
            ),
        ]
        return store, instances

    def test_serial_render(self, square_store) -> None:
        store, instances = self._scene(square_store)
        surface = Surface(24, 12, clear=Color.from_hex("#ffffff"))
        progress = MagicMock()

        stats = Rasterizer(max_workers=1).render(
            instances,
            store,
            surface,
            GlobalTransform(scale=(10.0, 10.0), translate=(1.0, 1.0)),
            progress_callback=progress,
        )

        assert stats.instances_rendered == 3
        assert stats.error_count == 0
        assert stats.pixels_shaded > 0
        assert progress.call_count == 3
        progress.assert_called_with(3, 3)
        # Box drawn over the first square.
        assert surface.get_pixel(9, 9) == (255, 0, 0, 255)
        assert surface.get_pixel(23, 11) == WHITE

    def test_parallel_matches_serial(self, square_store) -> None:
        """Scheduling does not change the frame."""
        store, instances = self._scene(square_store)
        transform = GlobalTransform(scale=(10.0, 10.0), translate=(1.0, 1.0))
        config = CompositorConfig(mode=CompositeMode.SMOOTH)

        serial = Surface(24, 12)
        Rasterizer(config, max_workers=1).render(instances, store, serial, transform)

        parallel = Surface(24, 12)
        stats = Rasterizer(config, max_workers=2).render(instances, store, parallel, transform)

        assert stats.instances_rendered == 3
        assert parallel.pixels == serial.pixels

    def test_repeat_render_is_bit_identical(self, square_store) -> None:
        store, instances = self._scene(square_store)
        transform = GlobalTransform(scale=(7.0, 7.0), translate=(0.5, 0.5))
        first = Surface(20, 10)
        second = Surface(20, 10)
        Rasterizer(max_workers=1).render(instances, store, first, transform)
        Rasterizer(max_workers=1).render(instances, store, second, transform)
        assert first.pixels == second.pixels

    def test_counts_capped_instances(self, square_store) -> None:
        store, instance = square_store
        capped = GlyphInstance(
            position=(0.0, 0.0),
            scale=(1.0, 1.0),
            foreground=instance.foreground,
            background=instance.background,
            quadratic_range=CurveRange(0, 501),
        )
        stats = Rasterizer(max_workers=1).render(
            [capped], store, Surface(4, 4), GlobalTransform(scale=(4.0, 4.0))
        )
        assert stats.capped_instances == 1

    def test_worker_error_is_recorded(self, square_store, monkeypatch) -> None:
        """A failing instance is reported in stats, the rest still render."""
        store, instance = square_store

        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("glyphsdf.core.rasterizer.rasterize_instance", explode)
        stats = Rasterizer(max_workers=1).render(
            [instance], store, Surface(4, 4), GlobalTransform(scale=(4.0, 4.0))
        )
        assert stats.error_count == 1
        assert stats.instances_rendered == 0
        assert stats.errors == [(0, "boom")]

    @pytest.mark.parametrize("workers", [1, 2])
    def test_empty_batch(self, square_store, workers: int) -> None:
        store, _ = square_store
        stats = Rasterizer(max_workers=workers).render(
            [], store, Surface(2, 2), GlobalTransform()
        )
        assert stats.instances_rendered == 0

    def test_interrupt_raises_cancelled(self, square_store, monkeypatch) -> None:
        store, instance = square_store

        def interrupt(*args, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr("glyphsdf.core.rasterizer.rasterize_instance", interrupt)
        with pytest.raises(RenderCancelledError) as exc_info:
            Rasterizer(max_workers=1).render(
                [instance, instance], store, Surface(4, 4), GlobalTransform(scale=(4.0, 4.0))
            )
        assert exc_info.value.processed_count == 0
        assert exc_info.value.pending_count == 2
