"""Data-parallel rasterization of glyph instances onto a surface.

Each instance is rasterized independently: every pixel center inside the
instance's screen rectangle is mapped back to the glyph-local coordinate
and shaded. Work is spread over a ProcessPoolExecutor whose workers receive
the shared curve store once, at start-up. Tiles are composited in instance
order, so the frame does not depend on how work was scheduled.

Key components:
- rasterize_instance: Pure per-instance pixel loop
- rasterize_task: Top-level picklable function for parallel execution
- Rasterizer: Orchestrates workers and compositing

"""

import math
import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any

import structlog

from glyphsdf.config import CompositorConfig, EvaluatorConfig
from glyphsdf.core.compositor import Compositor
from glyphsdf.core.transform import screen_bounds, screen_to_local
from glyphsdf.domain import (
    ControlPoint,
    GlobalTransform,
    GlyphCurveStore,
    GlyphInstance,
    Surface,
    Tile,
)
from glyphsdf.exceptions import RenderCancelledError
from glyphsdf.utils import RenderLogger, RenderStats


def rasterize_instance(
    instance: GlyphInstance,
    store: GlyphCurveStore,
    compositor: Compositor,
    transform: GlobalTransform,
    surface_size: tuple[int, int],
) -> Tile | None:
    """Shade every pixel an instance covers.

    Args:
        instance: Instance to rasterize
        store: Shared curve buffers
        compositor: Per-pixel shader
        transform: Global screen transform
        surface_size: (width, height) of the target surface

    Returns:
        Tile of shaded pixels, or None if the instance is off-surface or empty
    """
    width, height = surface_size
    min_x, min_y, max_x, max_y = screen_bounds(instance, transform)
    x0 = max(0, math.floor(min_x))
    y0 = max(0, math.floor(min_y))
    x1 = min(width, math.ceil(max_x))
    y1 = min(height, math.ceil(max_y))
    if x1 <= x0 or y1 <= y0:
        return None

    pixels = bytearray()
    mask = bytearray()
    for py in range(y0, y1):
        for px in range(x0, x1):
            local = screen_to_local(ControlPoint(px + 0.5, py + 0.5), instance, transform)
            if local is None:
                return None
            if not (0.0 <= local.x <= 1.0 and 0.0 <= local.y <= 1.0):
                pixels.extend(b"\x00\x00\x00\x00")
                mask.append(0)
                continue
            color = compositor.shade(local, instance, store)
            pixels.extend(color.to_rgba8())
            mask.append(1)

    return Tile(x0, y0, x1 - x0, y1 - y0, bytes(pixels), bytes(mask))


@dataclass
class _RasterContext:
    store: GlyphCurveStore
    compositor: Compositor
    transform: GlobalTransform
    surface_size: tuple[int, int]


_WORKER_CONTEXT: list[_RasterContext] = []


def _init_worker(
    store_dict: dict[str, Any],
    config_dict: dict[str, Any],
    transform_dict: dict[str, Any],
    surface_size: tuple[int, int],
) -> None:
    """Install the read-only render context in a worker process."""
    _WORKER_CONTEXT.clear()
    _WORKER_CONTEXT.append(
        _RasterContext(
            store=GlyphCurveStore.from_dict(store_dict),
            compositor=Compositor.from_config(
                CompositorConfig(**config_dict["compositor"]),
                EvaluatorConfig(**config_dict["evaluator"]),
            ),
            transform=GlobalTransform.from_dict(transform_dict),
            surface_size=tuple(surface_size),  # type: ignore[arg-type]
        )
    )


def _run_task(context: _RasterContext, index: int, instance: GlyphInstance) -> dict[str, Any]:
    start_time = time.time()

    try:
        tile = rasterize_instance(
            instance,
            context.store,
            context.compositor,
            context.transform,
            context.surface_size,
        )
        duration_ms = (time.time() - start_time) * 1000
        return {
            "index": index,
            "tile": tile.to_dict() if tile is not None else None,
            "pixels": tile.covered if tile is not None else 0,
            "capped": context.compositor.is_capped(instance),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "index": index,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


def rasterize_task(index: int, instance_dict: dict[str, Any]) -> dict[str, Any]:
    """Rasterize one serialized instance inside a worker process.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        index: Draw order of the instance
        instance_dict: Serialized instance (from GlyphInstance.to_dict())

    Returns:
        Dictionary containing either:
        - Success: {"index", "tile", "pixels", "capped", "duration_ms"}
        - Error: {"error", "index", "traceback", "duration_ms"}
    """
    return _run_task(_WORKER_CONTEXT[0], index, GlyphInstance.from_dict(instance_dict))


class Rasterizer:
    """Rasterizes a batch of instances onto a surface.

    With ``max_workers == 1`` everything runs in-process; otherwise a
    process pool shares the work. Both produce identical frames.

    Example:
        rasterizer = Rasterizer(settings.compositor, settings.evaluator, max_workers=4)
        stats = rasterizer.render(instances, store, surface, transform)
    """

    def __init__(
        self,
        compositor_config: CompositorConfig | None = None,
        evaluator_config: EvaluatorConfig | None = None,
        max_workers: int | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.compositor_config = compositor_config or CompositorConfig()
        self.evaluator_config = evaluator_config or EvaluatorConfig()
        self.max_workers = max_workers
        self.logger = logger or structlog.get_logger("glyphsdf.rasterizer")

    def render(
        self,
        instances: Sequence[GlyphInstance],
        store: GlyphCurveStore,
        surface: Surface,
        transform: GlobalTransform,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> RenderStats:
        """Rasterize instances and composite them in draw order.

        Args:
            instances: Instances in draw order (later ones paint over earlier)
            store: Shared curve buffers referenced by the instances
            surface: Target surface, modified in place
            transform: Global screen transform
            progress_callback: Optional callback(completed, total)

        Returns:
            RenderStats with counts, timing, and error details

        Raises:
            RenderCancelledError: If rendering is cancelled by user
        """
        render_logger = RenderLogger(self.logger)
        stats = render_logger.stats
        stats.start_time = time.time()

        self.logger.info(
            "Starting rasterization",
            instances=len(instances),
            surface=(surface.width, surface.height),
            max_workers=self.max_workers,
        )

        if self.max_workers == 1:
            results = self._render_serial(instances, store, surface, transform, progress_callback)
        else:
            results = self._render_parallel(
                instances, store, surface, transform, stats, progress_callback
            )

        for index in sorted(results):
            result = results[index]
            if "error" in result:
                render_logger.log_instance_error(
                    index=index,
                    error=Exception(result["error"]),
                    traceback=result.get("traceback"),
                )
                continue
            if result["tile"] is not None:
                surface.blit(Tile.from_dict(result["tile"]))
            render_logger.log_instance_complete(
                index=index,
                pixels=result["pixels"],
                capped=result["capped"],
                duration_ms=result["duration_ms"],
            )

        stats.end_time = time.time()

        self.logger.info(
            "Rasterization complete",
            instances=stats.instances_rendered,
            pixels=stats.pixels_shaded,
            capped=stats.capped_instances,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _render_serial(
        self,
        instances: Sequence[GlyphInstance],
        store: GlyphCurveStore,
        surface: Surface,
        transform: GlobalTransform,
        progress_callback: Callable[[int, int], None] | None,
    ) -> dict[int, dict[str, Any]]:
        context = _RasterContext(
            store=store,
            compositor=Compositor.from_config(self.compositor_config, self.evaluator_config),
            transform=transform,
            surface_size=(surface.width, surface.height),
        )
        results: dict[int, dict[str, Any]] = {}
        try:
            for index, instance in enumerate(instances):
                results[index] = _run_task(context, index, instance)
                if progress_callback is not None:
                    progress_callback(index + 1, len(instances))
        except KeyboardInterrupt:
            self.logger.info("Cancellation requested by user")
            raise RenderCancelledError(len(results), len(instances) - len(results)) from None
        return results

    def _render_parallel(
        self,
        instances: Sequence[GlyphInstance],
        store: GlyphCurveStore,
        surface: Surface,
        transform: GlobalTransform,
        stats: RenderStats,
        progress_callback: Callable[[int, int], None] | None,
    ) -> dict[int, dict[str, Any]]:
        """Rasterize instances using ProcessPoolExecutor.

        Returns:
            Dictionary mapping draw index to task result
        """
        results: dict[int, dict[str, Any]] = {}

        config_dict = {
            "compositor": self.compositor_config.model_dump(),
            "evaluator": self.evaluator_config.model_dump(),
        }

        total = len(instances)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(
            max_workers=self.max_workers,
            initializer=_init_worker,
            initargs=(
                store.to_dict(),
                config_dict,
                transform.to_dict(),
                (surface.width, surface.height),
            ),
        ) as executor:
            for index, instance in enumerate(instances):
                future = executor.submit(rasterize_task, index, instance.to_dict())
                pending_futures[future] = index

            try:
                for future in as_completed(pending_futures):
                    index = pending_futures.pop(future)

                    try:
                        results[index] = future.result()
                    except Exception as e:
                        # Executor-level error
                        results[index] = {
                            "error": str(e),
                            "index": index,
                            "traceback": traceback.format_exc(),
                            "duration_ms": 0.0,
                        }

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise RenderCancelledError(completed, len(pending_futures)) from None

        return results
