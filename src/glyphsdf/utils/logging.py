"""Logging utilities for glyphsdf."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class RenderStats:
    """Statistics from a render run."""

    instances_rendered: int = 0
    pixels_shaded: int = 0
    capped_instances: int = 0
    skipped_count: int = 0
    error_count: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    instance_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate render duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_instance_time_ms(self) -> float | None:
        if not self.instance_timings_ms:
            return None
        return sum(self.instance_timings_ms) / len(self.instance_timings_ms)

    @property
    def min_instance_time_ms(self) -> float | None:
        if not self.instance_timings_ms:
            return None
        return min(self.instance_timings_ms)

    @property
    def max_instance_time_ms(self) -> float | None:
        if not self.instance_timings_ms:
            return None
        return max(self.instance_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphsdf")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RenderLogger:
    """Logger for tracking rasterization progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RenderStats()

    def log_instance_complete(
        self,
        index: int,
        pixels: int,
        capped: bool,
        duration_ms: float,
    ) -> None:
        """Log a rasterized instance."""
        self._logger.debug(
            "Instance rasterized",
            instance=index,
            pixels=pixels,
            capped=capped,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.instances_rendered += 1
        self._stats.pixels_shaded += pixels
        self._stats.instance_timings_ms.append(duration_ms)
        if capped:
            self._stats.capped_instances += 1
            self._logger.warning(
                "Instance exceeds quadratic segment cap, drawn with diagnostic color",
                instance=index,
            )

    def log_glyph_skipped(self, char: str, reason: str) -> None:
        """Log a character that produced no instance."""
        self._logger.debug("Glyph skipped", char=char, reason=reason)
        self._stats.skipped_count += 1

    def log_instance_error(
        self,
        index: int,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log an instance that failed to rasterize."""
        self._logger.error(
            "Instance rasterization failed",
            instance=index,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((index, str(error)))

    @property
    def stats(self) -> RenderStats:
        """Get current render statistics."""
        return self._stats
