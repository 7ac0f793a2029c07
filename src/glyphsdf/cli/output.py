"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from glyphsdf.domain import GlyphEntry

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for instance rasterization.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]glyphsdf[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_render_info(text: str, size: float, mode: str, workers: int, is_auto: bool = False) -> None:
    """Print render configuration.

    Args:
        text: Text being rendered
        size: Pixels per em
        mode: Compositing mode
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    line = Text("  ")
    line.append(repr(text), style="bold")
    line.append(f" {SYM_DOT} {size:g}px {SYM_DOT} {mode}")
    console.print(line)
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_success(
    output_path: str,
    image_size: tuple[int, int],
    total_time_s: float,
    rendered: int,
    skipped: int,
    capped: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output image
        image_size: (width, height) in pixels
        total_time_s: Total render time in seconds
        rendered: Number of instances rasterized
        skipped: Number of characters without an instance
        capped: Number of instances drawn with the diagnostic color
        errors: Number of errors encountered
        avg_time_ms: Average time per instance in milliseconds
        min_time_ms: Minimum time per instance in milliseconds
        max_time_ms: Maximum time per instance in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({image_size[0]}x{image_size[1]})")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {rendered} instances {SYM_DOT} {skipped} skipped {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )
    if capped:
        console.print(f"  [yellow]{capped} over the segment cap[/yellow]")

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}-{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_glyph_table(rows: list[tuple[str, GlyphEntry | None]]) -> None:
    """Print atlas entries for a list of characters.

    Args:
        rows: (character, entry) pairs; entry is None for unmapped characters
    """
    table = Table(show_edge=False, pad_edge=False, box=None)
    table.add_column("Char")
    table.add_column("Glyph")
    table.add_column("Lines", justify="right")
    table.add_column("Quads", justify="right")
    table.add_column("Ranges")
    table.add_column("Advance", justify="right")

    for char, entry in rows:
        if entry is None:
            table.add_row(repr(char), f"[red]{SYM_ERR} missing[/red]", "", "", "", "")
            continue
        lines = entry.line_range
        quads = entry.quadratic_range
        table.add_row(
            repr(char),
            entry.name,
            str(lines.count),
            str(quads.count),
            f"L{lines.to_tuple()} Q{quads.to_tuple()}",
            f"{entry.metrics.advance:.3f}",
        )

    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress instances")


def print_cancellation_summary(rendered: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        rendered: Number of instances rasterized before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {rendered} instances completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
