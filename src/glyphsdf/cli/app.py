"""CLI application entry point for glyphsdf.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from glyphsdf import __version__
from glyphsdf.cli.output import (
    SYM_DOT,
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_font_info,
    print_glyph_table,
    print_header,
    print_render_info,
    print_step,
    print_success,
)
from glyphsdf.config import (
    CompositeMode,
    CompositorConfig,
    GlyphSDFSettings,
    LoggingConfig,
    RasterConfig,
)
from glyphsdf.core import TextRenderer, TextRun
from glyphsdf.domain import Color, GlyphEntry
from glyphsdf.exceptions import (
    FontLoadError,
    GlyphNotFoundError,
    GlyphSDFError,
    RenderCancelledError,
)
from glyphsdf.io import FontReader, GlyphAtlas, ImageWriter

app = typer.Typer(
    name="glyphsdf",
    help="Render text from TTF/OTF fonts by evaluating analytic signed distances per pixel.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphsdf[/bold blue] v{__version__}")
        raise typer.Exit()


def _check_font_path(font: Path) -> None:
    if not font.exists():
        print_error(
            f"Input file not found: {font}",
            details=f"The file '{font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not font.is_file():
        print_error(
            f"Input path is not a file: {font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)


@app.command()
def render(
    font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    text: Annotated[
        str,
        typer.Argument(
            help="Text to render",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output image path (default: {font stem}-render.png)",
        ),
    ] = None,
    size: Annotated[
        float,
        typer.Option(
            "--size",
            "-s",
            help="Font size in pixels per em",
            min=1.0,
            max=2048.0,
        ),
    ] = 64.0,
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            "-m",
            help="Compositing mode (smooth|threshold)",
        ),
    ] = "smooth",
    fg: Annotated[
        str,
        typer.Option(
            "--fg",
            help="Foreground color as #rrggbb or #rrggbbaa",
        ),
    ] = "#000000",
    bg: Annotated[
        str,
        typer.Option(
            "--bg",
            help="Background color as #rrggbb or #rrggbbaa",
        ),
    ] = "#ffffff",
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto, 1: in-process)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render a line of text to a PNG image.

    Every pixel of every glyph quad is shaded from the exact signed distance
    to the glyph's line and quadratic segments.

    Example:
        glyphsdf render Roboto-Regular.ttf "Hello" -o hello.png --size 96
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    _check_font_path(font)

    try:
        composite_mode = CompositeMode(mode.lower())
    except ValueError:
        print_error(
            f"Invalid mode: {mode}",
            details="Valid values: smooth, threshold",
        )
        raise typer.Exit(code=1)

    console_level = log_level
    if verbose:
        console_level = "INFO"
    elif quiet:
        console_level = "ERROR"

    try:
        settings = GlyphSDFSettings(
            compositor=CompositorConfig(mode=composite_mode),
            raster=RasterConfig(
                font_size=size,
                max_workers=workers,
                foreground=fg,
                background=bg,
            ),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=console_level,
            ),
        )
    except ValidationError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    output_path = output if output is not None else ImageWriter.get_render_path(font)

    try:
        if not quiet:
            print_step("Loading font")
            try:
                with FontReader(font) as reader:
                    print_font_info(
                        font_path=str(font),
                        font_type=reader.format,
                        glyph_count=reader.glyph_count,
                        upm=reader.units_per_em,
                    )
            except Exception as e:
                raise FontLoadError(str(font), str(e)) from e

            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Rendering")
            print_render_info(text, size, composite_mode.value, actual_workers, is_auto=(workers is None))

        renderer = TextRenderer(settings)
        run = TextRun(text, Color.from_hex(fg), Color.from_hex(bg))

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task("Rasterizing", total=None)

                    def update_progress(completed: int, total: int) -> None:
                        progress.update(task_id, completed=completed, total=total)

                    surface, stats = renderer.render_surface(
                        font,
                        [run],
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                surface, stats = renderer.render_surface(font, [run], max_workers=workers)
        except RenderCancelledError as e:
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(
                    rendered=e.processed_count,
                    cancelled=e.pending_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
        except KeyboardInterrupt:
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(rendered=0, cancelled=0)
            raise typer.Exit(code=130) from None

        ImageWriter(surface, output_path).save()

        if not quiet:
            print_success(
                output_path=str(output_path),
                image_size=(surface.width, surface.height),
                total_time_s=stats.duration_seconds,
                rendered=stats.instances_rendered,
                skipped=stats.skipped_count,
                capped=stats.capped_instances,
                errors=stats.error_count,
                avg_time_ms=stats.avg_instance_time_ms,
                min_time_ms=stats.min_instance_time_ms,
                max_time_ms=stats.max_instance_time_ms,
            )

        if stats.error_count:
            raise typer.Exit(code=1)

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphSDFError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def inspect(
    font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    chars: Annotated[
        str,
        typer.Argument(
            help="Characters to look up",
            show_default=False,
        ),
    ],
) -> None:
    """Show how characters land in the glyph atlas.

    Lists the glyph name, segment counts, curve ranges and advance of each
    character after outline conversion.

    Example:
        glyphsdf inspect Roboto-Regular.ttf "Ag"
    """
    _check_font_path(font)

    try:
        with FontReader(font) as reader:
            print_font_info(
                font_path=str(font),
                font_type=reader.format,
                glyph_count=reader.glyph_count,
                upm=reader.units_per_em,
            )

            atlas = GlyphAtlas(reader)
            rows: list[tuple[str, GlyphEntry | None]] = []
            for char in chars:
                try:
                    rows.append((char, atlas.entry_for(char)))
                except GlyphNotFoundError:
                    rows.append((char, None))

            console.print()
            print_glyph_table(rows)
            console.print(
                f"\n  {len(atlas.store.lines)} lines {SYM_DOT} "
                f"{len(atlas.store.quadratics)} quadratics in store"
            )

    except Exception as e:
        print_error(f"Could not inspect font: {e}")
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
