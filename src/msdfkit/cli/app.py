"""CLI application entry point for msdfkit.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from msdfkit import __version__
from msdfkit.cli.output import (
    console,
    create_progress,
    print_error,
    print_field_info,
    print_font_info,
    print_header,
    print_step,
    print_summary,
)
from msdfkit.config import (
    ColoringConfig,
    FieldConfig,
    LoggingConfig,
    MsdfSettings,
    ProcessingConfig,
)
from msdfkit.core import MsdfGenerator
from msdfkit.exceptions import FontLoadError, MsdfError
from msdfkit.io import FontReader
from msdfkit.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="msdfkit",
    help="Render multi-channel signed distance fields for font glyphs.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]msdfkit[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def render(
    input_font: Annotated[
        Path,
        typer.Argument(
            help="Path to input TTF/OTF font file",
            show_default=False,
        ),
    ],
    chars: Annotated[
        str | None,
        typer.Option(
            "--chars",
            "-c",
            help="Characters to render (default: every glyph)",
        ),
    ] = None,
    size: Annotated[
        int,
        typer.Option(
            "--size",
            "-s",
            help="Field width and height in pixels",
            min=1,
            max=8192,
        ),
    ] = 32,
    distance_range: Annotated[
        float,
        typer.Option(
            "--range",
            "-r",
            help="Distance range in pixels",
            min=0.1,
        ),
    ] = 4.0,
    channels: Annotated[
        int,
        typer.Option(
            "--channels",
            help="Channels per pixel (1|3|4)",
        ),
    ] = 3,
    sub_samples: Annotated[
        int,
        typer.Option(
            "--sub-samples",
            help="Sub-samples per pixel along each axis",
            min=1,
            max=8,
        ),
    ] = 1,
    angle: Annotated[
        float,
        typer.Option(
            "--angle",
            "-a",
            help="Corner angle (degrees) above which a corner is sharp",
            min=0.1,
            max=179.0,
        ),
    ] = 3.0,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for .npz fields (default: next to the font)",
        ),
    ] = None,
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            "-j",
            help="Worker processes used per field (1 = in-process)",
            min=1,
        ),
    ] = 1,
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
    """Render distance fields for the glyphs of a font.

    Each glyph is written as {font}-{glyph}-msdf.npz holding the raw float
    field, its scale, translation and distance range.

    Example:
        msdfkit Roboto-Regular.ttf --chars ABC --size 48
    """
    if not input_font.exists():
        print_error(
            f"Input file not found: {input_font}",
            details=f"The file '{input_font}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_font.is_file():
        print_error(
            f"Input path is not a file: {input_font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    try:
        settings = MsdfSettings(
            coloring=ColoringConfig(corner_angle_threshold=angle),
            field=FieldConfig(
                width=size,
                height=size,
                channels=channels,
                distance_range=distance_range,
                sub_samples=sub_samples,
            ),
            processing=ProcessingConfig(max_workers=workers),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        )
    except ValueError as e:
        print_error("Invalid options", details=str(e))
        raise typer.Exit(code=1) from None

    logger = configure_logging(settings.logging, quiet=quiet)
    target_dir = output_dir if output_dir is not None else input_font.parent

    try:
        if quiet:
            stats = MsdfGenerator(settings, logger=logger).process_font(
                input_font, output_dir=output_dir, chars=chars
            )
        else:
            print_header(__version__)
            print_step("Loading font")
            with FontReader(input_font) as reader:
                print_font_info(input_font, reader)
                total = len(set(chars)) if chars is not None else reader.glyph_count

            print_step("Rendering")
            print_field_info(settings.field)
            with create_progress() as progress:
                task_id = progress.add_task("glyphs", total=total)

                def advance(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                stats = MsdfGenerator(settings, logger=logger).process_font(
                    input_font,
                    output_dir=output_dir,
                    chars=chars,
                    progress_callback=advance,
                )
                progress.update(task_id, completed=total)

    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1) from None
    except MsdfError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    if not quiet:
        print_summary(stats, target_dir)

    if stats.error_count:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
