"""Console reporting for the msdfkit CLI, built on Rich."""

from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.text import Text

from msdfkit.config import FieldConfig
from msdfkit.io import FontReader
from msdfkit.utils import GenerationStats

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_DOT = "·"

# Failed glyphs listed individually before the rest are summarized
MAX_LISTED_ERRORS = 20


def create_progress() -> Progress:
    """Progress bar counting rendered glyphs."""
    return Progress(
        TextColumn("  {task.description}"),
        BarColumn(bar_width=40, complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def print_header(version: str) -> None:
    console.print(f"\n[bold]msdfkit[/bold] v{version}")
    console.rule(style="dim")


def print_step(message: str) -> None:
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: Path, reader: FontReader) -> None:
    """Show the font being rendered.

    Args:
        font_path: Path given on the command line
        reader: Loaded reader for that font
    """
    # Text avoids interpreting brackets in file names as markup
    line = Text("  ")
    line.append(str(font_path), style="bold")
    line.append(f" ({reader.format})", style="dim")
    console.print(line)
    console.print(f"  {reader.glyph_count:,} glyphs {SYM_DOT} {reader.units_per_em:,} units per em")


def print_field_info(config: FieldConfig) -> None:
    """Show the raster layout every glyph is rendered into."""
    channels = {1: "signed distance", 3: "RGB", 4: "RGB + true distance"}[config.channels]
    console.print(
        f"  {config.width}x{config.height} px {SYM_DOT} {channels} {SYM_DOT} "
        f"range {config.distance_range:g} px"
    )


def format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    minutes, seconds = divmod(seconds, 60)
    if minutes:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{seconds:.1f}s"


def print_summary(stats: GenerationStats, output_dir: Path) -> None:
    """Print the outcome of a font run.

    Args:
        stats: Counters collected while rendering
        output_dir: Directory the fields were written to
    """
    if stats.error_count:
        console.print(f"\n[bold yellow]{SYM_ERR} Finished with errors[/bold yellow]")
    else:
        console.print(f"\n[bold green]{SYM_OK} Complete[/bold green]")

    table = Table.grid(padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("Output", Text(str(output_dir), style="bold"))
    table.add_row("Fields", str(stats.generated_count))
    table.add_row("Skipped", str(stats.skipped_count))
    table.add_row("Errors", f"[red]{stats.error_count}[/red]" if stats.error_count else "0")
    if stats.contours_reversed:
        table.add_row("Reversed contours", str(stats.contours_reversed))
    if stats.coloring_fallbacks:
        table.add_row("Uniform colorings", str(stats.coloring_fallbacks))
    timing = format_duration(stats.duration_seconds)
    if stats.avg_field_time_ms is not None:
        timing += f" ({stats.avg_field_time_ms:.1f}ms per field)"
    table.add_row("Time", timing)
    console.print(table)

    for name, message in stats.errors[:MAX_LISTED_ERRORS]:
        console.print(f"  [red]{SYM_ERR}[/red] {name}: {message}")
    if len(stats.errors) > MAX_LISTED_ERRORS:
        console.print(f"  {SYM_DOT * 3} and {len(stats.errors) - MAX_LISTED_ERRORS} more")


def print_error(message: str, details: str | None = None) -> None:
    """Print an error, with optional detail on a second line."""
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}", markup=False)
