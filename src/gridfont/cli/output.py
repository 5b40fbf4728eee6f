"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from gridfont.domain import Severity, ValidationReport
from gridfont.utils import BuildStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for glyph compilation.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  {task.description}"),
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
    console.print(f"\n[bold]Gridfont[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_corpus_info(directories: list[Path], glyph_count: int, failures: int) -> None:
    """Print what was read from the corpus directories."""
    for directory in directories:
        # Text keeps brackets in paths from being read as markup
        line = Text("  ")
        line.append(str(directory))
        console.print(line)
    failure_style = "red" if failures else "green"
    console.print(
        f"  {glyph_count:,} glyphs {SYM_DOT} "
        f"[{failure_style}]{failures} unreadable[/{failure_style}]"
    )


def print_report(report: ValidationReport) -> None:
    """Print every issue of a validation report, errors first.

    Args:
        report: Validation outcome
    """
    if not report.issues:
        console.print(f"  [green]{SYM_OK} No issues[/green]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("", width=1)
    table.add_column("Source", overflow="fold")
    table.add_column("Problem", overflow="fold")

    for issue in report.errors + report.warnings:
        if issue.severity == Severity.ERROR:
            marker = Text(SYM_ERR, style="bold red")
        else:
            marker = Text(SYM_WARN, style="bold yellow")
        table.add_row(marker, Text(issue.source), Text(issue.message))

    console.print(table)

    errors = len(report.errors)
    warnings = len(report.warnings)
    error_style = "red" if errors else "green"
    console.print(
        f"\n  [{error_style}]{errors} errors[/{error_style}] {SYM_DOT} "
        f"[yellow]{warnings} warnings[/yellow]"
    )


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


def _format_file_size(path: Path | None) -> str:
    """Format file size in human-readable form (e.g., "12 KB")."""
    if path is None:
        return "not written"
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def print_success(stats: BuildStats) -> None:
    """Print success message with build summary.

    Args:
        stats: Statistics of the finished build
    """
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(stats.duration_seconds)}"
    )

    for output in stats.outputs:
        for path in (output.ttf_path, output.woff2_path):
            line = Text("  ")
            line.append(str(path), style="bold")
            line.append(f" ({_format_file_size(path)})")
            console.print(line)

    console.print(
        f"  {stats.compiled_count} glyphs {SYM_DOT} {stats.derived_count} derived {SYM_DOT} "
        f"{stats.rectangle_count} rectangles {SYM_DOT} {stats.substitution_count} ligatures"
    )

    if stats.avg_glyph_time_ms is not None:
        console.print(f"  {stats.avg_glyph_time_ms:.2f}ms avg per glyph")


def print_generated(set_name: str, paths: list[Path], output_dir: Path) -> None:
    """Print the result of a glyph generator run."""
    line = Text(f"\n{SYM_OK} ", style="bold green")
    line.append(f"{len(paths)} {set_name} glyphs written to ", style="bold green")
    line.append(str(output_dir), style="bold")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print("  Fonts written before cancellation are kept")
