"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from collections.abc import Iterable

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

from iconspec.domain import ChangeRecord, PresetDefinition, ValidationIssue
from iconspec.utils import BuildStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch builds.

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
    console.print(f"\n[bold]iconspec[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_document_info(path: str, kind: str, name: str | None) -> None:
    """Print loaded document information."""
    line = Text("  ")
    line.append(path)
    line.append(f" ({kind})")
    console.print(line)
    if name:
        console.print(f"  icon {SYM_DOT} {name}")


def print_presets(presets: Iterable[PresetDefinition]) -> None:
    """Print the preset table."""
    table = Table(show_edge=False, pad_edge=False, box=None)
    table.add_column("id", style="bold", no_wrap=True)
    table.add_column("name")
    table.add_column("sizes")
    table.add_column("stroke")
    table.add_column("fill")
    table.add_column("cap/join")

    for preset in presets:
        table.add_row(
            preset.key,
            preset.name,
            ", ".join(str(size) for size in preset.recommended_sizes),
            preset.style.stroke,
            preset.style.fill,
            f"{preset.style.line_cap.value}/{preset.style.line_join.value}",
        )
    console.print(table)


def print_changes(changes: list[ChangeRecord]) -> None:
    """Print the expansion change log."""
    if not changes:
        console.print("  No changes")
        return

    for change in changes:
        line = Text(f"  {SYM_DOT} ")
        line.append(change.type.value, style="cyan")
        line.append(f" {change.json_path}")
        if change.note:
            line.append(f" ({change.note})", style="dim")
        console.print(line)


def print_issues(issues: list[ValidationIssue]) -> None:
    """Print validation issues; errors are marked red, warnings yellow."""
    if not issues:
        console.print(f"  [green]{SYM_OK}[/green] No issues")
        return

    table = Table(show_edge=False, pad_edge=False, box=None)
    table.add_column("")
    table.add_column("code")
    table.add_column("path")
    table.add_column("message")

    for issue in issues:
        marker = f"[red]{SYM_ERR}[/red]" if issue.is_error else f"[yellow]{SYM_WARN}[/yellow]"
        table.add_row(
            marker,
            issue.code.value,
            Text(issue.json_path),
            Text(issue.message),
        )
    console.print(table)


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


def print_written(path: str) -> None:
    """Print a written artifact path."""
    line = Text(f"  {SYM_OK} ", style="green")
    line.append(path, style="bold")
    console.print(line)


def print_success(message: str) -> None:
    """Print a success line."""
    console.print(f"\n[bold green]{SYM_OK} {message}[/bold green]")


def print_build_summary(stats: BuildStats) -> None:
    """Print batch build summary.

    Args:
        stats: Statistics of the finished build
    """
    time_str = _format_time(stats.duration_seconds)
    failed = stats.failed_count

    if failed:
        console.print(f"\n[bold red]{SYM_ERR} Finished with failures[/bold red] in {time_str}")
    else:
        console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    failed_style = "red" if failed > 0 else "green"
    console.print(
        f"  {stats.built_count} built {SYM_DOT} {stats.warning_count} warnings {SYM_DOT} "
        f"[{failed_style}]{failed} failed[/{failed_style}]"
    )

    if stats.icon_timings_ms:
        timings = stats.icon_timings_ms
        avg = sum(timings) / len(timings)
        console.print(f"  {avg:.1f}ms avg ({min(timings):.1f}-{max(timings):.1f}ms range)")

    for name, reason in stats.errors:
        line = Text(f"  {SYM_ERR} ", style="red")
        line.append(name, style="bold")
        line.append(f": {reason}")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
