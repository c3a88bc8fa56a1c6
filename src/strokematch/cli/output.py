"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from strokematch.core.library import Match, MatchLibrary, ScoreBreakdown

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Strokematch[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_library_info(library_path: str, library: MatchLibrary) -> None:
    """Print library information.

    Args:
        library_path: Path to the library file
        library: The loaded library
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(library_path)
    line1.append(f" ({library.name})")
    console.print(line1)

    weights = library.weights
    console.print(
        f"  {len(library)} entries {SYM_DOT} precision {library.precision} {SYM_DOT} "
        f"weights grid={weights.grid:g} circle={weights.circle:g} "
        f"horizontal={weights.horizontal:g} vertical={weights.vertical:g}"
    )


def print_entries(library: MatchLibrary) -> None:
    """Print a table of library entries.

    Args:
        library: Library whose entries are listed
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Points", justify="right")
    table.add_column("Precision", justify="right")

    for index, entry in enumerate(library.entries):
        table.add_row(
            str(index),
            Text(entry.name),
            str(entry.shape.point_count),
            str(entry.shape.precision),
        )

    console.print(table)


def print_matches(matches: Sequence[Match], limit: int | None = None) -> None:
    """Print ranked matches.

    Args:
        matches: Ranked matches, best first
        limit: Maximum number of rows to show
    """
    shown = list(matches[:limit]) if limit else list(matches)

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Rank", justify="right")
    table.add_column("Name")
    table.add_column("Score", justify="right")
    table.add_column("Match", justify="right")

    for rank, match in enumerate(shown, start=1):
        style = "green" if rank == 1 else None
        table.add_row(
            str(rank),
            Text(match.name, style=style or ""),
            f"{match.score:.4f}",
            f"{match.percent:.2f}%",
        )

    console.print(table)
    if len(matches) > len(shown):
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(matches) - len(shown)} more)")


def print_best_match(match: Match | None) -> None:
    """Print the recognized label.

    Args:
        match: Best match, None if the library is empty
    """
    if match is None:
        console.print(f"\n[bold red]{SYM_ERR}[/bold red] Library has no entries")
        return

    line = Text(f"\n{SYM_OK} ", style="bold green")
    line.append(match.name, style="bold")
    line.append(f" ({match.percent:.2f}%)")
    console.print(line)


def print_breakdown(first: str, second: str, breakdown: ScoreBreakdown) -> None:
    """Print the per-representation differences between two entries.

    Args:
        first: Name of the entry being scored
        second: Name of the reference entry
        breakdown: Score breakdown of the comparison
    """
    title = Text("\n")
    title.append(first, style="bold")
    title.append(" vs ")
    title.append(second, style="bold")
    console.print(title)

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Map")
    table.add_column("Difference", justify="right")

    table.add_row("grid", f"{breakdown.grid:.4f}")
    table.add_row("circle", f"{breakdown.circle:.4f}")
    table.add_row("horizontal", f"{breakdown.horizontal:.4f}")
    table.add_row("vertical", f"{breakdown.vertical:.4f}")
    table.add_row(Text("total", style="bold"), f"{breakdown.total:.4f}")

    console.print(table)


def print_success(message: str) -> None:
    """Print a success message.

    Args:
        message: What was done
    """
    console.print(f"\n[bold green]{SYM_OK}[/bold green] {escape(message)}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")
