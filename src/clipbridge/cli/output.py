"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from clipbridge.domain import PathCollection

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str, engine_version: str | None = None) -> None:
    """Print application header.

    Args:
        version: Package version string
        engine_version: Native engine version, if loaded
    """
    engine = f" {SYM_DOT} Clipper2 {engine_version}" if engine_version else ""
    console.print(f"\n[bold]clipbridge[/bold] v{version}{engine}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_input_info(label: str, file_path: str, paths: PathCollection) -> None:
    """Print information about a loaded path document.

    Args:
        label: Role of the document (e.g. "subject", "clip")
        file_path: Path to the document
        paths: Loaded collection
    """
    line = Text(f"  {label}: ")
    line.append(file_path)
    console.print(line)
    console.print(f"    {paths.size():,} paths {SYM_DOT} {paths.point_count():,} points")


def _bounds(coords: list[float]) -> str:
    if not coords:
        return "-"
    xs = coords[0::2]
    ys = coords[1::2]
    return f"{min(xs):g},{min(ys):g} → {max(xs):g},{max(ys):g}"


def print_collection(title: str, paths: PathCollection, verbose: bool = False) -> None:
    """Print a table describing each path of a result.

    Args:
        title: Table title
        paths: Result collection
        verbose: Whether to include every coordinate
    """
    table = Table(title=title, title_justify="left", show_edge=False)
    table.add_column("#", justify="right")
    table.add_column("points", justify="right")
    table.add_column("bounds")
    if verbose:
        table.add_column("coordinates")

    for index, path in enumerate(paths):
        coords = path.to_coords()
        row = [str(index), str(path.size()), _bounds(coords)]
        if verbose:
            row.append(" ".join(f"{p.x:g},{p.y:g}" for p in path))
        table.add_row(*row)

    if paths.size() == 0:
        console.print(f"\n  {title}: [dim]empty[/dim]")
    else:
        console.print()
        console.print(table)


def print_success(operation: str, paths: int, duration_ms: float | None, output_path: str | None) -> None:
    """Print success message with summary.

    Args:
        operation: Operation that ran
        paths: Number of result paths
        duration_ms: Engine call time in milliseconds
        output_path: Where results were written, if anywhere
    """
    timing = f" in {duration_ms:.1f}ms" if duration_ms is not None else ""
    console.print(f"\n[bold green]{SYM_OK} {operation}[/bold green]{timing}")
    console.print(f"  {paths} result paths")
    if output_path:
        line = Text("  ")
        line.append(output_path, style="bold")
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
