"""CLI application entry point for clipbridge.

This module provides the command-line interface using Typer. Each command
loads JSON path documents, runs one engine operation and prints or saves
the result.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Annotated, TypeVar

import typer

from clipbridge import __version__
from clipbridge.cli.output import (
    SYM_DOT,
    console,
    print_collection,
    print_error,
    print_header,
    print_input_info,
    print_step,
    print_success,
)
from clipbridge.config import ClipBridgeSettings, EngineConfig, LoggingConfig
from clipbridge.core import Clipper
from clipbridge.domain import ClipType, EndType, FillRule, JoinType, PathCollection, Rect
from clipbridge.exceptions import ClipBridgeError, NativeLibraryError
from clipbridge.io import PathReader, PathWriter
from clipbridge.utils import configure_logging

EnumT = TypeVar("EnumT", bound=IntEnum)

BOOLEAN_OPERATIONS = (ClipType.INTERSECTION, ClipType.UNION, ClipType.DIFFERENCE, ClipType.XOR)

# Create the Typer app
app = typer.Typer(
    name="clipbridge",
    help="Polygon boolean operations, offsetting and rectangle clipping via Clipper2.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Options shared by every command."""

    settings: ClipBridgeSettings
    quiet: bool = False
    verbose: bool = False


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]clipbridge[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
    library: Annotated[
        Path | None,
        typer.Option(
            "--library",
            "-L",
            help="Path to the Clipper2 shared library (default: search)",
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
            help="Print every result coordinate",
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
    """Run Clipper2 operations on JSON path documents."""
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    ctx.obj = CliState(
        settings=ClipBridgeSettings(
            engine=EngineConfig(library_path=library),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        ),
        quiet=quiet,
        verbose=verbose,
    )


def _state(ctx: typer.Context) -> CliState:
    if ctx.obj is None:
        ctx.obj = CliState(settings=ClipBridgeSettings())
    return ctx.obj


def _create_clipper(state: CliState) -> Clipper:
    """Build a facade with logging configured from CLI options."""
    logging_config = state.settings.logging
    logger = configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
        quiet=state.quiet,
    )
    clipper = Clipper(settings=state.settings, logger=logger)
    if not state.quiet:
        print_header(__version__, clipper.version())
    return clipper


def _parse_enum(
    enum_cls: type[EnumT], value: str, option: str, allowed: Sequence[EnumT] | None = None
) -> EnumT:
    """Resolve a case-insensitive enum member name given on the command line."""
    choices = list(allowed) if allowed is not None else list(enum_cls)
    member = enum_cls.__members__.get(value.upper().replace("-", "_"))
    if member is None or member not in choices:
        valid = ", ".join(choice.name.lower() for choice in choices)
        print_error(f"Invalid {option}: {value}", details=f"Valid values: {valid}")
        raise typer.Exit(code=1)
    return member


def _parse_rect(value: str) -> Rect:
    parts = value.split(",")
    try:
        left, top, right, bottom = (float(part) for part in parts)
    except ValueError:
        print_error(
            f"Invalid rectangle: {value}",
            details="Expected four comma-separated numbers: left,top,right,bottom",
        )
        raise typer.Exit(code=1) from None
    return Rect(left, top, right, bottom)


def _load(label: str, file_path: Path, state: CliState) -> PathCollection:
    paths = PathReader(file_path).load()
    if not state.quiet:
        print_input_info(label, str(file_path), paths)
    return paths


def _report(
    clipper: Clipper,
    state: CliState,
    operation: str,
    results: list[tuple[str, PathCollection]],
    output: Path | None,
) -> None:
    """Print result tables and save results when an output path is given."""
    written: list[str] = []
    if output is not None:
        for index, (label, paths) in enumerate(results):
            if index == 0:
                target = output
            elif paths.size() == 0:
                continue
            else:
                target = PathWriter.get_result_path(output, label)
            PathWriter(target).save(paths)
            written.append(str(target))

    if state.quiet:
        return

    for label, paths in results:
        print_collection(f"{operation} {SYM_DOT} {label}", paths, verbose=state.verbose)

    last_call_ms = clipper.stats.last_call_ms
    print_success(
        operation=operation,
        paths=sum(paths.size() for _, paths in results),
        duration_ms=last_call_ms,
        output_path=", ".join(written) if written else None,
    )


def _run(ctx: typer.Context, action: Callable[[CliState], None]) -> None:
    """Run a command body, turning library errors into exit codes."""
    try:
        action(_state(ctx))
    except NativeLibraryError as e:
        print_error("Could not load the Clipper2 library", details=str(e))
        raise typer.Exit(code=1)
    except ClipBridgeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def version(ctx: typer.Context) -> None:
    """Show package and native engine versions."""

    def action(state: CliState) -> None:
        clipper = Clipper(settings=state.settings)
        console.print(f"clipbridge {__version__}")
        console.print(f"Clipper2 {clipper.version()}")

    _run(ctx, action)


@app.command()
def boolean(
    ctx: typer.Context,
    operation: Annotated[
        str,
        typer.Argument(help="Operation (intersection|union|difference|xor)", show_default=False),
    ],
    subject: Annotated[
        Path,
        typer.Argument(help="JSON document with closed subject paths", show_default=False),
    ],
    clip: Annotated[
        Path | None,
        typer.Option("--clip", "-c", help="JSON document with clip paths"),
    ] = None,
    open_subject: Annotated[
        Path | None,
        typer.Option("--open", help="JSON document with open subject paths"),
    ] = None,
    fill_rule: Annotated[
        str,
        typer.Option("--fill-rule", "-f", help="Fill rule (even_odd|non_zero|positive|negative)"),
    ] = "even_odd",
    precision: Annotated[
        int,
        typer.Option("--precision", help="Decimal precision (-8..8)", min=-8, max=8),
    ] = 2,
    preserve_collinear: Annotated[
        bool,
        typer.Option("--preserve-collinear/--drop-collinear", help="Keep collinear vertices"),
    ] = True,
    reverse: Annotated[
        bool,
        typer.Option("--reverse", help="Reverse output orientation"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write closed results to this JSON file"),
    ] = None,
) -> None:
    """Run a boolean operation on subject and clip paths."""
    clip_type = _parse_enum(ClipType, operation, "operation", allowed=BOOLEAN_OPERATIONS)
    rule = _parse_enum(FillRule, fill_rule, "fill rule")

    def action(state: CliState) -> None:
        subjects = _load("subject", subject, state)
        clips = _load("clip", clip, state) if clip is not None else None
        opened = _load("open subject", open_subject, state) if open_subject is not None else None

        clipper = _create_clipper(state)
        if not state.quiet:
            print_step(f"Running {clip_type.name.lower()}")
        closed_result, open_result = clipper.boolean_op(
            clip_type,
            rule,
            subjects,
            subjects_open=opened,
            clips=clips,
            precision=precision,
            preserve_collinear=preserve_collinear,
            reverse_solution=reverse,
        )
        _report(
            clipper,
            state,
            clip_type.name.lower(),
            [("closed", closed_result), ("open", open_result)],
            output,
        )

    _run(ctx, action)


@app.command()
def inflate(
    ctx: typer.Context,
    input_paths: Annotated[
        Path,
        typer.Argument(help="JSON document with paths to offset", show_default=False),
    ],
    delta: Annotated[
        float,
        typer.Option("--delta", "-d", help="Offset distance (>0 grows, <0 shrinks)"),
    ],
    join: Annotated[
        str,
        typer.Option("--join", "-j", help="Join style (square|bevel|round|miter)"),
    ] = "miter",
    end: Annotated[
        str,
        typer.Option("--end", "-e", help="End style (polygon|joined|butt|square|round)"),
    ] = "polygon",
    precision: Annotated[
        int,
        typer.Option("--precision", help="Decimal precision (-8..8)", min=-8, max=8),
    ] = 2,
    miter_limit: Annotated[
        float,
        typer.Option("--miter-limit", help="Maximum miter ratio"),
    ] = 2.0,
    arc_tolerance: Annotated[
        float,
        typer.Option("--arc-tolerance", help="Round join tolerance (0 = engine default)"),
    ] = 0.0,
    reverse: Annotated[
        bool,
        typer.Option("--reverse", help="Reverse output orientation"),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write results to this JSON file"),
    ] = None,
) -> None:
    """Offset paths outward or inward."""
    join_type = _parse_enum(JoinType, join, "join style")
    end_type = _parse_enum(EndType, end, "end style")

    def action(state: CliState) -> None:
        paths = _load("input", input_paths, state)
        clipper = _create_clipper(state)
        if not state.quiet:
            print_step(f"Inflating by {delta:g}")
        result = clipper.inflate_paths(
            paths,
            delta,
            join_type=join_type,
            end_type=end_type,
            precision=precision,
            miter_limit=miter_limit,
            arc_tolerance=arc_tolerance,
            reverse_solution=reverse,
        )
        _report(clipper, state, "inflate", [("result", result)], output)

    _run(ctx, action)


@app.command("rect-clip")
def rect_clip(
    ctx: typer.Context,
    input_paths: Annotated[
        Path,
        typer.Argument(help="JSON document with paths to clip", show_default=False),
    ],
    rect: Annotated[
        str,
        typer.Option("--rect", "-r", help="Rectangle as left,top,right,bottom"),
    ],
    lines: Annotated[
        bool,
        typer.Option("--lines", help="Treat paths as open lines"),
    ] = False,
    precision: Annotated[
        int,
        typer.Option("--precision", help="Decimal precision (-8..8)", min=-8, max=8),
    ] = 2,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write results to this JSON file"),
    ] = None,
) -> None:
    """Clip paths to a rectangle."""
    bounds = _parse_rect(rect)

    def action(state: CliState) -> None:
        paths = _load("input", input_paths, state)
        clipper = _create_clipper(state)
        operation = "rect_clip_lines" if lines else "rect_clip"
        if not state.quiet:
            print_step(f"Clipping to {rect}")
        if lines:
            result = clipper.rect_clip_lines(bounds, paths, precision=precision)
        else:
            result = clipper.rect_clip(bounds, paths, precision=precision)
        _report(clipper, state, operation, [("result", result)], output)

    _run(ctx, action)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
