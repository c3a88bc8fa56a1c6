"""CLI application entry point for strokematch.

This module provides the command-line interface using Typer. Every command
operates on a JSON library file: it loads the library, applies one change or
query, and writes the library back when it was changed.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn

import structlog
import typer

from strokematch import __version__
from strokematch.cli.output import (
    console,
    print_best_match,
    print_breakdown,
    print_entries,
    print_error,
    print_header,
    print_library_info,
    print_matches,
    print_step,
    print_success,
)
from strokematch.config import LoggingConfig, StrokeMatchSettings
from strokematch.core import DrawingRecognizer, MatchLibrary, ShapeEncoder
from strokematch.exceptions import (
    EntryNotFoundError,
    LibraryFormatError,
    LibraryLoadError,
    LibrarySaveError,
    StrokeLoadError,
    StrokeMatchError,
)
from strokematch.io import LibraryReader, LibraryWriter, read_stroke
from strokematch.utils import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Create the Typer app
app = typer.Typer(
    name="strokematch",
    help="Recognize freehand strokes against a library of labeled reference strokes.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Settings shared by every command of one invocation."""

    settings: StrokeMatchSettings
    logger: structlog.stdlib.BoundLogger
    quiet: bool


LibraryArg = Annotated[
    Path,
    typer.Argument(help="Path to the JSON library file", show_default=False),
]
StrokeArg = Annotated[
    Path,
    typer.Argument(help="Path to a JSON stroke file ([[x, y], ...])", show_default=False),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Strokematch[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
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
    """Manage stroke libraries and recognize drawn strokes."""
    if log_level.upper() not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    settings = StrokeMatchSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper(),
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliState(settings=settings, logger=logger, quiet=quiet)

    if not quiet:
        print_header(__version__)


def _load(state: CliState, library_path: Path) -> MatchLibrary:
    if not state.quiet:
        print_step("Loading library")

    reader = LibraryReader(library_path, ShapeEncoder(state.settings.encoder))
    reader.load()
    library = reader.library

    if not state.quiet:
        print_library_info(str(library_path), library)
    return library


def _save(library: MatchLibrary, library_path: Path) -> None:
    LibraryWriter(library, library_path).save()


def _session(state: CliState, library: MatchLibrary) -> DrawingRecognizer:
    return DrawingRecognizer(state.settings, libraries=[library], logger=state.logger)


def _fail(error: StrokeMatchError) -> NoReturn:
    """Report an error and exit with status 1."""
    if isinstance(error, LibraryLoadError):
        print_error(f"Could not load library: {error.reason}", details=error.path)
    elif isinstance(error, LibraryFormatError):
        print_error("Invalid library file", details=str(error))
    elif isinstance(error, LibrarySaveError):
        print_error(f"Could not save library: {error.reason}", details=error.path)
    elif isinstance(error, StrokeLoadError):
        print_error(f"Could not load stroke: {error.reason}", details=error.path)
    else:
        print_error(str(error))
    raise typer.Exit(code=1)


@app.command()
def init(
    ctx: typer.Context,
    library_path: LibraryArg,
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Library name (default: file name without extension)",
        ),
    ] = None,
    precision: Annotated[
        int,
        typer.Option(
            "--precision",
            "-p",
            help="Map resolution used for every entry",
            min=1,
            max=32,
        ),
    ] = 5,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing library file",
        ),
    ] = False,
) -> None:
    """Create a new library holding only the reserved Empty entry."""
    state: CliState = ctx.obj

    if library_path.exists() and not force:
        print_error(
            f"Library file already exists: {library_path}",
            details="Use --force to overwrite it.",
        )
        raise typer.Exit(code=1)

    try:
        encoder_config = state.settings.encoder.model_copy(update={"precision": precision})
        library = MatchLibrary.from_config(
            name or library_path.stem, encoder_config, state.settings.weights
        )
        _save(library, library_path)
    except StrokeMatchError as e:
        _fail(e)

    if not state.quiet:
        print_library_info(str(library_path), library)
    print_success(f"Created library '{library.name}'")


@app.command()
def add(
    ctx: typer.Context,
    library_path: LibraryArg,
    name: Annotated[str, typer.Argument(help="Label for the stroke", show_default=False)],
    stroke_path: StrokeArg,
) -> None:
    """Encode a stroke and store it under a name, replacing any entry with that name."""
    state: CliState = ctx.obj

    try:
        library = _load(state, library_path)
        points = read_stroke(stroke_path)
        recognizer = _session(state, library)
        replaced = name in library
        entry = recognizer.add_drawing(name, points)
        _save(library, library_path)
    except StrokeMatchError as e:
        _fail(e)

    verb = "Replaced" if replaced else "Added"
    print_success(f"{verb} '{name}' ({entry.shape.point_count} points)")


@app.command()
def remove(
    ctx: typer.Context,
    library_path: LibraryArg,
    name: Annotated[str, typer.Argument(help="Entry to remove", show_default=False)],
) -> None:
    """Remove an entry from the library."""
    state: CliState = ctx.obj

    try:
        library = _load(state, library_path)
        _session(state, library).remove_drawing(name)
        _save(library, library_path)
    except StrokeMatchError as e:
        _fail(e)

    print_success(f"Removed '{name}'")


@app.command()
def clear(
    ctx: typer.Context,
    library_path: LibraryArg,
) -> None:
    """Remove every entry except the reserved Empty entry."""
    state: CliState = ctx.obj

    try:
        library = _load(state, library_path)
        _session(state, library).clear_current_library()
        _save(library, library_path)
    except StrokeMatchError as e:
        _fail(e)

    print_success(f"Cleared library '{library.name}'")


@app.command("list")
def list_entries(
    ctx: typer.Context,
    library_path: LibraryArg,
) -> None:
    """List the entries of a library."""
    state: CliState = ctx.obj

    try:
        library = _load(state, library_path)
    except StrokeMatchError as e:
        _fail(e)

    console.print()
    print_entries(library)


@app.command()
def recognize(
    ctx: typer.Context,
    library_path: LibraryArg,
    stroke_path: StrokeArg,
    top: Annotated[
        int,
        typer.Option(
            "--top",
            "-t",
            help="Number of ranked candidates to show",
            min=1,
        ),
    ] = 5,
) -> None:
    """Recognize a stroke against the library."""
    state: CliState = ctx.obj

    try:
        library = _load(state, library_path)
        points = read_stroke(stroke_path)
        recognizer = _session(state, library)
        matches = recognizer.recognize_ranked(points)
    except StrokeMatchError as e:
        _fail(e)

    if matches and not state.quiet:
        print_step(f"Ranking {len(points)} points against {len(matches)} entries")
        console.print()
        print_matches(matches, limit=top)
    print_best_match(matches[0] if matches else None)


@app.command()
def compare(
    ctx: typer.Context,
    library_path: LibraryArg,
    first: Annotated[str, typer.Argument(help="Entry being scored", show_default=False)],
    second: Annotated[str, typer.Argument(help="Reference entry", show_default=False)],
) -> None:
    """Score one stored entry against another."""
    state: CliState = ctx.obj

    try:
        library = _load(state, library_path)
        for entry_name in (first, second):
            if entry_name not in library:
                raise EntryNotFoundError(entry_name)
        breakdown = library.score(library.get(first).shape, library.get(second))
    except StrokeMatchError as e:
        _fail(e)

    print_breakdown(first, second, breakdown)


@app.command()
def weights(
    ctx: typer.Context,
    library_path: LibraryArg,
    grid: Annotated[
        float | None,
        typer.Option("--grid", help="Grid map weight", min=0.0),
    ] = None,
    circle: Annotated[
        float | None,
        typer.Option("--circle", help="Circle map weight", min=0.0),
    ] = None,
    horizontal: Annotated[
        float | None,
        typer.Option("--horizontal", help="Horizontal flat map weight", min=0.0),
    ] = None,
    vertical: Annotated[
        float | None,
        typer.Option("--vertical", help="Vertical flat map weight", min=0.0),
    ] = None,
) -> None:
    """Show or change the scoring weights of a library.

    Weights that are not given keep their current value.
    """
    state: CliState = ctx.obj
    requested = {
        "grid": grid,
        "circle": circle,
        "horizontal": horizontal,
        "vertical": vertical,
    }

    try:
        library = _load(state, library_path)
        if all(value is None for value in requested.values()):
            if state.quiet:
                print_library_info(str(library_path), library)
            return

        current = library.weights.to_dict()
        library.set_weights(
            **{key: current[key] if value is None else value for key, value in requested.items()}
        )
        _save(library, library_path)
    except StrokeMatchError as e:
        _fail(e)

    w = library.weights
    print_success(
        f"Weights set to grid={w.grid:g} circle={w.circle:g} "
        f"horizontal={w.horizontal:g} vertical={w.vertical:g}"
    )


@app.command()
def precision(
    ctx: typer.Context,
    library_path: LibraryArg,
    value: Annotated[
        int,
        typer.Argument(help="New map resolution", min=1, max=32, show_default=False),
    ],
) -> None:
    """Re-encode every entry of a library at a new precision."""
    state: CliState = ctx.obj

    try:
        library = _load(state, library_path)
        _session(state, library).set_precision(value)
        _save(library, library_path)
    except StrokeMatchError as e:
        _fail(e)

    print_success(f"Re-encoded {len(library)} entries at precision {value}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
