# cli.py
import logging
import shlex
from pathlib import Path
from typing import Annotated, Optional

import numpy as np
import typer

from .grid_document import GridDocument, Point
from .history_engine import DEFAULT_MAX_HISTORY, HistoryEngine
from .logger import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(pretty_exceptions_show_locals=False, add_completion=False)


def _log_status(engine: HistoryEngine):
    logger.info(
        f"undo: {engine.undo_description!r} (empty={engine.undo_empty}), "
        f"redo: {engine.redo_description!r} (empty={engine.redo_empty}), "
        f"dirty: {engine.is_dirty}"
    )


def _parse_point_list(args: list[str], lineno: int) -> list[Point]:
    if not args or len(args) % 2:
        raise typer.BadParameter(f"line {lineno}: expected pairs of ROW COL indices")
    try:
        coords = [int(a) for a in args]
    except ValueError:
        raise typer.BadParameter(f"line {lineno}: indices must be integers")
    return [Point(coords[i], coords[i + 1]) for i in range(0, len(coords), 2)]


def _check_points(doc: GridDocument, points: list[Point], lineno: int):
    for p in points:
        if not (0 <= p.x < doc.shape[0] and 0 <= p.y < doc.shape[1]):
            raise typer.BadParameter(
                f"line {lineno}: {p} is outside the grid of shape {doc.shape}"
            )


def run_script(doc: GridDocument, engine: HistoryEngine, lines: list[str]):
    """Apply an edit script to ``doc`` through ``engine``."""
    for lineno, line in enumerate(lines, start=1):
        try:
            tokens = shlex.split(line, comments=True)
        except ValueError as e:
            raise typer.BadParameter(f"line {lineno}: {e}")
        if not tokens:
            continue
        cmd, *args = tokens
        cmd = cmd.lower()

        if cmd == "set":
            if len(args) < 3:
                raise typer.BadParameter(f"line {lineno}: usage: set ROW COL VALUE [LABEL]")
            points = _parse_point_list(args[:2], lineno)
            _check_points(doc, points, lineno)
            try:
                value = float(args[2])
            except ValueError:
                raise typer.BadParameter(f"line {lineno}: VALUE must be a number")
            label = " ".join(args[3:])
            engine.execute(doc.set_values_action(points, [value], label))
        elif cmd == "average":
            points = _parse_point_list(args, lineno)
            _check_points(doc, points, lineno)
            engine.execute(doc.average_action(points))
        elif cmd == "clip":
            if not 1 <= len(args) <= 3:
                raise typer.BadParameter(
                    f"line {lineno}: usage: clip MINDEPTH [MAXDEPTH [LANDVALUE]]"
                )
            try:
                numbers = [float(a) for a in args]
            except ValueError:
                raise typer.BadParameter(f"line {lineno}: clip takes numbers")
            engine.execute(doc.clip_action(*numbers))
        elif cmd == "undo":
            if engine.can_undo():
                engine.undo()
            else:
                logger.warning(f"line {lineno}: nothing to undo")
        elif cmd == "redo":
            if engine.can_redo():
                engine.redo()
            else:
                logger.warning(f"line {lineno}: nothing to redo")
        elif cmd == "save":
            if engine.can_save():
                engine.acknowledge_save()
            else:
                logger.info(f"line {lineno}: no unsaved changes")
        elif cmd == "clear":
            engine.clear_history()
        elif cmd == "status":
            _log_status(engine)
        else:
            raise typer.BadParameter(f"line {lineno}: unknown command {cmd!r}")


@app.command()
def replay(
    grid_file: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="Raw >f4 grid file"),
    ],
    script: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="Edit script"),
    ],
    nx: Annotated[int, typer.Option(help="Number of points in x")],
    ny: Annotated[int, typer.Option(help="Number of points in y")],
    max_history: Annotated[
        int, typer.Option(help="Maximum number of undo steps")
    ] = DEFAULT_MAX_HISTORY,
    output: Annotated[
        Optional[Path],
        typer.Option(help="Where `save` writes the grid (default: GRID_FILE)"),
    ] = None,
    log_level: Annotated[str, typer.Option(help="Logging level")] = "INFO",
):
    """
    Replay an edit script against a grid file with undo/redo.\n
    ROW indexes the ny axis (0..ny-1) and COL the nx axis (0..nx-1).\n
    Script commands, one per line, `#` starts a comment:\n
        - set ROW COL VALUE [LABEL]\n
        - average ROW COL [ROW COL ...]\n
        - clip MINDEPTH [MAXDEPTH [LANDVALUE]]\n
        - undo, redo, save, clear, status\n
    Example:\n
        `undoredo replay bathy.bin edits.txt --nx 120 --ny 80`
    """
    setup_logging(log_level)
    out = output or grid_file

    doc = GridDocument.from_file(grid_file, nx, ny)
    engine = HistoryEngine(max_history, save_state=lambda: doc.save(out))

    lines = script.read_text().splitlines()
    logger.info(f"Replaying {script} ({len(lines)} lines)")
    run_script(doc, engine, lines)
    _log_status(engine)

    if engine.is_dirty:
        logger.warning("Unsaved changes are discarded, add `save` to the script")


@app.command()
def info(
    grid_file: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, help="Raw >f4 grid file"),
    ],
    nx: Annotated[int, typer.Option(help="Number of points in x")],
    ny: Annotated[int, typer.Option(help="Number of points in y")],
):
    """Print the shape and value range of a grid file."""
    setup_logging(logging.INFO)
    doc = GridDocument.from_file(grid_file, nx, ny)
    logger.info(f"Shape: {doc.shape}")
    logger.info(f"Min value: {np.min(doc.grid)}")
    logger.info(f"Max value: {np.max(doc.grid)}")


app_click = typer.main.get_command(app)

if __name__ == "__main__":
    app()
