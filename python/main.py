#!/usr/bin/env python3
"""Number Jump.

Place 1 anywhere on the grid, then jump three cells across or two cells
diagonally to an empty cell and place the next number. Fill every cell.

Usage::

    python main.py                # Rich terminal menu, 7×7 selected
    python main.py -s 10          # start the menu on 10×10
    python main.py --scores       # view high scores
"""

import logging
import sys
from enum import StrEnum
from pathlib import Path

import typer

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"
LOG_FILE = "number-jump.log"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

logger = logging.getLogger("number_jump")


class LogLevel(StrEnum):
    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"
    critical = "CRITICAL"


# -- helpers ------------------------------------------------------------------


def _configure_logging(data_dir: Path, level: LogLevel) -> None:
    # The terminal is redrawn on every key, so logs go to a file.
    data_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=data_dir / LOG_FILE,
        level=level.value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_highscores(data_dir: Path) -> None:
    from backend.models.highscore import HighScoreManager

    manager = HighScoreManager(data_dir / "highscores.json")
    sizes = manager.get_all_sizes()

    typer.echo("\n  === HIGH SCORES ===")
    if not sizes:
        typer.echo("  No high scores yet.\n")
        return
    for size in sizes:
        typer.echo(f"\n  --- {size}x{size} ---")
        for i, e in enumerate(manager.get_scores(size)[:10], 1):
            mark = "  won" if e.won else ""
            typer.echo(
                f"  {i:>2}. {e.score:>3}/{e.cells:<3}  {e.time:>7.1f}s  ({e.date}){mark}"
            )
    typer.echo("")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    size: int = typer.Option(
        7, "-s", "--size",
        min=5, max=16,
        help="Grid size (5-16).",
    ),
    scores: bool = typer.Option(
        False, "--scores",
        help="Show high scores and exit.",
    ),
    data_dir: Path = typer.Option(
        DATA_DIR, "--data-dir",
        envvar="NUMBER_JUMP_DATA_DIR",
        help="Where high scores and the log file are kept.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        envvar="NUMBER_JUMP_LOG_LEVEL",
        case_sensitive=False,
        help="Logging level for the log file.",
    ),
) -> None:
    """Number Jump puzzle."""
    _configure_logging(data_dir, log_level)

    if scores:
        _print_highscores(data_dir)
        return

    from frontend.cli.rich.app import run

    logger.info("Launching rich frontend at %dx%d", size, size)
    run(size=size, data_dir=data_dir)


if __name__ == "__main__":
    app()
