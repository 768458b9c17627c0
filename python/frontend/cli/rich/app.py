"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output and the shared single-key
input handler. Includes a menu for size selection, play, and high scores.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.models.board import MAX_SIZE, MIN_SIZE, Board, Direction
from backend.models.highscore import HighScoreEntry, HighScoreManager
from frontend.cli.input_handler import get_key

console = Console()

# Keypad layout: 7 8 9 / 4 . 6 / 1 2 3.
_KEYPAD: dict[str, Direction] = {
    "8": Direction.UP,
    "9": Direction.UP_RIGHT,
    "6": Direction.RIGHT,
    "3": Direction.DOWN_RIGHT,
    "2": Direction.DOWN,
    "1": Direction.DOWN_LEFT,
    "4": Direction.LEFT,
    "7": Direction.UP_LEFT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

_STEPS: dict[str, tuple[int, int]] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _keys(*pairs: tuple[str, str]) -> Text:
    line = Text()
    for key, what in pairs:
        line.append(f"  {key}", style="bold cyan")
        line.append(f"  {what} ", style="dim")
    return line


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board, selected: tuple[int, int] | None = None) -> Table:
    """Return a Rich Table of the grid.

    Reachable cells are marked, the cursor is highlighted, and *selected*
    (the start picker's position) is shown in reverse video.
    """
    width = len(str(board.cells))
    targets = {board.valid_move(d) for d in board.possible_moves()}
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width, justify="right")

    for y, row in enumerate(board.rows()):
        cells: list[str] = []
        for x, val in enumerate(row):
            if (x, y) == selected:
                cells.append(f"[reverse]{'·':>{width}}[/reverse]")
            elif val == 0 and (x, y) in targets:
                cells.append(f"[bold cyan]{'+':>{width}}[/bold cyan]")
            elif val == 0:
                cells.append(f"[dim]{'·':>{width}}[/dim]")
            elif board.is_started() and (x, y) == (board.x, board.y):
                cells.append(f"[bold black on yellow]{val:>{width}}[/bold black on yellow]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


# -- menu screen --------------------------------------------------------------


def _draw_menu(sel_size: int) -> None:
    console.clear()

    sizes = Text()
    for s in range(MIN_SIZE, MAX_SIZE + 1):
        if s > MIN_SIZE:
            sizes.append(" ")
        style = "bold green on #313244" if s == sel_size else "dim"
        sizes.append(f" {s}×{s} ", style=style)

    nav = Text("  ← →  change size", style="dim")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("2", style="dim bold")
    opts.append("  Scores    ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(sizes),
        Align.center(nav),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]N U M B E R   J U M P[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


# -- game screens -------------------------------------------------------------


def _draw_picker(game: GamePlay, selected: tuple[int, int]) -> None:
    console.clear()
    size = game.size
    panel = Panel(
        Align.center(_render_board(game.board, selected)),
        title=f"[bold cyan]Choose a start  {size}×{size}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(
            _keys(("↑↓←→", "select"), ("Enter", "place 1"), ("Q", "back"))
        )
    )


def _draw_game(game: GamePlay, status: str = "") -> None:
    console.clear()

    size = game.size
    board = game.board

    stats = Text()
    stats.append("  Score: ", style="dim")
    stats.append(f"{board.score()}/{board.cells}", style="bold yellow")
    stats.append("    Jumps: ", style="dim")
    stats.append(str(game.moves), style="bold yellow")
    stats.append("    Available: ", style="dim")
    stats.append(str(len(board.possible_moves())), style="bold yellow")
    stats.append("    Undos: ", style="dim")
    stats.append(str(game.state.undos), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    panel = Panel(
        Align.center(_render_board(board)),
        title=f"[bold cyan]Number Jump  {size}×{size}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(
        Align.center(
            _keys(
                ("7 8 9 / 4 6 / 1 2 3", "jump"),
                ("U", "undo"),
                ("R", "restart"),
                ("Q", "back"),
            )
        )
    )


def _draw_end(game: GamePlay) -> None:
    console.clear()

    size = game.size
    board = game.board

    banner = Text()
    if game.is_won:
        banner.append("\n  ★ ", style="bold yellow")
        banner.append("CONGRATULATIONS!", style="bold green")
        banner.append(f"  All {board.cells} cells filled!  ", style="green")
        banner.append("★\n", style="bold yellow")
        border = "bold green"
    else:
        banner.append("\n  BLOCKED", style="bold red")
        banner.append(f"  No jump left from {board.score()}.\n", style="red")
        border = "red"

    stats = Text()
    stats.append("  Score: ", style="dim")
    stats.append(f"{board.score()}/{board.cells}", style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    panel = Panel(
        Group(
            Align.center(_render_board(board)),
            Align.center(banner),
            Align.center(stats),
        ),
        title=f"[{border}]Number Jump  {size}×{size}[/{border}]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_highscores(manager: HighScoreManager) -> None:
    """Full-screen high-scores view (used from the menu)."""
    console.clear()

    sizes = manager.get_all_sizes()
    parts: list[Align] = []

    if not sizes:
        parts.append(Align.center(Text("  No high scores yet.", style="dim")))

    for size in sizes:
        hs_table = Table(
            title=f"{size}×{size}",
            title_style="bold cyan",
            box=rich.box.ROUNDED,
            border_style="dim",
        )
        hs_table.add_column("#", justify="right", style="dim", width=3)
        hs_table.add_column("Score", justify="right", style="yellow")
        hs_table.add_column("Time", justify="right", style="yellow")
        hs_table.add_column("Date", style="dim")

        for i, e in enumerate(manager.get_scores(size)[:10], 1):
            score = f"{e.score}/{e.cells}" + (" ★" if e.won else "")
            hs_table.add_row(str(i), score, f"{e.time:.1f}s", e.date)
        parts.append(Align.center(hs_table))

    panel = Panel(
        Group(*parts),
        title="[bold]HIGH  SCORES[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game loops ---------------------------------------------------------------


def _pick_start(game: GamePlay) -> bool:
    """Let the player choose the cell for label 1. False means backed out."""
    x = y = game.size // 2
    while True:
        _draw_picker(game, (x, y))
        key = get_key()
        if key in _STEPS:
            dx, dy = _STEPS[key]
            x = min(max(x + dx, 0), game.size - 1)
            y = min(max(y + dy, 0), game.size - 1)
        elif key == "enter":
            return game.start(x, y)
        elif key == "quit":
            return False


def _record(game: GamePlay, manager: HighScoreManager) -> None:
    entry = HighScoreEntry(
        score=game.board.score(),
        cells=game.board.cells,
        won=game.is_won,
        time=round(game.state.elapsed_time, 2),
        date=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )
    manager.add_score(game.size, entry)


def _play_session(game: GamePlay, manager: HighScoreManager) -> bool:
    """Play a started game to the end. True means play another one.

    A blocked run is only recorded once the player leaves the end screen,
    so the last jumps can still be undone from there.
    """
    status = ""
    while True:
        while not game.is_over:
            _draw_game(game, status)
            status = ""
            key = get_key()

            if key in _KEYPAD:
                direction = _KEYPAD[key]
                if game.move(direction):
                    status = f"[cyan]Jumped[/cyan] [bold]{direction.label}[/bold]"
                else:
                    status = f"[red]{game.last_error}[/red]"
            elif key == "undo":
                if not game.undo():
                    status = f"[yellow]{game.last_error}[/yellow]"
                elif not game.board.is_started():
                    # Undid the starting label; choose a new start.
                    if not _pick_start(game):
                        return False
            elif key == "restart":
                game.restart()
                if not _pick_start(game):
                    return False
            elif key == "quit":
                return False

        # -- finished ----------------------------------------------------------
        game.state.pause()
        _draw_end(game)
        hint = "R to play again, Q to go back"
        if not game.is_won:
            hint = "U to undo, " + hint
        console.print(Align.center(Text(f"\n  Press {hint}.\n", style="dim")))

        while True:
            key = get_key()
            if key == "undo" and not game.is_won:
                game.undo()
                status = "[yellow]Took back the last jump.[/yellow]"
                break
            if key in ("restart", "quit"):
                _record(game, manager)
                return key == "restart"


def _play_game(size: int, manager: HighScoreManager) -> None:
    while True:
        game = GamePlay(size)
        if not _pick_start(game):
            return
        if not _play_session(game, manager):
            return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(size: int, data_dir: Path) -> None:
    manager = HighScoreManager(data_dir / "highscores.json")
    sel_size = size

    while True:
        _draw_menu(sel_size)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key == "left":
            sel_size = max(MIN_SIZE, sel_size - 1)
        elif key == "right":
            sel_size = min(MAX_SIZE, sel_size + 1)
        elif key in ("1", "enter"):
            _play_game(sel_size, manager)
        elif key in ("2", "help"):
            _draw_highscores(manager)


# -- public entry point -------------------------------------------------------


def run(size: int, data_dir: Path) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(size, data_dir)
