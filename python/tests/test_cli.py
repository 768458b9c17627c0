"""CLI tests — typer entry point, key mapping, and board rendering."""

from __future__ import annotations

import io
import os
import subprocess
import sys
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from backend.engine.gameplay import GamePlay
from backend.models.board import Board, Direction
from backend.models.highscore import HighScoreEntry, HighScoreManager
from frontend.cli.input_handler import resolve
from frontend.cli.rich import app as rich_app
from frontend.cli.rich.app import _KEYPAD, _render_board
from main import app

runner = CliRunner()


# -- entry point --------------------------------------------------------------


def test_scores_when_empty(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--scores", "--data-dir", str(tmp_path)])
    assert result.exit_code == 0
    assert "No high scores yet." in result.output


def test_scores_are_listed(tmp_path: Path) -> None:
    manager = HighScoreManager(tmp_path / "highscores.json")
    manager.add_score(
        5, HighScoreEntry(score=25, cells=25, won=True, time=61.2, date="2026-10-19 09:30")
    )
    result = runner.invoke(app, ["--scores", "--data-dir", str(tmp_path)])
    assert result.exit_code == 0
    assert "--- 5x5 ---" in result.output
    assert "25/25" in result.output
    assert "won" in result.output


@pytest.mark.parametrize("size", ["4", "17"])
def test_size_out_of_range_is_rejected(tmp_path: Path, size: str) -> None:
    result = runner.invoke(app, ["--scores", "-s", size, "--data-dir", str(tmp_path)])
    assert result.exit_code != 0


# -- input --------------------------------------------------------------------


@pytest.mark.parametrize(
    "ch,action",
    [
        ("w", "up"),
        ("D", "right"),
        ("u", "undo"),
        ("Q", "quit"),
        ("\x03", "quit"),
        ("\r", "enter"),
        ("7", "7"),
        ("\x01", ""),
    ],
)
def test_resolve(ch: str, action: str) -> None:
    assert resolve(ch) == action


def test_keypad_covers_every_direction() -> None:
    digits = {k: v for k, v in _KEYPAD.items() if k.isdigit()}
    assert sorted(digits.values()) == sorted(Direction)


# -- rendering ----------------------------------------------------------------


def test_render_board_shape() -> None:
    board = Board.new(6).start_at(0, 0)
    table = _render_board(board)
    assert len(table.columns) == 6
    assert table.row_count == 6


# -- log level ----------------------------------------------------------------
# Run as a separate process: pytest's own root handlers would turn
# ``logging.basicConfig`` into a no-op here.

MAIN = Path(__file__).resolve().parent.parent / "main.py"


def _run_main(*args: str) -> subprocess.CompletedProcess:
    env = {k: v for k, v in os.environ.items() if not k.startswith("NUMBER_JUMP_")}
    return subprocess.run(
        [sys.executable, str(MAIN), *args],
        capture_output=True,
        text=True,
        env=env,
        timeout=30,
    )


def test_unknown_log_level_is_a_usage_error(tmp_path: Path) -> None:
    result = _run_main("--scores", "--data-dir", str(tmp_path), "--log-level", "verbose")
    assert result.returncode == 2
    assert "Traceback" not in result.stderr
    assert not (tmp_path / "number-jump.log").exists()


@pytest.mark.parametrize("level", ["debug", "INFO", "Warning"])
def test_known_log_level_is_accepted(tmp_path: Path, level: str) -> None:
    result = _run_main("--scores", "--data-dir", str(tmp_path), "--log-level", level)
    assert result.returncode == 0, result.stderr
    assert "No high scores yet." in result.stdout
    assert (tmp_path / "number-jump.log").exists()


# -- play session -------------------------------------------------------------


def _corners_board() -> Board:
    # Labels 1-4 on the corners of a 5×5, cursor on (4, 4). The only jump
    # left is UP_LEFT into the centre, which blocks the game.
    flat = [0] * 25
    for label, (x, y) in enumerate([(0, 0), (4, 0), (0, 4), (4, 4)], 1):
        flat[y * 5 + x] = label
    return Board.from_flat(5, flat)


@pytest.fixture
def quiet_console(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(rich_app, "console", Console(file=io.StringIO()))


def _script(monkeypatch: pytest.MonkeyPatch, keys: list[str]) -> None:
    pending = iter(keys)
    monkeypatch.setattr(rich_app, "get_key", lambda: next(pending))


def test_blocked_run_can_be_undone_before_recording(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, quiet_console: None
) -> None:
    manager = HighScoreManager(tmp_path / "highscores.json")
    game = GamePlay.from_board(_corners_board())
    _script(monkeypatch, ["7", "undo", "quit"])

    assert not rich_app._play_session(game, manager)
    assert game.board.score() == 4
    assert game.board.value_at(2, 2) == 0
    assert game.state.undos == 1
    assert manager.get_scores(5) == []


def test_blocked_run_is_recorded_on_leaving(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, quiet_console: None
) -> None:
    manager = HighScoreManager(tmp_path / "highscores.json")
    game = GamePlay.from_board(_corners_board())
    _script(monkeypatch, ["7", "restart"])

    assert rich_app._play_session(game, manager)
    [entry] = manager.get_scores(5)
    assert (entry.score, entry.cells, entry.won) == (5, 25, False)
