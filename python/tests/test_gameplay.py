"""Session tests — GamePlay and GameState on top of the board model."""

from __future__ import annotations

import time

from backend.engine.gameplay import GamePlay
from backend.engine.gamestate import GameState
from backend.models.board import Board, Direction

from tests.test_board import WIN_5_MOVES


# -- game play ----------------------------------------------------------------


def test_new_game_is_empty() -> None:
    game = GamePlay(3)
    assert game.size == 5
    assert game.board == Board.new(5)
    assert game.moves == 0
    assert not game.is_over


def test_move_before_start_is_rejected() -> None:
    game = GamePlay(5)
    assert not game.move(Direction.DOWN)
    assert game.last_error == "Attempt to move with an empty board"
    assert game.board == Board.new(5)


def test_start_and_move() -> None:
    game = GamePlay(5)
    assert game.start(0, 0)
    assert game.last_error is None
    assert game.move(Direction.RIGHT)
    assert game.board.value_at(3, 0) == 2
    assert game.moves == 1


def test_invalid_move_keeps_board() -> None:
    game = GamePlay(5)
    game.start(0, 0)
    before = game.board
    assert not game.move(Direction.LEFT)
    assert game.last_error == "Moving in direction: 'Left' is invalid"
    assert game.board is before


def test_second_start_is_rejected() -> None:
    game = GamePlay(5)
    game.start(0, 0)
    assert not game.start(4, 4)
    assert "already used" in game.last_error
    assert game.board.value_at(4, 4) == 0


def test_undo() -> None:
    game = GamePlay(5)
    assert not game.undo()
    assert game.last_error == "Nothing to undo"

    game.start(0, 0)
    game.move(Direction.RIGHT)
    game.move(Direction.DOWN)
    assert game.undo()
    assert game.board.score() == 2
    assert (game.board.x, game.board.y) == (3, 0)
    assert game.board.value_at(3, 3) == 0
    assert game.state.undos == 1

    # The same jump is legal again after undoing it.
    assert game.move(Direction.DOWN)
    assert game.board.value_at(3, 3) == 3


def test_undo_back_to_empty() -> None:
    game = GamePlay(5)
    game.start(2, 2)
    assert game.undo()
    assert not game.board.is_started()
    assert game.start(0, 0)


def test_restart() -> None:
    game = GamePlay(7)
    game.start(3, 3)
    game.move(Direction.UP)
    game.restart()
    assert game.board == Board.new(7)
    assert game.state.depth == 0
    assert game.last_error is None


def test_full_game() -> None:
    game = GamePlay(5)
    game.start(0, 0)
    for direction in WIN_5_MOVES:
        assert not game.is_over
        assert game.move(direction)
    assert game.is_won
    assert game.is_blocked
    assert game.is_over
    assert game.moves == 24
    assert game.state.depth == 25


def test_from_board() -> None:
    board = Board.new(6).start_at(0, 0)
    game = GamePlay.from_board(board)
    assert game.size == 6
    assert game.board is board
    assert game.move(Direction.DOWN_RIGHT)
    assert game.board.value_at(2, 2) == 2


# -- game state ---------------------------------------------------------------


def test_state_pause_freezes_clock() -> None:
    state = GameState(Board.new(5))
    state.pause()
    frozen = state.elapsed_time
    assert state.elapsed_time == frozen
    state.resume()
    assert state.elapsed_time >= frozen


def test_state_history() -> None:
    empty = Board.new(5)
    state = GameState(empty)
    started = empty.start_at(1, 1)
    state.advance(started)
    assert state.board is started
    assert state.depth == 1
    assert state.rewind()
    assert state.board is empty
    assert not state.rewind()
    assert state.undos == 1


# -- clock --------------------------------------------------------------------


def test_clock_waits_for_first_label(monkeypatch) -> None:
    now = [1000.0]
    monkeypatch.setattr(time, "time", lambda: now[0])

    game = GamePlay(5)
    now[0] += 30.0  # time spent choosing a start cell
    assert game.state.elapsed_time == 0.0

    game.start(0, 0)
    now[0] += 5.0
    assert game.state.elapsed_time == 5.0


def test_clock_stops_on_undo_to_empty_board(monkeypatch) -> None:
    now = [1000.0]
    monkeypatch.setattr(time, "time", lambda: now[0])

    game = GamePlay(5)
    game.start(0, 0)
    now[0] += 4.0
    game.undo()
    now[0] += 60.0
    assert game.state.elapsed_time == 4.0

    # Placing a new start begins a fresh run.
    game.start(2, 2)
    now[0] += 1.0
    assert game.state.elapsed_time == 1.0


def test_undo_resumes_paused_clock(monkeypatch) -> None:
    now = [1000.0]
    monkeypatch.setattr(time, "time", lambda: now[0])

    game = GamePlay(5)
    game.start(0, 0)
    game.move(Direction.RIGHT)
    now[0] += 2.0
    game.state.pause()
    now[0] += 100.0
    game.undo()
    now[0] += 3.0
    assert game.state.elapsed_time == 5.0
