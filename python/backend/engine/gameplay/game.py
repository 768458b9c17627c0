"""Core gameplay session — places labels and reports the outcome."""

from __future__ import annotations

import logging
from typing import Callable

from backend.engine.gamestate import GameState
from backend.models.board import Board, BoardError, Direction

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single game session.

    Board errors never escape a session call: the call returns ``False`` and
    the message is kept in ``last_error`` for the frontend to show.
    """

    def __init__(self, size: int) -> None:
        board = Board.new(size)
        self.size = board.size
        self.state = GameState(board)
        self.last_error: str | None = None

    @classmethod
    def from_board(cls, board: Board) -> "GamePlay":
        """Resume a session from an existing board (e.g. loaded from file)."""
        obj = object.__new__(cls)
        obj.size = board.size
        obj.state = GameState(board)
        obj.last_error = None
        if board.is_started():
            obj.state.start_clock()
        return obj

    # -- actions --------------------------------------------------------------

    def start(self, x: int, y: int) -> bool:
        """Place the first label at ``(x, y)``; the clock starts here."""
        if self._apply(lambda board: board.start_at(x, y)):
            self.state.start_clock()
            logger.info("Started %dx%d game at [%d, %d]", self.size, self.size, x, y)
            return True
        return False

    def move(self, direction: Direction) -> bool:
        """Jump in *direction*. Returns True if the label was placed."""
        if not self._apply(lambda board: board.next_move(direction)):
            return False
        if self.is_won:
            logger.info("Won %dx%d game", self.size, self.size)
        elif self.is_blocked:
            logger.info("Blocked at %d/%d", self.board.score(), self.board.cells)
        return True

    def undo(self) -> bool:
        """Take back the last placed label, including the starting 1."""
        if not self.state.rewind():
            self.last_error = "Nothing to undo"
            return False
        self.last_error = None
        if not self.board.is_started():
            # Back to an empty board; the next start resets the clock.
            self.state.pause()
        else:
            self.state.resume()
        logger.info("Undo to score %d", self.board.score())
        return True

    def restart(self) -> None:
        self.state = GameState(Board.new(self.size))
        self.last_error = None
        logger.info("Restarted %dx%d game", self.size, self.size)

    # -- queries --------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def moves(self) -> int:
        """Jumps made so far; the starting label is not a jump."""
        return max(self.board.score() - 1, 0)

    @property
    def is_won(self) -> bool:
        return self.board.is_won()

    @property
    def is_blocked(self) -> bool:
        return self.board.is_blocked()

    @property
    def is_over(self) -> bool:
        return self.is_won or self.is_blocked

    # -- helpers --------------------------------------------------------------

    def _apply(self, step: Callable[[Board], Board]) -> bool:
        try:
            board = step(self.board)
        except BoardError as err:
            self.last_error = str(err)
            logger.debug("Rejected: %s", err)
            return False
        self.state.advance(board)
        self.last_error = None
        return True
