"""Tracks the state of a game in progress."""

from __future__ import annotations

import time

from backend.models.board import Board


class GameState:
    """Holds the current board, the boards it replaced, and elapsed time.

    The clock stays at zero until ``start_clock`` is called, which the
    session does once the first label is placed.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.undos: int = 0
        self._history: list[Board] = []
        self._start_time: float = 0.0
        self._elapsed_banked: float = 0.0
        self._running: bool = False

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def start_clock(self) -> None:
        self._elapsed_banked = 0.0
        self._start_time = time.time()
        self._running = True

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- history --------------------------------------------------------------

    def advance(self, board: Board) -> None:
        """Make *board* current, keeping the previous one for ``rewind``."""
        self._history.append(self.board)
        self.board = board

    def rewind(self) -> bool:
        if not self._history:
            return False
        self.board = self._history.pop()
        self.undos += 1
        return True

    @property
    def depth(self) -> int:
        return len(self._history)
