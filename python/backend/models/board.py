"""Board model for the number jump puzzle.

The board is an immutable value: ``start_at`` and ``next_move`` return a
new :class:`Board` and never touch the receiver, so a rejected move leaves
nothing to roll back and any board can be handed to independent callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)

MIN_SIZE = 5
MAX_SIZE = 16

# Distance from the cursor for horizontal or vertical jumps.
HV_OFFSET = 3

# Distance from the cursor on both axes for diagonal jumps.
DIAG_OFFSET = 2


class Direction(StrEnum):
    """The eight jumps, in the order ``possible_moves`` reports them."""

    DOWN = "down"
    DOWN_RIGHT = "down right"
    RIGHT = "right"
    UP_RIGHT = "up right"
    UP = "up"
    UP_LEFT = "up left"
    LEFT = "left"
    DOWN_LEFT = "down left"

    @property
    def offset(self) -> tuple[int, int]:
        """``(dx, dy)`` applied to the cursor; y grows downward."""
        return _OFFSETS[self]

    @property
    def label(self) -> str:
        return self.value.title()


_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.DOWN: (0, HV_OFFSET),
    Direction.DOWN_RIGHT: (DIAG_OFFSET, DIAG_OFFSET),
    Direction.RIGHT: (HV_OFFSET, 0),
    Direction.UP_RIGHT: (DIAG_OFFSET, -DIAG_OFFSET),
    Direction.UP: (0, -HV_OFFSET),
    Direction.UP_LEFT: (-DIAG_OFFSET, -DIAG_OFFSET),
    Direction.LEFT: (-HV_OFFSET, 0),
    Direction.DOWN_LEFT: (-DIAG_OFFSET, DIAG_OFFSET),
}


# -- errors -------------------------------------------------------------------


class BoardError(Exception):
    """Base class for rejected board operations."""


class NotStartedError(BoardError):
    def __init__(self) -> None:
        super().__init__("Attempt to move with an empty board")


class InvalidDirectionError(BoardError):
    def __init__(self, direction: Direction) -> None:
        self.direction = direction
        super().__init__(f"Moving in direction: '{direction.label}' is invalid")


class OutOfRangeError(BoardError):
    def __init__(self, x: int, y: int, size: int) -> None:
        self.x, self.y = x, y
        super().__init__(f"cannot set cell [{x}, {y}], out of range ({size})")


class NonPositiveValueError(BoardError):
    def __init__(self, x: int, y: int, value: int) -> None:
        self.x, self.y, self.value = x, y, value
        super().__init__(f"cannot clear cell [{x}, {y}]")


class ValueAlreadyUsedError(BoardError):
    def __init__(self, x: int, y: int, value: int) -> None:
        self.x, self.y, self.value = x, y, value
        super().__init__(f"cannot set cell [{x}, {y}] = {value}, value already used")


class ValueTooLargeError(BoardError):
    def __init__(self, x: int, y: int, value: int, cells: int) -> None:
        self.x, self.y, self.value = x, y, value
        super().__init__(
            f"cannot set cell [{x}, {y}] = {value}, larger than ({cells})"
        )


class CellOccupiedError(BoardError):
    def __init__(self, x: int, y: int) -> None:
        self.x, self.y = x, y
        super().__init__(f"cannot change value of cell [{x}, {y}]")


# -- board --------------------------------------------------------------------


@dataclass(frozen=True)
class Board:
    """A square grid of labels ``0..cells``; 0 marks an unvisited cell.

    ``values`` is row-major (index ``y * size + x``) and ``(x, y)`` is the
    cursor, the cell holding the most recently placed label.
    """

    size: int
    values: tuple[int, ...]
    x: int = 0
    y: int = 0

    # -- construction helpers -------------------------------------------------

    @classmethod
    def new(cls, size: int) -> Board:
        """Return an empty board, with *size* clamped to ``[5, 16]``."""
        size = min(max(size, MIN_SIZE), MAX_SIZE)
        return cls(size=size, values=(0,) * (size * size))

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> Board:
        """Rebuild a board from a row-major label list.

        Example::

            Board.from_flat(5, [1, 0, 0, 2, 0] + [0] * 20)

        The labels present must be exactly ``1..n`` for some ``n``; the
        cursor is placed on ``n``.
        """
        if not MIN_SIZE <= size <= MAX_SIZE:
            raise ValueError(
                f"Board size must be between {MIN_SIZE} and {MAX_SIZE}, got {size}."
            )
        if len(flat) != size * size:
            raise ValueError(
                f"Expected {size * size} cells for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        placed = sorted(v for v in flat if v != 0)
        if placed != list(range(1, len(placed) + 1)):
            raise ValueError(
                "Labels must run from 1 upward with no gaps or repeats."
            )
        x = y = 0
        if placed:
            index = flat.index(placed[-1])
            y, x = divmod(index, size)
        return cls(size=size, values=tuple(flat), x=x, y=y)

    # -- queries --------------------------------------------------------------

    @property
    def cells(self) -> int:
        return self.size * self.size

    def value_at(self, x: int, y: int) -> int:
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise IndexError(f"cell [{x}, {y}] is outside a {self.size}×{self.size} board")
        return self.values[y * self.size + x]

    def is_started(self) -> bool:
        return self.value_at(self.x, self.y) > 0

    def score(self) -> int:
        """The highest label on the board, which is also the filled-cell count."""
        return max(self.values)

    def valid_move(self, direction: Direction) -> tuple[int, int] | None:
        """Return the target of a jump in *direction*, or ``None``.

        A target is valid when the board is started, the target lies on the
        board and the target cell is still empty.
        """
        if not self.is_started():
            return None
        dx, dy = direction.offset
        tx, ty = self.x + dx, self.y + dy
        if 0 <= tx < self.size and 0 <= ty < self.size and self.value_at(tx, ty) == 0:
            return tx, ty
        return None

    def possible_moves(self) -> list[Direction]:
        """Directions with a valid target, in ``Direction`` order."""
        return [d for d in Direction if self.valid_move(d) is not None]

    def is_won(self) -> bool:
        """All cells filled and the cursor holds the maximum label.

        Both conditions are checked, neither is inferred from the other.
        """
        return self.value_at(self.x, self.y) == self.cells and 0 not in self.values

    def is_blocked(self) -> bool:
        """Started with no move left; a won board is blocked too."""
        return self.is_started() and not self.possible_moves()

    def rows(self) -> list[list[int]]:
        n = self.size
        return [list(self.values[r * n : (r + 1) * n]) for r in range(n)]

    def render(self) -> str:
        width = len(str(self.cells))
        return "\n".join(
            " ".join(f"{v:>{width}}" for v in row) for row in self.rows()
        )

    def __str__(self) -> str:
        return self.render()

    # -- moves ----------------------------------------------------------------

    def start_at(self, x: int, y: int) -> Board:
        """Place 1 at ``(x, y)`` and return the started board."""
        return self._set_value(x, y, 1)

    def next_move(self, direction: Direction) -> Board:
        """Jump in *direction* and place the next label there."""
        if not self.is_started():
            raise NotStartedError()
        target = self.valid_move(direction)
        if target is None:
            logger.debug("Rejected %s from [%d, %d]", direction.label, self.x, self.y)
            raise InvalidDirectionError(direction)
        return self._set_value(*target, self.score() + 1)

    def _set_value(self, x: int, y: int, value: int) -> Board:
        # The order of these checks decides which error a caller sees.
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise OutOfRangeError(x, y, self.size)
        if value < 1:
            raise NonPositiveValueError(x, y, value)
        if value <= self.score():
            raise ValueAlreadyUsedError(x, y, value)
        if value > self.cells:
            raise ValueTooLargeError(x, y, value, self.cells)
        if self.value_at(x, y) != 0:
            raise CellOccupiedError(x, y)

        values = list(self.values)
        values[y * self.size + x] = value
        logger.debug("Placed %d at [%d, %d]", value, x, y)
        return Board(size=self.size, values=tuple(values), x=x, y=y)
