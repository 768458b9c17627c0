from backend.models.board import (
    Board,
    BoardError,
    CellOccupiedError,
    Direction,
    InvalidDirectionError,
    NonPositiveValueError,
    NotStartedError,
    OutOfRangeError,
    ValueAlreadyUsedError,
    ValueTooLargeError,
)
from backend.models.highscore import HighScoreEntry, HighScoreManager

__all__ = [
    "Board",
    "BoardError",
    "CellOccupiedError",
    "Direction",
    "HighScoreEntry",
    "HighScoreManager",
    "InvalidDirectionError",
    "NonPositiveValueError",
    "NotStartedError",
    "OutOfRangeError",
    "ValueAlreadyUsedError",
    "ValueTooLargeError",
]
