"""Exceptions raised inside the engine.

None of these reach the caller of a controller command: they are raised at
the point of failure and handled one layer up.
"""


class TicTacToeError(Exception):
    """Base class for engine errors."""


class InvalidMove(TicTacToeError, ValueError):
    """Target cell is occupied or outside the board."""

    def __init__(self, index: int, reason: str = "cell occupied") -> None:
        super().__init__(f"invalid move at index {index}: {reason}")
        self.index = index
        self.reason = reason


class PersistedStateCorrupt(TicTacToeError):
    """Stored score snapshot is missing fields of the right type or unparsable."""
