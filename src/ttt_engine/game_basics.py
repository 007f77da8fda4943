"""
Game basics: board representation, serialization, move application, result evaluation.
Notes:
- A board is a tuple of 9 cells, each None (empty) or a Mark. FIRST always starts.
- Board strings use 0=empty, 1=FIRST (X), 2=SECOND (O).
- Boards are never mutated in place; apply_move returns a fresh tuple.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

from .errors import InvalidMove


class Mark(IntEnum):
    FIRST = 1
    SECOND = 2

    @property
    def symbol(self) -> str:
        return "X" if self is Mark.FIRST else "O"

    @property
    def other(self) -> "Mark":
        return Mark.SECOND if self is Mark.FIRST else Mark.FIRST


Cell = Optional[Mark]
Board = Tuple[Cell, ...]
Line = Tuple[int, int, int]

BOARD_SIZE = 9

WIN_PATTERNS: Tuple[Line, ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class Outcome(Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class GameResult:
    outcome: Outcome
    winner: Optional[Mark] = None
    line: Optional[Line] = None

    @classmethod
    def in_progress(cls) -> "GameResult":
        return cls(Outcome.IN_PROGRESS)

    @classmethod
    def win(cls, mark: Mark, line: Line) -> "GameResult":
        return cls(Outcome.WIN, mark, line)

    @classmethod
    def draw(cls) -> "GameResult":
        return cls(Outcome.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.outcome is not Outcome.IN_PROGRESS

    def __str__(self) -> str:
        if self.outcome is Outcome.WIN:
            return f"win({self.winner.symbol}, {list(self.line)})"
        return self.outcome.value


def empty_board() -> Board:
    return (None,) * BOARD_SIZE


def empty_cells(board: Board) -> List[int]:
    return [i for i, v in enumerate(board) if v is None]


def apply_move(board: Board, index: int, mark: Mark) -> Board:
    if not 0 <= index < BOARD_SIZE:
        raise InvalidMove(index, "out of range")
    if board[index] is not None:
        raise InvalidMove(index)
    lst = list(board)
    lst[index] = mark
    return tuple(lst)


def evaluate(board: Board) -> GameResult:
    """Classify a board.

    Lines are checked in WIN_PATTERNS order and the first uniformly marked one
    wins. A full board with no such line is a draw; anything else is in progress.
    """
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        v = board[a]
        if v is not None and v == board[b] and v == board[c]:
            return GameResult.win(v, pattern)
    if all(v is not None for v in board):
        return GameResult.draw()
    return GameResult.in_progress()


def serialize_board(board: Board) -> str:
    return ''.join('0' if cell is None else str(int(cell)) for cell in board)


def deserialize_board(board_str: str) -> Board:
    """Parse a 9-char 0/1/2 string; raises ValueError on anything else."""
    raw = board_str.strip()
    if len(raw) != BOARD_SIZE or any(c not in "012" for c in raw):
        raise ValueError(f"board string must be 9 chars of 0/1/2, got {board_str!r}")
    return tuple(None if c == '0' else Mark(int(c)) for c in raw)


def get_piece_counts(board: Board) -> Tuple[int, int]:
    return board.count(Mark.FIRST), board.count(Mark.SECOND)


def current_mark(board: Board) -> Mark:
    x, o = get_piece_counts(board)
    return Mark.FIRST if x == o else Mark.SECOND


def is_valid_state(board: Board) -> bool:
    x_count, o_count = get_piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False
    # no double winners
    def count_wins(p: Mark) -> int:
        return sum(1 for pat in WIN_PATTERNS if all(board[i] == p for i in pat))
    x_wins, o_wins = count_wins(Mark.FIRST), count_wins(Mark.SECOND)
    if x_wins and o_wins:
        return False
    if x_wins and x_count != o_count + 1:
        return False
    if o_wins and x_count != o_count:
        return False
    return True
