"""
Tactics: immediate wins and the blocks they imply.
Notes:
- A block for one mark is an immediate win for the other, so both come from
  the same scan over empty cells in ascending index order.
"""
from typing import List

from .game_basics import Board, Mark, Outcome, apply_move, empty_cells, evaluate


def immediate_winning_moves(board: Board, mark: Mark) -> List[int]:
    wins: List[int] = []
    for i in empty_cells(board):
        res = evaluate(apply_move(board, i, mark))
        if res.outcome is Outcome.WIN and res.winner is mark:
            wins.append(i)
    return wins


def blocking_moves(board: Board, mark: Mark) -> List[int]:
    return immediate_winning_moves(board, mark.other)
