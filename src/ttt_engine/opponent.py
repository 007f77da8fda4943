"""
Computer opponent: take a win, else block, else pick a random empty cell.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import numpy as np

from .game_basics import Board, Mark, empty_cells
from .tactics import blocking_moves, immediate_winning_moves

Chooser = Callable[[Sequence[int]], int]


def numpy_chooser(seed: Optional[int] = None) -> Chooser:
    """Uniform choice among candidate indices backed by a numpy Generator."""
    rng = np.random.default_rng(seed)

    def choose(candidates: Sequence[int]) -> int:
        return int(rng.choice(list(candidates)))

    return choose


class OpponentStrategy:
    def __init__(self, chooser: Optional[Chooser] = None, seed: Optional[int] = None) -> None:
        self.chooser = chooser if chooser is not None else numpy_chooser(seed)

    def choose_move(self, board: Board, mark: Mark) -> int:
        """Return one empty index for ``mark``.

        The caller must only ask while at least one cell is empty.
        """
        wins = immediate_winning_moves(board, mark)
        if wins:
            logging.debug("opponent %s takes win at %d", mark.symbol, wins[0])
            return wins[0]
        blocks = blocking_moves(board, mark)
        if blocks:
            logging.debug("opponent %s blocks at %d", mark.symbol, blocks[0])
            return blocks[0]
        free = empty_cells(board)
        mv = self.chooser(free)
        if mv not in free:
            raise ValueError(f"chooser returned {mv}, not one of {free}")
        logging.debug("opponent %s plays random %d", mark.symbol, mv)
        return mv
