"""Turn sequencing: X_TURN <-> O_TURN until a terminal result, then GAME_OVER."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from .game_basics import GameResult, Mark


class TurnState(Enum):
    X_TURN = "x_turn"
    O_TURN = "o_turn"
    GAME_OVER = "game_over"


_MARK_FOR_TURN = {TurnState.X_TURN: Mark.FIRST, TurnState.O_TURN: Mark.SECOND}


class TurnScheduler:
    def __init__(self) -> None:
        self.state = TurnState.X_TURN

    @property
    def game_over(self) -> bool:
        return self.state is TurnState.GAME_OVER

    @property
    def acting_mark(self) -> Optional[Mark]:
        return _MARK_FOR_TURN.get(self.state)

    def advance(self, result: GameResult) -> TurnState:
        """Apply the result of the move just played.

        GAME_OVER is sticky; only restart() leaves it.
        """
        if self.state is TurnState.GAME_OVER:
            return self.state
        if result.is_terminal:
            self.state = TurnState.GAME_OVER
        elif self.state is TurnState.X_TURN:
            self.state = TurnState.O_TURN
        else:
            self.state = TurnState.X_TURN
        return self.state

    def restart(self) -> None:
        self.state = TurnState.X_TURN
