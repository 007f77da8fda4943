"""
Game controller: the single command surface for a front-end.

Commands (move, restart, set_mode) run to completion one at a time. Work that
has to wait (the computer's thinking pause, clearing the last-move highlight,
the score reset after a mode change) is parked in a Slot so any command that
invalidates it can cancel it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple

from .config import GameConfig, Mode
from .errors import InvalidMove
from .game_basics import (
    Board,
    Cell,
    GameResult,
    Line,
    Mark,
    Outcome,
    apply_move,
    empty_board,
    empty_cells,
    evaluate,
)
from .opponent import OpponentStrategy
from .scheduling import Scheduler, Slot
from .scores import Score, ScoreStore, ScoreTracker
from .turns import TurnScheduler, TurnState

COMPUTER_MARK = Mark.SECOND


@dataclass(frozen=True)
class Projection:
    """Everything a renderer needs to draw the current state."""

    board: Tuple[Cell, ...]
    turn: TurnState
    status_text: str
    winning_line: Optional[Line]
    score: Score
    mode: Mode
    highlight_cells: Tuple[int, ...] = ()
    enabled_cells: Tuple[int, ...] = ()
    score_labels: Tuple[str, str, str] = ("Player X", "Player O", "Draw")


Listener = Callable[[Projection], None]


def status_text(result: GameResult, turn: TurnState, mode: Mode) -> str:
    vs_ai = mode is Mode.HUMAN_VS_AI
    if result.outcome is Outcome.DRAW:
        return "Draw!"
    if result.outcome is Outcome.WIN:
        if result.winner is Mark.FIRST:
            return "You win!" if vs_ai else "Player X wins!"
        return "AI wins!" if vs_ai else "Player O wins!"
    x_next = turn is TurnState.X_TURN
    if vs_ai:
        return "Your move" if x_next else "AI is thinking..."
    return "X's turn" if x_next else "O's turn"


def score_labels(mode: Mode) -> Tuple[str, str, str]:
    if mode is Mode.HUMAN_VS_AI:
        return ("You (X)", "AI (O)", "Draw")
    return ("Player X", "Player O", "Draw")


class GameController:
    def __init__(
        self,
        store: ScoreStore,
        scheduler: Scheduler,
        config: Optional[GameConfig] = None,
        strategy: Optional[OpponentStrategy] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.strategy = strategy or OpponentStrategy(seed=self.config.seed)
        self.scores = ScoreTracker(store)
        self.scores.load()
        self.mode = self.config.initial_mode
        self.board: Board = empty_board()
        self.turns = TurnScheduler()
        self.result = GameResult.in_progress()
        self.winning_line: Optional[Line] = None
        self.highlight_cells: Tuple[int, ...] = ()
        self._opponent_task = Slot(scheduler)
        self._highlight_task = Slot(scheduler)
        self._score_reset_task = Slot(scheduler)
        self._listeners: List[Listener] = []

    # -- queries ---------------------------------------------------------

    @property
    def is_computer_turn(self) -> bool:
        return self.mode is Mode.HUMAN_VS_AI and self.turns.acting_mark is COMPUTER_MARK

    @property
    def opponent_pending(self) -> bool:
        return self._opponent_task.pending

    @property
    def score_reset_pending(self) -> bool:
        return self._score_reset_task.pending

    def projection(self) -> Projection:
        if self.turns.game_over or self.is_computer_turn:
            enabled: Sequence[int] = ()
        else:
            enabled = empty_cells(self.board)
        return Projection(
            board=self.board,
            turn=self.turns.state,
            status_text=status_text(self.result, self.turns.state, self.mode),
            winning_line=self.winning_line,
            score=replace(self.scores.score),
            mode=self.mode,
            highlight_cells=self.highlight_cells,
            enabled_cells=tuple(enabled),
            score_labels=score_labels(self.mode),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- commands --------------------------------------------------------

    def click(self, index: int) -> bool:
        """Human input; ignored while the computer is to move."""
        if self.is_computer_turn:
            logging.debug("Ignoring click at %d: computer to move", index)
            return False
        return self.move(index)

    def move(self, index: int) -> bool:
        """Play ``index`` for the side to move. Returns False if nothing changed."""
        mark = self.turns.acting_mark
        if mark is None:
            logging.debug("Ignoring move at %d: game over", index)
            return False
        try:
            board = apply_move(self.board, index, mark)
        except InvalidMove as e:
            logging.debug("Ignoring %s", e)
            return False

        self._opponent_task.cancel()
        self.board = board
        self.result = evaluate(board)
        self.turns.advance(self.result)
        logging.debug("%s played %d -> %s", mark.symbol, index, self.result)
        self._set_highlight((index,))

        if self.result.is_terminal:
            self.winning_line = self.result.line
            logging.info("Game over: %s", self.result)
            self.scores.record_result(self.result)
        elif self.is_computer_turn:
            self._opponent_task.schedule(self.config.opponent_delay, self._play_opponent)
        self._notify()
        return True

    def restart(self) -> None:
        self._opponent_task.cancel()
        self._highlight_task.cancel()
        self.board = empty_board()
        self.turns.restart()
        self.result = GameResult.in_progress()
        self.winning_line = None
        self.highlight_cells = ()
        self._notify()

    def set_mode(self, mode: Mode) -> None:
        """Switch mode and restart; the score is zeroed after a short grace delay."""
        logging.info("Mode -> %s", mode.value)
        self.mode = mode
        self.restart()
        self._score_reset_task.schedule(self.config.score_reset_delay, self._reset_scores)

    def close(self) -> None:
        self._opponent_task.cancel()
        self._highlight_task.cancel()
        self._score_reset_task.cancel()
        self._listeners.clear()

    # -- deferred work ---------------------------------------------------

    def _play_opponent(self) -> None:
        if not self.is_computer_turn:
            return
        idx = self.strategy.choose_move(self.board, COMPUTER_MARK)
        self.move(idx)

    def _set_highlight(self, cells: Tuple[int, ...]) -> None:
        self.highlight_cells = cells
        self._highlight_task.schedule(self.config.highlight_delay, self._clear_highlight)

    def _clear_highlight(self) -> None:
        self.highlight_cells = ()
        self._notify()

    def _reset_scores(self) -> None:
        self.scores.reset()
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        view = self.projection()
        for listener in list(self._listeners):
            listener(view)
