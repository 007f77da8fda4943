"""Shared fixtures: a virtual-clock scheduler and controller factories."""
from __future__ import annotations

from typing import Callable, List, Optional

import pytest

from ttt_engine.config import GameConfig, Mode
from ttt_engine.controller import GameController
from ttt_engine.game_basics import Board, Mark
from ttt_engine.opponent import OpponentStrategy
from ttt_engine.scores import MemoryScoreStore


class _Timer:
    def __init__(self, when: float, seq: int, callback: Callable[[], None]) -> None:
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic stand-in for an event loop; time only moves in advance()."""

    def __init__(self) -> None:
        self.now = 0.0
        self._timers: List[_Timer] = []
        self._seq = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Timer:
        self._seq += 1
        t = _Timer(self.now + delay, self._seq, callback)
        self._timers.append(t)
        return t

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self._timers if not t.cancelled and t.when <= target]
            if not due:
                break
            t = min(due, key=lambda x: (x.when, x.seq))
            self._timers.remove(t)
            self.now = t.when
            t.callback()
        self.now = target
        self._timers = [t for t in self._timers if not t.cancelled]

    def run_all(self) -> None:
        while self.pending:
            self.advance(max(t.when for t in self._timers if not t.cancelled) - self.now)


def first_free(candidates) -> int:
    return min(candidates)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def store() -> MemoryScoreStore:
    return MemoryScoreStore()


@pytest.fixture
def make_controller(scheduler, store):
    def _make(mode: Mode = Mode.HUMAN_VS_HUMAN, chooser=first_free,
              config: Optional[GameConfig] = None) -> GameController:
        cfg = config or GameConfig(initial_mode=mode)
        return GameController(store, scheduler, cfg, OpponentStrategy(chooser=chooser))

    return _make


def board_from(s: str) -> Board:
    """Board from a picture string like 'XX_OO____'."""
    lookup = {"X": Mark.FIRST, "O": Mark.SECOND, "_": None}
    return tuple(lookup[c] for c in s)
