"""ttt_engine package.

Board rules, turn flow, the computer opponent, persisted scores and the
controller that ties them together for a front-end.

Convenience imports are exposed for common workflows.
"""

from .config import GameConfig, Mode, load_config
from .controller import GameController, Projection
from .errors import InvalidMove, PersistedStateCorrupt
from .game_basics import GameResult, Mark, Outcome, apply_move, empty_board, evaluate
from .opponent import OpponentStrategy
from .scheduling import AsyncioScheduler
from .scores import JsonScoreStore, MemoryScoreStore, Score, ScoreTracker
from .turns import TurnScheduler, TurnState

__all__ = [
    "GameController",
    "Projection",
    "GameConfig",
    "Mode",
    "load_config",
    "Mark",
    "GameResult",
    "Outcome",
    "apply_move",
    "empty_board",
    "evaluate",
    "InvalidMove",
    "PersistedStateCorrupt",
    "OpponentStrategy",
    "AsyncioScheduler",
    "Score",
    "ScoreTracker",
    "JsonScoreStore",
    "MemoryScoreStore",
    "TurnScheduler",
    "TurnState",
]
