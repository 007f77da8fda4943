"""
Session score counters and their persisted snapshot.

The snapshot is a single key-value entry whose value is
``{"player1_wins": int, "player2_wins": int, "draws": int}``. It is read once
at startup and rewritten in full after every change.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol

from .errors import PersistedStateCorrupt
from .game_basics import GameResult, Mark, Outcome

SCORE_KEY = "tic_tac_toe_scores"


@dataclass
class Score:
    player1_wins: int = 0
    player2_wins: int = 0
    draws: int = 0

    @property
    def total(self) -> int:
        return self.player1_wins + self.player2_wins + self.draws

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Any) -> "Score":
        """Build a Score from a stored snapshot.

        Missing fields default to 0; a field of the wrong type or a negative
        count makes the whole snapshot corrupt.
        """
        if not isinstance(data, Mapping):
            raise PersistedStateCorrupt(f"score snapshot is not an object: {data!r}")
        values: Dict[str, int] = {}
        for name in ("player1_wins", "player2_wins", "draws"):
            v = data.get(name, 0)
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                raise PersistedStateCorrupt(f"bad value for {name}: {v!r}")
            values[name] = v
        return cls(**values)


class ScoreStore(Protocol):
    def load(self) -> Optional[Mapping[str, Any]]:
        """Return the stored snapshot, None if absent; raise PersistedStateCorrupt if unreadable."""

    def save(self, snapshot: Mapping[str, int]) -> None:
        ...


class MemoryScoreStore:
    """In-process store; nothing survives the process."""

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        self.data: Dict[str, Any] = {}
        if initial is not None:
            self.data[SCORE_KEY] = initial
        self.saves = 0

    def load(self) -> Optional[Mapping[str, Any]]:
        return self.data.get(SCORE_KEY)

    def save(self, snapshot: Mapping[str, int]) -> None:
        self.data[SCORE_KEY] = dict(snapshot)
        self.saves += 1


class JsonScoreStore:
    """JSON object file holding the snapshot under a single key."""

    def __init__(self, path: Path, key: str = SCORE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _read(self) -> Optional[Dict[str, Any]]:
        try:
            if not self.path.exists():
                return None
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistedStateCorrupt(f"cannot read {self.path}: {e}") from e
        if not isinstance(raw, dict):
            raise PersistedStateCorrupt(f"{self.path} does not hold a JSON object")
        return raw

    def load(self) -> Optional[Mapping[str, Any]]:
        raw = self._read()
        if raw is None:
            return None
        return raw.get(self.key)

    def save(self, snapshot: Mapping[str, int]) -> None:
        # keep unrelated keys if the file is readable; a corrupt file is replaced
        try:
            payload = self._read() or {}
        except PersistedStateCorrupt:
            payload = {}
        payload[self.key] = dict(snapshot)
        dir_name = self.path.parent
        temp_path = None
        try:
            dir_name.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(dir=dir_name, prefix=".scores.", text=True)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            os.replace(temp_path, self.path)
            temp_path = None
        except OSError as e:
            logging.warning("Could not save scores to %s: %s", self.path, e)
        finally:
            if temp_path is not None and os.path.exists(temp_path):
                os.remove(temp_path)


class ScoreTracker:
    def __init__(self, store: ScoreStore) -> None:
        self.store = store
        self.score = Score()

    def load(self) -> Score:
        try:
            snapshot = self.store.load()
            self.score = Score() if snapshot is None else Score.from_mapping(snapshot)
        except PersistedStateCorrupt as e:
            logging.warning("Score snapshot unusable, starting from zero: %s", e)
            self.score = Score()
        return self.score

    def record_result(self, result: GameResult) -> None:
        if result.outcome is Outcome.IN_PROGRESS:
            return
        if result.outcome is Outcome.DRAW:
            self.score.draws += 1
        elif result.winner is Mark.FIRST:
            self.score.player1_wins += 1
        else:
            self.score.player2_wins += 1
        logging.info("Recorded %s; score=%s", result, self.score.to_dict())
        self._persist()

    def reset(self) -> None:
        self.score = Score()
        self._persist()

    def _persist(self) -> None:
        self.store.save(self.score.to_dict())
