"""
Runtime settings for a game session, with environment overrides.

Recognised variables: TTT_OPPONENT_DELAY, TTT_HIGHLIGHT_DELAY,
TTT_SCORE_RESET_DELAY (seconds), TTT_MODE (ai|2p), TTT_SEED (int) and
TTT_NO_PERSIST (any of 1/true/yes).
"""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional


class Mode(Enum):
    HUMAN_VS_HUMAN = "2p"
    HUMAN_VS_AI = "ai"


@dataclass(frozen=True)
class GameConfig:
    opponent_delay: float = 0.65
    highlight_delay: float = 0.30
    score_reset_delay: float = 0.35
    initial_mode: Mode = Mode.HUMAN_VS_AI
    seed: Optional[int] = None
    persist: bool = True


def _non_negative_float(raw: str) -> float:
    v = float(raw)
    if not math.isfinite(v) or v < 0:
        raise ValueError("must be a finite number >= 0")
    return v


def _flag(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


_ENV_FIELDS: Mapping[str, tuple] = {
    "TTT_OPPONENT_DELAY": ("opponent_delay", _non_negative_float),
    "TTT_HIGHLIGHT_DELAY": ("highlight_delay", _non_negative_float),
    "TTT_SCORE_RESET_DELAY": ("score_reset_delay", _non_negative_float),
    "TTT_MODE": ("initial_mode", lambda raw: Mode(raw.strip().lower())),
    "TTT_SEED": ("seed", int),
    "TTT_NO_PERSIST": ("persist", lambda raw: not _flag(raw)),
}


def load_config(env: Optional[Mapping[str, str]] = None, base: Optional[GameConfig] = None) -> GameConfig:
    """Return ``base`` (defaults if None) with any valid environment overrides applied.

    Unparsable values are logged and ignored.
    """
    env = os.environ if env is None else env
    cfg = base or GameConfig()
    overrides = {}
    for var, (field_name, parse) in _ENV_FIELDS.items():
        raw = env.get(var)
        if raw is None or raw == "":
            continue
        try:
            overrides[field_name] = parse(raw)
        except ValueError as e:
            logging.warning("Ignoring %s=%r: %s", var, raw, e)
    return replace(cfg, **overrides)
