from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .config import GameConfig, Mode, load_config
from .controller import GameController, Projection
from .game_basics import (
    Board,
    Mark,
    current_mark,
    deserialize_board,
    empty_cells,
    evaluate,
    is_valid_state,
    serialize_board,
)
from .opponent import OpponentStrategy
from .paths import score_file
from .scheduling import AsyncioScheduler
from .scores import JsonScoreStore, MemoryScoreStore, ScoreTracker
from .tactics import blocking_moves, immediate_winning_moves

PLAY_HELP = "cells 1-9 to move, r = restart, m ai|2p = switch mode, q = quit"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe engine CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for the opponent's random fallback")

    p_play = sub.add_parser("play", help="Play in the terminal")
    p_play.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=None,
        help="ai (you vs computer) or 2p (two humans); default from TTT_MODE or ai",
    )
    p_play.add_argument("--no-persist", action="store_true", help="Keep scores in memory only")
    p_play.add_argument("--score-file", type=Path, default=None, help="Score snapshot path")

    p_eval = sub.add_parser("evaluate", help="Classify a board (9 digits, 0=empty,1=X,2=O)")
    p_eval.add_argument("--board", required=True, help="Board string, e.g., 110220000")

    p_opp = sub.add_parser("opponent", help="Show the computer's move for a board")
    p_opp.add_argument("--board", required=True, help="Board string, e.g., 110020000")
    p_opp.add_argument(
        "--mark", type=int, choices=[1, 2], default=None, help="Mark to move for (default: side to move)"
    )

    p_tac = sub.add_parser("tactics", help="List immediate wins and blocks for side-to-move")
    p_tac.add_argument("--board", required=True, help="Board string, e.g., 110020000")

    p_score = sub.add_parser("score", help="Persisted score utilities")
    p_score.add_argument("action", choices=["show", "reset"])
    p_score.add_argument("--score-file", type=Path, default=None, help="Score snapshot path")

    return p


def _print_info() -> None:
    import importlib.util
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")
    print(f"score_file={score_file()}")


def _parse_board(raw: str) -> Optional[Board]:
    try:
        b = deserialize_board(raw)
    except ValueError:
        logging.error("Invalid board string. Must be 9 chars of 0/1/2.")
        return None
    if not is_valid_state(b):
        logging.error("Board is not a valid reachable state.")
        return None
    return b


def render(view: Projection) -> str:
    cells = []
    for i, v in enumerate(view.board):
        if v is None:
            cells.append(str(i + 1))
        elif view.winning_line and i in view.winning_line:
            cells.append(v.symbol.lower())
        else:
            cells.append(v.symbol)
    rows = [" " + " | ".join(cells[r:r + 3]) for r in (0, 3, 6)]
    labels = view.score_labels
    score = view.score
    return "\n".join([
        rows[0], "---+---+---", rows[1], "---+---+---", rows[2],
        view.status_text,
        f"{labels[0]}: {score.player1_wins}  {labels[1]}: {score.player2_wins}  "
        f"{labels[2]}: {score.draws}",
    ])


async def _play(game: GameController) -> None:
    loop = asyncio.get_running_loop()
    print(PLAY_HELP)
    while True:
        if game.opponent_pending:
            await asyncio.sleep(0.05)
            continue
        print()
        print(render(game.projection()))
        try:
            line = await loop.run_in_executor(None, input, "> ")
        except EOFError:
            break
        cmd = line.strip().lower()
        if cmd in {"q", "quit", "exit"}:
            break
        if cmd in {"r", "restart"}:
            game.restart()
        elif cmd.startswith("m"):
            choice = cmd[1:].strip()
            try:
                game.set_mode(Mode(choice))
            except ValueError:
                print("Usage: m ai|2p")
        elif cmd.isdigit() and 1 <= int(cmd) <= 9:
            if not game.click(int(cmd) - 1):
                print("That move is not available.")
            elif game.opponent_pending:
                print(game.projection().status_text)
        else:
            print(PLAY_HELP)
    # let a pending score reset land before teardown
    while game.score_reset_pending:
        await asyncio.sleep(0.05)


def run_play(cfg: GameConfig, store_path: Optional[Path]) -> int:
    if cfg.persist:
        store = JsonScoreStore(store_path or score_file())
    else:
        store = MemoryScoreStore()

    async def _main() -> None:
        game = GameController(store, AsyncioScheduler(), cfg)
        try:
            await _play(game)
        finally:
            game.close()

    asyncio.run(_main())
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("ttt-engine"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    cfg = load_config()
    if ns.seed is not None:
        cfg = replace(cfg, seed=ns.seed)

    if ns.cmd == "play":
        if ns.mode is not None:
            cfg = replace(cfg, initial_mode=Mode(ns.mode))
        if ns.no_persist:
            cfg = replace(cfg, persist=False)
        return run_play(cfg, ns.score_file)

    if ns.cmd == "evaluate":
        b = _parse_board(ns.board)
        if b is None:
            return 2
        res = evaluate(b)
        logging.info("board=%s result=%s empty=%s", serialize_board(b), res, empty_cells(b))
        return 0

    if ns.cmd == "opponent":
        b = _parse_board(ns.board)
        if b is None:
            return 2
        if evaluate(b).is_terminal:
            logging.error("Board is already decided; no move to choose.")
            return 2
        mark = Mark(ns.mark) if ns.mark is not None else current_mark(b)
        mv = OpponentStrategy(seed=cfg.seed).choose_move(b, mark)
        logging.info("mark=%s move=%d", mark.symbol, mv)
        return 0

    if ns.cmd == "tactics":
        b = _parse_board(ns.board)
        if b is None:
            return 2
        mark = current_mark(b)
        logging.info(
            "to_move=%s wins=%s blocks=%s",
            mark.symbol,
            immediate_winning_moves(b, mark),
            blocking_moves(b, mark),
        )
        return 0

    if ns.cmd == "score":
        tracker = ScoreTracker(JsonScoreStore(ns.score_file or score_file()))
        if ns.action == "reset":
            tracker.reset()
            logging.info("Score reset")
            return 0
        s = tracker.load()
        logging.info(
            "player1_wins=%d player2_wins=%d draws=%d",
            s.player1_wins,
            s.player2_wins,
            s.draws,
        )
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
