# src/hatetris/apps/duel/entrypoint.py
from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from hatetris.agents.heuristic_agent import HeuristicAgent
from hatetris.config.resolve import build_engine, resolve_game_config
from hatetris.game.core.engine import Engine
from hatetris.game.core.errors import StrategyError
from hatetris.game.core.metrics import board_snapshot_metrics
from hatetris.strategies.base import invoke_strategy
from hatetris.strategies.catalog import STRATEGY_REGISTRY, describe_strategies, resolve_strategy
from hatetris.utils.logging import setup_logger

DUEL_PIECE_FAILED = "Caught this exception while asking the enemy AI for a piece. Duel abandoned."


@dataclass(frozen=True)
class DuelResult:
    enemy: str
    pieces: int
    lines: int
    game_over: bool
    holes: int
    max_height: int
    shapes: dict[str, int]
    elapsed_s: float


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Play a heuristic player against one or more enemy strategies (no rendering)."
    )
    ap.add_argument("--config", type=str, default=None, help="YAML game config (path or name under configs/)")
    ap.add_argument("--width", type=int, default=None)
    ap.add_argument("--depth", type=int, default=None)
    ap.add_argument("--bar", type=int, default=None)
    ap.add_argument("--rotation-system", type=str, default=None)
    ap.add_argument(
        "--enemies",
        type=str,
        default=None,
        help=f"comma-separated enemies (default: game.enemy). known: {describe_strategies()}",
    )
    ap.add_argument("--max-pieces", type=int, default=500, help="stop a game after N pieces (0 disables)")
    ap.add_argument("--log-every", type=int, default=50, help="log progress every N pieces (0 disables)")
    ap.add_argument("--log-level", type=str, default=None, help="override game.log_level")
    return ap.parse_args(argv)


def play_duel(
        *,
        engine: Engine,
        enemy_name: str,
        max_pieces: int = 0,
        log_every: int = 0,
        logger: Any = None,
) -> DuelResult:
    """
    One game: the enemy picks each piece, the player picks its landing.

    Ends when a landing reaches the bar row or after max_pieces (if > 0).
    """
    strategy = resolve_strategy(enemy_name)
    agent = HeuristicAgent(engine=engine)
    get_next_core_states = engine.bind_enumerate()

    core = engine.empty_core()
    ai_state: Any = None
    pieces = 0
    shapes: dict[str, int] = {}
    t0 = time.perf_counter()

    while not engine.is_game_over(core):
        if max_pieces > 0 and pieces >= max_pieces:
            break

        shape_id, ai_state = invoke_strategy(
            strategy,
            core=core,
            ai_state=ai_state,
            get_next_core_states=get_next_core_states,
            shape_ids=engine.shape_ids,
            interpretation=DUEL_PIECE_FAILED,
        )
        shapes[shape_id] = shapes.get(shape_id, 0) + 1

        landing = agent.place(core, shape_id)
        if landing is None:
            break
        core = landing
        pieces += 1

        if logger is not None and log_every > 0 and pieces % log_every == 0:
            logger.info("[duel] enemy=%s pieces=%d lines=%d", enemy_name, pieces, core.score)

    m = board_snapshot_metrics(core, engine.well_width)
    return DuelResult(
        enemy=str(enemy_name),
        pieces=int(pieces),
        lines=int(core.score),
        game_over=bool(engine.is_game_over(core)),
        holes=int(m.holes),
        max_height=int(m.max_height),
        shapes=shapes,
        elapsed_s=float(time.perf_counter() - t0),
    )


def _render_results(results: list[DuelResult]) -> Table:
    table = Table(title="[duel] RESULT", box=box.SIMPLE_HEAVY)
    table.add_column("enemy", style="bold")
    table.add_column("pieces", justify="right")
    table.add_column("lines", justify="right")
    table.add_column("over")
    table.add_column("holes", justify="right")
    table.add_column("height", justify="right")
    table.add_column("shapes")
    table.add_column("s", justify="right")
    for r in results:
        table.add_row(
            r.enemy,
            str(r.pieces),
            str(r.lines),
            "yes" if r.game_over else "no",
            str(r.holes),
            str(r.max_height),
            " ".join(f"{k}:{v}" for k, v in sorted(r.shapes.items())),
            f"{r.elapsed_s:.2f}",
        )
    return table


def run_duel(args: argparse.Namespace) -> int:
    cfg = resolve_game_config(
        config=args.config,
        overrides={
            "well_width": args.width,
            "well_depth": args.depth,
            "bar": args.bar,
            "rotation_system": args.rotation_system,
            "log_level": args.log_level,
        },
    )
    logger = setup_logger(name="hatetris.duel", use_rich=True, level=cfg.log_level)
    engine = build_engine(cfg)

    if args.enemies:
        enemies = [s.strip().lower() for s in str(args.enemies).split(",") if s.strip()]
        if not enemies:
            raise ValueError("--enemies must list at least one enemy")
    else:
        enemies = [cfg.enemy]

    unknown = [e for e in enemies if e not in STRATEGY_REGISTRY]
    if unknown:
        logger.error("unknown enemy(s) %s; known: %s", unknown, ",".join(sorted(STRATEGY_REGISTRY)))
        return 2

    results: list[DuelResult] = []
    for name in enemies:
        try:
            results.append(
                play_duel(
                    engine=engine,
                    enemy_name=name,
                    max_pieces=int(args.max_pieces),
                    log_every=int(args.log_every),
                    logger=logger,
                )
            )
        except StrategyError as e:
            logger.error("[duel] %s: %s", e.interpretation, e.real)
            return 1

    Console().print(_render_results(results))
    return 0


__all__ = ["DuelResult", "parse_args", "play_duel", "run_duel"]
