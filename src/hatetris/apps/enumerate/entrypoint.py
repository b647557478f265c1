# src/hatetris/apps/enumerate/entrypoint.py
from __future__ import annotations

import argparse
import time
from collections import Counter
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from hatetris.agents.heuristic_agent import HeuristicAgent
from hatetris.config.resolve import build_engine, resolve_game_config
from hatetris.game.core.metrics import render_well
from hatetris.utils.logging import setup_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Enumerate every landing of a piece dropped into an empty well."
    )
    ap.add_argument("--config", type=str, default=None, help="YAML game config (path or name under configs/)")
    ap.add_argument("--width", type=int, default=None, help="override game.well_width")
    ap.add_argument("--depth", type=int, default=None, help="override game.well_depth")
    ap.add_argument("--bar", type=int, default=None, help="override game.bar")
    ap.add_argument("--rotation-system", type=str, default=None, help="override game.rotation_system")
    ap.add_argument(
        "--shape",
        type=str,
        default=None,
        help="shape id to enumerate (default: every shape of the rotation system)",
    )
    ap.add_argument("--show", type=int, default=0, help="print the N best landings per shape (heuristic order)")
    ap.add_argument("--log-level", type=str, default=None, help="override game.log_level")
    return ap.parse_args(argv)


def _summary_table(rows: list[dict[str, Any]], *, title: str) -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("shape", style="bold")
    table.add_column("landings", justify="right")
    table.add_column("distinct", justify="right")
    table.add_column("max score", justify="right")
    table.add_column("ms", justify="right")
    for r in rows:
        table.add_row(
            str(r["shape"]),
            str(r["landings"]),
            str(r["distinct"]),
            str(r["max_score"]),
            f"{r['ms']:.2f}",
        )
    return table


def run_enumerate(args: argparse.Namespace) -> int:
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
    logger = setup_logger(name="hatetris.enumerate", use_rich=True, level=cfg.log_level)
    engine = build_engine(cfg)
    agent = HeuristicAgent(engine=engine)

    shapes = [str(args.shape)] if args.shape else list(engine.shape_ids)
    unknown = [s for s in shapes if s not in engine.shape_ids]
    if unknown:
        logger.error("unknown shape(s) %s; known: %s", unknown, ",".join(engine.shape_ids))
        return 2

    console = Console()
    core = engine.empty_core()
    rows: list[dict[str, Any]] = []

    for shape_id in shapes:
        t0 = time.perf_counter()
        futures = engine.enumerate(core, shape_id)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0

        distinct = Counter(futures)
        rows.append(
            {
                "shape": shape_id,
                "landings": len(futures),
                "distinct": len(distinct),
                "max_score": max((f.score for f in futures), default=0),
                "ms": elapsed_ms,
            }
        )
        logger.info("[enumerate] shape=%s landings=%d distinct=%d", shape_id, len(futures), len(distinct))

        if int(args.show) > 0:
            for i, f in enumerate(agent.ranked(core, list(distinct))[: int(args.show)]):
                console.print(f"[bold]{shape_id}[/bold] #{i + 1} score={f.score}")
                console.print(render_well(f, engine.well_width, bar=engine.bar), highlight=False)

    console.print(
        _summary_table(
            rows,
            title=f"[enumerate] {cfg.rotation_system} {engine.well_width}x{engine.well_depth} bar={engine.bar}",
        )
    )
    return 0


__all__ = ["parse_args", "run_enumerate"]
