# src/hatetris/agents/heuristic_agent.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from hatetris.game.core.engine import Engine
from hatetris.game.core.metrics import board_snapshot_metrics
from hatetris.game.core.types import CoreState


@dataclass(frozen=True)
class HeuristicWeights:
    # CodemyRoad: a*agg_height + b*complete_lines + c*holes + d*bumpiness
    a_agg_height: float = -0.510066
    b_lines: float = 0.760666
    c_holes: float = -0.35663
    d_bumpiness: float = -0.184483


class HeuristicAgent:
    """
    CodemyRoad-style player that picks a landing directly from the explorer's
    output instead of steering the piece move by move.

    Landings that end the game are only chosen when nothing else is reachable.
    """

    def __init__(self, *, engine: Engine, weights: HeuristicWeights = HeuristicWeights()) -> None:
        self.engine = engine
        self.w = weights

    def phi(self, before: CoreState, after: CoreState) -> float:
        m = board_snapshot_metrics(after, self.engine.well_width)
        lines = int(after.score) - int(before.score)
        return (
                self.w.a_agg_height * m.agg_height
                + self.w.b_lines * lines
                + self.w.c_holes * m.holes
                + self.w.d_bumpiness * m.bumpiness
        )

    def choose(self, core: CoreState, futures: Sequence[CoreState]) -> Optional[CoreState]:
        """Best landing among `futures`, or None when there are none."""
        best: Optional[CoreState] = None
        best_key = None
        for f in futures:
            key = (not self.engine.is_game_over(f), self.phi(core, f))
            if best_key is None or key > best_key:
                best, best_key = f, key
        return best

    def ranked(self, core: CoreState, futures: Sequence[CoreState]) -> List[CoreState]:
        return sorted(futures, key=lambda f: self.phi(core, f), reverse=True)

    def place(self, core: CoreState, shape_id: str) -> Optional[CoreState]:
        return self.choose(core, self.engine.enumerate(core, shape_id))


__all__ = ["HeuristicAgent", "HeuristicWeights"]
