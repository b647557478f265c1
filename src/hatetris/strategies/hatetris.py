# src/hatetris/strategies/hatetris.py
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Tuple

from hatetris.game.core.metrics import stack_height
from hatetris.game.core.types import CoreState
from hatetris.strategies.base import GetNextCoreStates

CLASSIC_SHAPE_IDS: Tuple[str, ...] = ("I", "J", "L", "O", "S", "T", "Z")

Rating = Tuple[int, int]

# Worse than any reachable rating.
_WORST: Rating = (-(1 << 30), -(1 << 30))


def rate_core_state(core: CoreState) -> Rating:
    """
    Rating from the player's point of view: more lines first, then a lower stack.
    """
    return int(core.score), -stack_height(core)


def _player_best(
        core: CoreState,
        shape_id: str,
        get_next_core_states: GetNextCoreStates,
        shape_ids: Sequence[str],
        depth: int,
) -> Rating:
    best: Optional[Rating] = None
    for future in get_next_core_states(core, shape_id):
        if depth <= 0:
            r = rate_core_state(future)
        else:
            _, r = _enemy_worst(future, get_next_core_states, shape_ids, depth - 1)
        if best is None or r > best:
            best = r
    return _WORST if best is None else best


def _enemy_worst(
        core: CoreState,
        get_next_core_states: GetNextCoreStates,
        shape_ids: Sequence[str],
        depth: int,
) -> Tuple[str, Rating]:
    worst_id = shape_ids[0]
    worst: Optional[Rating] = None
    for shape_id in shape_ids:
        r = _player_best(core, shape_id, get_next_core_states, shape_ids, depth)
        # strict: ties go to the earliest shape
        if worst is None or r < worst:
            worst_id, worst = shape_id, r
    return worst_id, (_WORST if worst is None else worst)


def make_hatetris_ai(
        *,
        shape_ids: Sequence[str] = CLASSIC_SHAPE_IDS,
        lookahead: int = 0,
) -> Callable[[CoreState, Any, GetNextCoreStates], str]:
    """
    Build a HATETRIS-style enemy.

    For every shape the enemy works out the player's best landing, then hands
    out the shape whose best landing is worst. With lookahead > 0 a landing is
    rated by recursing: the enemy's own worst choice for the following piece.
    """
    ids = tuple(str(s) for s in shape_ids)
    if not ids:
        raise ValueError("make_hatetris_ai requires non-empty shape_ids")
    depth = int(lookahead)
    if depth < 0:
        raise ValueError(f"lookahead must be >= 0 (got {lookahead})")

    def hatetris_ai(
            current_core_state: CoreState,
            current_ai_state: Any,
            get_next_core_states: GetNextCoreStates,
    ) -> str:
        shape_id, _rating = _enemy_worst(current_core_state, get_next_core_states, ids, depth)
        return shape_id

    return hatetris_ai


hatetris_ai = make_hatetris_ai()


__all__ = ["CLASSIC_SHAPE_IDS", "Rating", "hatetris_ai", "make_hatetris_ai", "rate_core_state"]
