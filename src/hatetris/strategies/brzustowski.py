# src/hatetris/strategies/brzustowski.py
from __future__ import annotations

from typing import Any, Optional, Tuple

from hatetris.game.core.types import CoreState
from hatetris.strategies.base import GetNextCoreStates
from hatetris.strategies.hatetris import Rating, rate_core_state

FORCING_SHAPE_IDS: Tuple[str, str] = ("S", "Z")


def _player_best(core: CoreState, shape_id: str, get_next_core_states: GetNextCoreStates) -> Optional[Rating]:
    ratings = [rate_core_state(f) for f in get_next_core_states(core, shape_id)]
    return max(ratings) if ratings else None


def brzustowski_ai(
        current_core_state: CoreState,
        current_ai_state: Any,
        get_next_core_states: GetNextCoreStates,
) -> Tuple[str, str]:
    """
    Brzustowski (1992): only S and Z pieces.

    Hands out whichever of the two leaves the player's best landing worse. On
    a tie it switches away from the shape handed out last time (S first). A
    shape with no landing at all counts as worst. The state is the last shape.
    """
    s_id, z_id = FORCING_SHAPE_IDS
    s_best = _player_best(current_core_state, s_id, get_next_core_states)
    z_best = _player_best(current_core_state, z_id, get_next_core_states)

    if s_best is None or (z_best is not None and s_best < z_best):
        shape_id = s_id
    elif z_best is None or z_best < s_best:
        shape_id = z_id
    else:
        shape_id = z_id if current_ai_state == s_id else s_id
    return shape_id, shape_id


__all__ = ["brzustowski_ai", "FORCING_SHAPE_IDS"]
