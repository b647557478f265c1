# src/hatetris/strategies/burgiel.py
from __future__ import annotations

from typing import Any, Tuple

from hatetris.game.core.types import CoreState
from hatetris.strategies.base import GetNextCoreStates


def burgiel_ai(
        current_core_state: CoreState,
        current_ai_state: Any,
        get_next_core_states: GetNextCoreStates,
) -> Tuple[str, str]:
    """
    Burgiel (1997): alternate S and Z pieces, starting with S.

    The state is the shape handed out last time.
    """
    shape_id = "Z" if current_ai_state == "S" else "S"
    return shape_id, shape_id


__all__ = ["burgiel_ai"]
