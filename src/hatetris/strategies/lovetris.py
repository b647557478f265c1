# src/hatetris/strategies/lovetris.py
from __future__ import annotations

from typing import Any

from hatetris.game.core.types import CoreState
from hatetris.strategies.base import GetNextCoreStates


def lovetris_ai(
        current_core_state: CoreState,
        current_ai_state: Any,
        get_next_core_states: GetNextCoreStates,
) -> str:
    """All 4x1 pieces, all the time."""
    return "I"


__all__ = ["lovetris_ai"]
