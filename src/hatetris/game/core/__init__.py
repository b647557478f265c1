# src/hatetris/game/core/__init__.py
from __future__ import annotations

from hatetris.game.core.engine import Engine, GetNextCoreStates
from hatetris.game.core.errors import ConfigurationError, HatetrisError, StrategyError
from hatetris.game.core.explorer import next_core_states, position_hash
from hatetris.game.core.rotation_system import BoxRotationSystem, RotationSystem
from hatetris.game.core.transition import next_state
from hatetris.game.core.types import MOVES, CoreState, Move, Orientation, Piece, WellState

__all__ = [
    "Engine",
    "GetNextCoreStates",
    "HatetrisError",
    "ConfigurationError",
    "StrategyError",
    "next_core_states",
    "position_hash",
    "RotationSystem",
    "BoxRotationSystem",
    "next_state",
    "MOVES",
    "CoreState",
    "Move",
    "Orientation",
    "Piece",
    "WellState",
]
