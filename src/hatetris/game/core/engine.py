# src/hatetris/game/core/engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from hatetris.game.core.constants import MAX_WELL_WIDTH, MIN_WELL_WIDTH
from hatetris.game.core.errors import ConfigurationError
from hatetris.game.core.explorer import next_core_states
from hatetris.game.core.rotation_system import BoxRotationSystem, RotationSystem, validate_rotation_system
from hatetris.game.core.transition import next_state
from hatetris.game.core.types import CoreState, Move, Piece

if TYPE_CHECKING:
    from hatetris.config.game_config import GameConfig

GetNextCoreStates = Callable[[CoreState, str], List[CoreState]]


@dataclass(frozen=True)
class Engine:
    """
    Rotation system + well geometry, fixed for one game instance.

    The two entry points a controller needs are apply() (one player move) and
    enumerate() (every landing of a new piece). Both are pure.
    """

    rotation_system: RotationSystem
    well_width: int
    well_depth: int
    bar: int

    def __post_init__(self) -> None:
        validate_rotation_system(self.rotation_system)
        if int(self.well_width) < MIN_WELL_WIDTH:
            raise ConfigurationError(
                f"Can't have well with width {self.well_width} less than {MIN_WELL_WIDTH}"
            )
        if int(self.well_width) > MAX_WELL_WIDTH:
            raise ConfigurationError(
                f"Can't have well with width {self.well_width} more than {MAX_WELL_WIDTH}"
            )
        if int(self.well_depth) < int(self.bar):
            raise ConfigurationError(
                f"Can't have well with depth {self.well_depth} less than bar at {self.bar}"
            )
        if int(self.bar) < 1:
            raise ConfigurationError(f"bar must be >= 1, got {self.bar}")

    @classmethod
    def from_config(cls, cfg: "GameConfig") -> "Engine":
        rotation_system = BoxRotationSystem.named(cfg.rotation_system)
        return cls(
            rotation_system=rotation_system,
            well_width=int(cfg.well_width),
            well_depth=int(cfg.well_depth),
            bar=int(cfg.bar),
        )

    @property
    def shape_ids(self) -> Tuple[str, ...]:
        return tuple(self.rotation_system.rotations)

    def empty_core(self) -> CoreState:
        return CoreState.empty(self.well_depth)

    def spawn(self, shape_id: str) -> Piece:
        return self.rotation_system.place_new_piece(self.well_width, shape_id)

    def apply(self, core: CoreState, piece: Piece, move: Move) -> Tuple[Optional[Piece], CoreState]:
        return next_state(
            self.rotation_system,
            self.well_width,
            self.well_depth,
            self.bar,
            core,
            piece,
            Move.parse(move),
        )

    def enumerate(self, core: CoreState, shape_id: str) -> List[CoreState]:
        return next_core_states(
            self.rotation_system,
            self.well_width,
            self.well_depth,
            self.bar,
            core,
            shape_id,
        )

    def bind_enumerate(self) -> GetNextCoreStates:
        """The explorer pre-bound to this engine, as handed to enemy strategies."""

        def get_next_core_states(core: CoreState, shape_id: str) -> List[CoreState]:
            return self.enumerate(core, shape_id)

        return get_next_core_states

    def is_game_over(self, core: CoreState) -> bool:
        # Cells at row bar-2 or higher can't exist without one at row bar-1.
        return core.well[self.bar - 1] != 0


__all__ = ["Engine", "GetNextCoreStates"]
