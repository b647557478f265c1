# src/hatetris/game/core/explorer.py
from __future__ import annotations

from collections import deque
from typing import Deque, List, Set, Tuple

from hatetris.game.core.constants import HASH_MARGIN
from hatetris.game.core.rotation_system import RotationSystem
from hatetris.game.core.transition import next_state
from hatetris.game.core.types import MOVES, CoreState, Piece


def position_hash(well_depth: int, orientation_count: int, piece: Piece) -> int:
    """
    Unique integer for a placement of one shape in a well of fixed depth.

    Mixed radix over (x, y, o):
      y varies over 0..well_depth+2, so radix well_depth+3
      o varies over 0..orientation_count-1
    x is the leading digit and may be negative without losing injectivity.
    """
    return (piece.x * (int(well_depth) + HASH_MARGIN) + piece.y) * int(orientation_count) + piece.o


def shape_band(rotation_system: RotationSystem, shape_id: str) -> Tuple[int, int]:
    """Rows [top, bottom) relative to the anchor touched by any orientation of a shape."""
    orientations = rotation_system.rotations[shape_id]
    top = min(o.y_min for o in orientations)
    bottom = max(o.y_min + o.y_dim for o in orientations)
    return top, bottom


def fast_forward(*, rotation_system: RotationSystem, well_depth: int, core: CoreState, piece: Piece) -> Piece:
    """
    Drop the piece while every row its shape can touch, in any orientation,
    stays empty.

    Inside an empty band every placement reachable at one height is also
    reachable one row lower, so the reachable landings are unchanged. Only the
    row entering the band is read; the full collision check is skipped.
    """
    well = core.well
    top, bottom = shape_band(rotation_system, piece.shape_id)
    first = piece.y + top
    below = piece.y + bottom
    if first < 0 or below > well_depth:
        return piece
    if any(well[r] != 0 for r in range(first, below)):
        return piece
    while below < well_depth and well[below] == 0:
        piece = piece.moved(dy=+1)
        below += 1
    return piece


def next_core_states(
        rotation_system: RotationSystem,
        well_width: int,
        well_depth: int,
        bar: int,
        core: CoreState,
        shape_id: str,
) -> List[CoreState]:
    """
    Every board configuration reachable by spawning `shape_id` and moving it
    until it locks.

    Flood fill over placements: each placement is expanded once (keyed by
    position_hash), every obstructed DOWN contributes its locked configuration.
    Lock outcomes are not de-duplicated; two placements locking into the same
    configuration both appear in the result.
    """
    orientation_count = len(rotation_system.rotations[shape_id])

    piece = rotation_system.place_new_piece(well_width, shape_id)
    piece = fast_forward(rotation_system=rotation_system, well_depth=well_depth, core=core, piece=piece)

    frontier: Deque[Piece] = deque([piece])
    seen: Set[int] = {position_hash(well_depth, orientation_count, piece)}

    possible_futures: List[CoreState] = []

    while frontier:
        current = frontier.popleft()
        for move in MOVES:
            new_piece, new_core = next_state(
                rotation_system, well_width, well_depth, bar, core, current, move
            )

            if new_piece is None:
                possible_futures.append(new_core)
                continue

            h = position_hash(well_depth, orientation_count, new_piece)
            if h not in seen:
                seen.add(h)
                frontier.append(new_piece)

    return possible_futures


__all__ = ["next_core_states", "position_hash", "fast_forward", "shape_band"]
