# src/hatetris/game/core/transition.py
from __future__ import annotations

from typing import Optional, Tuple

from hatetris.game.core.rotation_system import RotationSystem
from hatetris.game.core.types import CoreState, Move, Orientation, Piece


def full_row(well_width: int) -> int:
    return (1 << int(well_width)) - 1


def candidate_piece(rotation_system: RotationSystem, piece: Piece, move: Move) -> Piece:
    if move is Move.LEFT:
        return piece.moved(dx=-1)
    if move is Move.RIGHT:
        return piece.moved(dx=+1)
    if move is Move.DOWN:
        return piece.moved(dy=+1)
    if move is Move.ROTATE:
        return piece.rotated(len(rotation_system.rotations[piece.shape_id]))
    raise ValueError(f"unknown move {move!r}")


def orientation_of(rotation_system: RotationSystem, piece: Piece) -> Orientation:
    return rotation_system.rotations[piece.shape_id][piece.o]


def collides(
        *,
        rotation_system: RotationSystem,
        well_width: int,
        well_depth: int,
        core: CoreState,
        piece: Piece,
) -> bool:
    """
    True iff the placement runs off any edge of the well or overlaps a filled cell.
    """
    orientation = orientation_of(rotation_system, piece)
    x_actual = piece.x + orientation.x_min
    y_actual = piece.y + orientation.y_min

    if x_actual < 0 or x_actual + orientation.x_dim > well_width:
        return True
    if y_actual < 0 or y_actual + orientation.y_dim > well_depth:
        return True

    well = core.well
    for row, bits in enumerate(orientation.rows):
        if well[y_actual + row] & (bits << x_actual):
            return True
    return False


def lock_piece(
        *,
        rotation_system: RotationSystem,
        well_width: int,
        bar: int,
        core: CoreState,
        piece: Piece,
) -> CoreState:
    """
    Merge the piece into a copy of the well, then resolve line clears.

    Each row the piece touches is checked top to bottom against the well as it
    stands after any earlier clear in this same lock. A full row scores only
    if its absolute index is at or below the bar.
    """
    well = list(core.well)
    score = int(core.score)

    orientation = orientation_of(rotation_system, piece)
    x_actual = piece.x + orientation.x_min
    y_actual = piece.y + orientation.y_min

    for row, bits in enumerate(orientation.rows):
        well[y_actual + row] |= bits << x_actual

    full = full_row(well_width)
    for row in range(orientation.y_dim):
        y = y_actual + row
        if y >= bar and well[y] == full:
            for k in range(y, 0, -1):
                well[k] = well[k - 1]
            well[0] = 0
            score += 1

    return CoreState(well=tuple(well), score=score)


def next_state(
        rotation_system: RotationSystem,
        well_width: int,
        well_depth: int,
        bar: int,
        core: CoreState,
        piece: Piece,
        move: Move,
) -> Tuple[Optional[Piece], CoreState]:
    """
    Apply one move to a live piece.

    Returns:
      (candidate, core)       if the move is unobstructed
      (None, locked_core)     if a DOWN move is obstructed (the piece locks
                              where it was before the move)
      (piece, core)           if any other move is obstructed (no-op)

    The input piece must already rest legally in the well; this is not checked.
    """
    candidate = candidate_piece(rotation_system, piece, move)

    if not collides(
            rotation_system=rotation_system,
            well_width=well_width,
            well_depth=well_depth,
            core=core,
            piece=candidate,
    ):
        return candidate, core

    if move is Move.DOWN:
        locked = lock_piece(
            rotation_system=rotation_system,
            well_width=well_width,
            bar=bar,
            core=core,
            piece=piece,
        )
        return None, locked

    return piece, core


__all__ = ["next_state", "collides", "lock_piece", "candidate_piece", "orientation_of", "full_row"]
