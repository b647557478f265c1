# src/hatetris/game/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Move(Enum):
    LEFT = "L"
    RIGHT = "R"
    DOWN = "D"
    ROTATE = "U"

    @classmethod
    def parse(cls, value: object) -> "Move":
        if isinstance(value, Move):
            return value
        s = str(value).strip()
        for m in cls:
            if s == m.value or s.upper() == m.name:
                return m
        raise ValueError(f"unknown move {value!r} (valid: {[m.value for m in cls]})")


# Canonical exploration order.
MOVES: Tuple[Move, ...] = (Move.LEFT, Move.RIGHT, Move.DOWN, Move.ROTATE)


@dataclass(frozen=True)
class Piece:
    """
    In-flight placement.

    x, y: anchor offset in well coordinates (x may be negative when the
          orientation's bounding box starts right of the anchor)
    o:    rotation index into the shape's orientation list
    """

    x: int
    y: int
    o: int
    shape_id: str

    def moved(self, *, dx: int = 0, dy: int = 0) -> "Piece":
        return Piece(x=self.x + dx, y=self.y + dy, o=self.o, shape_id=self.shape_id)

    def rotated(self, orientation_count: int) -> "Piece":
        return Piece(x=self.x, y=self.y, o=(self.o + 1) % int(orientation_count), shape_id=self.shape_id)


@dataclass(frozen=True)
class Orientation:
    """
    Geometry of one (shape, rotation) pair.

    The bounding box (y_min, y_dim, x_min, x_dim) is relative to the anchor.
    rows[i] is the bitmask of occupied cells in bounding-box row i, bit j set
    iff bounding-box column j is occupied.
    """

    y_min: int
    y_dim: int
    x_min: int
    x_dim: int
    rows: Tuple[int, ...]

    def __post_init__(self) -> None:
        if self.y_dim <= 0 or self.x_dim <= 0:
            raise ValueError(f"orientation bounding box must be positive, got {self.y_dim}x{self.x_dim}")
        if len(self.rows) != self.y_dim:
            raise ValueError(f"orientation has y_dim={self.y_dim} but {len(self.rows)} rows")
        limit = 1 << self.x_dim
        for r in self.rows:
            if r < 0 or r >= limit:
                raise ValueError(f"orientation row {r:#b} does not fit in x_dim={self.x_dim}")
        if not any(self.rows):
            raise ValueError("orientation must occupy at least one cell")

    def cell_count(self) -> int:
        return sum(bin(r).count("1") for r in self.rows)


@dataclass(frozen=True)
class CoreState:
    """
    Board configuration: row bitmasks from top (index 0) to bottom plus score.

    Immutable snapshot. Bit i of a row is set iff column i is occupied.
    """

    well: Tuple[int, ...]
    score: int = 0

    @classmethod
    def empty(cls, depth: int) -> "CoreState":
        return cls(well=(0,) * int(depth), score=0)

    @classmethod
    def from_rows(cls, rows, score: int = 0) -> "CoreState":
        return cls(well=tuple(int(r) for r in rows), score=int(score))

    @property
    def depth(self) -> int:
        return len(self.well)

    def cell_count(self) -> int:
        return sum(bin(r).count("1") for r in self.well)


@dataclass(frozen=True)
class WellState:
    """Session snapshot: board, opaque strategy state, live piece (None once locked)."""

    core: CoreState
    ai: object
    piece: Optional[Piece]
