# src/hatetris/game/core/rotation_system.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Protocol, Sequence, Tuple, runtime_checkable

import yaml

from hatetris.game.core.errors import ConfigurationError
from hatetris.game.core.types import Orientation, Piece
from hatetris.utils.paths import rotation_systems_dir


@runtime_checkable
class RotationSystem(Protocol):
    """
    Capability contract for a rotation system.

    Anything that exposes an orientation table and a spawn function is usable;
    no base class is required.
    """

    rotations: Mapping[str, Sequence[Orientation]]

    def place_new_piece(self, well_width: int, shape_id: str) -> Piece:
        ...


def validate_rotation_system(rotation_system: RotationSystem) -> None:
    rotations = getattr(rotation_system, "rotations", None)
    if not isinstance(rotations, Mapping):
        raise ConfigurationError(f"rotation system must expose a 'rotations' mapping, got {type(rotations)!r}")
    if len(rotations) < 1:
        raise ConfigurationError("Have to have at least one piece!")
    for shape_id, orientations in rotations.items():
        if len(orientations) < 1:
            raise ConfigurationError(f"piece {shape_id!r} has no orientations")
    if not callable(getattr(rotation_system, "place_new_piece", None)):
        raise ConfigurationError("rotation system must provide place_new_piece(well_width, shape_id)")


# -----------------------------------------------------------------------------
# Box drawings
# -----------------------------------------------------------------------------
def _parse_box(rows: Sequence[str], *, where: str) -> Tuple[Tuple[int, ...], ...]:
    if not isinstance(rows, (list, tuple)) or len(rows) == 0:
        raise ConfigurationError(f"{where}: drawing must be a non-empty list of strings")

    width = None
    out: List[Tuple[int, ...]] = []
    for r in rows:
        if not isinstance(r, str) or len(r) == 0:
            raise ConfigurationError(f"{where}: drawing rows must be non-empty strings, got {r!r}")
        if width is None:
            width = len(r)
        elif len(r) != width:
            raise ConfigurationError(f"{where}: drawing rows must have equal width, got widths {width} and {len(r)}")
        out.append(tuple(1 if ch == "#" else 0 for ch in r))

    if not any(any(r) for r in out):
        raise ConfigurationError(f"{where}: drawing must have at least one filled cell ('#')")
    return tuple(out)


def rotate_box_cw(box: Sequence[Sequence[int]]) -> Tuple[Tuple[int, ...], ...]:
    """Rotate a square drawing a quarter turn clockwise about its centre."""
    n = len(box)
    if any(len(r) != n for r in box):
        raise ConfigurationError(f"only square drawings can be rotated, got {n} rows of widths {[len(r) for r in box]}")
    return tuple(tuple(box[n - 1 - x][y] for x in range(n)) for y in range(n))


def orientation_from_box(box: Sequence[Sequence[int]]) -> Orientation:
    """
    Trim a drawing to its occupied bounding box.

    Bit j of each row corresponds to drawing column x_min + j, so the
    leftmost drawn column ends up in the least significant bit.
    """
    cells = [(y, x) for y, r in enumerate(box) for x, v in enumerate(r) if v]
    ys = [c[0] for c in cells]
    xs = [c[1] for c in cells]
    y_min, y_max = min(ys), max(ys)
    x_min, x_max = min(xs), max(xs)

    rows = []
    for y in range(y_min, y_max + 1):
        bits = 0
        for x in range(x_min, x_max + 1):
            if box[y][x]:
                bits |= 1 << (x - x_min)
        rows.append(bits)

    return Orientation(
        y_min=int(y_min),
        y_dim=int(y_max - y_min + 1),
        x_min=int(x_min),
        x_dim=int(x_max - x_min + 1),
        rows=tuple(rows),
    )


@dataclass(frozen=True)
class BoxRotationSystem:
    """
    Rotation system whose shapes are drawn inside a fixed square box.

    The anchor of a placement is the top-left corner of the box; orientations
    are the trimmed bounding boxes of each drawing relative to that corner.
    New pieces spawn horizontally centred with the box's top row on row
    spawn_y, in orientation 0.

    Loaded from YAML:

        box: 4
        spawn_y: 0
        pieces:
          I:
            layout: ["....", "####", "....", "...."]   # rotations derived (cw)
          O:
            rotations:                                  # or listed explicitly
              - ["....", ".##.", ".##.", "...."]
    """

    rotations: Mapping[str, Tuple[Orientation, ...]]
    box: int = 4
    spawn_y: int = 0
    name: str = "custom"

    def __post_init__(self) -> None:
        validate_rotation_system(self)
        if int(self.box) <= 0:
            raise ConfigurationError(f"box must be positive, got {self.box}")

    def place_new_piece(self, well_width: int, shape_id: str) -> Piece:
        if shape_id not in self.rotations:
            raise KeyError(f"unknown shape {shape_id!r}. known shapes={list(self.rotations)!r}")
        return Piece(x=(int(well_width) - int(self.box)) // 2, y=int(self.spawn_y), o=0, shape_id=str(shape_id))

    def shape_ids(self) -> Tuple[str, ...]:
        return tuple(self.rotations)

    def orientation_count(self, shape_id: str) -> int:
        return len(self.rotations[shape_id])

    @classmethod
    def from_layouts(
            cls,
            layouts: Mapping[str, Sequence[str]],
            *,
            turns: int = 4,
            spawn_y: int = 0,
            name: str = "custom",
    ) -> "BoxRotationSystem":
        """Build from one square drawing per shape, deriving `turns` clockwise rotations."""
        rotations: Dict[str, Tuple[Orientation, ...]] = {}
        box = None
        for shape_id, layout in layouts.items():
            drawing = _parse_box(layout, where=f"{name}.{shape_id}")
            if box is None:
                box = len(drawing)
            elif len(drawing) != box:
                raise ConfigurationError(f"{name}.{shape_id}: all drawings must share box size {box}")
            rotations[str(shape_id)] = _derive_rotations(drawing, turns=int(turns))
        return cls(rotations=rotations, box=int(box) if box is not None else 4, spawn_y=int(spawn_y), name=str(name))

    @classmethod
    def from_yaml(cls, path: Path) -> "BoxRotationSystem":
        p = Path(path)
        try:
            data = yaml.safe_load(p.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"rotation system YAML {p} is malformed: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"rotation system YAML must be a mapping at top-level, got {type(data)!r}")

        name = str(data.get("name", p.stem))
        box = data.get("box", 4)
        if not isinstance(box, int) or box <= 0:
            raise ConfigurationError(f"{name}: 'box' must be a positive int, got {box!r}")
        spawn_y = data.get("spawn_y", 0)
        if not isinstance(spawn_y, int):
            raise ConfigurationError(f"{name}: 'spawn_y' must be an int, got {spawn_y!r}")
        turns = data.get("turns", 4)
        if not isinstance(turns, int) or turns <= 0:
            raise ConfigurationError(f"{name}: 'turns' must be a positive int, got {turns!r}")

        pieces_node = data.get("pieces")
        if not isinstance(pieces_node, dict) or not pieces_node:
            raise ConfigurationError("Have to have at least one piece!")

        rotations: Dict[str, Tuple[Orientation, ...]] = {}
        for shape_id, piece_node in pieces_node.items():
            if not isinstance(shape_id, str) or not shape_id:
                raise ConfigurationError(f"{name}: piece key must be a non-empty string, got {shape_id!r}")
            if not isinstance(piece_node, dict):
                raise ConfigurationError(f"{name}.{shape_id}: piece entry must be a mapping, got {type(piece_node)!r}")

            where = f"{name}.{shape_id}"
            if "rotations" in piece_node:
                node = piece_node["rotations"]
                if not isinstance(node, list) or not node:
                    raise ConfigurationError(f"{where}: 'rotations' must be a non-empty list")
                drawings = [_parse_box(d, where=f"{where}.rotations[{i}]") for i, d in enumerate(node)]
                for d in drawings:
                    if len(d) != box or any(len(r) != box for r in d):
                        raise ConfigurationError(f"{where}: every drawing must be {box}x{box}")
                rotations[shape_id] = tuple(orientation_from_box(d) for d in drawings)
            elif "layout" in piece_node:
                drawing = _parse_box(piece_node["layout"], where=f"{where}.layout")
                if len(drawing) != box or any(len(r) != box for r in drawing):
                    raise ConfigurationError(f"{where}: layout must be {box}x{box}")
                rotations[shape_id] = _derive_rotations(drawing, turns=int(turns))
            else:
                raise ConfigurationError(f"{where}: needs either 'layout' or 'rotations'")

        return cls(rotations=rotations, box=int(box), spawn_y=int(spawn_y), name=name)

    @classmethod
    def named(cls, name: str) -> "BoxRotationSystem":
        """Load a bundled rotation system by asset name, or from a YAML path."""
        p = Path(str(name))
        if p.suffix in {".yaml", ".yml"}:
            if not p.is_file():
                raise ConfigurationError(f"rotation system file not found: {p}")
            return cls.from_yaml(p)
        path = rotation_systems_dir() / f"{name}.yaml"
        if not path.is_file():
            known = sorted(q.stem for q in rotation_systems_dir().glob("*.yaml"))
            raise ConfigurationError(f"unknown rotation system {name!r}. known={known!r}")
        return cls.from_yaml(path)


def _derive_rotations(drawing: Tuple[Tuple[int, ...], ...], *, turns: int) -> Tuple[Orientation, ...]:
    out = []
    cur = drawing
    for _ in range(turns):
        out.append(orientation_from_box(cur))
        cur = rotate_box_cw(cur)
    return tuple(out)


__all__ = [
    "RotationSystem",
    "BoxRotationSystem",
    "validate_rotation_system",
    "orientation_from_box",
    "rotate_box_cw",
]
