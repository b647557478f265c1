# src/hatetris/game/core/metrics.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from hatetris.game.core.types import CoreState


@dataclass(frozen=True)
class BoardSnapshotMetrics:
    """
    Metrics of a locked well.

    holes:
      empty cells that have at least one occupied cell above in same column
    bumpiness:
      sum(abs(h[i+1] - h[i])) over column heights
    max_height:
      max column height
    agg_height:
      sum of column heights
    """
    holes: int
    bumpiness: int
    max_height: int
    agg_height: int


def well_to_grid(core: CoreState, well_width: int) -> np.ndarray:
    """
    Unpack row bitmasks into a (depth, width) uint8 occupancy grid.

    grid[y, x] == 1 iff bit x of row y is set.
    """
    rows = np.asarray(core.well, dtype=np.int64).reshape(-1, 1)
    cols = np.arange(int(well_width), dtype=np.int64).reshape(1, -1)
    return ((rows >> cols) & 1).astype(np.uint8)


def column_heights(core: CoreState, well_width: int) -> np.ndarray:
    occ = well_to_grid(core, well_width) != 0
    h, _w = occ.shape
    any_filled = occ.any(axis=0)

    # argmax returns 0 when all-false; mask those to 0 height
    first_filled = np.argmax(occ, axis=0)
    return np.where(any_filled, h - first_filled, 0).astype(np.int64, copy=False)


def stack_height(core: CoreState) -> int:
    """Number of rows from the topmost non-empty row to the bottom (0 for an empty well)."""
    for y, row in enumerate(core.well):
        if row != 0:
            return len(core.well) - y
    return 0


def count_holes(core: CoreState, well_width: int) -> int:
    occ = well_to_grid(core, well_width) != 0
    # filled_seen[y,x] True if any filled cell exists at or above y in that column
    filled_seen = np.maximum.accumulate(occ, axis=0)
    return int(np.sum((~occ) & filled_seen))


def board_snapshot_metrics(core: CoreState, well_width: int) -> BoardSnapshotMetrics:
    heights = column_heights(core, well_width)
    bump = int(np.abs(np.diff(heights)).sum()) if heights.size > 1 else 0
    return BoardSnapshotMetrics(
        holes=count_holes(core, well_width),
        bumpiness=bump,
        max_height=int(heights.max()) if heights.size > 0 else 0,
        agg_height=int(heights.sum()) if heights.size > 0 else 0,
    )


def render_well(core: CoreState, well_width: int, *, bar: int | None = None) -> str:
    """Plain-text picture of the well, column 0 on the left, '#' for filled cells."""
    grid = well_to_grid(core, well_width)
    lines = []
    for y, row in enumerate(grid):
        line = "".join("#" if v else "." for v in row)
        if bar is not None and y == bar:
            lines.append("-" * int(well_width))
        lines.append(line)
    return "\n".join(lines)


__all__ = [
    "BoardSnapshotMetrics",
    "well_to_grid",
    "column_heights",
    "stack_height",
    "count_holes",
    "board_snapshot_metrics",
    "render_well",
]
