# tests/test_metrics.py
from __future__ import annotations

import numpy as np

from hatetris.game.core.metrics import (
    board_snapshot_metrics,
    column_heights,
    count_holes,
    render_well,
    stack_height,
    well_to_grid,
)
from hatetris.game.core.types import CoreState


def _core() -> CoreState:
    # column 0 is the least significant bit
    return CoreState.from_rows([0b0000, 0b0001, 0b0000, 0b1011])


def test_well_to_grid_unpacks_bits() -> None:
    grid = well_to_grid(_core(), 4)
    expected = np.array(
        [
            [0, 0, 0, 0],
            [1, 0, 0, 0],
            [0, 0, 0, 0],
            [1, 1, 0, 1],
        ],
        dtype=np.uint8,
    )
    assert grid.dtype == np.uint8
    np.testing.assert_array_equal(grid, expected)


def test_heights_holes_and_stack() -> None:
    core = _core()
    np.testing.assert_array_equal(column_heights(core, 4), np.array([3, 1, 0, 1]))
    assert count_holes(core, 4) == 1
    assert stack_height(core) == 3
    assert stack_height(CoreState.empty(5)) == 0


def test_board_snapshot_metrics() -> None:
    m = board_snapshot_metrics(_core(), 4)
    assert m.holes == 1
    assert m.max_height == 3
    assert m.agg_height == 5
    assert m.bumpiness == 2 + 1 + 1


def test_render_well_marks_the_bar() -> None:
    text = render_well(_core(), 4, bar=2)
    assert text.splitlines() == ["....", "#...", "----", "....", "##.#"]
