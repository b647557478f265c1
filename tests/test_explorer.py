# tests/test_explorer.py
from __future__ import annotations

from hatetris.game.core.engine import Engine
from hatetris.game.core.explorer import fast_forward, next_core_states, position_hash, shape_band
from hatetris.game.core.rotation_system import BoxRotationSystem
from hatetris.game.core.types import CoreState, Piece


def test_flat_i_settles_on_the_floor(small_engine: Engine) -> None:
    futures = small_engine.enumerate(small_engine.empty_core(), "I")

    expected = CoreState(well=(0, 0, 0, 0, 0, 0, 0, 0b0000001111), score=0)
    assert expected in futures


def test_every_shape_conserves_cells_on_an_empty_well(small_engine: Engine) -> None:
    core = small_engine.empty_core()
    for shape_id in small_engine.shape_ids:
        spawn = small_engine.spawn(shape_id)
        cells = small_engine.rotation_system.rotations[shape_id][spawn.o].cell_count()

        futures = small_engine.enumerate(core, shape_id)

        assert len(futures) >= 1
        for f in futures:
            assert f.score == 0
            assert f.cell_count() == cells


def test_cells_are_conserved_on_top_of_existing_cells(small_engine: Engine) -> None:
    well = [0] * 8
    well[7] = 0b0000110011
    core = CoreState.from_rows(well)

    for f in small_engine.enumerate(core, "T"):
        assert f.score == 0
        assert f.cell_count() == core.cell_count() + 4


def test_distinct_landings_on_empty_well(small_engine: Engine) -> None:
    core = small_engine.empty_core()

    # 7 flat positions + 10 upright columns
    assert len(set(small_engine.enumerate(core, "I"))) == 17
    # the square only slides
    assert len(set(small_engine.enumerate(core, "O"))) == 9


def test_duplicate_outcomes_are_kept(small_engine: Engine) -> None:
    futures = small_engine.enumerate(small_engine.empty_core(), "O")
    # every O orientation covers the same cells, so each landing is reached more than once
    assert len(futures) > len(set(futures))


def test_enumerate_is_deterministic_and_leaves_input_alone(small_engine: Engine) -> None:
    well = [0] * 8
    well[6] = 0b0000010000
    well[7] = 0b1011111111
    core = CoreState.from_rows(well, score=2)

    first = small_engine.enumerate(core, "L")
    second = small_engine.enumerate(core, "L")

    assert first == second
    assert core.well == tuple(well)
    assert core.score == 2


def test_upright_i_fills_a_well_and_scores(small_engine: Engine) -> None:
    well = [0] * 8
    well[7] = 0b1111111110  # column 0 open
    core = CoreState.from_rows(well)

    futures = small_engine.enumerate(core, "I")

    assert CoreState(well=(0, 0, 0, 0, 0, 1, 1, 1), score=1) in futures
    assert all(f.score >= core.score for f in futures)


def test_overhang_is_reached_by_sliding_under_it(small_engine: Engine) -> None:
    # A roof over columns 0..5 at row 5 leaves a tunnel at row 6..7 on the left.
    well = [0] * 8
    well[5] = 0b0000111111
    core = CoreState.from_rows(well)

    futures = small_engine.enumerate(core, "I")

    tucked = CoreState(well=(0, 0, 0, 0, 0, 0b0000111111, 0, 0b0000001111), score=0)
    assert tucked in futures


def test_fast_forward_stops_above_first_filled_row(hatetris_rs: BoxRotationSystem) -> None:
    well = [0] * 8
    well[6] = 0b1
    core = CoreState.from_rows(well)

    assert shape_band(hatetris_rs, "I") == (0, 4)
    assert fast_forward(
        rotation_system=hatetris_rs, well_depth=8, core=core, piece=Piece(3, 0, 0, "I")
    ) == Piece(3, 2, 0, "I")
    assert fast_forward(
        rotation_system=hatetris_rs, well_depth=8, core=CoreState.empty(8), piece=Piece(3, 0, 0, "I")
    ) == Piece(3, 4, 0, "I")


def test_fast_forward_leaves_piece_alone_when_band_is_occupied(hatetris_rs: BoxRotationSystem) -> None:
    well = [0] * 8
    well[2] = 0b1
    core = CoreState.from_rows(well)

    piece = Piece(3, 0, 0, "I")
    assert fast_forward(rotation_system=hatetris_rs, well_depth=8, core=core, piece=piece) == piece


def test_tall_box_never_lands_on_top_of_existing_cells() -> None:
    # a 5-cell stick in a 5x5 box reaches one row further than a 4x4 box
    rs = BoxRotationSystem.from_layouts(
        {"V": ["..#..", "..#..", "..#..", "..#..", "..#.."]},
        turns=1,
        name="tall",
    )
    engine = Engine(rotation_system=rs, well_width=5, well_depth=10, bar=2)
    well = [0] * 10
    well[5] = 0b00100
    core = CoreState.from_rows(well)

    assert shape_band(rs, "V") == (0, 5)
    assert fast_forward(rotation_system=rs, well_depth=10, core=core, piece=engine.spawn("V")) == Piece(0, 0, 0, "V")

    futures = engine.enumerate(core, "V")

    assert futures
    for f in futures:
        assert f.cell_count() == core.cell_count() + 5
        assert f.well[5] & 0b00100


def test_position_hash_is_injective() -> None:
    width, depth, count = 10, 8, 4
    hashes = {
        position_hash(depth, count, Piece(x, y, o, "T"))
        for x in range(-3, width)
        for y in range(0, depth + 3)
        for o in range(count)
    }
    assert len(hashes) == (width + 3) * (depth + 3) * count


def test_function_form_matches_engine(small_engine: Engine, hatetris_rs: BoxRotationSystem) -> None:
    core = small_engine.empty_core()
    assert next_core_states(hatetris_rs, 10, 8, 4, core, "S") == small_engine.enumerate(core, "S")


def test_two_orientation_rotation_system() -> None:
    rs = BoxRotationSystem.from_layouts({"I": ["....", "####", "....", "...."]}, turns=2)
    engine = Engine(rotation_system=rs, well_width=6, well_depth=6, bar=2)

    futures = engine.enumerate(engine.empty_core(), "I")

    # 3 flat positions + 6 upright columns
    assert len(set(futures)) == 9
