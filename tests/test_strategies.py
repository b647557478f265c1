# tests/test_strategies.py
from __future__ import annotations

from typing import Any

import pytest

from hatetris.game.core.engine import Engine
from hatetris.game.core.errors import StrategyError
from hatetris.game.core.types import CoreState
from hatetris.strategies.base import invoke_strategy, validate_strategy_result
from hatetris.strategies.brzustowski import brzustowski_ai
from hatetris.strategies.burgiel import burgiel_ai
from hatetris.strategies.catalog import STRATEGY_DESCRIPTIONS, STRATEGY_REGISTRY, describe_strategies, resolve_strategy
from hatetris.strategies.hatetris import hatetris_ai, make_hatetris_ai, rate_core_state
from hatetris.strategies.lovetris import lovetris_ai

SHAPES = ("I", "J", "L", "O", "S", "T", "Z")


def test_lovetris_generates_i_every_time(small_engine: Engine) -> None:
    core = CoreState.from_rows([0b0000000000] * 8, score=0)
    assert lovetris_ai(core, None, small_engine.bind_enumerate()) == "I"


def test_hatetris_withholds_the_i_on_an_empty_well(small_engine: Engine) -> None:
    # every shape but I leaves a stack two rows high; ties go to the earliest shape
    assert hatetris_ai(small_engine.empty_core(), None, small_engine.bind_enumerate()) == "J"


def test_hatetris_with_single_shape(small_engine: Engine) -> None:
    ai = make_hatetris_ai(shape_ids=("O",))
    assert ai(small_engine.empty_core(), None, small_engine.bind_enumerate()) == "O"


def test_hatetris_lookahead_consults_the_explorer_recursively(small_engine: Engine) -> None:
    calls: list[str] = []
    get_next_core_states = small_engine.bind_enumerate()

    def counting(core: CoreState, shape_id: str) -> list[CoreState]:
        calls.append(shape_id)
        return get_next_core_states(core, shape_id)

    ai = make_hatetris_ai(shape_ids=("I", "O"), lookahead=1)
    shape_id = ai(small_engine.empty_core(), None, counting)

    assert shape_id in ("I", "O")
    # first level: one call per shape; second level: one call per shape per landing
    assert len(calls) > 2


def test_make_hatetris_ai_validates_arguments() -> None:
    with pytest.raises(ValueError, match="non-empty"):
        make_hatetris_ai(shape_ids=())
    with pytest.raises(ValueError, match="lookahead"):
        make_hatetris_ai(lookahead=-1)


def test_rating_prefers_lines_then_low_stack() -> None:
    low = CoreState.from_rows([0, 0, 0, 1])
    high = CoreState.from_rows([0, 1, 0, 1])
    scored_high = CoreState.from_rows([0, 1, 0, 1], score=1)

    assert rate_core_state(low) > rate_core_state(high)
    assert rate_core_state(scored_high) > rate_core_state(low)


def test_validate_strategy_result_bare_id_keeps_state() -> None:
    assert validate_strategy_result("T", ai_state={"n": 1}, shape_ids=SHAPES, interpretation="x") == ("T", {"n": 1})


def test_validate_strategy_result_pair_replaces_state() -> None:
    assert validate_strategy_result(("S", 7), ai_state=None, shape_ids=SHAPES, interpretation="x") == ("S", 7)
    assert validate_strategy_result(["Z", None], ai_state=3, shape_ids=SHAPES, interpretation="x") == ("Z", None)


@pytest.mark.parametrize("bad", ["X", "", None, 3, ("Q", 1), ("I", 1, 2)])
def test_validate_strategy_result_rejects_bad_ids(bad: Any) -> None:
    with pytest.raises(StrategyError) as ei:
        validate_strategy_result(bad, ai_state=None, shape_ids=SHAPES, interpretation="while testing")
    assert ei.value.interpretation == "while testing"
    assert "Bad" in ei.value.real


def test_invoke_strategy_wraps_failures(small_engine: Engine) -> None:
    def broken(core: CoreState, ai_state: Any, get_next_core_states: Any) -> str:
        raise RuntimeError("kaboom")

    with pytest.raises(StrategyError) as ei:
        invoke_strategy(
            broken,
            core=small_engine.empty_core(),
            ai_state=None,
            get_next_core_states=small_engine.bind_enumerate(),
            shape_ids=small_engine.shape_ids,
            interpretation="generating a piece",
        )

    assert ei.value.interpretation == "generating a piece"
    assert "kaboom" in ei.value.real
    assert isinstance(ei.value.__cause__, RuntimeError)


def test_invoke_strategy_hands_over_the_explorer(small_engine: Engine) -> None:
    seen: dict[str, int] = {}

    def curious(core: CoreState, ai_state: Any, get_next_core_states: Any) -> tuple[str, int]:
        seen["landings"] = len(get_next_core_states(core, "O"))
        return "O", (ai_state or 0) + 1

    out = invoke_strategy(
        curious,
        core=small_engine.empty_core(),
        ai_state=None,
        get_next_core_states=small_engine.bind_enumerate(),
        shape_ids=small_engine.shape_ids,
        interpretation="x",
    )

    assert out == ("O", 1)
    assert seen["landings"] > 0


def test_registry() -> None:
    assert set(STRATEGY_REGISTRY) == {"hatetris", "lovetris", "brzustowski", "burgiel"}
    assert set(STRATEGY_DESCRIPTIONS) == set(STRATEGY_REGISTRY)
    assert resolve_strategy(" LoveTris ") is lovetris_ai
    assert resolve_strategy("Burgiel") is burgiel_ai
    assert "Brzustowski (1992)" in describe_strategies()
    with pytest.raises(KeyError, match="unknown enemy"):
        resolve_strategy("pajitnov")


def test_burgiel_alternates_and_threads_its_state(small_engine: Engine) -> None:
    get_next_core_states = small_engine.bind_enumerate()
    core = small_engine.empty_core()

    state = None
    handed_out = []
    for _ in range(4):
        shape_id, state = invoke_strategy(
            burgiel_ai,
            core=core,
            ai_state=state,
            get_next_core_states=get_next_core_states,
            shape_ids=small_engine.shape_ids,
            interpretation="x",
        )
        handed_out.append(shape_id)

    assert handed_out == ["S", "Z", "S", "Z"]
    assert state == "Z"


def test_brzustowski_alternates_on_ties(small_engine: Engine) -> None:
    get_next_core_states = small_engine.bind_enumerate()
    core = small_engine.empty_core()

    # S and Z both leave a two-row stack on an empty well
    first = brzustowski_ai(core, None, get_next_core_states)
    second = brzustowski_ai(core, first[1], get_next_core_states)

    assert first == ("S", "S")
    assert second == ("Z", "Z")


def test_brzustowski_hands_out_the_worse_shape() -> None:
    tall = CoreState.from_rows([0, 0b1, 0, 0b1])
    flat = CoreState.from_rows([0, 0, 0, 0b1])
    cleared = CoreState.from_rows([0, 0, 0, 0b1], score=1)

    def fixed(core: CoreState, shape_id: str) -> list[CoreState]:
        return {"S": [flat, cleared], "Z": [tall, flat]}[shape_id]

    # S lets the player clear a line, Z does not
    assert brzustowski_ai(flat, "Z", fixed) == ("Z", "Z")


def test_brzustowski_prefers_a_shape_with_no_landing() -> None:
    core = CoreState.from_rows([0, 0, 0, 0b1])

    def fixed(core: CoreState, shape_id: str) -> list[CoreState]:
        return {"S": [core], "Z": []}[shape_id]

    assert brzustowski_ai(core, None, fixed)[0] == "Z"
