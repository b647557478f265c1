# src/hatetris/strategies/base.py
from __future__ import annotations

from typing import Any, Callable, Collection, List, Protocol, Tuple, Union, runtime_checkable

from hatetris.game.core.errors import StrategyError
from hatetris.game.core.types import CoreState

GetNextCoreStates = Callable[[CoreState, str], List[CoreState]]
StrategyResult = Union[str, Tuple[str, Any]]


@runtime_checkable
class EnemyStrategy(Protocol):
    """
    Enemy AI interface.

    Called whenever a new piece is needed with:
      - the current board configuration
      - the strategy's own opaque state from the previous call (None at game start)
      - the landing-state explorer, pre-bound to the active engine

    Returns either a shape id, or (shape_id, new_state). Returning a bare shape
    id keeps the previous state.
    """

    def __call__(
            self,
            current_core_state: CoreState,
            current_ai_state: Any,
            get_next_core_states: GetNextCoreStates,
    ) -> StrategyResult:
        ...


def validate_strategy_result(
        result: object,
        *,
        ai_state: Any,
        shape_ids: Collection[str],
        interpretation: str,
) -> Tuple[str, Any]:
    """
    Normalize a strategy's return value to (shape_id, ai_state) and check the
    shape id is known.
    """
    if isinstance(result, (list, tuple)):
        if len(result) != 2:
            raise StrategyError(interpretation, f"Bad result: expected (piece_id, ai_state), got {result!r}")
        unsafe_shape_id, next_ai_state = result[0], result[1]
    else:
        unsafe_shape_id, next_ai_state = result, ai_state

    if isinstance(unsafe_shape_id, str) and unsafe_shape_id in shape_ids:
        return unsafe_shape_id, next_ai_state

    raise StrategyError(interpretation, f"Bad piece ID: {unsafe_shape_id!r}")


def invoke_strategy(
        strategy: EnemyStrategy,
        *,
        core: CoreState,
        ai_state: Any,
        get_next_core_states: GetNextCoreStates,
        shape_ids: Collection[str],
        interpretation: str,
) -> Tuple[str, Any]:
    """
    Call a strategy and validate what it returns.

    Any exception raised by the strategy is reported as a StrategyError that
    keeps the original message; nothing is retried.
    """
    try:
        result = strategy(core, ai_state, get_next_core_states)
    except StrategyError:
        raise
    except Exception as e:
        raise StrategyError(interpretation, f"{type(e).__name__}: {e}") from e

    return validate_strategy_result(
        result,
        ai_state=ai_state,
        shape_ids=shape_ids,
        interpretation=interpretation,
    )


__all__ = [
    "EnemyStrategy",
    "GetNextCoreStates",
    "StrategyResult",
    "invoke_strategy",
    "validate_strategy_result",
]
