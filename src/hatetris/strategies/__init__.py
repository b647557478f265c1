from .base import EnemyStrategy, invoke_strategy, validate_strategy_result
from .brzustowski import brzustowski_ai
from .burgiel import burgiel_ai
from .catalog import STRATEGY_DESCRIPTIONS, STRATEGY_REGISTRY, describe_strategies, resolve_strategy
from .hatetris import hatetris_ai, make_hatetris_ai
from .lovetris import lovetris_ai

__all__ = [
    "EnemyStrategy",
    "invoke_strategy",
    "validate_strategy_result",
    "STRATEGY_DESCRIPTIONS",
    "STRATEGY_REGISTRY",
    "describe_strategies",
    "resolve_strategy",
    "hatetris_ai",
    "make_hatetris_ai",
    "lovetris_ai",
    "brzustowski_ai",
    "burgiel_ai",
]
