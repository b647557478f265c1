# src/hatetris/strategies/catalog.py
from __future__ import annotations

from typing import Any, Mapping

from hatetris.strategies.brzustowski import brzustowski_ai
from hatetris.strategies.burgiel import burgiel_ai
from hatetris.strategies.hatetris import hatetris_ai
from hatetris.strategies.lovetris import lovetris_ai

# - imports + plain dicts only
# - easy to add new entries

STRATEGY_REGISTRY: Mapping[str, Any] = {
    "hatetris": hatetris_ai,
    "lovetris": lovetris_ai,
    "brzustowski": brzustowski_ai,
    "burgiel": burgiel_ai,
}

STRATEGY_DESCRIPTIONS: Mapping[str, str] = {
    "hatetris": "HATETRIS, the original and worst",
    "lovetris": "all 4x1 pieces, all the time",
    "brzustowski": "Brzustowski (1992)",
    "burgiel": "Burgiel (1997)",
}


def resolve_strategy(name: str) -> Any:
    key = str(name).strip().lower()
    try:
        return STRATEGY_REGISTRY[key]
    except KeyError as e:
        raise KeyError(f"unknown enemy {name!r}. known enemies={sorted(STRATEGY_REGISTRY)!r}") from e


def describe_strategies() -> str:
    """One `name: description` entry per registered enemy, comma separated."""
    return ", ".join(f"{k}: {STRATEGY_DESCRIPTIONS.get(k, k)}" for k in STRATEGY_REGISTRY)


__all__ = ["STRATEGY_REGISTRY", "STRATEGY_DESCRIPTIONS", "resolve_strategy", "describe_strategies"]
