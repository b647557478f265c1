# src/hatetris/game/core/errors.py
from __future__ import annotations


class HatetrisError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(HatetrisError, ValueError):
    """
    Invalid game configuration.

    Raised before any board configuration exists (empty rotation table,
    empty orientation list, well narrower than the minimum, well shallower
    than the bar, malformed rotation assets). Never retried.
    """


class StrategyError(HatetrisError):
    """
    An enemy strategy broke its contract.

    Carries both a human-readable interpretation of what was going on when the
    failure happened and the underlying failure detail.
    """

    def __init__(self, interpretation: str, real: str) -> None:
        super().__init__(f"{interpretation} ({real})")
        self.interpretation = str(interpretation)
        self.real = str(real)


__all__ = ["HatetrisError", "ConfigurationError", "StrategyError"]
