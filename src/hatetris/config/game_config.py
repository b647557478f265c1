# src/hatetris/config/game_config.py
from __future__ import annotations

from typing import Literal, Mapping

from pydantic import Field, field_validator, model_validator

from hatetris.config.base import ConfigBase
from hatetris.game.core.constants import (
    DEFAULT_BAR,
    DEFAULT_WELL_DEPTH,
    DEFAULT_WELL_WIDTH,
    MAX_WELL_WIDTH,
    MIN_WELL_WIDTH,
)


def _as_int(value: object, *, where: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str, bytes, bytearray)):
        raise TypeError(f"{where} must be an int-like value, got {type(value)!r}")
    try:
        return int(value)
    except Exception as e:
        raise TypeError(f"{where} must be an int-like value, got {type(value)!r}") from e


class GameConfig(ConfigBase):
    """
    Game-level config (engine-facing).

    Single home for the things fixed once per game instance:
      - well geometry (width, depth, bar row)
      - rotation system (bundled asset name or path to a YAML file)
      - enemy strategy (registry key)
    """

    well_width: int = Field(default=DEFAULT_WELL_WIDTH, ge=MIN_WELL_WIDTH, le=MAX_WELL_WIDTH)
    well_depth: int = Field(default=DEFAULT_WELL_DEPTH, ge=1)
    bar: int = Field(default=DEFAULT_BAR, ge=1)
    rotation_system: str = "hatetris"
    enemy: str = "hatetris"
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "info"

    @field_validator("well_width", "well_depth", "bar", mode="before")
    @classmethod
    def _int_fields(cls, v: object, info) -> int:
        return _as_int(v, where=f"game.{info.field_name}")

    @field_validator("enemy", "log_level", mode="before")
    @classmethod
    def _lower(cls, v: object) -> str:
        return str(v).strip().lower()

    @field_validator("rotation_system", mode="before")
    @classmethod
    def _strip(cls, v: object) -> str:
        s = str(v).strip()
        if not s:
            raise ValueError("game.rotation_system must be non-empty")
        return s

    @model_validator(mode="before")
    @classmethod
    def _depth_not_above_bar(cls, data: object) -> object:
        if not isinstance(data, Mapping):
            return data
        if "well_depth" not in data and "bar" not in data:
            return data
        depth = _as_int(data.get("well_depth", DEFAULT_WELL_DEPTH), where="game.well_depth")
        bar = _as_int(data.get("bar", DEFAULT_BAR), where="game.bar")
        if depth < bar:
            raise ValueError(f"Can't have well with depth {depth} less than bar at {bar}")
        return data


__all__ = ["GameConfig"]
