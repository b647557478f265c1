# src/hatetris/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from hatetris.config.game_config import GameConfig


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
        if not isinstance(data, dict):
            raise TypeError("config must resolve to a mapping")
        return data
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_yaml(path: Path) -> dict[str, Any]:
    cfg_path = Path(path)
    cfg = OmegaConf.load(cfg_path)
    data = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(data, dict):
        raise TypeError(f"config({path}) must be a mapping")
    return data


def game_section(data: Mapping[str, Any], *, where: str) -> dict[str, Any]:
    """
    The game section of a loaded config: either the whole mapping or the
    mapping under a `game:` key.
    """
    game = data.get("game", data)
    if not isinstance(game, Mapping):
        raise TypeError(f"config({where}).game must be a mapping, got {type(game)!r}")
    return dict(game)


def load_game_config(path: Path) -> GameConfig:
    """Load a GameConfig from YAML (bare or wrapped under `game:`)."""
    return GameConfig.model_validate(game_section(load_yaml(path), where=str(path)))


__all__ = ["to_plain_dict", "load_yaml", "game_section", "load_game_config"]
