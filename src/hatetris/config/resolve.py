# src/hatetris/config/resolve.py
from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import ValidationError

from hatetris.config.game_config import GameConfig
from hatetris.config.io import game_section, load_yaml, to_plain_dict
from hatetris.game.core.engine import Engine
from hatetris.game.core.errors import ConfigurationError
from hatetris.utils.logging import setup_logger
from hatetris.utils.paths import resolve_config_path

LOG = setup_logger(name="hatetris.config.resolve", use_rich=True, level="info")


def resolve_game_config(
        *,
        config: Optional[str] = None,
        overrides: Optional[Mapping[str, Any]] = None,
) -> GameConfig:
    """
    Merge (in order) defaults, the YAML config file (if any), then explicit
    overrides whose value is not None.

    The file may hold the game section bare or wrapped as {game: {...}}.
    """
    data: dict[str, Any] = {}
    if config is not None:
        path = resolve_config_path(config)
        data.update(game_section(load_yaml(path), where=str(path)))
        LOG.debug("loaded game config from %s", path)

    for k, v in dict(overrides or {}).items():
        if v is not None:
            data[str(k)] = v

    return GameConfig.model_validate(data)


def build_engine(cfg: GameConfig) -> Engine:
    """Engine for a validated config; geometry problems surface as ConfigurationError."""
    LOG.debug("game config: %s", to_plain_dict(cfg))
    engine = Engine.from_config(cfg)
    LOG.debug("engine shapes=%s", ",".join(engine.shape_ids))
    return engine


def build_engine_from_mapping(data: Mapping[str, Any]) -> Engine:
    try:
        cfg = GameConfig.model_validate(dict(data))
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
    return build_engine(cfg)


__all__ = ["resolve_game_config", "build_engine", "build_engine_from_mapping"]
