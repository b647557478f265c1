# src/hatetris/config/__init__.py
from __future__ import annotations

from hatetris.config.game_config import GameConfig
from hatetris.config.io import game_section, load_game_config, load_yaml, to_plain_dict

__all__ = ["GameConfig", "game_section", "load_game_config", "load_yaml", "to_plain_dict"]
