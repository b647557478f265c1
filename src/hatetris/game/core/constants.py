# src/hatetris/game/core/constants.py
from __future__ import annotations

# Well geometry
MIN_WELL_WIDTH: int = 4
MAX_WELL_WIDTH: int = 30

# Classic HATETRIS well
DEFAULT_WELL_WIDTH: int = 10
DEFAULT_WELL_DEPTH: int = 20
DEFAULT_BAR: int = 4

# Extra anchor range beyond the well used by the position hash
HASH_MARGIN: int = 3
