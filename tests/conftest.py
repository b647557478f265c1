# tests/conftest.py
from __future__ import annotations

import pytest

from hatetris.game.core.engine import Engine
from hatetris.game.core.rotation_system import BoxRotationSystem


@pytest.fixture(scope="session")
def hatetris_rs() -> BoxRotationSystem:
    return BoxRotationSystem.named("hatetris")


@pytest.fixture()
def small_engine(hatetris_rs: BoxRotationSystem) -> Engine:
    # 10 wide, 8 deep, bar at row 4
    return Engine(rotation_system=hatetris_rs, well_width=10, well_depth=8, bar=4)


@pytest.fixture()
def narrow_rs() -> BoxRotationSystem:
    return BoxRotationSystem.from_layouts(
        {
            "I": ["....", "####", "....", "...."],
            "O": ["....", ".##.", ".##.", "...."],
        },
        name="narrow",
    )
