from __future__ import annotations

import os

# no window is ever opened by the tests, but pygame still wants a video driver
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from typing import Iterator

import numpy as np
import pytest

from dot3d_scripts import dot3d as engine
from dot3d_scripts import dot3d_rendering


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    np.random.seed(12345)


@pytest.fixture(autouse=True)
def clean_scene() -> Iterator[None]:
    """Every test starts with an empty scene and an unparented camera."""
    engine.destroyAllObjects()
    engine.resetCamera()
    yield
    engine.destroyAllObjects()
    engine.resetCamera()


@pytest.fixture()
def render_config() -> Iterator[dot3d_rendering.RenderingConfig]:
    """A small orthographic renderer (80x60, 6 pixels per world unit)."""
    previous = dot3d_rendering.renderConfig
    dot3d_rendering.init(80, 60, np.pi / 3, "orthographic", 5.0, "shaded", "solid color", 160, 120)
    yield dot3d_rendering.renderConfig
    dot3d_rendering.renderConfig = previous


@pytest.fixture()
def top_down_camera() -> None:
    engine.setCameraPosition(0.0, 9.0, 0.0)
    engine.setCameraRotation(90.0, 0.0, 0.0)
