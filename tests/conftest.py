import random

import matplotlib

matplotlib.use("Agg")

import pytest

from grid_core import MazeGrid


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def hex_grid(rng):
    return MazeGrid(5, 5, rng=rng)
