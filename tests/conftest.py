"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from controls import Controller, EventLifecycle  # noqa: E402
from particle import Arena  # noqa: E402


class FixedRng:
    """Stands in for a numpy Generator with scripted draws."""

    def __init__(self, angle=0.0, u01=0.5, proton_bit=1):
        self.angle = angle
        self.u01 = u01
        self.proton_bit = proton_bit

    def uniform(self, lo, hi):
        return self.angle

    def random(self):
        return self.u01

    def integers(self, lo, hi):
        return self.proton_bit


@pytest.fixture
def rng():
    return np.random.default_rng(20240611)


@pytest.fixture
def arena():
    return Arena(60.0, 60.0, 980.0, 580.0)


@pytest.fixture
def origin(arena):
    return np.array([arena.left + 140.0, arena.centery])


@pytest.fixture
def lifecycle(origin, arena, rng):
    return EventLifecycle(origin, arena, rng)


@pytest.fixture
def controller(lifecycle):
    return Controller(lifecycle)
