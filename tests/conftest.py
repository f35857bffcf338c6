"""
Pytest configuration for the test suite.

Shared fixtures for the simulation core. Nothing here opens a window:
the core never touches pygame display APIs.
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from elf_invaders.config import Config
from elf_invaders.game.formation import FormationController
from elf_invaders.game.particles import ParticleSystem
from elf_invaders.game.player import PlayerController
from elf_invaders.game.simulation import Simulation
from elf_invaders.game.state import SimulationState


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


class FixedRng:
    """Stand-in generator returning fixed draws, for deterministic fire tests."""

    def __init__(self, value: float = 0.0, index: int = 0):
        self.value = value
        self.index = index

    def random(self):
        return self.value

    def integers(self, high):
        return min(self.index, high - 1)


@pytest.fixture
def config():
    """Create a test configuration."""
    return Config()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def state(config):
    """A fresh playfield with a full formation at base speed."""
    st = SimulationState(player=PlayerController(config).spawn(), lives=config.LIVES)
    FormationController(config).reset(st)
    return st


@pytest.fixture
def particles(config, rng):
    return ParticleSystem(config, rng)


@pytest.fixture
def sim(config):
    """A seeded simulation sitting in the menu."""
    return Simulation(config, seed=42)


@pytest.fixture
def fixed_rng():
    """Factory for FixedRng: fixed_rng(value=0.0, index=0)."""
    return FixedRng
