"""Shared test fixtures for the antcolony test suite."""

from __future__ import annotations

import random

import pytest

from antcolony.config import ColonyConfig
from antcolony.simulation.colony import Colony
from antcolony.simulation.world import VoxelWorld
from tests.helpers import make_flat_world


@pytest.fixture
def config() -> ColonyConfig:
    """Default rules with a small 16x16x16 world and a small colony."""
    return ColonyConfig(
        seed=42,
        world_diameter=2,
        world_height=2,
        chunk_diameter=8,
        worker_count=4,
        evaluation_steps=40,
        history_recording=False,
    )


@pytest.fixture
def flat_world() -> VoxelWorld:
    """8x6x8 world of grass columns topped at y=2."""
    return make_flat_world()


@pytest.fixture
def colony(flat_world: VoxelWorld, config: ColonyConfig) -> Colony:
    """Empty colony on the flat world."""
    return Colony(flat_world, config)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(7)
