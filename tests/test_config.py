"""Tests for configuration settings."""

from __future__ import annotations

import pytest

from antcolony.config import ColonyConfig


class TestDefaults:
    """Test default rules and derived values."""

    def test_defaults(self):
        config = ColonyConfig()
        assert config.seed == 1337
        assert config.worker_count == 32
        assert config.evaluation_steps == 700
        assert config.worker_max_health == 24.0
        assert config.queen_max_health == 48.0
        assert config.elite_count == 4
        assert config.mutation_strength == 0.32

    def test_world_size_in_blocks(self):
        config = ColonyConfig()
        assert (config.world_size_x, config.world_size_y, config.world_size_z) == (128, 32, 128)

    def test_nest_cost_is_a_third(self):
        assert ColonyConfig().nest_cost(48.0) == pytest.approx(16.0)

    def test_nest_cost_fraction_clamped(self):
        assert ColonyConfig(queen_nest_cost_fraction=2.0).nest_cost(48.0) == 48.0
        assert ColonyConfig(queen_nest_cost_fraction=-1.0).nest_cost(48.0) == 0.0

    def test_counts_never_below_one(self):
        config = ColonyConfig(worker_count=0, evaluation_steps=-3)
        assert config.effective_worker_count == 1
        assert config.effective_evaluation_steps == 1


class TestEnvironment:
    """Test ANTCOLONY_* overrides."""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ANTCOLONY_SEED", "7")
        monkeypatch.setenv("ANTCOLONY_HISTORY_RECORDING", "true")
        config = ColonyConfig()
        assert config.seed == 7
        assert config.history_recording is True
