"""Tests for the colony roster and agent health bookkeeping."""

from __future__ import annotations

import pytest

from antcolony.errors import ValidationError
from antcolony.simulation.colony import Colony, cell_distance
from antcolony.simulation.entities import Role
from tests.helpers import zero_genome


class TestRoster:
    """Test spawning and roster queries."""

    def test_spawn_uses_role_max_health(self, colony: Colony):
        queen = colony.spawn(Role.QUEEN, zero_genome(), (3, 2, 3))
        worker = colony.spawn(Role.WORKER, zero_genome(), (4, 2, 4))

        assert queen.health == queen.max_health == 48.0
        assert worker.health == worker.max_health == 24.0
        assert (queen.index, worker.index) == (0, 1)
        assert colony.queen is queen

    def test_second_queen_rejected(self, colony: Colony):
        colony.spawn(Role.QUEEN, zero_genome(), (3, 2, 3))
        with pytest.raises(ValidationError):
            colony.spawn(Role.QUEEN, zero_genome(), (4, 2, 4))

    def test_dead_agents_stay_in_roster(self, colony: Colony):
        colony.spawn(Role.QUEEN, zero_genome(), (3, 2, 3))
        worker = colony.spawn(Role.WORKER, zero_genome(), (4, 2, 4))
        worker.die()

        assert len(colony) == 2
        assert colony.count_living == 1
        assert colony.count_dead == 1
        assert worker not in colony.living_agents()

    def test_live_queen_is_none_after_death(self, colony: Colony):
        queen = colony.spawn(Role.QUEEN, zero_genome(), (3, 2, 3))
        queen.die()
        assert colony.queen is queen
        assert colony.live_queen is None


class TestOccupancy:
    """Test co-location queries."""

    def test_count_living_at_ignores_dead(self, colony: Colony):
        a = colony.spawn(Role.WORKER, zero_genome(), (3, 2, 3))
        colony.spawn(Role.WORKER, zero_genome(), (3, 2, 3))
        assert colony.count_living_at((3, 2, 3)) == 2

        a.die()
        assert colony.count_living_at((3, 2, 3)) == 1

    def test_co_located_excludes_self(self, colony: Colony):
        a = colony.spawn(Role.WORKER, zero_genome(), (3, 2, 3))
        b = colony.spawn(Role.WORKER, zero_genome(), (3, 2, 3))
        colony.spawn(Role.WORKER, zero_genome(), (5, 2, 5))
        assert colony.co_located(a) == [b]

    def test_workers_within_radius(self, colony: Colony):
        colony.spawn(Role.QUEEN, zero_genome(), (3, 2, 3))
        colony.spawn(Role.WORKER, zero_genome(), (4, 2, 4))
        colony.spawn(Role.WORKER, zero_genome(), (6, 2, 6))
        assert colony.workers_within_radius((3, 2, 3), 4) == 1

    def test_manhattan_distance(self):
        assert cell_distance((0, 0, 0), (1, -2, 3)) == 6


class TestHealth:
    """Test health changes on a single agent."""

    def test_lose_health_kills_at_zero(self, colony: Colony):
        worker = colony.spawn(Role.WORKER, zero_genome(), (3, 2, 3))
        worker.lose_health(24.0)
        assert not worker.alive
        assert worker.health == 0.0

    def test_gain_health_caps_at_max(self, colony: Colony):
        worker = colony.spawn(Role.WORKER, zero_genome(), (3, 2, 3))
        worker.health = 20.0
        worker.gain_health(12.0)
        assert worker.health == 24.0
