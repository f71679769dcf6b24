"""Spawn placement search.

Finds an unoccupied, standable, non-container cell for a new agent. The
search escalates through tiers until one succeeds:

1. uniform random column probes
2. random probes around an anchor (usually the queen), if one is given
3. exhaustive scan of every interior column
4. expanding rings from the world centre, forcing a standable cell if needed
"""

from __future__ import annotations

import logging
import random
from collections.abc import Set
from typing import TYPE_CHECKING

from antcolony.simulation.terrain import CellKind, find_top_solid_y, is_solid

if TYPE_CHECKING:
    from antcolony.simulation.entities import Cell
    from antcolony.simulation.terrain import Terrain

logger = logging.getLogger(__name__)

RANDOM_PROBES = 2400
NEAR_PROBES = 140
NEAR_RADIUS = 8


class SpawnSearch:
    """Tiered spawn-cell search over one terrain."""

    def __init__(self, terrain: Terrain, rng: random.Random):
        self.terrain = terrain
        self.rng = rng
        self.last_tier = 0  # tier that produced the last successful placement

    @property
    def x_range(self) -> tuple[int, int]:
        """Inclusive interior x bounds (the outer rim is excluded when possible)."""
        return _interior(self.terrain.size_x)

    @property
    def z_range(self) -> tuple[int, int]:
        return _interior(self.terrain.size_z)

    def _candidate(self, x: int, z: int, occupied: Set[Cell]) -> Cell | None:
        y = find_top_solid_y(self.terrain, x, z)
        if y < 1:
            return None
        cell = (x, y, z)
        if cell in occupied:
            return None
        if self.terrain.get_cell(x, y, z) is CellKind.CONTAINER:
            return None
        return cell

    def find(self, occupied: Set[Cell], anchor: Cell | None = None) -> Cell | None:
        """Run the full tiered search.

        Args:
            occupied: Cells already taken this generation
            anchor: Optional cell to search around after random probing fails

        Returns:
            A spawn cell, or None only if every column is occupied
        """
        cell = self._random_probe(occupied)
        if cell is not None:
            self.last_tier = 1
            return cell

        if anchor is not None:
            cell = self.find_near(anchor, occupied)
            if cell is not None:
                self.last_tier = 2
                return cell

        cell = self._exhaustive_scan(occupied)
        if cell is not None:
            self.last_tier = 3
            return cell

        cell = self._forced_ring_scan(occupied)
        if cell is not None:
            self.last_tier = 4
            logger.warning(f"Spawn fallback was used to place an agent at {cell}")
        return cell

    def find_near(
        self,
        anchor: Cell,
        occupied: Set[Cell],
        radius: int = NEAR_RADIUS,
        attempts: int = NEAR_PROBES,
    ) -> Cell | None:
        """Random probes within a square radius of an anchor cell."""
        x_lo, x_hi = self.x_range
        z_lo, z_hi = self.z_range
        for _ in range(attempts):
            x = _clamp(anchor[0] + self.rng.randint(-radius, radius), x_lo, x_hi)
            z = _clamp(anchor[2] + self.rng.randint(-radius, radius), z_lo, z_hi)
            cell = self._candidate(x, z, occupied)
            if cell is not None:
                return cell
        return None

    def _random_probe(self, occupied: Set[Cell]) -> Cell | None:
        x_lo, x_hi = self.x_range
        z_lo, z_hi = self.z_range
        for _ in range(RANDOM_PROBES):
            x = self.rng.randint(x_lo, x_hi)
            z = self.rng.randint(z_lo, z_hi)
            cell = self._candidate(x, z, occupied)
            if cell is not None:
                return cell
        return None

    def _exhaustive_scan(self, occupied: Set[Cell]) -> Cell | None:
        x_lo, x_hi = self.x_range
        z_lo, z_hi = self.z_range
        for x in range(x_lo, x_hi + 1):
            for z in range(z_lo, z_hi + 1):
                cell = self._candidate(x, z, occupied)
                if cell is not None:
                    return cell
        return None

    def _forced_ring_scan(self, occupied: Set[Cell]) -> Cell | None:
        """Walk rings outward from the centre and make the first free column standable.

        A column whose top is missing or is a container gets a GRASS cell at its
        top (or at y=1 when empty). Rings grow until they cover the whole grid.
        """
        x_lo, x_hi = self.x_range
        z_lo, z_hi = self.z_range
        cx = _clamp(self.terrain.size_x // 2, x_lo, x_hi)
        cz = _clamp(self.terrain.size_z // 2, z_lo, z_hi)
        max_radius = max(x_hi - x_lo, z_hi - z_lo) + 1

        for radius in range(max_radius):
            for dx in range(-radius, radius + 1):
                for dz in range(-radius, radius + 1):
                    if max(abs(dx), abs(dz)) != radius:
                        continue
                    x, z = cx + dx, cz + dz
                    if not (x_lo <= x <= x_hi and z_lo <= z <= z_hi):
                        continue
                    y = max(1, find_top_solid_y(self.terrain, x, z))
                    cell = (x, y, z)
                    if cell in occupied:
                        continue
                    kind = self.terrain.get_cell(x, y, z)
                    if not is_solid(kind) or kind is CellKind.CONTAINER:
                        self.terrain.set_cell(x, y, z, CellKind.GRASS)
                    return cell
        return None


def _interior(size: int) -> tuple[int, int]:
    low = min(1, size - 1)
    return low, max(low, size - 2)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
