"""Voxel world used as the colony's terrain.

Provides a column-based world with layered ground (stone under grass),
scattered mulch, acidic regions, container shells and an indestructible
container floor and rim. Satisfies the Terrain protocol.
"""

from __future__ import annotations

import math
import random
from typing import TYPE_CHECKING

from antcolony.errors import ConfigurationError, ValidationError
from antcolony.simulation.terrain import CellKind, is_solid

if TYPE_CHECKING:
    from antcolony.config import ColonyConfig


class VoxelWorld:
    """The terrain grid. y is up; y=0 is the container floor."""

    def __init__(
        self,
        size_x: int,
        size_y: int,
        size_z: int,
        seed: int = 42,
        generate: bool = True,
        acidic_region_count: int = 10,
        acidic_region_radius: int = 5,
        container_sphere_count: int = 5,
        container_sphere_radius: int = 20,
    ):
        """Initialize a new world with the given dimensions and random seed.

        Args:
            size_x: Width of the world in cells
            size_y: Height of the world in cells
            size_z: Depth of the world in cells
            seed: Random seed for reproducible world generation
            generate: Run procedural generation; otherwise start all AIR
            acidic_region_count: Number of acidic spheres carved into the ground
            acidic_region_radius: Radius of each acidic sphere
            container_sphere_count: Number of container shells
            container_sphere_radius: Radius of each container shell
        """
        if size_x < 2 or size_z < 2 or size_y < 2:
            raise ConfigurationError(
                f"World must be at least 2x2x2, got {size_x}x{size_y}x{size_z}"
            )
        self._size_x = size_x
        self._size_y = size_y
        self._size_z = size_z
        self.seed = seed
        self.acidic_region_count = acidic_region_count
        self.acidic_region_radius = acidic_region_radius
        self.container_sphere_count = container_sphere_count
        self.container_sphere_radius = container_sphere_radius
        self._rng = random.Random(seed)
        self._cells: list[CellKind] = [CellKind.AIR] * (size_x * size_y * size_z)
        self._nest_count = 0
        if generate:
            self._generate()
        self._initial_cells = list(self._cells)
        self._initial_nest_count = self._nest_count

    @classmethod
    def from_config(cls, config: ColonyConfig) -> VoxelWorld:
        """Build the world described by a ColonyConfig."""
        return cls(
            config.world_size_x,
            config.world_size_y,
            config.world_size_z,
            seed=config.seed,
            acidic_region_count=config.acidic_region_count,
            acidic_region_radius=config.acidic_region_radius,
            container_sphere_count=config.container_sphere_count,
            container_sphere_radius=config.container_sphere_radius,
        )

    @property
    def size_x(self) -> int:
        return self._size_x

    @property
    def size_y(self) -> int:
        return self._size_y

    @property
    def size_z(self) -> int:
        return self._size_z

    @property
    def nest_block_count(self) -> int:
        """Number of NEST cells currently in the world."""
        return self._nest_count

    def in_bounds(self, x: int, y: int, z: int) -> bool:
        return 0 <= x < self._size_x and 0 <= y < self._size_y and 0 <= z < self._size_z

    def _index(self, x: int, y: int, z: int) -> int:
        return (x * self._size_y + y) * self._size_z + z

    def get_cell(self, x: int, y: int, z: int) -> CellKind:
        """Get the cell at the given coordinates, or AIR if out of bounds."""
        if not self.in_bounds(x, y, z):
            return CellKind.AIR
        return self._cells[self._index(x, y, z)]

    def set_cell(self, x: int, y: int, z: int, kind: CellKind) -> None:
        """Replace the cell at the given coordinates."""
        if not self.in_bounds(x, y, z):
            raise ValidationError(f"Cell ({x}, {y}, {z}) is outside the world")
        i = self._index(x, y, z)
        previous = self._cells[i]
        if previous is CellKind.NEST:
            self._nest_count -= 1
        if kind is CellKind.NEST:
            self._nest_count += 1
        self._cells[i] = kind

    def fill_column(self, x: int, z: int, top: int, kind: CellKind = CellKind.GRASS) -> None:
        """Make cells 0..top of a column solid with `kind`, and everything above AIR."""
        for y in range(self._size_y):
            self.set_cell(x, y, z, kind if y <= top else CellKind.AIR)

    def reset_to_initial_state(self) -> None:
        """Restore every cell to its state right after generation."""
        self._cells = list(self._initial_cells)
        self._nest_count = self._initial_nest_count

    def snapshot_as_initial(self) -> None:
        """Treat the current cells as the state reset_to_initial_state() restores."""
        self._initial_cells = list(self._cells)
        self._initial_nest_count = self._nest_count

    def count(self, kind: CellKind) -> int:
        return sum(1 for cell in self._cells if cell is kind)

    def _generate(self) -> None:
        """Generate layered terrain with acidic regions, container shells and mulch.

        Surface height follows a few random low-frequency waves so neighbouring
        columns stay within reach of each other.
        """
        base = self._size_y // 3
        amplitude = max(1.0, self._size_y / 8)
        waves = [
            (
                self._rng.uniform(0.05, 0.2),
                self._rng.uniform(0.05, 0.2),
                self._rng.uniform(0.0, 2 * math.pi),
            )
            for _ in range(3)
        ]

        for x in range(self._size_x):
            for z in range(self._size_z):
                wave = sum(math.sin(fx * x + fz * z + phase) for fx, fz, phase in waves) / 3
                surface = int(round(base + wave * amplitude))
                surface = max(1, min(self._size_y - 2, surface))
                for y in range(surface + 1):
                    if y == 0:
                        kind = CellKind.CONTAINER
                    elif y < surface - 2:
                        kind = CellKind.STONE
                    else:
                        kind = CellKind.GRASS
                    self._cells[self._index(x, y, z)] = kind

        for _ in range(self.acidic_region_count):
            self._carve_sphere(self.acidic_region_radius, CellKind.ACIDIC, shell_only=False)

        for _ in range(self.container_sphere_count):
            self._carve_sphere(self.container_sphere_radius, CellKind.CONTAINER, shell_only=True)

        # Mulch sits on roughly one column in twelve
        for x in range(1, self._size_x - 1):
            for z in range(1, self._size_z - 1):
                if self._rng.random() >= 1 / 12:
                    continue
                for y in range(self._size_y - 2, 0, -1):
                    below = self._cells[self._index(x, y, z)]
                    if is_solid(below):
                        if below is not CellKind.CONTAINER:
                            self._cells[self._index(x, y + 1, z)] = CellKind.MULCH
                        break

        # Container rim around the world edge
        for x in range(self._size_x):
            for z in range(self._size_z):
                if x in (0, self._size_x - 1) or z in (0, self._size_z - 1):
                    for y in range(self._size_y):
                        if is_solid(self._cells[self._index(x, y, z)]):
                            self._cells[self._index(x, y, z)] = CellKind.CONTAINER

    def _carve_sphere(self, radius: int, kind: CellKind, shell_only: bool) -> None:
        """Convert solid cells inside (or on the shell of) a random sphere to `kind`."""
        cx = self._rng.randrange(self._size_x)
        cy = self._rng.randrange(self._size_y)
        cz = self._rng.randrange(self._size_z)
        r2 = radius * radius
        inner2 = (radius - 1) * (radius - 1)
        for x in range(max(0, cx - radius), min(self._size_x, cx + radius + 1)):
            for y in range(max(1, cy - radius), min(self._size_y, cy + radius + 1)):
                for z in range(max(0, cz - radius), min(self._size_z, cz + radius + 1)):
                    d2 = (x - cx) ** 2 + (y - cy) ** 2 + (z - cz) ** 2
                    if d2 > r2 or (shell_only and d2 < inner2):
                        continue
                    i = self._index(x, y, z)
                    if is_solid(self._cells[i]) and self._cells[i] is not CellKind.CONTAINER:
                        self._cells[i] = kind
