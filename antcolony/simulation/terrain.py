"""Cell classification and the terrain interface the colony runs against.

The simulation never owns terrain storage. It only classifies cells,
replaces them, and asks for the world bounds.
"""

from __future__ import annotations

import enum
from typing import Protocol, runtime_checkable


class CellKind(enum.Enum):
    """Closed set of terrain cell variants."""

    AIR = "air"
    GRASS = "grass"
    STONE = "stone"
    MULCH = "mulch"  # edible, restores health
    ACIDIC = "acidic"  # doubles health decay
    CONTAINER = "container"  # indestructible, never buildable
    NEST = "nest"  # built by the queen


def is_solid(kind: CellKind) -> bool:
    """Whether an agent can stand on a cell of this kind."""
    return kind is not CellKind.AIR


@runtime_checkable
class Terrain(Protocol):
    """Narrow cell-based interface to the voxel world."""

    @property
    def size_x(self) -> int: ...

    @property
    def size_y(self) -> int: ...

    @property
    def size_z(self) -> int: ...

    @property
    def nest_block_count(self) -> int: ...

    def get_cell(self, x: int, y: int, z: int) -> CellKind:
        """Classify a cell. Out-of-bounds cells read as AIR."""
        ...

    def set_cell(self, x: int, y: int, z: int, kind: CellKind) -> None:
        """Replace a cell."""
        ...

    def reset_to_initial_state(self) -> None:
        """Restore the terrain as it was right after generation."""
        ...


def find_top_solid_y(terrain: Terrain, x: int, z: int) -> int:
    """Highest solid y (>= 1) in a column, or -1 when the column is empty."""
    for y in range(terrain.size_y - 1, 0, -1):
        if is_solid(terrain.get_cell(x, y, z)):
            return y
    return -1
