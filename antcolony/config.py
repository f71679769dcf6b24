"""Configuration settings for the ant colony simulation.

Uses Pydantic Settings for validation and environment variable support.
All settings can be overridden via ANTCOLONY_* environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ColonyConfig(BaseSettings):
    """Global configuration for the colony simulation and its evolution."""

    seed: int = 1337

    # World (sizes are in chunks; a chunk is chunk_diameter blocks wide)
    world_diameter: int = Field(default=16, ge=1)
    world_height: int = Field(default=4, ge=1)
    chunk_diameter: int = Field(default=8, ge=1)
    acidic_region_count: int = 10
    acidic_region_radius: int = 5
    container_sphere_count: int = 5
    container_sphere_radius: int = 20

    # Ant simulation
    worker_count: int = 32  # queen is spawned in addition to this count
    evaluation_steps: int = 700  # ticks per generation
    tick_seconds: float = 0.15
    worker_max_health: float = 24.0
    queen_max_health: float = 48.0
    base_health_drain: float = 0.25  # per tick, doubled on acidic cells
    mulch_health_restore: float = 12.0
    health_transfer_amount: float = 3.0
    queen_nest_cost_fraction: float = 1.0 / 3.0

    # Evolution
    elite_count: int = 4
    mutation_strength: float = 0.32
    reset_world_each_generation: bool = True

    # Generation history recording
    history_recording: bool = False
    history_output_dir: str = "data/history"

    model_config = {"env_prefix": "ANTCOLONY_"}

    @property
    def world_size_x(self) -> int:
        return self.world_diameter * self.chunk_diameter

    @property
    def world_size_y(self) -> int:
        return self.world_height * self.chunk_diameter

    @property
    def world_size_z(self) -> int:
        return self.world_diameter * self.chunk_diameter

    @property
    def effective_worker_count(self) -> int:
        """Size of the worker genome pool (never below one)."""
        return max(1, self.worker_count)

    @property
    def effective_evaluation_steps(self) -> int:
        return max(1, self.evaluation_steps)

    def nest_cost(self, max_health: float) -> float:
        """Health a queen with the given max health spends per nest block."""
        fraction = min(1.0, max(0.0, self.queen_nest_cost_fraction))
        return max_health * fraction
