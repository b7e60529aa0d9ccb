from abc import ABC, abstractmethod
from dataclasses import asdict

from jammed.config import SimulationConfig
from jammed.metrics.types import SimulationResult
from jammed.model.seeding import random_world
from jammed.model.world import World


class SimulationBackend(ABC):
    """
    Abstract base for all backends (Sequential, Numba).
    Every backend simulates a random world seeded from the config.
    """

    name: str = "base"

    def __init__(self, config: SimulationConfig, world: World | None = None):
        self.config = config
        self.world = world if world is not None else random_world(config)

    @property
    def num_steps(self) -> int:
        return int(round(self.config.total_time / self.config.dt))

    @abstractmethod
    def step(self, dt: float) -> int:
        """Advance the world by dt; returns the collisions of this step."""
        raise NotImplementedError

    @abstractmethod
    def run(self) -> SimulationResult:
        """Run the whole simulation and return its results."""
        raise NotImplementedError

    def _result(self, wall_time: float) -> SimulationResult:
        total, wrecked, mean_speed, collisions_per_min = self.world.get_metrics_summary()
        raw = self.world.metrics_raw

        return SimulationResult(
            backend=self.name,
            config=asdict(self.config),
            wall_time_seconds=wall_time,
            total_simulated_time=raw.simulated_time,
            steps=raw.steps,
            vehicles_total=total,
            vehicles_wrecked=wrecked,
            collisions=raw.collisions,
            mean_speed=mean_speed,
            collisions_per_min=collisions_per_min,
            extra_stats=self.world.get_debug_stats(),
        )
