from jammed.backends.base_backend import SimulationBackend
from jammed.metrics.types import SimulationResult
from jammed.metrics.timers import Timer


class SequentialBackend(SimulationBackend):
    """
    Pure Python implementation of the simulation step.
    Used as the reference for the other backends.
    """

    name = "sequential"

    def step(self, dt: float) -> int:
        return self.world.step(dt)

    def run(self) -> SimulationResult:
        dt = self.config.dt

        with Timer() as t:
            for _ in range(self.num_steps):
                self.step(dt)

        return self._result(t.elapsed)
