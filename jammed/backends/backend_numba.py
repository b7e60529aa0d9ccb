import numba
from numba import set_num_threads

from jammed.backends.base_backend import SimulationBackend
from jammed.config import SimulationConfig
from jammed.metrics.types import SimulationResult
from jammed.metrics.timers import Timer
from jammed.model.world import World


class NumbaBackend(SimulationBackend):
    """
    Parallel CPU backend. Uses the same World model, but calls
    step_parallel(), which runs the car-following rule in a Numba
    @njit(parallel=True) kernel, one lane per worker.
    """

    name = "numba"

    def __init__(self, config: SimulationConfig, world: World | None = None):
        super().__init__(config, world)

        # Configure the number of threads used by Numba
        if self.config.num_threads > 0:
            set_num_threads(min(self.config.num_threads, numba.config.NUMBA_NUM_THREADS))

    def step(self, dt: float) -> int:
        return self.world.step_parallel(dt)

    def run(self) -> SimulationResult:
        dt = self.config.dt
        steps = self.num_steps

        # Warm-up step to trigger Numba JIT compilation (not measured)
        if steps > 0:
            self.step(dt)

        with Timer() as t:
            for _ in range(steps - 1):
                self.step(dt)

        return self._result(t.elapsed)
