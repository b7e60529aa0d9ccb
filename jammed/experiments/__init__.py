from jammed.config import SimulationConfig
from jammed.backends import get_backend, BACKENDS
from jammed.experiments.driver import SimulationDriver


__all__ = ["SimulationConfig", "get_backend", "BACKENDS", "SimulationDriver"]
