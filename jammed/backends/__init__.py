from typing import Dict, Type

from jammed.backends.base_backend import SimulationBackend
from jammed.backends.backend_sequential import SequentialBackend
from jammed.backends.backend_numba import NumbaBackend


BACKENDS: Dict[str, Type[SimulationBackend]] = {
    SequentialBackend.name: SequentialBackend,
    NumbaBackend.name: NumbaBackend,
}


def get_backend(name: str) -> Type[SimulationBackend]:
    try:
        return BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown backend '{name}'. Available: {', '.join(BACKENDS.keys())}"
        )
