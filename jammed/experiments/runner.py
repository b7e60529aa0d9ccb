from typing import Iterable, List

from jammed.backends import get_backend
from jammed.config import SimulationConfig
from jammed.io.logging_utils import logger
from jammed.metrics.types import SimulationResult


def run_single(config: SimulationConfig) -> SimulationResult:
    BackendCls = get_backend(config.backend)
    backend = BackendCls(config)
    logger.info(f"Running {backend.num_steps} steps with backend='{config.backend}'")
    return backend.run()


def run_scaling_experiment(
    base_config: SimulationConfig,
    backend_name: str,
    param_name: str,
    values: Iterable[int | float]
) -> List[SimulationResult]:
    """
    Run backend_name once per value, changing only param_name
    (e.g. num_threads or cars_per_lane) in a copy of base_config.
    """

    results: List[SimulationResult] = []
    for v in values:
        cfg_dict = base_config.to_dict()
        cfg_dict["backend"] = backend_name
        cfg_dict[param_name] = v
        cfg = SimulationConfig(**cfg_dict)  # type: ignore[arg-type]
        res = run_single(cfg)
        results.append(res)
    return results
