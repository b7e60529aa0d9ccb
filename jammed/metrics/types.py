from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class SimulationResult:
    backend: str
    config: Dict[str, Any]

    wall_time_seconds: float
    total_simulated_time: float
    steps: int

    # traffic stats at the end of the run
    vehicles_total: int
    vehicles_wrecked: int
    collisions: int
    # [m/s] over vehicles that are not wrecked
    mean_speed: float
    collisions_per_min: float

    extra_stats: Dict[str, Any] = field(default_factory=dict)
