from dataclasses import dataclass, asdict
from typing import Literal, Optional


BackendName = Literal["sequential", "numba"]
RoadKind = Literal["circular", "polyline"]


@dataclass
class SimulationConfig:
    # total time of simulation (seconds)
    total_time: float = 60.0
    # time step (seconds)
    dt: float = 1.0 / 30.0
    random_seed: int = 42

    backend: BackendName = "sequential"
    # numba
    num_threads: int = 1

    # world seeding
    num_roads: int = 1
    road_kind: RoadKind = "circular"
    lanes_per_road: int = 2
    cars_per_lane: int = 10
    width: float = 800.0
    height: float = 600.0

    # frame driver
    target_fps: float = 30.0
    # use the measured frame time instead of dt
    adaptive_dt: bool = False

    output_dir: str = "results"
    # scenario desc
    label: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DrivingRules:
    # general delta for floating-point comparisons
    delta: float = 0.001
    # time-to-impact [s] under which cars start braking
    min_impact_time: float = 1.0
    # gap [m] under which cars always brake
    min_keeping_distance: float = 1.0
    # slack added to the projected clearance before calling it a wreck
    collision_distance_delta: float = 0.1


@dataclass(frozen=True)
class VehicleLimits:
    min_length: float = 5.0
    max_length: float = 8.0
    min_max_speed: float = 70.0
    max_max_speed: float = 100.0
    min_max_acceleration: float = 2.0
    max_max_acceleration: float = 8.0
    # minimum travel time to the next car's rear kept while in motion
    min_keeping_time: float = 0.5
    max_keeping_time: float = 2.0


@dataclass(frozen=True)
class LaneLayout:
    lane_width: float = 10.0
    min_lane_radius: float = 150.0
    max_random_road_points: int = 10
    min_segment_length: float = 15.0
