from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from jammed.config import DrivingRules
from jammed.io.logging_utils import logger
from .car_following import follow_car, follow_lanes_kernel
from .geometry import Vector
from .road import Road
from .vehicles import Vehicle


@dataclass
class WorldMetricsRaw:
    steps: int = 0
    simulated_time: float = 0.0
    collisions: int = 0  # wreck events, each wrecks two cars

    def record_step(self, dt: float, collisions: int) -> None:
        self.steps += 1
        self.simulated_time += dt
        self.collisions += collisions


@dataclass(frozen=True)
class CarRenderState:
    """What a renderer needs to draw one car for the current frame."""
    road_index: int
    road: Road
    car: Vehicle
    translate: Vector
    tangent: Vector
    corners: Tuple[Vector, Vector, Vector, Vector] = field(repr=False)


class World:
    """
    Owns every road of the simulation and advances them together.

    Roads never interact, so a step is just sort-then-update per road.
    width and height are the display bounds and do not affect the motion.
    """

    def __init__(
        self,
        width: float,
        height: float,
        roads: Optional[List[Road]] = None,
        rules: Optional[DrivingRules] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.roads: List[Road] = list(roads) if roads else []
        self.rules = rules or DrivingRules()
        self.metrics_raw = WorldMetricsRaw()

    def add_road(self, road: Road) -> Road:
        self.roads.append(road)
        return road

    # ------------------------ PUBLIC API ------------------------

    def step(self, dt: float) -> int:
        """
        Sequential step. For every road:
        1) restore position order inside each lane
        2) apply the car-following rule to every car against its successor

        Returns the number of collisions that happened in this step.
        """
        if dt < 0:
            raise ValueError("dt cannot be negative")

        collisions = 0
        for road_idx, road in enumerate(self.roads):
            road.sort_cars()
            outcomes = road.for_each_car(
                lambda r, car, next_car: follow_car(r.length, car, next_car, dt, self.rules)
            )
            wrecks = sum(outcomes)
            if wrecks:
                logger.debug(f"Road {road_idx}: {wrecks} collision(s) at t={self.metrics_raw.simulated_time:.2f}s")
            collisions += wrecks

        self.metrics_raw.record_step(dt, collisions)
        return collisions

    def step_parallel(self, dt: float) -> int:
        """
        Same update as step(), computed by a Numba-parallel kernel.
        Every (road, lane) pair becomes one row of NumPy arrays.
        """
        if dt < 0:
            raise ValueError("dt cannot be negative")

        rows: List[List[Vehicle]] = []
        row_roads: List[int] = []
        for road_idx, road in enumerate(self.roads):
            road.sort_cars()
            for lane_cars in road.cars:
                rows.append(lane_cars)
                row_roads.append(road_idx)

        max_n = max((len(r) for r in rows), default=0)
        if max_n == 0:
            self.metrics_raw.record_step(dt, 0)
            return 0

        num_rows = len(rows)
        positions = np.zeros((num_rows, max_n), dtype=np.float64)
        speeds = np.zeros((num_rows, max_n), dtype=np.float64)
        accels = np.zeros((num_rows, max_n), dtype=np.float64)
        lengths = np.zeros((num_rows, max_n), dtype=np.float64)
        max_speeds = np.zeros((num_rows, max_n), dtype=np.float64)
        max_accels = np.zeros((num_rows, max_n), dtype=np.float64)
        keeping_times = np.zeros((num_rows, max_n), dtype=np.float64)
        wrecked = np.zeros((num_rows, max_n), dtype=np.bool_)
        counts = np.zeros(num_rows, dtype=np.int32)
        road_lengths = np.zeros(num_rows, dtype=np.float64)
        wrecks = np.zeros(num_rows, dtype=np.int32)

        # Fill arrays from the vehicle objects
        for row, lane_cars in enumerate(rows):
            counts[row] = len(lane_cars)
            road_lengths[row] = self.roads[row_roads[row]].length
            for i, car in enumerate(lane_cars):
                positions[row, i] = car.position
                speeds[row, i] = car.speed
                accels[row, i] = car.acceleration
                lengths[row, i] = car.length
                max_speeds[row, i] = car.max_speed
                max_accels[row, i] = car.max_acceleration
                keeping_times[row, i] = car.min_keeping_time
                wrecked[row, i] = car.wrecked

        rules = self.rules
        follow_lanes_kernel(
            positions,
            speeds,
            accels,
            lengths,
            max_speeds,
            max_accels,
            keeping_times,
            wrecked,
            counts,
            road_lengths,
            wrecks,
            dt,
            rules.delta,
            rules.min_impact_time,
            rules.min_keeping_distance,
            rules.collision_distance_delta,
        )

        # Write back updated values
        for row, lane_cars in enumerate(rows):
            for i, car in enumerate(lane_cars):
                car.position = float(positions[row, i])
                car.speed = float(speeds[row, i])
                car.acceleration = float(accels[row, i])
                car.wrecked = bool(wrecked[row, i])

        collisions = int(wrecks.sum())
        if collisions:
            logger.debug(f"{collisions} collision(s) at t={self.metrics_raw.simulated_time:.2f}s")
        self.metrics_raw.record_step(dt, collisions)
        return collisions

    def render_states(self) -> Iterator[CarRenderState]:
        """Read-only traversal of every car with its place in world space."""
        for road_idx, road in enumerate(self.roads):
            for car in road.all_cars():
                translate, tangent = road.road_to_world_position(car.position, car.lane)
                yield CarRenderState(
                    road_index=road_idx,
                    road=road,
                    car=car,
                    translate=translate,
                    tangent=tangent,
                    corners=car.footprint(translate, tangent),
                )

    def all_cars(self) -> List[Vehicle]:
        return [car for road in self.roads for car in road.all_cars()]

    def get_metrics_summary(self) -> Tuple[int, int, float, float]:
        """
        - total vehicles
        - wrecked vehicles
        - mean speed of the vehicles still moving
        - collisions per simulated minute
        """
        cars = self.all_cars()
        wrecked = sum(1 for c in cars if c.wrecked)
        moving = [c.speed for c in cars if not c.wrecked]
        mean_speed = float(np.mean(moving)) if moving else 0.0

        minutes = self.metrics_raw.simulated_time / 60.0
        collisions_per_min = self.metrics_raw.collisions / minutes if minutes > 0 else 0.0

        return len(cars), wrecked, mean_speed, collisions_per_min

    def get_debug_stats(self) -> Dict[str, int]:
        return {
            "steps": self.metrics_raw.steps,
            "roads": len(self.roads),
            "collisions": self.metrics_raw.collisions,
        }
