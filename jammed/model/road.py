from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from .geometry import (
    CircularGeometry,
    PolylineGeometry,
    RoadGeometry,
    Vector,
    locate,
    wrap_position,
)
from .vehicles import Vehicle


T = TypeVar("T")
CarVisitor = Callable[["Road", Vehicle, Optional[Vehicle]], T]


class Road:
    """
    A path shared by num_lanes lanes.

    Every lane keeps its own list of vehicles. Traffic on a lane is a
    closed loop: the car after the last one (by position) is the first.
    """

    def __init__(
        self,
        geometry: RoadGeometry,
        num_lanes: int = 1,
        color: str = "rgba(230,230,230,1)",
    ) -> None:
        if num_lanes < 1:
            raise ValueError("a road needs at least one lane")

        self.geometry = geometry
        self.num_lanes = num_lanes
        self.length: float = geometry.length
        self.color = color
        self.cars: List[List[Vehicle]] = [[] for _ in range(num_lanes)]

    @classmethod
    def polyline(
        cls,
        points: Sequence[Vector],
        num_lanes: int = 1,
        lane_width: float = 10.0,
        **kwargs,
    ) -> Road:
        return cls(PolylineGeometry(tuple(points), lane_width), num_lanes, **kwargs)

    @classmethod
    def circular(
        cls,
        center: Vector,
        min_radius: float = 150.0,
        num_lanes: int = 1,
        lane_width: float = 10.0,
        **kwargs,
    ) -> Road:
        return cls(CircularGeometry(center, min_radius, lane_width), num_lanes, **kwargs)

    @property
    def points(self) -> Tuple[Vector, ...]:
        if self.geometry.kind == "circular":
            return (self.geometry.center,)
        return self.geometry.points

    # ------------------------ VEHICLES ------------------------

    def add_car(self, car: Vehicle, lane: int) -> None:
        """Append car to lane. Ordering is restored by sort_cars()."""
        if not 0 <= lane < self.num_lanes:
            raise ValueError(f"lane {lane} out of range (road has {self.num_lanes})")
        car.lane = lane
        self.cars[lane].append(car)

    def sort_cars(self) -> None:
        for lane_cars in self.cars:
            lane_cars.sort(key=lambda c: c.position)

    def all_cars(self) -> List[Vehicle]:
        return [car for lane_cars in self.cars for car in lane_cars]

    def for_each_car(self, f: CarVisitor, lane: int | None = None) -> List[T]:
        """
        Call f(road, car, next_car) for every car of one lane, or of all
        lanes when lane is None, in stored order. next_car is None only
        when the car is alone in its lane.
        """
        lanes = range(self.num_lanes) if lane is None else [lane]
        results: List[T] = []
        for lane_idx in lanes:
            lane_cars = self.cars[lane_idx]
            n = len(lane_cars)
            for i, car in enumerate(lane_cars):
                next_car = lane_cars[(i + 1) % n] if n > 1 else None
                results.append(f(self, car, next_car))
        return results

    # ------------------------ GEOMETRY ------------------------

    def wrap_position(self, position: float) -> float:
        return wrap_position(position, self.length)

    def road_to_world_position(self, road_position: float, lane: int = 0) -> Tuple[Vector, Vector]:
        """World point and travel tangent of road_position on the given lane."""
        return locate(self.geometry, self.wrap_position(road_position), lane)
