"""
Random world generation: roads, and cars parked bumper to bumper on them.
Everything is drawn from a caller-supplied random.Random, so a seed fully
determines the world.
"""

from __future__ import annotations

import itertools
import random
from typing import Iterator, List, Optional

from jammed.config import DrivingRules, LaneLayout, SimulationConfig, VehicleLimits
from jammed.io.logging_utils import logger
from .geometry import Vector
from .road import Road
from .vehicles import Vehicle
from .world import World


def random_color(rng: random.Random, low: int = 0, high: int = 255) -> str:
    r, g, b = (rng.randint(low, high) for _ in range(3))
    return f"rgba({r},{g},{b},1)"


def random_vehicle(
    rng: random.Random,
    vid: int,
    limits: VehicleLimits | None = None,
) -> Vehicle:
    """A parked car with random dimensions and performance."""
    limits = limits or VehicleLimits()
    return Vehicle(
        id=vid,
        length=rng.uniform(limits.min_length, limits.max_length),
        max_speed=rng.uniform(limits.min_max_speed, limits.max_max_speed),
        max_acceleration=rng.uniform(limits.min_max_acceleration, limits.max_max_acceleration),
        min_keeping_time=rng.uniform(limits.min_keeping_time, limits.max_keeping_time),
        speed=0.0,
        color=random_color(rng, 0, 200),
    )


def random_road_points(
    rng: random.Random,
    width: float,
    height: float,
    layout: LaneLayout | None = None,
) -> List[Vector]:
    """
    A random path of axis-aligned segments inside width x height.
    Segments alternate between vertical and horizontal moves.
    """
    layout = layout or LaneLayout()
    # segments alternate axes, so both sides must fit a full segment
    if min(width, height) <= layout.min_segment_length:
        raise ValueError(
            f"area {width}x{height} too small for segments of {layout.min_segment_length}"
        )
    num_segments = rng.randrange(layout.max_random_road_points) + 2

    points = [Vector(rng.uniform(0, width), rng.uniform(0, height))]
    prev = points[0]
    for i in range(num_segments):
        while True:
            target = Vector(rng.uniform(0, width), rng.uniform(0, height))
            if i % 2 == 0:
                point = Vector(prev.x, target.y)
            else:
                point = Vector(target.x, prev.y)
            if prev.distance_to(point) >= layout.min_segment_length:
                break
        points.append(point)
        prev = point
    return points


def last_car_in_lane(road: Road, lane: int) -> Optional[Vehicle]:
    lane_cars = road.cars[lane]
    return lane_cars[-1] if lane_cars else None


def add_random_car(
    rng: random.Random,
    road: Road,
    lane: int,
    vid: int,
    limits: VehicleLimits | None = None,
    rules: DrivingRules | None = None,
) -> Optional[Vehicle]:
    """
    Put a random car just ahead of the last car of the lane.
    Returns None when the lane has no room left for it.
    """
    rules = rules or DrivingRules()
    last = last_car_in_lane(road, lane)
    car = random_vehicle(rng, vid, limits)

    spacing = 1.0 + rng.uniform(0.0, rules.min_keeping_distance)
    car.position = last.position + last.length + spacing if last else 0.0

    # the lane is a loop: keep room behind the first car as well
    if car.position + car.length + spacing >= road.length:
        return None

    road.add_car(car, lane)
    return car


def random_road(
    rng: random.Random,
    config: SimulationConfig,
    ids: Iterator[int] | None = None,
    layout: LaneLayout | None = None,
    limits: VehicleLimits | None = None,
    rules: DrivingRules | None = None,
) -> Road:
    layout = layout or LaneLayout()
    ids = ids if ids is not None else itertools.count()
    color = random_color(rng, 200, 255)

    if config.road_kind == "circular":
        road = Road.circular(
            Vector(config.width, config.height) * 0.5,
            min_radius=layout.min_lane_radius,
            num_lanes=config.lanes_per_road,
            lane_width=layout.lane_width,
            color=color,
        )
    elif config.road_kind == "polyline":
        road = Road.polyline(
            random_road_points(rng, config.width, config.height, layout),
            num_lanes=config.lanes_per_road,
            lane_width=layout.lane_width,
            color=color,
        )
    else:
        raise ValueError(f"Unknown road kind '{config.road_kind}'")

    for lane in range(road.num_lanes):
        for _ in range(config.cars_per_lane):
            if add_random_car(rng, road, lane, next(ids), limits, rules) is None:
                logger.debug(f"Lane {lane} full after {len(road.cars[lane])} cars (road length {road.length:.1f})")
                break

    road.sort_cars()
    return road


def random_world(
    config: SimulationConfig,
    rules: DrivingRules | None = None,
    layout: LaneLayout | None = None,
    limits: VehicleLimits | None = None,
) -> World:
    rng = random.Random(config.random_seed)
    ids = itertools.count()
    world = World(config.width, config.height, rules=rules)
    for _ in range(config.num_roads):
        world.add_road(random_road(rng, config, ids, layout, limits, world.rules))
    return world
