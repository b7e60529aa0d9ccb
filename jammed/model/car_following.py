from __future__ import annotations

from typing import Optional

import numpy as np
from numba import njit, prange

from jammed.config import DrivingRules
from .geometry import wrap_position
from .vehicles import Vehicle


def follow_car(
    road_length: float,
    car: Vehicle,
    next_car: Optional[Vehicle],
    dt: float,
    rules: DrivingRules,
) -> bool:
    """
    Advance one car by dt, reacting only to the car ahead of it in its lane.

    Returns True when this update ended in a wreck.
    """
    if car.wrecked:
        return False

    car.acceleration = car.max_acceleration
    gap: float | None = None
    closing_speed = 0.0

    if next_car is not None:
        closing_speed = car.speed - next_car.speed
        gap = next_car.position - car.position
        # the car ahead may sit across the loop seam
        while gap < 0.0:
            gap += road_length

        if abs(closing_speed) > rules.delta:
            impact_time = gap / closing_speed
        else:
            impact_time = -1.0

        if impact_time < 0.0:
            # diverging, or closing too slowly to matter
            car.acceleration = car.max_acceleration
        elif impact_time <= rules.min_impact_time:
            car.acceleration = -car.max_acceleration

        if car.speed > rules.delta and gap / car.speed < car.min_keeping_time:
            car.acceleration = -car.max_acceleration
        if gap < rules.min_keeping_distance:
            car.acceleration = -car.max_acceleration

    car.speed = min(car.max_speed, max(0.0, car.speed + car.acceleration * dt))
    car.position += car.speed * dt + 0.5 * car.acceleration * dt * dt

    wrecked = False
    if gap is not None and gap - closing_speed + rules.collision_distance_delta < car.length:
        car.position = next_car.position - car.length
        car.wreck()
        next_car.wreck()
        wrecked = True

    car.position = wrap_position(car.position, road_length)

    return wrecked


@njit(parallel=True)
def follow_lanes_kernel(
    positions: np.ndarray,
    speeds: np.ndarray,
    accels: np.ndarray,
    lengths: np.ndarray,
    max_speeds: np.ndarray,
    max_accels: np.ndarray,
    keeping_times: np.ndarray,
    wrecked: np.ndarray,
    counts: np.ndarray,
    road_lengths: np.ndarray,
    wrecks: np.ndarray,
    dt: float,
    delta: float,
    min_impact_time: float,
    min_keeping_distance: float,
    collision_distance_delta: float,
) -> None:
    """
    Numba-parallel version of follow_car over many lanes.

    Arrays have shape (num_rows, max_n_per_row), one row per (road, lane),
    each row sorted by position. counts[row] says how many slots are valid.
    Rows run in parallel; cars inside a row are updated in order, as in
    the pure Python loop. wrecks[row] receives the number of new wrecks.
    """
    num_rows = counts.shape[0]

    for row in prange(num_rows):
        n = counts[row]
        road_length = road_lengths[row]
        wrecks[row] = 0

        for i in range(n):
            if wrecked[row, i]:
                continue

            accel = max_accels[row, i]
            speed = speeds[row, i]
            gap = 0.0
            closing_speed = 0.0
            has_next = n > 1
            j = (i + 1) % n

            if has_next:
                closing_speed = speed - speeds[row, j]
                gap = positions[row, j] - positions[row, i]
                while gap < 0.0:
                    gap += road_length

                impact_time = -1.0
                if abs(closing_speed) > delta:
                    impact_time = gap / closing_speed

                if impact_time < 0.0:
                    accel = max_accels[row, i]
                elif impact_time <= min_impact_time:
                    accel = -max_accels[row, i]

                if speed > delta and gap / speed < keeping_times[row, i]:
                    accel = -max_accels[row, i]
                if gap < min_keeping_distance:
                    accel = -max_accels[row, i]

            speed = min(max_speeds[row, i], max(0.0, speed + accel * dt))
            position = positions[row, i] + speed * dt + 0.5 * accel * dt * dt

            if has_next and gap - closing_speed + collision_distance_delta < lengths[row, i]:
                position = positions[row, j] - lengths[row, i]
                speed = 0.0
                accel = 0.0
                wrecked[row, i] = True
                wrecked[row, j] = True
                speeds[row, j] = 0.0
                accels[row, j] = 0.0
                wrecks[row] += 1

            while position >= road_length:
                position -= road_length
            while position < 0.0:
                position += road_length
            if position >= road_length:
                position = 0.0

            positions[row, i] = position
            speeds[row, i] = speed
            accels[row, i] = accel
