"""
Pytest Configuration and Shared Fixtures
"""

import pytest

from jammed.config import DrivingRules
from jammed.model.geometry import Vector
from jammed.model.road import Road
from jammed.model.vehicles import Vehicle


@pytest.fixture
def rules() -> DrivingRules:
    return DrivingRules()


@pytest.fixture
def make_car():
    """Factory for vehicles with test-friendly defaults"""
    counter = {"next": 0}

    def _make(**overrides) -> Vehicle:
        params = dict(
            id=counter["next"],
            length=5.0,
            max_speed=100.0,
            max_acceleration=8.0,
            min_keeping_time=0.1,
            position=0.0,
            speed=0.0,
        )
        params.update(overrides)
        counter["next"] += 1
        return Vehicle(**params)

    return _make


@pytest.fixture
def loop_road() -> Road:
    """Single-lane straight road of length 100, traffic wraps at the end"""
    return Road.polyline([Vector(0.0, 0.0), Vector(100.0, 0.0)])


@pytest.fixture
def ring_road() -> Road:
    """Two-lane circular track around (400, 300)"""
    return Road.circular(Vector(400.0, 300.0), min_radius=150.0, num_lanes=2, lane_width=10.0)
