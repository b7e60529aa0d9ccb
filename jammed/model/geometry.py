from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal, Sequence, Tuple, Union

import numpy as np


GeometryKind = Literal["polyline", "circular"]


@dataclass(frozen=True)
class Vector:
    x: float
    y: float

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Vector:
        return Vector(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def unit(self) -> Vector:
        """Same direction, length 1. Undefined for the zero vector."""
        size = self.magnitude()
        if size == 0.0:
            raise ValueError("unit vector of a zero-length vector is undefined")
        return Vector(self.x / size, self.y / size)

    def normal(self) -> Vector:
        """Unit vector rotated a quarter turn counter-clockwise."""
        return Vector(-self.y, self.x).unit()

    def distance_to(self, other: Vector) -> float:
        return (other - self).magnitude()

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


def _as_array(points: Sequence[Vector]) -> np.ndarray:
    if len(points) < 1:
        raise ValueError("a path needs at least one point")
    return np.array([(p.x, p.y) for p in points], dtype=np.float64)


def segment_lengths(points: Sequence[Vector]) -> np.ndarray:
    arr = _as_array(points)
    deltas = np.diff(arr, axis=0)
    return np.hypot(deltas[:, 0], deltas[:, 1])


def polyline_length(points: Sequence[Vector]) -> float:
    """Total arc length of the path; 0.0 for a single point."""
    return float(np.sum(segment_lengths(points)))


def point_at(
    points: Sequence[Vector],
    s: float,
    tolerance: float = 1e-9,
) -> Tuple[Vector, Vector]:
    """
    Walk the path to arc length s.

    Returns the point on the path and the unit tangent of the segment
    it lies on. The caller must wrap s into [0, length] first; anything
    further out than tolerance is rejected.
    """
    lengths = segment_lengths(points)
    total = float(np.sum(lengths))
    if total <= 0.0:
        raise ValueError("path has zero length")
    if s < 0.0 or s > total + tolerance:
        raise ValueError(f"road position {s} outside [0, {total}]")
    s = min(s, total)

    consumed = np.concatenate(([0.0], np.cumsum(lengths)))
    idx = int(np.searchsorted(consumed, s, side="right")) - 1
    idx = min(max(idx, 0), len(lengths) - 1)
    # a trailing zero-length segment has no direction
    while lengths[idx] == 0.0:
        idx -= 1

    start = points[idx]
    tangent = (points[idx + 1] - start).unit()
    return start + tangent * (s - float(consumed[idx])), tangent


@dataclass(frozen=True)
class PolylineGeometry:
    points: Tuple[Vector, ...]
    lane_width: float = 10.0
    kind: GeometryKind = field(default="polyline", init=False)
    length: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        length = polyline_length(self.points)
        if length <= 0.0:
            raise ValueError("polyline road must have positive length")
        object.__setattr__(self, "points", tuple(self.points))
        object.__setattr__(self, "length", length)


@dataclass(frozen=True)
class CircularGeometry:
    center: Vector
    min_radius: float = 150.0
    lane_width: float = 10.0
    kind: GeometryKind = field(default="circular", init=False)
    length: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        if self.min_radius <= 0.0:
            raise ValueError("circular road needs a positive radius")
        if self.lane_width < 0.0:
            raise ValueError("lane width cannot be negative")
        object.__setattr__(self, "length", 2.0 * math.pi * self.min_radius)

    def lane_radius(self, lane: int) -> float:
        return lane * self.lane_width + self.min_radius


RoadGeometry = Union[PolylineGeometry, CircularGeometry]


def wrap_position(position: float, length: float) -> float:
    """Bring position into [0, length), cheap for the one-wrap case."""
    if not math.isfinite(position):
        raise ValueError(f"road position {position} is not finite")
    while position >= length:
        position -= length
    while position < 0.0:
        position += length
    # a tiny negative value rounds up to exactly length
    if position >= length:
        position = 0.0
    return position


def locate(geometry: RoadGeometry, s: float, lane: int = 0) -> Tuple[Vector, Vector]:
    """
    Map road position s (already in [0, length]) of the given lane to a
    world point and the unit tangent in the direction of travel.
    """
    if geometry.kind == "circular":
        angle = 2.0 * math.pi * s / geometry.length
        radial = Vector(math.cos(angle), math.sin(angle))
        translate = geometry.center + radial * geometry.lane_radius(lane)
        return translate, radial.normal()

    point, tangent = point_at(geometry.points, s)
    # lanes sit side by side, offset along the segment normal
    return point + tangent.normal() * (lane * geometry.lane_width), tangent
