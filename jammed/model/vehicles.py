from dataclasses import dataclass
from typing import Tuple

from .geometry import Vector


WRECKED_CAR_COLOR = "black"


@dataclass
class Vehicle:
    id: int
    length: float                # [m]
    max_speed: float             # [m/s]
    max_acceleration: float      # [m/s^2]
    min_keeping_time: float      # [s] time gap kept to the next car
    position: float = 0.0        # [m] along the road
    speed: float = 0.0           # [m/s]
    acceleration: float = 0.0    # [m/s^2] last decision
    lane: int = 0
    wrecked: bool = False
    color: str = "rgba(220,220,220,1)"

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError(f"vehicle {self.id}: length must be positive")
        if self.max_speed <= 0 or self.max_acceleration <= 0:
            raise ValueError(f"vehicle {self.id}: max speed and acceleration must be positive")
        if self.min_keeping_time <= 0:
            raise ValueError(f"vehicle {self.id}: keeping time must be positive")
        if self.speed < 0:
            raise ValueError(f"vehicle {self.id}: speed cannot be negative")

    def wreck(self) -> None:
        self.wrecked = True
        self.speed = 0.0
        self.acceleration = 0.0

    @property
    def display_color(self) -> str:
        return WRECKED_CAR_COLOR if self.wrecked else self.color

    def footprint(
        self, translate: Vector, tangent: Vector, width: float | None = None
    ) -> Tuple[Vector, Vector, Vector, Vector]:
        """
        Corners of the car's rectangle in world space, rear-left first.
        translate is the rear-centre point, tangent the travel direction.
        Square by default.
        """
        if width is None:
            width = self.length
        ahead = tangent.unit() * self.length
        side = tangent.normal() * (width / 2.0)
        front = translate + ahead
        return (translate + side, front + side, front - side, translate - side)
