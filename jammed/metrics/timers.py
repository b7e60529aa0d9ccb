import time
from collections import deque
from typing import Callable, Deque


class Timer:
    """
    Context for time mesurement.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self.clock = clock
        self.elapsed = 0.0

    def __enter__(self):
        self.start = self.clock()
        self.elapsed = 0.0
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = self.clock() - self.start


class MovingAverage:
    """Mean of the last `size` values; starts out filled with zeros."""

    def __init__(self, size: int):
        if size < 1:
            raise ValueError("moving average needs a window of at least 1")
        self.size = size
        self.data: Deque[float] = deque(maxlen=size)
        self.clear()

    def clear(self) -> None:
        self.data.clear()
        self.data.extend([0.0] * self.size)

    def add(self, value: float) -> None:
        self.data.append(value)

    def result(self) -> float:
        return sum(self.data) / self.size


class FrameClock:
    """
    Measures the time between frames.

    tick() returns the seconds elapsed since the previous tick; the first
    tick has nothing to measure against and returns the nominal frame
    time. fps is smoothed over the last `window` frames.
    """

    def __init__(
        self,
        target_fps: float = 30.0,
        window: int = 4,
        clock: Callable[[], float] = time.perf_counter,
    ):
        if target_fps <= 0:
            raise ValueError("target fps must be positive")
        self.target_fps = target_fps
        self.clock = clock
        self.elapsed_avg = MovingAverage(window)
        self.last_tick: float | None = None
        self.frames = 0

    @property
    def frame_time(self) -> float:
        return 1.0 / self.target_fps

    @property
    def fps(self) -> float:
        avg = self.elapsed_avg.result()
        return 1.0 / avg if avg > 0 else 0.0

    def tick(self) -> float:
        now = self.clock()
        elapsed = self.frame_time if self.last_tick is None else now - self.last_tick
        self.last_tick = now
        self.elapsed_avg.add(elapsed)
        self.frames += 1
        return elapsed
