from __future__ import annotations

import threading
import time
from typing import Callable, List, Optional

from jammed.io.logging_utils import logger
from jammed.metrics.timers import FrameClock
from jammed.model.world import CarRenderState, World


StepFn = Callable[[float], int]
FrameCallback = Callable[[World, List[CarRenderState]], None]


class SimulationDriver:
    """
    Frame loop around a World: tick the clock, hand the current frame to
    on_frame, advance the world, wait for the next frame.

    The world is only mutated by the step function, between frames.
    stop() is honoured at the next step boundary.
    """

    def __init__(
        self,
        world: World,
        step: Optional[StepFn] = None,
        clock: Optional[FrameClock] = None,
        sleep: Callable[[float], None] = time.sleep,
        adaptive_dt: bool = False,
    ) -> None:
        self.world = world
        self.step_fn: StepFn = step or world.step
        self.clock = clock or FrameClock()
        self.sleep = sleep
        self.adaptive_dt = adaptive_dt
        self.steps_done = 0
        self._stop = threading.Event()

    def stop(self) -> None:
        self._stop.set()

    @property
    def running(self) -> bool:
        return not self._stop.is_set()

    def run(
        self,
        max_steps: Optional[int] = None,
        on_frame: Optional[FrameCallback] = None,
    ) -> int:
        """Loop until stop() or max_steps; returns the steps done in this call."""
        self._stop.clear()
        done = 0

        while not self._stop.is_set():
            if max_steps is not None and done >= max_steps:
                break

            elapsed = self.clock.tick()
            dt = elapsed if self.adaptive_dt else self.clock.frame_time

            if on_frame is not None:
                on_frame(self.world, list(self.world.render_states()))

            self.step_fn(dt)
            done += 1
            self.steps_done += 1

            if self.clock.frames % 100 == 0:
                logger.debug(f"{self.clock.fps:.0f} fps after {self.clock.frames} frames")

            if not self._stop.is_set():
                self.sleep(self.clock.frame_time)

        logger.info(f"Driver stopped after {done} step(s)")
        return done
