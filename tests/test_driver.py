"""
Test Suite: Frame timing and the simulation driver

Uses a fake clock and a no-op sleep so the loop runs instantly and every
measured frame time is known in advance.
"""

import pytest

from jammed.metrics.timers import FrameClock, MovingAverage, Timer
from jammed.experiments.driver import SimulationDriver
from jammed.model.world import World


class FakeClock:
    """Returns the queued timestamps one by one"""

    def __init__(self, *times):
        self.times = list(times)

    def __call__(self):
        return self.times.pop(0)


# =============================================================================
# Test Class: Timers
# =============================================================================

class TestTimers:

    def test_timer_measures_block(self):
        with Timer(clock=FakeClock(10.0, 12.5)) as t:
            pass
        assert t.elapsed == pytest.approx(2.5)

    def test_moving_average_window(self):
        avg = MovingAverage(4)
        assert avg.result() == 0.0
        for v in (1.0, 2.0, 3.0, 4.0, 5.0):
            avg.add(v)
        assert avg.result() == pytest.approx((2.0 + 3.0 + 4.0 + 5.0) / 4)
        avg.clear()
        assert avg.result() == 0.0

    def test_moving_average_needs_window(self):
        with pytest.raises(ValueError):
            MovingAverage(0)

    def test_frame_clock_first_tick_is_nominal(self):
        clock = FrameClock(target_fps=30, clock=FakeClock(100.0))
        assert clock.tick() == pytest.approx(1 / 30)

    def test_frame_clock_measures_and_smooths(self):
        clock = FrameClock(target_fps=30, window=2, clock=FakeClock(0.0, 0.05, 0.15))
        clock.tick()
        assert clock.tick() == pytest.approx(0.05)
        assert clock.tick() == pytest.approx(0.10)
        assert clock.fps == pytest.approx(1 / 0.075)
        assert clock.frames == 3

    def test_frame_clock_rejects_bad_fps(self):
        with pytest.raises(ValueError):
            FrameClock(target_fps=0)


# =============================================================================
# Test Class: Driver
# =============================================================================

class TestSimulationDriver:

    @pytest.fixture
    def world(self, loop_road, make_car):
        loop_road.add_car(make_car(position=10.0), 0)
        return World(800, 600, roads=[loop_road])

    def test_runs_max_steps_with_fixed_dt(self, world):
        seen = []
        sleeps = []
        driver = SimulationDriver(
            world,
            step=lambda dt: seen.append(dt) or 0,
            clock=FrameClock(target_fps=20, clock=FakeClock(0.0, 1.0, 2.0)),
            sleep=sleeps.append,
        )

        assert driver.run(max_steps=3) == 3
        assert seen == [pytest.approx(0.05)] * 3
        assert sleeps == [pytest.approx(0.05)] * 3

    def test_adaptive_dt_uses_measured_time(self, world):
        seen = []
        driver = SimulationDriver(
            world,
            step=lambda dt: seen.append(dt) or 0,
            clock=FrameClock(target_fps=20, clock=FakeClock(0.0, 0.2)),
            sleep=lambda s: None,
            adaptive_dt=True,
        )

        driver.run(max_steps=2)
        assert seen == [pytest.approx(0.05), pytest.approx(0.2)]

    def test_frames_see_state_before_step(self, world):
        positions = []
        driver = SimulationDriver(world, clock=FrameClock(clock=FakeClock(0.0, 1.0)), sleep=lambda s: None)

        driver.run(
            max_steps=2,
            on_frame=lambda w, states: positions.append(states[0].car.position),
        )

        assert positions[0] == 10.0
        assert positions[1] > 10.0
        assert world.metrics_raw.steps == 2

    def test_stop_takes_effect_at_step_boundary(self, world):
        driver = SimulationDriver(world, clock=FrameClock(clock=FakeClock(*range(10))), sleep=lambda s: None)
        calls = []

        def step(dt):
            calls.append(dt)
            if len(calls) == 3:
                driver.stop()
            return world.step(dt)

        driver.step_fn = step
        assert driver.run() == 3
        assert not driver.running
        # the step that requested the stop still completed
        assert world.metrics_raw.steps == 3
