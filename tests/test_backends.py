"""
Test Suite: Backends, runner and result files
"""

import json
import os

import pytest

from jammed.backends import BACKENDS, get_backend
from jammed.backends.backend_numba import NumbaBackend
from jammed.backends.backend_sequential import SequentialBackend
from jammed.config import SimulationConfig
from jammed.experiments.runner import run_scaling_experiment, run_single
from jammed.io.results_writer import save_result_as_json


@pytest.fixture
def short_config() -> SimulationConfig:
    return SimulationConfig(total_time=2.0, dt=0.1, lanes_per_road=2, cars_per_lane=5, random_seed=1)


# =============================================================================
# Test Class: Registry
# =============================================================================

class TestRegistry:

    def test_known_backends(self):
        assert set(BACKENDS) == {"sequential", "numba"}
        assert get_backend("sequential") is SequentialBackend
        assert get_backend("numba") is NumbaBackend

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Available"):
            get_backend("cuda")


# =============================================================================
# Test Class: Runs
# =============================================================================

class TestRuns:

    def test_sequential_run(self, short_config):
        result = run_single(short_config)

        assert result.backend == "sequential"
        assert result.steps == 20
        assert result.total_simulated_time == pytest.approx(2.0)
        assert result.vehicles_total == 10
        assert 0 <= result.vehicles_wrecked <= result.vehicles_total
        assert result.wall_time_seconds >= 0.0
        assert result.config["cars_per_lane"] == 5
        assert result.extra_stats["steps"] == 20

    @pytest.mark.slow
    def test_numba_run_matches_sequential(self, short_config):
        sequential = run_single(short_config)
        short_config.backend = "numba"
        parallel = run_single(short_config)

        assert parallel.backend == "numba"
        assert parallel.steps == sequential.steps
        assert parallel.vehicles_wrecked == sequential.vehicles_wrecked
        assert parallel.collisions == sequential.collisions
        assert parallel.mean_speed == pytest.approx(sequential.mean_speed, abs=1e-6)

    def test_scaling_experiment(self, short_config):
        results = run_scaling_experiment(short_config, "sequential", "cars_per_lane", [2, 4])

        assert [r.vehicles_total for r in results] == [4, 8]
        # the base config is left alone
        assert short_config.cars_per_lane == 5


# =============================================================================
# Test Class: Result files
# =============================================================================

class TestResultsWriter:

    def test_json_written(self, short_config, tmp_path):
        short_config.label = "ring"
        result = run_single(short_config)

        path = save_result_as_json(result, str(tmp_path / "out"))

        assert os.path.basename(path).startswith("sequential_ring_")
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["steps"] == result.steps
        assert data["config"]["label"] == "ring"
