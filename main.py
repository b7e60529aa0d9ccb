from jammed.backends import BACKENDS, get_backend
from jammed.config import SimulationConfig
from jammed.experiments.driver import SimulationDriver
from jammed.experiments.runner import run_single
from jammed.io.logging_utils import setup_logging, logger
from jammed.io.results_writer import save_result_as_json
from jammed.metrics.timers import FrameClock


def choose_backend() -> str:
    print("=== Choose backend ===")
    for i, name in enumerate(BACKENDS.keys(), start=1):
        print(f"{i}. {name}")
    choice = input("Enter number: ").strip()

    try:
        idx = int(choice) - 1
        name = list(BACKENDS.keys())[idx]
    except (ValueError, IndexError):
        print("Invalid choice, falling back to 'sequential'")
        name = "sequential"
    return name


def run_live(cfg: SimulationConfig) -> None:
    """Drive the world in real time, logging a status line once per second."""
    backend = get_backend(cfg.backend)(cfg)
    clock = FrameClock(target_fps=cfg.target_fps)
    driver = SimulationDriver(backend.world, backend.step, clock, adaptive_dt=cfg.adaptive_dt)
    report_every = max(1, int(cfg.target_fps))

    def on_frame(world, states):
        if clock.frames % report_every == 0:
            wrecked = sum(1 for s in states if s.car.wrecked)
            logger.info(f"t={world.metrics_raw.simulated_time:6.1f}s  {clock.fps:5.1f} fps  wrecked {wrecked}/{len(states)}")

    try:
        driver.run(max_steps=int(cfg.total_time * cfg.target_fps), on_frame=on_frame)
    except KeyboardInterrupt:
        driver.stop()
        logger.info("Interrupted.")


def main():
    setup_logging()

    print("=== Jammed: car-following traffic simulation ===")

    backend_name = choose_backend()

    try:
        total_time = float(input("Total simulation time [s] (default 60): ") or "60")
        road_kind = input("Road kind circular/polyline (default circular): ").strip() or "circular"
        lanes = int(input("Lanes per road (default 2): ") or "2")
        cars = int(input("Cars per lane (default 10): ") or "10")
        live = (input("Run live? [y/N]: ").strip().lower() == "y")
    except ValueError:
        print("Invalid input, using defaults.")
        total_time, road_kind, lanes, cars, live = 60.0, "circular", 2, 10, False

    if road_kind not in ("circular", "polyline"):
        print("Unknown road kind, using 'circular'")
        road_kind = "circular"

    cfg = SimulationConfig(
        backend=backend_name,
        total_time=total_time,
        road_kind=road_kind,
        lanes_per_road=lanes,
        cars_per_lane=cars,
    )

    if live:
        run_live(cfg)
        return

    result = run_single(cfg)

    logger.info("Simulation finished.")
    logger.info(f"Wall time: {result.wall_time_seconds:.4f} s")
    logger.info(f"Steps: {result.steps}")
    logger.info(f"Vehicles wrecked: {result.vehicles_wrecked}/{result.vehicles_total}")
    logger.info(f"Collisions: {result.collisions} ({result.collisions_per_min:.2f}/min)")
    logger.info(f"Mean speed: {result.mean_speed:.2f} m/s")

    path = save_result_as_json(result, cfg.output_dir)
    logger.info(f"Results saved to {path}")


if __name__ == "__main__":
    main()
