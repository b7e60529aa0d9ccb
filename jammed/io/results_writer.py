import json
import os
from datetime import datetime

from jammed.metrics.types import SimulationResult


def _ensure_dir(path: str):
    os.makedirs(path, exist_ok=True)


def save_result_as_json(result: SimulationResult, output_dir: str) -> str:
    """Write one run's result to <output_dir>/<backend>[_<label>]_<timestamp>.json."""
    _ensure_dir(output_dir)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    label = result.config.get("label")
    stem = f"{result.backend}_{label}" if label else result.backend
    path = os.path.join(output_dir, f"{stem}_{ts}.json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.__dict__, f, indent=2, ensure_ascii=False)

    return path
