from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

import numpy as np

from lorenzbeat.core.features import FeatureSeries


def write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


TRAJECTORY_FIELDS: Sequence[str] = ("step", "x", "y", "z", "x_norm", "y_norm", "z_norm", "speed", "speed_norm")


def trajectory_rows(trajectory: np.ndarray, features: FeatureSeries) -> List[Dict[str, Any]]:
    rows = []
    for i, (x, y, z) in enumerate(np.asarray(trajectory).reshape(-1, 3)):
        rows.append(
            {
                "step": i + 1,
                "x": float(x),
                "y": float(y),
                "z": float(z),
                "x_norm": float(features.xs[i]),
                "y_norm": float(features.ys[i]),
                "z_norm": float(features.zs[i]),
                "speed": float(features.raw_speed[i]),
                "speed_norm": float(features.spd[i]),
            }
        )
    return rows


def write_csv(path: Path, rows: List[Dict[str, Any]], fieldnames: Sequence[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(fieldnames))
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
