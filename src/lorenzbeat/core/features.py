from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from lorenzbeat.core.constants import NEUTRAL
from lorenzbeat.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FeatureSeries:
    """Per-step features derived from a trajectory; all arrays share its length."""

    xs: np.ndarray
    ys: np.ndarray
    zs: np.ndarray
    dxs: np.ndarray
    dys: np.ndarray
    dzs: np.ndarray
    raw_speed: np.ndarray
    spd: np.ndarray

    def __len__(self) -> int:
        return len(self.xs)


def normalize(values, neutral: float = NEUTRAL) -> np.ndarray:
    """
    Min-max scale to [0, 1] using only the finite samples.

    Constant input, or input without finite samples, maps to `neutral`
    everywhere; isolated non-finite samples map to `neutral` as well.
    """
    arr = np.asarray(values, dtype=np.float64)
    out = np.full(arr.shape, neutral, dtype=np.float64)
    finite = np.isfinite(arr)
    if not finite.any():
        return out
    lo = float(arr[finite].min())
    hi = float(arr[finite].max())
    span = hi - lo
    if lo == hi or not np.isfinite(span):
        return out
    out[finite] = (arr[finite] - lo) / span
    return out


def diff(values) -> np.ndarray:
    """First difference with the same length as the input; element 0 is 0."""
    arr = np.asarray(values, dtype=np.float64)
    out = np.zeros(arr.shape, dtype=np.float64)
    if arr.size > 1:
        out[1:] = arr[1:] - arr[:-1]
    return out


def speed(dxs, dys, dzs) -> np.ndarray:
    """Euclidean magnitude of the step vector; non-finite components count as 0."""
    parts = [np.nan_to_num(np.asarray(d, dtype=np.float64), nan=0.0, posinf=0.0, neginf=0.0) for d in (dxs, dys, dzs)]
    return np.sqrt(parts[0] ** 2 + parts[1] ** 2 + parts[2] ** 2)


def extract_features(trajectory: np.ndarray) -> FeatureSeries:
    traj = np.asarray(trajectory, dtype=np.float64).reshape(-1, 3)
    xs_raw, ys_raw, zs_raw = traj[:, 0], traj[:, 1], traj[:, 2]

    # Diverged trajectories yield inf - inf here
    with np.errstate(over="ignore", invalid="ignore"):
        dxs, dys, dzs = diff(xs_raw), diff(ys_raw), diff(zs_raw)
        raw_speed = speed(dxs, dys, dzs)
        features = FeatureSeries(
            xs=normalize(xs_raw),
            ys=normalize(ys_raw),
            zs=normalize(zs_raw),
            dxs=dxs,
            dys=dys,
            dzs=dzs,
            raw_speed=raw_speed,
            spd=normalize(raw_speed),
        )
    logger.debug(
        "Extracted features n=%d non_finite_states=%d max_speed=%s",
        len(features),
        int((~np.isfinite(traj)).any(axis=1).sum()),
        float(raw_speed.max()) if raw_speed.size else "n/a",
    )
    return features
