from __future__ import annotations

from pathlib import Path
from typing import List

import matplotlib.pyplot as plt
import numpy as np

from lorenzbeat.core.mapping.base import ControlSeries


def plot_trajectory(trajectory: np.ndarray, out_path: Path) -> Path:
    """Two projections of the attractor: x/z (the butterfly) and x/y."""
    traj = np.asarray(trajectory).reshape(-1, 3)
    fig, (ax_xz, ax_xy) = plt.subplots(1, 2, figsize=(10, 4))
    ax_xz.plot(traj[:, 0], traj[:, 2], linewidth=0.5)
    ax_xz.set_xlabel("x")
    ax_xz.set_ylabel("z")
    ax_xy.plot(traj[:, 0], traj[:, 1], linewidth=0.5)
    ax_xy.set_xlabel("x")
    ax_xy.set_ylabel("y")
    fig.suptitle(f"Lorenz trajectory (steps={len(traj)})")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path


def plot_controls(controls: ControlSeries, out_path: Path) -> Path:
    """One panel per numeric series with its declared bounds as dashed lines."""
    names = sorted(controls.numeric)
    fig, axes = plt.subplots(max(len(names), 1), 1, figsize=(10, 1.8 * max(len(names), 1)), squeeze=False)
    for ax, name in zip(axes[:, 0], names):
        lo, hi = controls.bounds[name]
        ax.plot(controls.numeric[name], linewidth=0.7)
        ax.axhline(lo, linestyle="--", linewidth=0.5, color="grey")
        ax.axhline(hi, linestyle="--", linewidth=0.5, color="grey")
        ax.set_ylabel(name)
    axes[-1, 0].set_xlabel("step")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path


def generate_plots(trajectory: np.ndarray, controls: ControlSeries, out_dir: Path) -> List[str]:
    return [
        str(plot_trajectory(trajectory, out_dir / "trajectory.png")),
        str(plot_controls(controls, out_dir / "controls.png")),
    ]
