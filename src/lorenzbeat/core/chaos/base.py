from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class ChaoticSystem(ABC):
    """Base class for chaotic systems integrated with a fixed step."""

    def __init__(self, x: float, y: float, z: float, dt: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.dt = float(dt)

    @property
    def state(self) -> tuple[float, float, float]:
        return self.x, self.y, self.z

    @abstractmethod
    def step(self) -> tuple[float, float, float]:
        """Advance one step and return the new state."""
        ...

    def run(self, steps: int) -> np.ndarray:
        """Advance `steps` times and record every new state as a row."""
        steps = max(int(steps), 0)
        trajectory = np.empty((steps, 3), dtype=np.float64)
        for i in range(steps):
            trajectory[i] = self.step()
        trajectory.flags.writeable = False
        return trajectory
