from __future__ import annotations

import numpy as np

from lorenzbeat.core.constants import (
    DEFAULT_DT,
    DEFAULT_STEPS,
    INITIAL_STATE,
    LORENZ_BETA,
    LORENZ_RHO,
    LORENZ_SIGMA,
)

from .base import ChaoticSystem


class LorenzSystem(ChaoticSystem):
    """Classic fourth-order Runge-Kutta integration of the Lorenz system."""

    def __init__(
        self,
        x: float,
        y: float,
        z: float,
        dt: float,
        sigma: float,
        rho: float,
        beta: float,
    ):
        super().__init__(x, y, z, dt)
        self.sigma = float(sigma)
        self.rho = float(rho)
        self.beta = float(beta)

    def derivative(self, x: float, y: float, z: float) -> tuple[float, float, float]:
        dx = self.sigma * (y - x)
        dy = x * (self.rho - z) - y
        dz = x * y - self.beta * z
        return dx, dy, dz

    def step(self) -> tuple[float, float, float]:
        h = self.dt
        x, y, z = self.x, self.y, self.z

        k1x, k1y, k1z = self.derivative(x, y, z)
        k2x, k2y, k2z = self.derivative(x + 0.5 * h * k1x, y + 0.5 * h * k1y, z + 0.5 * h * k1z)
        k3x, k3y, k3z = self.derivative(x + 0.5 * h * k2x, y + 0.5 * h * k2y, z + 0.5 * h * k2z)
        k4x, k4y, k4z = self.derivative(x + h * k3x, y + h * k3y, z + h * k3z)

        self.x += (h / 6.0) * (k1x + 2.0 * k2x + 2.0 * k3x + k4x)
        self.y += (h / 6.0) * (k1y + 2.0 * k2y + 2.0 * k3y + k4y)
        self.z += (h / 6.0) * (k1z + 2.0 * k2z + 2.0 * k3z + k4z)
        return self.x, self.y, self.z


def integrate_lorenz(
    steps: int = DEFAULT_STEPS,
    dt: float = DEFAULT_DT,
    sigma: float = LORENZ_SIGMA,
    rho: float = LORENZ_RHO,
    beta: float = LORENZ_BETA,
    initial: tuple[float, float, float] = INITIAL_STATE,
) -> np.ndarray:
    """
    Integrate from `initial` and return an (steps, 3) read-only trajectory.

    The initial condition is not part of the result; row k holds the state
    after k + 1 steps. Non-positive step counts give an empty trajectory.
    Pathological constants may diverge to inf/nan; downstream mapping copes.
    """
    system = LorenzSystem(*initial, dt=dt, sigma=sigma, rho=rho, beta=beta)
    return system.run(steps)
