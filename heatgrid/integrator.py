"""
Explicit Euler integration of one completed sweep.

new_T = clamp(T + flux / (mass * heat_capacity) * speed * dt, min_heat, max_heat)

The update only reads the accumulated flux and the cell's own temperature,
and it is written to a fresh array, so every cell sees the same pre-update
snapshot.
"""

import numpy as np

try:
    from .config import DiffusionConfig, ConfigurationError
except ImportError:
    from config import DiffusionConfig, ConfigurationError


class DiffusionIntegrator:
    """Turns accumulated flux into a clamped temperature update."""

    def __init__(self, config: DiffusionConfig):
        if config.tile_mass <= 0 or config.tile_heat_capacity <= 0:
            raise ConfigurationError("Tile mass and heat capacity must be positive")
        self.config = config
        self.heat_mass = config.heat_mass
        self.min_heat = config.min_heat
        self.max_heat = config.max_heat

    def temperature_delta(self, flux: np.ndarray, dt: float) -> np.ndarray:
        """Unclamped temperature change produced by ``flux`` over ``dt``."""
        return flux * (self.config.heat_transfer_speed * dt / self.heat_mass)

    def integrate(self, temperature: np.ndarray, flux: np.ndarray, dt: float) -> np.ndarray:
        """
        Apply one sweep's flux.

        Args:
            temperature: Committed field, shape (height, width)
            flux: Accumulated net flux for the same cells
            dt: Delta of the tick that completed the sweep (seconds)

        Returns:
            New temperature array, same dtype as ``temperature``.
        """
        if temperature.shape != flux.shape:
            raise ValueError(
                f"Flux shape {flux.shape} does not match temperature shape {temperature.shape}"
            )
        new_temp = temperature + self.temperature_delta(flux, dt).astype(temperature.dtype)
        np.clip(new_temp, self.min_heat, self.max_heat, out=new_temp)
        return new_temp
