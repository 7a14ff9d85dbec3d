"""
Configuration constants for the incremental heat diffusion solver.

All values are plain named numbers fixed at construction time. The grid is
never resized, so anything derived from the dimensions (chunk grid, sweep
length) is computed here once.
"""

import math
from dataclasses import dataclass, field, fields, replace as dc_replace
from typing import Tuple

import numpy as np


# Polynomial fit of conductivity against temperature: k = a0 + a1*T + a2*T^2
DEFAULT_CONDUCTIVITY_COEFFS: Tuple[float, float, float] = (0.6065, -0.00122, 0.0000063)

# Fields used as array dimensions and slice bounds
INTEGER_FIELDS = ("width", "height", "chunk_size")


class ConfigurationError(ValueError):
    """Raised when the solver is constructed with unusable constants."""


@dataclass(frozen=True)
class DiffusionConfig:
    """Grid dimensions and physical constants for one solver instance."""
    # Grid
    width: int = 16
    height: int = 16
    chunk_size: int = 4
    cell_size: float = 32.0  # world units per tile (presentation only)

    # Thermal
    initial_temperature: float = 50.0
    tile_mass: float = 0.01
    tile_heat_capacity: float = 1.0
    heat_transfer_speed: float = 0.1
    min_heat: float = 0.0
    max_heat: float = 100.0
    conductivity_coeffs: Tuple[float, float, float] = field(
        default=DEFAULT_CONDUCTIVITY_COEFFS
    )

    # Seeding
    noise_scale: float = 0.1

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check every constant, raising ConfigurationError on the first bad one."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "conductivity_coeffs":
                if len(value) != 3 or not all(math.isfinite(c) for c in value):
                    raise ConfigurationError(
                        f"conductivity_coeffs must be three finite numbers, got {value!r}"
                    )
            elif f.name in INTEGER_FIELDS:
                if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                    raise ConfigurationError(f"{f.name} must be an integer, got {value!r}")
            elif not math.isfinite(value):
                raise ConfigurationError(f"{f.name} must be finite, got {value!r}")

        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.tile_mass <= 0:
            raise ConfigurationError(f"tile_mass must be positive, got {self.tile_mass}")
        if self.tile_heat_capacity <= 0:
            raise ConfigurationError(
                f"tile_heat_capacity must be positive, got {self.tile_heat_capacity}"
            )
        if self.heat_transfer_speed <= 0:
            raise ConfigurationError(
                f"heat_transfer_speed must be positive, got {self.heat_transfer_speed}"
            )
        if self.max_heat <= self.min_heat:
            raise ConfigurationError(
                f"max_heat ({self.max_heat}) must be greater than min_heat ({self.min_heat})"
            )
        if self.cell_size <= 0:
            raise ConfigurationError(f"cell_size must be positive, got {self.cell_size}")
        if self.noise_scale <= 0:
            raise ConfigurationError(f"noise_scale must be positive, got {self.noise_scale}")

    def replace(self, **changes) -> "DiffusionConfig":
        """Return a validated copy with some constants changed."""
        return dc_replace(self, **changes)

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------
    @property
    def shape(self) -> Tuple[int, int]:
        """Array shape of every per-cell field, (height, width)."""
        return (self.height, self.width)

    @property
    def heat_mass(self) -> float:
        """Heat needed to raise one tile by one degree."""
        return self.tile_mass * self.tile_heat_capacity

    @property
    def chunk_grid(self) -> Tuple[int, int]:
        """Number of chunks along x and y, trailing partial chunks included."""
        return (
            -(-self.width // self.chunk_size),
            -(-self.height // self.chunk_size),
        )

    @property
    def chunks_per_sweep(self) -> int:
        nx, ny = self.chunk_grid
        return nx * ny

    def max_conductivity(self) -> float:
        """Largest conductivity the polynomial reaches inside [min_heat, max_heat]."""
        a0, a1, a2 = self.conductivity_coeffs
        candidates = [self.min_heat, self.max_heat]
        if a2 != 0.0:
            vertex = -a1 / (2.0 * a2)
            if self.min_heat < vertex < self.max_heat:
                candidates.append(vertex)
        t = np.array(candidates, dtype=np.float64)
        return float(np.max(np.abs(a0 + a1 * t + a2 * t * t)))

    def stability_number(self, dt: float) -> float:
        """
        Explicit-scheme stability estimate for one integration of length dt.

        Values above 1 mean a cell can overshoot its neighbours within one
        sweep; the clamp still keeps temperatures inside the configured range.
        """
        return 4.0 * self.max_conductivity() * self.heat_transfer_speed * dt / self.heat_mass
