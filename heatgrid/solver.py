"""
Incremental heat diffusion solver.

One ``IncrementalDiffusionSolver`` is the whole simulation context: it owns
the temperature field, the flux accumulator and the chunk cursor. Callers
create it, keep a reference and drive it with ``tick(dt)``. Several instances
(for example a debug shadow grid) share nothing but the stateless flux model
and integration rule.

Per tick:
    1. flux for every east/south edge leaving the current chunk -> accumulator
    2. advance the chunk cursor
    3. if the cursor wrapped to (0, 0): integrate, commit, reset accumulator
"""

import logging
import math
from typing import Optional, Tuple

import numpy as np

try:
    from .config import DiffusionConfig
    from .grid import GridShape, Region, EAST, SOUTH
    from .flux_model import heat_flux_array
    from .chunk_scheduler import ChunkScheduler
    from .flux_accumulator import FluxAccumulator
    from .integrator import DiffusionIntegrator
except ImportError:
    from config import DiffusionConfig
    from grid import GridShape, Region, EAST, SOUTH
    from flux_model import heat_flux_array
    from chunk_scheduler import ChunkScheduler
    from flux_accumulator import FluxAccumulator
    from integrator import DiffusionIntegrator


FIELD_DTYPE = np.float32


class IncrementalDiffusionSolver:
    """Chunked explicit diffusion over a fixed 2-D grid."""

    def __init__(
        self,
        config: Optional[DiffusionConfig] = None,
        temperature: Optional[np.ndarray] = None,
        *,
        name: str = "primary",
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize solver state.

        Args:
            config: Grid and thermal constants (defaults to DiffusionConfig())
            temperature: Initial field of shape (height, width); defaults to
                config.initial_temperature everywhere. The array is copied.
            name: Label used in log messages
            logger: Logger to report to (module logger if omitted)
        """
        self.config = config if config is not None else DiffusionConfig()
        self.config.validate()
        self.name = name
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        self.grid = GridShape(self.config.width, self.config.height)
        self.scheduler = ChunkScheduler(self.config.width, self.config.height, self.config.chunk_size)
        self.accumulator = FluxAccumulator(self.config.width, self.config.height, dtype=FIELD_DTYPE)
        self.integrator = DiffusionIntegrator(self.config)

        self._temperature = np.empty(self.grid.shape, dtype=FIELD_DTYPE)
        self._load_field(temperature)

        self.tick_count = 0
        self.sweep_count = 0
        self.last_sweep_net_flux = 0.0
        self.last_sweep_flux = np.zeros(self.config.shape, dtype=FIELD_DTYPE)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def temperature(self) -> np.ndarray:
        """Committed temperatures as a read-only view."""
        view = self._temperature.view()
        view.flags.writeable = False
        return view

    @property
    def cursor(self) -> Tuple[int, int]:
        return self.scheduler.cursor

    @property
    def chunks_per_sweep(self) -> int:
        return self.scheduler.chunks_per_sweep

    def temperature_at(self, x: int, y: int) -> float:
        return float(self._temperature[self.grid.index(x, y)])

    def total_heat(self) -> float:
        """Heat content of the committed field relative to zero degrees."""
        return float(np.sum(self._temperature, dtype=np.float64) * self.config.heat_mass)

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------
    def tick(self, delta_seconds: float) -> bool:
        """
        Advance by one tick.

        Args:
            delta_seconds: Time since the previous tick

        Returns:
            True if this tick completed a sweep and committed new temperatures.
        """
        if not math.isfinite(delta_seconds) or delta_seconds < 0:
            raise ValueError(f"delta_seconds must be finite and non-negative, got {delta_seconds}")

        self.accumulate_region(self.scheduler.current_region())
        self.tick_count += 1

        if not self.scheduler.advance():
            return False

        self._commit_sweep(delta_seconds)
        return True

    def run_sweep(self, delta_seconds: float) -> int:
        """Tick until the sweep in progress completes; returns ticks used."""
        ticks = 1
        while not self.tick(delta_seconds):
            ticks += 1
        return ticks

    def accumulate_region(self, region: Region) -> None:
        """Add the flux of every east and south edge leaving ``region``."""
        coeffs = self.config.conductivity_coeffs
        for direction in (EAST, SOUTH):
            edges = self.grid.edge_slices(region, direction)
            if edges is None:
                continue
            source, dest = edges
            flux = heat_flux_array(self._temperature[source], self._temperature[dest],
                                   coeffs, dtype=FIELD_DTYPE)
            self.accumulator.accumulate_edges(source, dest, flux)

    def reset(self, temperature: Optional[np.ndarray] = None) -> None:
        """Reload the field and drop any partial sweep."""
        self._load_field(temperature)
        self.scheduler.reset()
        self.accumulator.clear()
        self.tick_count = 0
        self.sweep_count = 0
        self.last_sweep_net_flux = 0.0
        self.last_sweep_flux = np.zeros(self.config.shape, dtype=FIELD_DTYPE)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _load_field(self, temperature: Optional[np.ndarray]) -> None:
        if temperature is None:
            self._temperature.fill(self.config.initial_temperature)
            return
        field = np.asarray(temperature, dtype=FIELD_DTYPE)
        if field.shape != self.config.shape:
            raise ValueError(
                f"Temperature field shape {field.shape} does not match grid {self.config.shape}"
            )
        if not np.all(np.isfinite(field)):
            raise ValueError("Temperature field contains NaN or infinite values")
        self._temperature[...] = field

    def _commit_sweep(self, delta_seconds: float) -> None:
        flux = self.accumulator.swap()
        self.last_sweep_flux[...] = flux
        self.last_sweep_net_flux = self.accumulator.net_flux(flux)
        self._temperature[...] = self.integrator.integrate(self._temperature, flux, delta_seconds)
        self.accumulator.reset()
        self.sweep_count += 1

        if self.logger.isEnabledFor(logging.DEBUG):
            T = self._temperature
            self.logger.debug(
                "[%s] sweep %d committed after %d ticks: T_min=%.3f T_max=%.3f T_mean=%.3f net_flux=%.2e",
                self.name, self.sweep_count, self.tick_count,
                float(np.min(T)), float(np.max(T)), float(np.mean(T)), self.last_sweep_net_flux,
            )
