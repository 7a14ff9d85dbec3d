"""
Host tick driver for the incremental heat diffusion solver.

``HeatSimulation`` plays the role of the fixed-step game loop: it seeds the
field from a scenario, owns the solver (and an optional shadow solver used
for debugging), turns wall-clock frame time into fixed ticks and collects
the statistics shown by the visualizer.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Dict, Optional

import numpy as np

try:
    from .config import DiffusionConfig
    from .solver import IncrementalDiffusionSolver
    from .scenarios import seed_temperature
except ImportError:
    from config import DiffusionConfig
    from solver import IncrementalDiffusionSolver
    from scenarios import seed_temperature


DEFAULT_FIXED_DT = 1.0 / 64.0  # seconds per fixed tick


class HeatSimulation:
    """Owns the solver(s) and advances them on a fixed timestep."""

    def __init__(
        self,
        config: Optional[DiffusionConfig] = None,
        scenario: Optional[str] = "random",
        *,
        seed: Optional[int] = None,
        shadow: bool = False,
        fixed_dt: float = DEFAULT_FIXED_DT,
        max_ticks_per_frame: int = 8,
        paused: bool = True,
        log_level: str | int = "INFO",
    ) -> None:
        """
        Initialize the simulation.

        Args:
            config: Grid and thermal constants
            scenario: Name of the seeding scenario (None for the default)
            seed: Seed for the scenario's random generator
            shadow: Also run an independent shadow solver on a copy of the field
            fixed_dt: Seconds per tick
            max_ticks_per_frame: Upper bound on ticks run by one advance() call
            paused: Start paused (the interactive viewer unpauses on SPACE)
            log_level: Level for this simulation's logger
        """
        if fixed_dt <= 0:
            raise ValueError(f"fixed_dt must be positive, got {fixed_dt}")
        self.config = config if config is not None else DiffusionConfig()
        self.config.validate()

        # ---------- logger -------------------------------------------------
        self.logger = logging.getLogger(f"HeatGrid_{id(self)}")
        self.logger.setLevel(getattr(logging, str(log_level).upper(), logging.INFO)
                             if isinstance(log_level, str) else log_level)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            self.logger.addHandler(handler)

        self.scenario = scenario
        self.seed = seed
        self.use_shadow = shadow
        self.fixed_dt = float(fixed_dt)
        self.max_ticks_per_frame = max_ticks_per_frame
        self.paused = paused

        # Flags used by the visualizer
        self.logging_enabled = False

        self.primary: IncrementalDiffusionSolver
        self.shadow: Optional[IncrementalDiffusionSolver] = None
        self._setup_solvers()

        stability = self.config.stability_number(self.fixed_dt)
        if stability > 1.0:
            self.logger.warning(
                "Stability number %.2f > 1 for dt=%.4fs: temperatures may oscillate "
                "(values stay clamped to [%.1f, %.1f])",
                stability, self.fixed_dt, self.config.min_heat, self.config.max_heat,
            )

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def _setup_solvers(self) -> None:
        rng = np.random.default_rng(self.seed)
        initial = seed_temperature(self.scenario, self.config, rng)

        self.primary = IncrementalDiffusionSolver(self.config, initial, name="primary", logger=self.logger)
        if self.use_shadow:
            self.shadow = IncrementalDiffusionSolver(self.config, initial.copy(), name="shadow",
                                                     logger=self.logger)
        else:
            self.shadow = None

        self.time = 0.0
        self.step_count = 0
        self._clock_accumulator = 0.0
        self.step_timings: Dict[str, float] = {}
        self.last_step_time = 0.0
        self.fps = 0.0

        self.logger.info(
            "Heat grid %dx%d, chunk %d (%d ticks per sweep), scenario '%s'%s",
            self.config.width, self.config.height, self.config.chunk_size,
            self.primary.chunks_per_sweep, self.scenario,
            " with shadow grid" if self.shadow is not None else "",
        )

    def reset(self, scenario: Optional[str] = None) -> None:
        """Re-seed both solvers with the given (or stored) scenario."""
        if scenario is not None:
            self.scenario = scenario
        self._setup_solvers()
        self.logger.info("Simulation reset")

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    @property
    def temperature(self) -> np.ndarray:
        return self.primary.temperature

    @property
    def sweep_count(self) -> int:
        return self.primary.sweep_count

    def step(self) -> bool:
        """Run one fixed tick regardless of pause state; True if a sweep committed."""
        start_time = time.perf_counter()

        t0 = time.perf_counter()
        committed = self.primary.tick(self.fixed_dt)
        self.step_timings['primary'] = time.perf_counter() - t0

        if self.shadow is not None:
            t0 = time.perf_counter()
            self.shadow.tick(self.fixed_dt)
            self.step_timings['shadow'] = time.perf_counter() - t0

        self.time += self.fixed_dt
        self.step_count += 1

        self.last_step_time = time.perf_counter() - start_time
        if self.last_step_time > 0:
            self.fps = 1.0 / self.last_step_time

        if self.logging_enabled:
            self.logger.info("Performance timing (ms):")
            for name, seconds in self.step_timings.items():
                self.logger.info("  %s: %.3f", f"{name:<10}", seconds * 1000.0)

        return committed

    def step_forward(self) -> bool:
        """Execute one simulation tick unless paused."""
        if self.paused:
            return False
        return self.step()

    def advance(self, frame_seconds: float) -> int:
        """
        Feed wall-clock time into the fixed-step clock.

        Runs as many whole ticks as the accumulated time allows, at most
        max_ticks_per_frame; leftover time carries over to the next frame.

        Returns:
            Number of ticks executed.
        """
        if not math.isfinite(frame_seconds) or frame_seconds < 0:
            raise ValueError(f"frame_seconds must be finite and non-negative, got {frame_seconds}")
        if self.paused:
            return 0

        self._clock_accumulator += frame_seconds
        ticks = 0
        while self._clock_accumulator >= self.fixed_dt and ticks < self.max_ticks_per_frame:
            self.step()
            self._clock_accumulator -= self.fixed_dt
            ticks += 1
        if ticks == self.max_ticks_per_frame:
            # Falling behind: drop the backlog instead of spiralling
            self._clock_accumulator = min(self._clock_accumulator, self.fixed_dt)
        return ticks

    def run_sweeps(self, count: int) -> int:
        """Tick until ``count`` more sweeps have committed; returns ticks run."""
        target = self.primary.sweep_count + count
        ticks = 0
        while self.primary.sweep_count < target:
            self.step()
            ticks += 1
        return ticks

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def shadow_drift(self) -> float:
        """Largest difference between primary and shadow fields (0 without shadow)."""
        if self.shadow is None:
            return 0.0
        return float(np.max(np.abs(self.primary.temperature - self.shadow.temperature)))

    def get_info(self) -> Dict[str, Any]:
        """Get simulation information for display."""
        T = self.primary.temperature
        return {
            'time': self.time,
            'timestep': self.fixed_dt,
            'step_count': self.step_count,
            'sweep_count': self.primary.sweep_count,
            'cursor': self.primary.cursor,
            'chunks_per_sweep': self.primary.chunks_per_sweep,
            'fps': self.fps,
            'avg_temperature': float(np.mean(T)),
            'min_temperature': float(np.min(T)),
            'max_temperature': float(np.max(T)),
            'total_heat': self.primary.total_heat(),
            'net_flux': self.primary.last_sweep_net_flux,
            'shadow_drift': self.shadow_drift(),
        }
