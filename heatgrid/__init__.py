"""
Incremental heat diffusion on a 2-D grid.

An explicit finite-difference solver whose full-grid pass is spread over
several ticks by processing one rectangular chunk per tick.
"""

from .config import DiffusionConfig, ConfigurationError
from .flux_model import heat_flux, thermal_conductivity
from .chunk_scheduler import ChunkScheduler
from .flux_accumulator import FluxAccumulator
from .integrator import DiffusionIntegrator
from .solver import IncrementalDiffusionSolver
from .simulation import HeatSimulation
from .scenarios import get_scenario_names, seed_temperature

__version__ = "1.0.0"

__all__ = [
    'DiffusionConfig',
    'ConfigurationError',
    'heat_flux',
    'thermal_conductivity',
    'ChunkScheduler',
    'FluxAccumulator',
    'DiffusionIntegrator',
    'IncrementalDiffusionSolver',
    'HeatSimulation',
    'get_scenario_names',
    'seed_temperature',
]
