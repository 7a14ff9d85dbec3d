"""
Scenario definitions for the heat diffusion simulation.

Each scenario is a seeding function ``(config, rng) -> ndarray`` that returns
the initial temperature field, shape (height, width). The registry at the
bottom maps scenario names to those functions.
"""

import numpy as np
from scipy import ndimage
from typing import Callable, Dict, Optional

try:
    from .config import DiffusionConfig
except ImportError:
    from config import DiffusionConfig


SeedFunction = Callable[[DiffusionConfig, np.random.Generator], np.ndarray]


def coherent_noise(width: int, height: int, scale: float, rng: np.random.Generator) -> np.ndarray:
    """
    Smooth 2-D noise in [-1, 1].

    A coarse lattice of random values is laid over the grid with one lattice
    step every 1/scale cells, and each cell samples it with a cubic spline.
    Small scales give broad, slowly varying blobs.
    """
    lattice_w = int(np.ceil(width * scale)) + 2
    lattice_h = int(np.ceil(height * scale)) + 2
    lattice = rng.uniform(-1.0, 1.0, size=(lattice_h, lattice_w))

    y_grid, x_grid = np.mgrid[0:height, 0:width].astype(np.float64)
    coords = np.array([y_grid * scale, x_grid * scale])
    sampled = ndimage.map_coordinates(lattice, coords, order=3, mode="nearest")
    # Cubic splines overshoot slightly past the lattice extremes
    return np.clip(sampled, -1.0, 1.0)


def seed_random(config: DiffusionConfig, rng: np.random.Generator) -> np.ndarray:
    """Independent uniform temperature per tile in [min_heat, max_heat)."""
    span = config.max_heat - config.min_heat
    return config.min_heat + rng.random(config.shape) * span


def seed_noise(config: DiffusionConfig, rng: np.random.Generator) -> np.ndarray:
    """Coherent noise remapped from [-1, 1] to [min_heat, max_heat]."""
    noise = coherent_noise(config.width, config.height, config.noise_scale, rng)
    span = config.max_heat - config.min_heat
    return config.min_heat + (noise + 1.0) * 0.5 * span


def seed_uniform(config: DiffusionConfig, rng: np.random.Generator) -> np.ndarray:
    """Every tile at the initial temperature (equilibrium)."""
    return np.full(config.shape, config.initial_temperature, dtype=np.float64)


def seed_hot_row(config: DiffusionConfig, rng: np.random.Generator) -> np.ndarray:
    """Cold grid with the bottom row at max_heat."""
    temperature = np.full(config.shape, config.min_heat, dtype=np.float64)
    temperature[-1, :] = config.max_heat
    return temperature


def seed_hot_spot(config: DiffusionConfig, rng: np.random.Generator) -> np.ndarray:
    """Cold grid with a hot disk in the middle."""
    temperature = np.full(config.shape, config.min_heat, dtype=np.float64)
    cx, cy = (config.width - 1) / 2.0, (config.height - 1) / 2.0
    radius = max(min(config.width, config.height) / 6.0, 0.5)

    y_grid, x_grid = np.ogrid[:config.height, :config.width]
    dist = np.sqrt((x_grid - cx) ** 2 + (y_grid - cy) ** 2)
    temperature[dist <= radius] = config.max_heat
    return temperature


# Scenario registry
SCENARIOS: Dict[str, SeedFunction] = {
    'random': seed_random,
    'noise': seed_noise,
    'uniform': seed_uniform,
    'hot_row': seed_hot_row,
    'hot_spot': seed_hot_spot,
}

DEFAULT_SCENARIO = 'random'


def get_scenario_names():
    """Return list of available scenario names."""
    return list(SCENARIOS.keys())


def seed_temperature(name: Optional[str], config: DiffusionConfig,
                     rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Build the initial field for a named scenario.

    Args:
        name: Scenario name (or None for the default)
        config: Grid dimensions and temperature range
        rng: Random generator; a fresh unseeded one if omitted

    Returns:
        float64 array of shape (height, width)
    """
    if name is None:
        name = DEFAULT_SCENARIO
    if name not in SCENARIOS:
        raise ValueError(f"Unknown scenario: {name}. Available options: {get_scenario_names()}")
    if rng is None:
        rng = np.random.default_rng()
    return SCENARIOS[name](config, rng)
