"""Unit tests for the seeding scenarios"""

import numpy as np
import pytest
from config import DiffusionConfig
from scenarios import (SCENARIOS, coherent_noise, get_scenario_names, seed_temperature)


def test_registry_lists_all_scenarios():
    names = get_scenario_names()
    for expected in ['random', 'noise', 'uniform', 'hot_row', 'hot_spot']:
        assert expected in names, f"Missing scenario: {expected}"
    assert len(names) == len(SCENARIOS)


@pytest.mark.parametrize("name", sorted(SCENARIOS))
def test_scenarios_fill_grid_within_range(name, rng):
    """Every scenario yields a full field inside [min_heat, max_heat]"""
    config = DiffusionConfig(width=12, height=9)
    field = seed_temperature(name, config, rng)

    assert field.shape == (9, 12)
    assert np.all(np.isfinite(field))
    assert np.min(field) >= config.min_heat
    assert np.max(field) <= config.max_heat


def test_random_is_reproducible():
    config = DiffusionConfig()
    a = seed_temperature('random', config, np.random.default_rng(7))
    b = seed_temperature('random', config, np.random.default_rng(7))
    assert np.array_equal(a, b)
    assert np.max(a) < config.max_heat


def test_default_scenario_is_random():
    config = DiffusionConfig(width=4, height=4)
    a = seed_temperature(None, config, np.random.default_rng(3))
    b = seed_temperature('random', config, np.random.default_rng(3))
    assert np.array_equal(a, b)


def test_unknown_scenario_rejected(rng):
    with pytest.raises(ValueError):
        seed_temperature('volcano', DiffusionConfig(), rng)


def test_noise_is_coherent(rng):
    """Neighbouring noise samples differ far less than independent ones"""
    noise = coherent_noise(64, 64, 0.1, rng)
    assert noise.shape == (64, 64)
    assert np.min(noise) >= -1.0 and np.max(noise) <= 1.0

    white = rng.uniform(-1.0, 1.0, size=(64, 64))
    noise_step = np.mean(np.abs(np.diff(noise, axis=1)))
    white_step = np.mean(np.abs(np.diff(white, axis=1)))
    assert noise_step < 0.5 * white_step


def test_hot_row_and_uniform(rng):
    config = DiffusionConfig(width=4, height=4)

    hot_row = seed_temperature('hot_row', config, rng)
    assert hot_row.tolist() == [[0.0] * 4, [0.0] * 4, [0.0] * 4, [100.0] * 4]

    uniform = seed_temperature('uniform', config, rng)
    assert np.all(uniform == config.initial_temperature)


def test_hot_spot_centred(rng):
    config = DiffusionConfig(width=9, height=9)
    field = seed_temperature('hot_spot', config, rng)
    assert field[4, 4] == config.max_heat
    assert field[0, 0] == config.min_heat
