"""Unit tests for the explicit integration step"""

import numpy as np
import pytest
from config import DiffusionConfig
from integrator import DiffusionIntegrator


def test_delta_formula():
    """delta = flux / (mass * capacity) * speed * dt"""
    config = DiffusionConfig(width=2, height=1, tile_mass=0.5, tile_heat_capacity=2.0,
                             heat_transfer_speed=0.25)
    integrator = DiffusionIntegrator(config)

    temperature = np.array([[40.0, 60.0]], dtype=np.float32)
    flux = np.array([[8.0, -8.0]], dtype=np.float32)
    new_temp = integrator.integrate(temperature, flux, dt=2.0)

    # 8 / 1.0 * 0.25 * 2.0 = 4
    assert new_temp.tolist() == pytest.approx([[44.0, 56.0]])
    assert new_temp.dtype == np.float32
    assert temperature.tolist() == [[40.0, 60.0]], "Input field must not be modified"


def test_results_are_clamped():
    config = DiffusionConfig(width=3, height=1, min_heat=0.0, max_heat=100.0)
    integrator = DiffusionIntegrator(config)

    temperature = np.array([[5.0, 50.0, 95.0]], dtype=np.float32)
    flux = np.array([[-1e6, 0.0, 1e6]], dtype=np.float32)
    new_temp = integrator.integrate(temperature, flux, dt=1.0)

    assert new_temp.tolist() == [[0.0, 50.0, 100.0]]


def test_zero_flux_leaves_field_unchanged():
    config = DiffusionConfig(width=4, height=4)
    integrator = DiffusionIntegrator(config)
    temperature = np.linspace(0, 100, 16, dtype=np.float32).reshape(4, 4)

    new_temp = integrator.integrate(temperature, np.zeros_like(temperature), dt=0.5)
    assert np.array_equal(new_temp, temperature)


def test_shape_mismatch_rejected():
    integrator = DiffusionIntegrator(DiffusionConfig(width=2, height=2))
    with pytest.raises(ValueError):
        integrator.integrate(np.zeros((2, 2), np.float32), np.zeros((2, 3), np.float32), dt=1.0)
