"""
Heat flux between two neighbouring tiles.

Conductivity depends on the mean temperature of the pair through a quadratic
fit; the flux is that conductivity times the temperature difference. Positive
flux means heat moves from the first tile to the second, so callers subtract
it at the first tile and add it at the second.

Both functions are elementwise and accept Python floats or numpy arrays.
"""

import numpy as np

try:
    from .config import DEFAULT_CONDUCTIVITY_COEFFS
except ImportError:
    from config import DEFAULT_CONDUCTIVITY_COEFFS


def thermal_conductivity(t_mid, coeffs=DEFAULT_CONDUCTIVITY_COEFFS):
    """Evaluate k = a0 + a1*t + a2*t^2 at the pair's mean temperature."""
    a0, a1, a2 = coeffs
    return a0 + a1 * t_mid + a2 * t_mid * t_mid


def heat_flux(t1, t2, coeffs=DEFAULT_CONDUCTIVITY_COEFFS):
    """
    Flux from tile 1 to tile 2.

    Args:
        t1: Temperature of the source tile(s)
        t2: Temperature of the neighbouring tile(s)
        coeffs: Conductivity polynomial (a0, a1, a2)

    Returns:
        Flux with the same shape as the inputs; zero wherever t1 == t2.
    """
    t_mid = (t1 + t2) * 0.5
    return thermal_conductivity(t_mid, coeffs) * (t1 - t2)


def heat_flux_array(t1: np.ndarray, t2: np.ndarray, coeffs=DEFAULT_CONDUCTIVITY_COEFFS,
                    dtype=np.float32) -> np.ndarray:
    """Array form of heat_flux that keeps the field dtype."""
    return np.asarray(heat_flux(t1, t2, coeffs), dtype=dtype)
