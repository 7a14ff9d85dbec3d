"""Pytest configuration for heatgrid tests."""
import os
import sys
from pathlib import Path

import numpy as np
import pytest


def pytest_configure(config):
    """Configure pytest environment for headless operation."""
    # Add heatgrid directory to Python path so imports like 'from solver import ...' work
    heatgrid_dir = Path(__file__).parent.parent
    if str(heatgrid_dir) not in sys.path:
        sys.path.insert(0, str(heatgrid_dir))

    # Set SDL to use dummy video driver for headless operation
    os.environ['SDL_VIDEODRIVER'] = 'dummy'
    os.environ['SDL_AUDIODRIVER'] = 'dummy'


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)


@pytest.fixture(params=[(4, 4, 2), (7, 5, 3), (16, 16, 4)])
def grid_dims(request):
    """(width, height, chunk_size) combinations, including partial chunks."""
    return request.param
