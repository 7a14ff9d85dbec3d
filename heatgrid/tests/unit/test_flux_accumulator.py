"""Unit tests for the double-buffered flux accumulator"""

import numpy as np
import pytest
from flux_accumulator import FluxAccumulator


def test_accumulate_moves_flux_between_cells():
    """Flux is subtracted at the source and added at the destination"""
    acc = FluxAccumulator(3, 2)
    acc.accumulate((0, 0), (1, 0), 2.5)
    acc.accumulate((1, 0), (1, 1), -1.0)

    assert acc.active[0, 0] == pytest.approx(-2.5)
    assert acc.active[0, 1] == pytest.approx(3.5)
    assert acc.active[1, 1] == pytest.approx(-1.0)
    assert acc.net_flux() == pytest.approx(0.0)


def test_accumulate_rejects_outside_cells():
    acc = FluxAccumulator(2, 2)
    with pytest.raises(IndexError):
        acc.accumulate((1, 1), (2, 1), 1.0)


def test_vectorised_edges():
    acc = FluxAccumulator(3, 1)
    source = (slice(0, 1), slice(0, 2))
    dest = (slice(0, 1), slice(1, 3))
    acc.accumulate_edges(source, dest, np.array([[1.0, 2.0]], dtype=np.float32))

    assert acc.active.tolist() == [[-1.0, -1.0, 2.0]]


def test_swap_hands_over_filled_buffer():
    """After swap the filled buffer is committed and a zeroed one is active"""
    acc = FluxAccumulator(2, 2)
    acc.accumulate((0, 0), (0, 1), 4.0)

    committed = acc.swap()
    assert acc.pending
    assert committed[1, 0] == pytest.approx(4.0)
    assert np.all(acc.active == 0.0)

    acc.reset()
    assert not acc.pending
    assert np.all(acc.committed == 0.0)


def test_swap_before_reset_is_an_error():
    acc = FluxAccumulator(2, 2)
    acc.swap()
    with pytest.raises(RuntimeError):
        acc.swap()


def test_clear_drops_partial_sweep():
    acc = FluxAccumulator(2, 2)
    acc.accumulate((0, 0), (1, 0), 1.0)
    acc.swap()
    acc.accumulate((0, 0), (1, 0), 1.0)

    acc.clear()
    assert not acc.pending
    assert np.all(acc.active == 0.0)
    assert np.all(acc.committed == 0.0)
