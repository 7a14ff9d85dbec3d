"""
Double-buffered flux accumulator.

During a sweep every edge writes its flux into the *active* buffer, once with
each sign, so the buffer always sums to zero up to float rounding. When the
sweep completes the solver swaps buffers: the filled one becomes the
*committed* buffer read by the integrator, and the other, already zeroed,
starts collecting the next sweep. The committed buffer must be reset before
the next swap.
"""

from typing import Optional, Tuple

import numpy as np

try:
    from .grid import GridShape, Index
except ImportError:
    from grid import GridShape, Index


class FluxAccumulator:
    """Per-cell net flux collected over one sweep."""

    def __init__(self, width: int, height: int, dtype=np.float32):
        self.grid = GridShape(width, height)
        self.dtype = dtype
        self._buffers = [
            np.zeros((height, width), dtype=dtype),
            np.zeros((height, width), dtype=dtype),
        ]
        self._active = 0
        self._committed_pending = False

    @property
    def active(self) -> np.ndarray:
        """Buffer receiving contributions for the sweep in progress."""
        return self._buffers[self._active]

    @property
    def committed(self) -> np.ndarray:
        """Buffer holding the last completed sweep (zero once reset)."""
        return self._buffers[1 - self._active]

    @property
    def pending(self) -> bool:
        """True between swap() and reset()."""
        return self._committed_pending

    def accumulate(self, cell_a: Tuple[int, int], cell_b: Tuple[int, int], flux: float) -> None:
        """Move ``flux`` from cell_a to cell_b, cells given as (x, y)."""
        ia = self.grid.index(*cell_a)
        ib = self.grid.index(*cell_b)
        buf = self.active
        buf[ia] -= flux
        buf[ib] += flux

    def accumulate_edges(self, source: Index, dest: Index, flux: np.ndarray) -> None:
        """Vectorised accumulate over matching source/destination slices."""
        buf = self.active
        buf[source] -= flux
        buf[dest] += flux

    def swap(self) -> np.ndarray:
        """
        Hand over the completed sweep.

        Returns:
            The filled buffer, now the committed one.
        """
        if self._committed_pending:
            raise RuntimeError("Flux accumulator swapped before the previous sweep was reset")
        self._active = 1 - self._active
        self._committed_pending = True
        return self.committed

    def reset(self) -> None:
        """Zero the committed buffer after its sweep has been integrated."""
        self.committed.fill(0.0)
        self._committed_pending = False

    def clear(self) -> None:
        """Zero both buffers, dropping any partial sweep."""
        for buf in self._buffers:
            buf.fill(0.0)
        self._committed_pending = False

    def net_flux(self, buffer: Optional[np.ndarray] = None) -> float:
        """Sum of all slots (zero for a conserving sweep)."""
        buf = self.active if buffer is None else buffer
        return float(np.sum(buf, dtype=np.float64))
