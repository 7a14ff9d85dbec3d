"""
Chunk cursor that spreads one full-grid pass over several ticks.

The grid is cut into chunk_size x chunk_size rectangles (trailing ones
clamped to the grid). Each tick processes the chunk under the cursor, then
the cursor moves row-major through the chunk grid. Wrapping back to (0, 0)
means every chunk has been visited once: the sweep is complete.
"""

from typing import Iterator, Tuple

try:
    from .grid import GridShape, Region
except ImportError:
    from grid import GridShape, Region


class ChunkScheduler:
    """Row-major cursor over the chunk grid."""

    def __init__(self, width: int, height: int, chunk_size: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.grid = GridShape(width, height)
        self.chunk_size = chunk_size
        self.cx = 0
        self.cy = 0

    @property
    def cursor(self) -> Tuple[int, int]:
        return (self.cx, self.cy)

    @property
    def chunk_grid(self) -> Tuple[int, int]:
        return (
            -(-self.grid.width // self.chunk_size),
            -(-self.grid.height // self.chunk_size),
        )

    @property
    def chunks_per_sweep(self) -> int:
        nx, ny = self.chunk_grid
        return nx * ny

    @property
    def at_origin(self) -> bool:
        return self.cx == 0 and self.cy == 0

    def current_region(self) -> Region:
        """Cell rectangle processed on this tick."""
        return self.grid.chunk_region(self.cx, self.cy, self.chunk_size)

    def advance(self) -> bool:
        """
        Move to the next chunk.

        Returns:
            True when the cursor wrapped back to (0, 0), i.e. a sweep completed.
        """
        self.cx += 1
        if self.cx * self.chunk_size >= self.grid.width:
            self.cx = 0
            self.cy += 1
            if self.cy * self.chunk_size >= self.grid.height:
                self.cy = 0
        return self.at_origin

    def reset(self) -> None:
        self.cx = 0
        self.cy = 0

    def sweep_order(self) -> Iterator[Tuple[int, int]]:
        """Chunk coordinates in the order one sweep visits them."""
        nx, ny = self.chunk_grid
        for cy in range(ny):
            for cx in range(nx):
                yield (cx, cy)
