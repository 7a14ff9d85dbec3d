"""
Grid addressing for the dense temperature and flux fields.

Cells are addressed by integer coordinates (x, y) and stored in arrays of
shape (height, width), so a cell lives at ``field[y, x]``. Neighbour lookups
are direct index arithmetic; anything that falls outside the grid is reported
as missing and simply contributes no flux (insulated boundary).
"""

from dataclasses import dataclass
from typing import Optional, Tuple

# Direction offsets (dx, dy). South is +y, i.e. the next array row.
EAST = (1, 0)
WEST = (-1, 0)
SOUTH = (0, 1)
NORTH = (0, -1)

Index = Tuple[slice, slice]


@dataclass(frozen=True)
class Region:
    """Half-open cell rectangle [x0, x1) x [y0, y1)."""
    x0: int
    x1: int
    y0: int
    y1: int


@dataclass(frozen=True)
class GridShape:
    """Fixed grid dimensions plus the coordinate helpers built on them."""
    width: int
    height: int

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, x: int, y: int) -> Tuple[int, int]:
        """Array index of cell (x, y). Raises IndexError outside the grid."""
        if not self.contains(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return (y, x)

    def neighbor(self, x: int, y: int, direction: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        """Coordinate of the neighbour in ``direction`` or None past the boundary."""
        nx, ny = x + direction[0], y + direction[1]
        if self.contains(nx, ny):
            return (nx, ny)
        return None

    def chunk_region(self, cx: int, cy: int, chunk_size: int) -> Region:
        """Cell rectangle covered by chunk (cx, cy); trailing chunks are clamped."""
        x0 = cx * chunk_size
        y0 = cy * chunk_size
        return Region(
            x0=min(x0, self.width),
            x1=min(x0 + chunk_size, self.width),
            y0=min(y0, self.height),
            y1=min(y0 + chunk_size, self.height),
        )

    def edge_slices(self, region: Region, direction: Tuple[int, int]) -> Optional[Tuple[Index, Index]]:
        """
        Source and destination array indices for every edge leaving ``region``.

        Only the forward directions EAST and SOUTH are supported: visiting
        those two from every cell covers each undirected edge exactly once.
        Source cells whose neighbour would fall outside the grid are dropped.

        Returns:
            (source_index, dest_index) or None when the region has no such edge.
        """
        if direction == EAST:
            x_end = min(region.x1, self.width - 1)
            if x_end <= region.x0 or region.y1 <= region.y0:
                return None
            rows = slice(region.y0, region.y1)
            return (
                (rows, slice(region.x0, x_end)),
                (rows, slice(region.x0 + 1, x_end + 1)),
            )
        if direction == SOUTH:
            y_end = min(region.y1, self.height - 1)
            if y_end <= region.y0 or region.x1 <= region.x0:
                return None
            cols = slice(region.x0, region.x1)
            return (
                (slice(region.y0, y_end), cols),
                (slice(region.y0 + 1, y_end + 1), cols),
            )
        raise ValueError(f"Unsupported edge direction {direction}; use EAST or SOUTH")
