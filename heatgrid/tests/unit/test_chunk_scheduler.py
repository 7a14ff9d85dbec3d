"""Unit tests for the chunk cursor"""

import pytest
from chunk_scheduler import ChunkScheduler
from grid import Region


def test_cursor_starts_at_origin():
    scheduler = ChunkScheduler(8, 8, 4)
    assert scheduler.cursor == (0, 0)
    assert scheduler.at_origin
    assert scheduler.current_region() == Region(0, 4, 0, 4)


def test_cursor_visits_chunks_row_major(grid_dims):
    """Every chunk is visited once per sweep, row by row, before wrapping"""
    width, height, chunk = grid_dims
    scheduler = ChunkScheduler(width, height, chunk)
    expected = list(scheduler.sweep_order())
    assert len(expected) == scheduler.chunks_per_sweep

    for sweep in range(2):
        visited = []
        for i in range(scheduler.chunks_per_sweep):
            visited.append(scheduler.cursor)
            wrapped = scheduler.advance()
            is_last = i == scheduler.chunks_per_sweep - 1
            assert wrapped == is_last, f"Sweep {sweep}: wrap signalled at chunk {i}"
        assert visited == expected
        assert scheduler.at_origin


def test_cursor_invariant_holds():
    """0 <= cx*C < width and 0 <= cy*C < height at all times"""
    scheduler = ChunkScheduler(10, 6, 4)
    for _ in range(25):
        cx, cy = scheduler.cursor
        assert 0 <= cx * 4 < 10
        assert 0 <= cy * 4 < 6
        scheduler.advance()


def test_single_chunk_grid_completes_every_tick():
    scheduler = ChunkScheduler(3, 3, 8)
    assert scheduler.chunks_per_sweep == 1
    assert scheduler.current_region() == Region(0, 3, 0, 3)
    assert scheduler.advance()
    assert scheduler.advance()


def test_reset_returns_to_origin():
    scheduler = ChunkScheduler(8, 8, 2)
    for _ in range(5):
        scheduler.advance()
    assert scheduler.cursor == (1, 1)
    scheduler.reset()
    assert scheduler.cursor == (0, 0)


@pytest.mark.parametrize("width,height,chunk", [(0, 4, 2), (4, 0, 2), (4, 4, 0)])
def test_invalid_dimensions(width, height, chunk):
    with pytest.raises(ValueError):
        ChunkScheduler(width, height, chunk)
