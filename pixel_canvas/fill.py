"""Bucket fill and same-colour region queries.

Both entry points share one traversal: an explicit-stack depth-first walk
over the 4-neighbours (up, down, left, right) of the seed, accepting a cell
only if it is inside the grid, not yet visited and has the seed's colour.
Because the walk is shared, :func:`connected_component` always returns
exactly the cells a :func:`flood_fill` from the same seed would repaint.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import numpy as np
from scipy import ndimage

from pixel_canvas.grid import Grid

logger = logging.getLogger(__name__)

_NEIGHBOURS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def _walk(cells: np.ndarray, start_row: int, start_col: int) -> Iterator[tuple[int, int]]:
    """Yield every cell of the 4-connected region containing the seed."""
    height, width = cells.shape
    target = cells[start_row, start_col]
    visited = np.zeros((height, width), dtype=bool)
    stack = [(start_row, start_col)]

    while stack:
        r, c = stack.pop()
        if (
            r < 0 or r >= height or c < 0 or c >= width
            or visited[r, c] or cells[r, c] != target
        ):
            continue
        visited[r, c] = True
        yield r, c
        for dr, dc in _NEIGHBOURS:
            stack.append((r + dr, c + dc))


def connected_component(grid: Grid, row: int, col: int) -> set[tuple[int, int]]:
    """Coordinates of the same-colour region containing ``(row, col)``."""
    grid.require_in_bounds(row, col)
    return set(_walk(grid.cells, row, col))


def flood_fill(grid: Grid, row: int, col: int, color: int) -> Grid:
    """Repaint the region containing ``(row, col)`` with palette entry *color*.

    Returns:
        A new grid. If the seed already has *color*, it is an unchanged copy.
    """
    grid.require_in_bounds(row, col)
    if not 0 <= color < len(grid.palette):
        msg = f"Colour index {color} outside palette of {len(grid.palette)}"
        raise ValueError(msg)

    out = grid.copy()
    if grid.cells[row, col] == color:
        return out

    # Walk the source grid so repainting cannot feed back into the traversal
    filled = 0
    for r, c in _walk(grid.cells, row, col):
        out.cells[r, c] = color
        filled += 1
    logger.debug("Filled %d cells from (%d, %d) with %s",
                 filled, row, col, grid.palette[color].name)
    return out


def count_regions(grid: Grid) -> dict[str, int]:
    """Number of separate 4-connected regions per palette colour.

    Colours absent from the grid are omitted. Uses the same connectivity
    as the fill tools (scipy's default 2D structure is the 4-neighbourhood).
    """
    counts: dict[str, int] = {}
    for idx, color in enumerate(grid.palette):
        mask = grid.cells == idx
        if not mask.any():
            continue
        _, n = ndimage.label(mask)
        counts[color.name] = int(n)
    return counts
