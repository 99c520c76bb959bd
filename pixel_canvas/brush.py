"""Square brush stamping."""

from __future__ import annotations

from pixel_canvas.grid import Grid


def _stamp_bounds(
    grid: Grid, row: int, col: int, size: int,
) -> tuple[int, int, int, int]:
    """Clipped ``(r0, r1, c0, c1)`` half-open box covered by the stamp.

    The target cell sits at offset ``size // 2`` inside the stamp, so even
    sizes extend one cell further up/left than down/right.
    """
    half = size // 2
    top, left = row - half, col - half
    r0 = max(top, 0)
    c0 = max(left, 0)
    r1 = min(top + size, grid.height)
    c1 = min(left + size, grid.width)
    return r0, max(r1, r0), c0, max(c1, c0)


def brush_footprint(grid: Grid, row: int, col: int, size: int) -> list[tuple[int, int]]:
    """In-bounds cells a stamp at ``(row, col)`` would paint, row-major."""
    r0, r1, c0, c1 = _stamp_bounds(grid, row, col, size)
    return [(r, c) for r in range(r0, r1) for c in range(c0, c1)]


def apply_brush(grid: Grid, row: int, col: int, size: int, color: int) -> Grid:
    """Stamp a ``size x size`` square of palette entry *color*.

    Offsets that fall outside the grid are skipped, so a stamp near an edge
    paints only its in-bounds part. The target itself may lie outside the
    grid (e.g. a pointer just past the border); nothing in range is painted
    then.

    Returns:
        A new grid; *grid* is left untouched.
    """
    if size < 1:
        msg = f"Brush size must be positive, got {size}"
        raise ValueError(msg)
    if not 0 <= color < len(grid.palette):
        msg = f"Colour index {color} outside palette of {len(grid.palette)}"
        raise ValueError(msg)

    out = grid.copy()
    r0, r1, c0, c1 = _stamp_bounds(grid, row, col, size)
    out.cells[r0:r1, c0:c1] = color
    return out
