"""Block decomposition for printable assembly instructions.

The grid is cut into ``tile_size x tile_size`` tiles (one tile is built
from one cube face in a cube mosaic), and tiles are grouped into
``super_tile_size x super_tile_size`` super-tiles, one per guide page.
Edge tiles are clipped, never padded.

Iteration order is fixed: super-tiles row-major, tiles row-major within a
super-tile, cells row-major within a tile.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from pixel_canvas.grid import Grid


def column_label(index: int) -> str:
    """Spreadsheet-style column name: 0 -> A, 25 -> Z, 26 -> AA, 27 -> AB."""
    if index < 0:
        msg = f"Column index must be non-negative, got {index}"
        raise ValueError(msg)
    label = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        label = chr(ord("A") + rem) + label
    return label


def tile_label(tile_row: int, tile_col: int) -> str:
    """Column letters followed by the 1-based row number, e.g. ``B3``."""
    return f"{column_label(tile_col)}{tile_row + 1}"


@dataclass(frozen=True, eq=False)
class Tile:
    """One labelled block of cells.

    Attributes:
        label:     Column letters + 1-based row number.
        tile_row:  Row of the tile in the tile grid (0-based).
        tile_col:  Column of the tile in the tile grid (0-based).
        row_start: First grid row covered.
        col_start: First grid column covered.
        cells:     Read-only (h, w) palette indices, clipped at the edge.
    """

    label: str
    tile_row: int
    tile_col: int
    row_start: int
    col_start: int
    cells: np.ndarray

    @property
    def height(self) -> int:
        return self.cells.shape[0]

    @property
    def width(self) -> int:
        return self.cells.shape[1]


@dataclass(frozen=True)
class SuperTile:
    """A page worth of tiles."""

    row: int
    col: int
    tile_rows: range
    tile_cols: range
    tiles: tuple[Tile, ...]

    @property
    def label(self) -> str:
        first, last = self.tiles[0].label, self.tiles[-1].label
        return first if first == last else f"{first}-{last}"


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def decompose(grid: Grid, tile_size: int = 3, super_tile_size: int = 3) -> list[SuperTile]:
    """Partition *grid* into labelled tiles grouped by super-tile.

    Args:
        grid: The drawing.
        tile_size: Tile side in cells.
        super_tile_size: Super-tile side in tiles.

    Returns:
        Super-tiles in row-major order.
    """
    if tile_size < 1 or super_tile_size < 1:
        msg = f"Tile sizes must be positive, got {tile_size} and {super_tile_size}"
        raise ValueError(msg)

    n_tile_rows = _ceil_div(grid.height, tile_size)
    n_tile_cols = _ceil_div(grid.width, tile_size)

    supers: list[SuperTile] = []
    for sr in range(_ceil_div(n_tile_rows, super_tile_size)):
        tile_rows = range(sr * super_tile_size, min((sr + 1) * super_tile_size, n_tile_rows))
        for sc in range(_ceil_div(n_tile_cols, super_tile_size)):
            tile_cols = range(sc * super_tile_size, min((sc + 1) * super_tile_size, n_tile_cols))
            tiles = []
            for tr in tile_rows:
                for tc in tile_cols:
                    r0, c0 = tr * tile_size, tc * tile_size
                    block = grid.cells[r0 : r0 + tile_size, c0 : c0 + tile_size].copy()
                    block.flags.writeable = False
                    tiles.append(Tile(tile_label(tr, tc), tr, tc, r0, c0, block))
            supers.append(SuperTile(sr, sc, tile_rows, tile_cols, tuple(tiles)))
    return supers


def iter_tiles(super_tiles: list[SuperTile]) -> Iterator[Tile]:
    """Flatten super-tiles into their tiles, keeping page order."""
    for st in super_tiles:
        yield from st.tiles


def bill_of_materials(grid: Grid) -> list[tuple[str, int]]:
    """Cells needed per colour, in palette order, zeros omitted."""
    counts = grid.color_counts()
    return [
        (color.name, int(n))
        for color, n in zip(grid.palette, counts, strict=False)
        if n
    ]
