"""The pixel grid: a fixed-size 2D array of palette indices."""

from __future__ import annotations

import numpy as np

from pixel_canvas.config import CanvasConfig
from pixel_canvas.errors import InvalidDimensions, PreconditionViolation
from pixel_canvas.palette import Palette, PaletteColor


class Grid:
    """A ``height x width`` drawing whose cells are palette indices.

    Cells are stored as a (H, W) uint8 array of indices into *palette*, so
    a cell can never hold an off-palette colour. The shape is fixed at
    construction; resizing means building a new grid.
    """

    __slots__ = ("_cells", "palette")

    def __init__(self, cells: np.ndarray, palette: Palette) -> None:
        cells = np.asarray(cells)
        if cells.ndim != 2 or cells.shape[0] == 0 or cells.shape[1] == 0:
            msg = f"Grid cells must be a non-empty 2D array, got shape {cells.shape}"
            raise InvalidDimensions(msg)
        if not np.issubdtype(cells.dtype, np.integer):
            msg = f"Grid cells must be integer palette indices, got {cells.dtype}"
            raise ValueError(msg)
        lo, hi = int(cells.min()), int(cells.max())
        if lo < 0 or hi >= len(palette):
            msg = f"Cell index {lo if lo < 0 else hi} outside palette of {len(palette)}"
            raise ValueError(msg)
        self._cells = cells.astype(np.uint8, copy=True)
        self.palette = palette

    # -- Constructors -------------------------------------------------

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        config: CanvasConfig,
        fill: int = 0,
    ) -> Grid:
        """New canvas filled with palette entry *fill* (White by default)."""
        config.validate_dimensions(width, height)
        return cls(np.full((height, width), fill, dtype=np.uint8), config.palette)

    @classmethod
    def from_cubes(cls, cubes_x: int, cubes_y: int, config: CanvasConfig) -> Grid:
        """New blank canvas sized in cubes (each cube is ``cube_size`` cells)."""
        width, height = config.dimensions_from_cubes(cubes_x, cubes_y)
        return cls(np.zeros((height, width), dtype=np.uint8), config.palette)

    # -- Shape --------------------------------------------------------

    @property
    def cells(self) -> np.ndarray:
        """The live (H, W) index array. Mutate only through the edit tools."""
        return self._cells

    @property
    def width(self) -> int:
        return self._cells.shape[1]

    @property
    def height(self) -> int:
        return self._cells.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def require_in_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            msg = f"Cell ({row}, {col}) outside {self.height}x{self.width} grid"
            raise PreconditionViolation(msg)

    # -- Access -------------------------------------------------------

    def __getitem__(self, key: tuple[int, int]) -> int:
        row, col = key
        self.require_in_bounds(row, col)
        return int(self._cells[row, col])

    def color_at(self, row: int, col: int) -> PaletteColor:
        return self.palette[self[row, col]]

    def copy(self) -> Grid:
        return Grid(self._cells, self.palette)

    def to_rgb(self) -> np.ndarray:
        """Row-major (H, W, 3) uint8 raster, one pixel per cell."""
        return self.palette.rgb_array[self._cells]

    def color_counts(self) -> np.ndarray:
        """(K,) number of cells using each palette entry."""
        return np.bincount(self._cells.ravel(), minlength=len(self.palette))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.palette == other.palette and np.array_equal(
            self._cells, other._cells,
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, {len(self.palette)} colours)"
