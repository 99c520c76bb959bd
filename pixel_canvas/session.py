"""One user's editing session: a grid, its history and the tool state.

Pointer-style commands mirror the editor: ``press`` starts a stroke (or
fills, in bucket mode), ``drag`` keeps painting while pressed and
``release`` commits the result to history. Sessions share no state, so
independent sessions can run side by side; a host must apply the commands
of one session in order.
"""

from __future__ import annotations

import logging

import numpy as np

from pixel_canvas.brush import apply_brush, brush_footprint
from pixel_canvas.config import CanvasConfig
from pixel_canvas.errors import CanvasError
from pixel_canvas.fill import connected_component, flood_fill
from pixel_canvas.grid import Grid
from pixel_canvas.history import History
from pixel_canvas.quantize import quantize_bitmap

logger = logging.getLogger(__name__)


class EditSession:
    def __init__(self, config: CanvasConfig | None = None) -> None:
        self.config = config or CanvasConfig()
        self.grid: Grid | None = None
        self.history: History | None = None
        self.brush_size = self.config.min_brush
        self.color = 0
        self.bucket_mode = False
        self._pressed = False

    # -- Canvas lifecycle ---------------------------------------------

    @property
    def has_canvas(self) -> bool:
        return self.grid is not None

    def _require_canvas(self) -> Grid:
        if self.grid is None:
            msg = "No canvas: create or import one first"
            raise CanvasError(msg)
        return self.grid

    def _start(self, grid: Grid) -> Grid:
        self.grid = grid
        self.history = History(grid)
        self._pressed = False
        return grid

    def new_canvas(self, width: int, height: int) -> Grid:
        """Blank canvas; on invalid size the previous canvas is kept."""
        grid = Grid.blank(width, height, self.config)
        logger.info("New canvas %dx%d", width, height)
        return self._start(grid)

    def new_cube_canvas(self, cubes_x: int, cubes_y: int) -> Grid:
        grid = Grid.from_cubes(cubes_x, cubes_y, self.config)
        logger.info("New cube canvas %dx%d cubes", cubes_x, cubes_y)
        return self._start(grid)

    def import_bitmap(
        self,
        pixels: np.ndarray,
        width: int | None = None,
        height: int | None = None,
    ) -> Grid:
        """Replace the canvas with a quantized bitmap and restart history.

        The target size defaults to the current canvas, or the smallest
        allowed square when there is none.
        """
        if width is None or height is None:
            if self.grid is not None:
                width, height = self.grid.width, self.grid.height
            else:
                width = height = self.config.min_size
        self.config.validate_canvas(width, height)
        return self._start(quantize_bitmap(pixels, width, height, self.config.palette))

    def load(self, grid: Grid) -> Grid:
        """Adopt an existing grid (e.g. imported from a gallery)."""
        self.config.validate_canvas(grid.width, grid.height)
        return self._start(grid.copy())

    def reset(self) -> None:
        """Drop the canvas and its history."""
        self.grid = None
        self.history = None
        self._pressed = False

    # -- Tool state ---------------------------------------------------

    def select_color(self, color: str | int) -> None:
        if isinstance(color, str):
            self.color = self.config.palette.index_of(color)
        elif 0 <= color < len(self.config.palette):
            self.color = color
        else:
            msg = f"Colour index {color} outside palette of {len(self.config.palette)}"
            raise ValueError(msg)

    def set_brush_size(self, size: int) -> None:
        self.config.validate_brush(size)
        self.brush_size = size

    def toggle_bucket(self) -> bool:
        self.bucket_mode = not self.bucket_mode
        return self.bucket_mode

    # -- Pointer commands ---------------------------------------------

    def press(self, row: int, col: int) -> None:
        grid = self._require_canvas()
        if self.bucket_mode:
            self.grid = flood_fill(grid, row, col, self.color)
        else:
            self.grid = apply_brush(grid, row, col, self.brush_size, self.color)
        self._pressed = True

    def drag(self, row: int, col: int) -> None:
        if self._pressed and not self.bucket_mode:
            self.grid = apply_brush(
                self._require_canvas(), row, col, self.brush_size, self.color,
            )

    def release(self) -> bool:
        """End the stroke and commit it. Returns False if nothing changed."""
        was_pressed, self._pressed = self._pressed, False
        if not was_pressed or self.grid is None or self.history is None:
            return False
        if self.grid == self.history.current:
            return False
        self.history.commit(self.grid)
        return True

    def preview(self, row: int, col: int) -> set[tuple[int, int]]:
        """Cells the next press at ``(row, col)`` would change."""
        grid = self._require_canvas()
        if self.bucket_mode:
            return connected_component(grid, row, col)
        return set(brush_footprint(grid, row, col, self.brush_size))

    # -- History ------------------------------------------------------

    def undo(self) -> bool:
        if self.history is None or not self.history.can_undo:
            logger.debug("Undo ignored: at oldest snapshot")
            return False
        self._pressed = False
        self.grid = self.history.undo()
        return True

    def redo(self) -> bool:
        if self.history is None or not self.history.can_redo:
            logger.debug("Redo ignored: at newest snapshot")
            return False
        self._pressed = False
        self.grid = self.history.redo()
        return True
