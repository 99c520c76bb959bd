"""Linear undo / redo history of grid snapshots."""

from __future__ import annotations

import logging

import numpy as np

from pixel_canvas.errors import InvalidDimensions, OutOfRange
from pixel_canvas.grid import Grid

logger = logging.getLogger(__name__)


def _freeze(grid: Grid) -> np.ndarray:
    snap = grid.cells.copy()
    snap.flags.writeable = False
    return snap


class History:
    """Snapshots plus a cursor.

    Committing after an undo drops every snapshot past the cursor, so there
    is never more than one redo path. Snapshots are copied on commit and
    stored read-only; later edits to the live grid cannot reach them.

    Args:
        initial: The grid the history starts from (index 0).
        max_entries: Optional cap; the oldest snapshots are dropped first.
    """

    def __init__(self, initial: Grid, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            msg = f"max_entries must be at least 1, got {max_entries}"
            raise ValueError(msg)
        self.max_entries = max_entries
        self._palette = initial.palette
        self._snapshots: list[np.ndarray] = []
        self._index = -1
        self.reset(initial)

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def index(self) -> int:
        return self._index

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    @property
    def current(self) -> Grid:
        """A writable copy of the snapshot at the cursor."""
        return Grid(self._snapshots[self._index], self._palette)

    def snapshot(self, index: int) -> np.ndarray:
        """Read-only cell array stored at *index*."""
        return self._snapshots[index]

    def reset(self, grid: Grid) -> None:
        """Start over from *grid* as the only entry."""
        self._palette = grid.palette
        self._snapshots = [_freeze(grid)]
        self._index = 0

    def commit(self, grid: Grid) -> int:
        """Record *grid* after the cursor, discarding any redo tail.

        Returns:
            The new cursor position.
        """
        shape = self._snapshots[0].shape
        if grid.shape != shape or grid.palette != self._palette:
            msg = (
                f"Committed grid must keep the history's {shape[0]}x{shape[1]} "
                f"shape and palette (got {grid.height}x{grid.width})"
            )
            raise InvalidDimensions(msg)
        del self._snapshots[self._index + 1:]
        self._snapshots.append(_freeze(grid))
        if self.max_entries is not None and len(self._snapshots) > self.max_entries:
            del self._snapshots[: len(self._snapshots) - self.max_entries]
        self._index = len(self._snapshots) - 1
        logger.debug("Committed snapshot %d/%d", self._index + 1, len(self._snapshots))
        return self._index

    def undo(self) -> Grid:
        if not self.can_undo:
            msg = "Nothing to undo"
            raise OutOfRange(msg)
        self._index -= 1
        return self.current

    def redo(self) -> Grid:
        if not self.can_redo:
            msg = "Nothing to redo"
            raise OutOfRange(msg)
        self._index += 1
        return self.current
