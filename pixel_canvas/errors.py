"""Exception types raised by the canvas core."""

from __future__ import annotations


class CanvasError(Exception):
    """Base class for every error the canvas core raises."""


class InvalidDimensions(CanvasError, ValueError):
    """Grid size outside the configured bounds or step."""


class InvalidBrush(CanvasError, ValueError):
    """Brush side outside the configured range."""


class UnknownColor(CanvasError, KeyError):
    """Colour name or hex code not in the palette."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class OutOfRange(CanvasError, IndexError):
    """Undo or redo past either end of the history."""


class PreconditionViolation(CanvasError, IndexError):
    """Cell coordinate outside the grid."""
