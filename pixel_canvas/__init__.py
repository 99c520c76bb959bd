"""
Pixel Canvas
============

Draw low-resolution ("8-bit") pictures on a bounded grid of fixed palette
colours, with a square brush, a bucket fill and linear undo / redo.
Photos are imported by snapping them to the palette, and finished
drawings export as bitmaps or as a block-by-block assembly guide for
cube mosaics.
"""

__version__ = "1.0.0"

from pixel_canvas.blocks import SuperTile, Tile, bill_of_materials, column_label, decompose
from pixel_canvas.brush import apply_brush, brush_footprint
from pixel_canvas.config import CanvasConfig
from pixel_canvas.errors import (
    CanvasError,
    InvalidBrush,
    InvalidDimensions,
    OutOfRange,
    PreconditionViolation,
    UnknownColor,
)
from pixel_canvas.fill import connected_component, count_regions, flood_fill
from pixel_canvas.grid import Grid
from pixel_canvas.history import History
from pixel_canvas.image_io import load_bitmap, load_grid, save_grid
from pixel_canvas.palette import DEFAULT_PALETTE, Palette, PaletteColor
from pixel_canvas.publish import PublishPayload, build_payload, write_payload
from pixel_canvas.quantize import quantize_bitmap, quantize_image, resample_nearest
from pixel_canvas.session import EditSession

__all__ = [
    "DEFAULT_PALETTE",
    "CanvasConfig",
    "CanvasError",
    "EditSession",
    "Grid",
    "History",
    "InvalidBrush",
    "InvalidDimensions",
    "OutOfRange",
    "Palette",
    "PaletteColor",
    "PreconditionViolation",
    "PublishPayload",
    "SuperTile",
    "Tile",
    "UnknownColor",
    "apply_brush",
    "bill_of_materials",
    "brush_footprint",
    "build_payload",
    "column_label",
    "connected_component",
    "count_regions",
    "decompose",
    "flood_fill",
    "load_bitmap",
    "load_grid",
    "quantize_bitmap",
    "quantize_image",
    "resample_nearest",
    "save_grid",
    "write_payload",
]
