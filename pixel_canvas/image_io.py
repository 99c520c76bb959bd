"""Bitmap decoding and encoding for grids."""

from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from PIL import Image

from pixel_canvas.config import CanvasConfig
from pixel_canvas.grid import Grid
from pixel_canvas.quantize import quantize_bitmap


def load_bitmap(path: str | Path) -> np.ndarray:
    """Decode an image file.

    Returns:
        (H, W, 4) uint8 RGBA array, row-major.
    """
    with Image.open(path) as img:
        return np.array(img.convert("RGBA"), dtype=np.uint8)


def load_grid(path: str | Path, config: CanvasConfig) -> Grid:
    """Load a one-pixel-per-cell drawing at its own size.

    Every pixel is snapped to the nearest palette colour, so images that
    were not produced by :func:`save_grid` still import cleanly.
    """
    pixels = load_bitmap(path)
    h, w = pixels.shape[:2]
    config.validate_canvas(w, h)
    return quantize_bitmap(pixels, w, h, config.palette)


def grid_to_image(grid: Grid, pixel_upscale: int = 1) -> Image.Image:
    """Render a grid as an RGB image, each cell ``pixel_upscale`` px wide."""
    if pixel_upscale < 1:
        msg = f"pixel_upscale must be at least 1, got {pixel_upscale}"
        raise ValueError(msg)
    img = Image.fromarray(grid.to_rgb())
    if pixel_upscale > 1:
        img = img.resize(
            (grid.width * pixel_upscale, grid.height * pixel_upscale), Image.NEAREST,
        )
    return img


def save_grid(grid: Grid, path: str | Path, pixel_upscale: int = 1) -> None:
    """Save a grid as a nearest-neighbour-upscaled image."""
    grid_to_image(grid, pixel_upscale).save(path)


def grid_to_png_bytes(grid: Grid) -> bytes:
    """Encode a grid as PNG, one pixel per cell."""
    buf = io.BytesIO()
    grid_to_image(grid).save(buf, format="PNG")
    return buf.getvalue()


def default_filename(grid: Grid, output_format: str = "png") -> str:
    return f"drawing_{grid.width}x{grid.height}.{output_format}"
