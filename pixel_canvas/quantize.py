"""Photo import: resample to the grid size, then snap to the palette."""

from __future__ import annotations

import logging
import time

import numpy as np
from PIL import Image

from pixel_canvas.config import CanvasConfig
from pixel_canvas.grid import Grid
from pixel_canvas.palette import Palette

logger = logging.getLogger(__name__)


def _sample_positions(src_len: int, dst_len: int) -> np.ndarray:
    """Source index sampled for each of *dst_len* output positions.

    Output pixel *i* takes the source pixel under its centre,
    ``floor((i + 0.5) * src_len / dst_len)``, clamped to the last index.
    """
    i = np.arange(dst_len, dtype=np.int64)
    pos = ((2 * i + 1) * src_len) // (2 * dst_len)
    return np.minimum(pos, src_len - 1)


def resample_nearest(
    pixels: np.ndarray,
    target_width: int,
    target_height: int,
) -> np.ndarray:
    """Nearest-neighbour resample of an (H, W, C) raster.

    Returns:
        A new (target_height, target_width, C) array.
    """
    if target_width < 1 or target_height < 1:
        msg = f"Target size must be positive, got {target_width}x{target_height}"
        raise ValueError(msg)
    src_h, src_w = pixels.shape[:2]
    rows = _sample_positions(src_h, target_height)
    cols = _sample_positions(src_w, target_width)
    return pixels[rows[:, np.newaxis], cols[np.newaxis, :]]


def quantize_bitmap(
    pixels: np.ndarray,
    target_width: int,
    target_height: int,
    palette: Palette,
) -> Grid:
    """Convert an arbitrary bitmap into a palette grid.

    Args:
        pixels: (H, W, 3) RGB or (H, W, 4) RGBA, 8 bits per channel,
            row-major. Alpha is ignored. The array is not modified.
        target_width: Grid width in cells.
        target_height: Grid height in cells.
        palette: Allowed colours.

    Returns:
        A freshly allocated :class:`Grid`.
    """
    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4) or arr.shape[0] == 0 or arr.shape[1] == 0:
        msg = f"Expected a non-empty (H, W, 3|4) bitmap, got shape {arr.shape}"
        raise ValueError(msg)

    t0 = time.perf_counter()
    rgb = resample_nearest(arr[..., :3], target_width, target_height)
    indices = palette.nearest_indices(rgb.reshape(-1, 3))
    logger.info(
        "Quantized %dx%d bitmap to %dx%d grid  (%.3f s)",
        arr.shape[1], arr.shape[0], target_width, target_height,
        time.perf_counter() - t0,
    )
    return Grid(indices.reshape(target_height, target_width), palette)


def quantize_image(
    image: Image.Image,
    width: int,
    height: int,
    config: CanvasConfig,
) -> Grid:
    """Quantize a decoded PIL image into a validated ``width x height`` grid."""
    config.validate_canvas(width, height)
    pixels = np.array(image.convert("RGB"), dtype=np.uint8)
    return quantize_bitmap(pixels, width, height, config.palette)
