"""Assembly guide pages rendered with Pillow.

One summary page lists the colour counts, then one page per super-tile
shows each tile's cells under its label. Pages can be written as a single
multi-page PDF or as numbered PNGs.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from pixel_canvas.blocks import SuperTile, bill_of_materials
from pixel_canvas.grid import Grid
from pixel_canvas.palette import Palette

logger = logging.getLogger(__name__)

_BACKGROUND = (255, 255, 255)
_INK = (30, 30, 30)
_CELL_OUTLINE = (150, 150, 150)
_MARGIN = 32
_TITLE_HEIGHT = 48
_LABEL_HEIGHT = 22
_TILE_GAP = 20


def _font(size: int) -> ImageFont.ImageFont:
    try:
        return ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", size,
        )
    except OSError:
        return ImageFont.load_default()


def render_page(
    super_tile: SuperTile,
    palette: Palette,
    tile_size: int,
    super_tile_size: int,
    cell_px: int = 24,
    page_number: int | None = None,
) -> Image.Image:
    """Draw one super-tile: every tile under its label, cells outlined.

    Page size depends only on *tile_size*, *super_tile_size* and *cell_px*,
    so clipped edge pages line up with full ones.
    """
    tile_px = tile_size * cell_px
    slot_w = tile_px + _TILE_GAP
    slot_h = tile_px + _LABEL_HEIGHT + _TILE_GAP
    width = 2 * _MARGIN + super_tile_size * slot_w - _TILE_GAP
    height = 2 * _MARGIN + _TITLE_HEIGHT + super_tile_size * slot_h - _TILE_GAP

    page = Image.new("RGB", (width, height), _BACKGROUND)
    draw = ImageDraw.Draw(page)
    title_font = _font(22)
    label_font = _font(14)

    title = f"Section {super_tile.label}"
    if page_number is not None:
        title = f"Page {page_number}  |  {title}"
    draw.text((_MARGIN, _MARGIN), title, fill=_INK, font=title_font)

    rgb = palette.rgb_array
    top = _MARGIN + _TITLE_HEIGHT
    for tile in super_tile.tiles:
        x0 = _MARGIN + (tile.tile_col - super_tile.tile_cols.start) * slot_w
        y0 = top + (tile.tile_row - super_tile.tile_rows.start) * slot_h
        draw.text((x0, y0), tile.label, fill=_INK, font=label_font)
        y0 += _LABEL_HEIGHT
        for r in range(tile.height):
            for c in range(tile.width):
                x = x0 + c * cell_px
                y = y0 + r * cell_px
                draw.rectangle(
                    [x, y, x + cell_px - 1, y + cell_px - 1],
                    fill=tuple(int(v) for v in rgb[tile.cells[r, c]]),
                    outline=_CELL_OUTLINE,
                )
        draw.rectangle(
            [x0, y0, x0 + tile.width * cell_px - 1, y0 + tile.height * cell_px - 1],
            outline=_INK, width=2,
        )
    return page


def render_summary(grid: Grid, n_tiles: int, n_pages: int, cell_px: int = 24) -> Image.Image:
    """Cover page: grid size, tile and page counts, cells needed per colour."""
    materials = bill_of_materials(grid)
    row_h = cell_px + 12
    width = 480
    height = 2 * _MARGIN + _TITLE_HEIGHT + 3 * row_h + len(materials) * row_h

    page = Image.new("RGB", (width, height), _BACKGROUND)
    draw = ImageDraw.Draw(page)
    title_font = _font(22)
    body_font = _font(16)

    draw.text((_MARGIN, _MARGIN), "Assembly guide", fill=_INK, font=title_font)
    y = _MARGIN + _TITLE_HEIGHT
    for line in (
        f"Grid: {grid.width} x {grid.height} cells",
        f"Tiles: {n_tiles}  |  Pages: {n_pages}",
        "Cells per colour:",
    ):
        draw.text((_MARGIN, y), line, fill=_INK, font=body_font)
        y += row_h

    for name, count in materials:
        rgb = grid.palette[grid.palette.index_of(name)].rgb
        draw.rectangle(
            [_MARGIN, y, _MARGIN + cell_px, y + cell_px], fill=rgb, outline=_INK,
        )
        draw.text(
            (_MARGIN + cell_px + 12, y + 2), f"{name}: {count}",
            fill=_INK, font=body_font,
        )
        y += row_h
    return page


def render_guide(
    grid: Grid,
    super_tiles: list[SuperTile],
    tile_size: int,
    super_tile_size: int,
    cell_px: int = 24,
) -> list[Image.Image]:
    """Summary page followed by one page per super-tile, in order."""
    n_tiles = sum(len(st.tiles) for st in super_tiles)
    pages = [render_summary(grid, n_tiles, len(super_tiles), cell_px)]
    for i, st in enumerate(super_tiles, 1):
        pages.append(render_page(
            st, grid.palette, tile_size, super_tile_size, cell_px, page_number=i,
        ))
    logger.info("Rendered %d guide pages (%d tiles)", len(pages), n_tiles)
    return pages


def save_guide(pages: list[Image.Image], path: str | Path) -> list[Path]:
    """Write pages to *path*.

    A ``.pdf`` path produces one multi-page document; any other suffix
    produces ``<stem>_p01<suffix>``, ``<stem>_p02<suffix>``, ...

    Returns:
        The files written.
    """
    if not pages:
        msg = "No pages to save"
        raise ValueError(msg)
    path = Path(path)
    if path.suffix.lower() == ".pdf":
        pages[0].save(path, save_all=True, append_images=pages[1:])
        written = [path]
    else:
        written = []
        for i, page in enumerate(pages, 1):
            p = path.with_name(f"{path.stem}_p{i:02d}{path.suffix}")
            page.save(p)
            written.append(p)
    logger.info("Guide saved: %s", ", ".join(str(p) for p in written))
    return written
