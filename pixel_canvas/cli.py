"""Rich command-line interface powered by Typer.

Canvases are stored as one-pixel-per-cell images; every command loads one,
applies a single operation and writes the result.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from PIL import Image, UnidentifiedImageError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from pixel_canvas.blocks import bill_of_materials, decompose
from pixel_canvas.brush import apply_brush
from pixel_canvas.config import CanvasConfig
from pixel_canvas.errors import CanvasError
from pixel_canvas.fill import count_regions, flood_fill
from pixel_canvas.grid import Grid
from pixel_canvas.guide import render_guide, save_guide
from pixel_canvas.image_io import default_filename, load_grid, save_grid
from pixel_canvas.publish import build_payload, write_payload
from pixel_canvas.quantize import quantize_image

app = typer.Typer(
    name="pixel-canvas",
    help="Draw 8-bit pictures on a palette grid and print cube-mosaic guides.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()
logger = logging.getLogger("pixel_canvas")

# Defaults come from CanvasConfig - single source of truth
_DEFAULTS = CanvasConfig()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _fail(err: Exception) -> typer.Exit:
    console.print(f"[red]Error:[/red] {err}")
    return typer.Exit(1)


def _load(canvas: Path) -> Grid:
    if not canvas.exists():
        raise _fail(FileNotFoundError(f"No such canvas: {canvas}"))
    try:
        return load_grid(canvas, _DEFAULTS)
    except CanvasError as err:
        raise _fail(err) from err


def _save(grid: Grid, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    save_grid(grid, path)
    console.print(
        f"[green]✓[/green] Saved {path}  [dim]{grid.width}x{grid.height} cells[/dim]"
    )


def _color_index(color: str) -> int:
    try:
        return _DEFAULTS.palette.index_of(color)
    except CanvasError as err:
        raise _fail(err) from err


# -- new ---------------------------------------------------------------

@app.command()
def new(
    width: int = typer.Argument(..., help="Width in cells (or cubes with --cubes)"),
    height: int = typer.Argument(..., help="Height in cells (or cubes with --cubes)"),
    output: Path = typer.Option(
        _DEFAULTS.output_dir / "canvas.png", "--output", "-o", help="Canvas file",
    ),
    cubes: bool = typer.Option(
        False, "--cubes", help=f"Size in cubes of {_DEFAULTS.cube_size}x{_DEFAULTS.cube_size} cells",
    ),
    color: str = typer.Option(_DEFAULTS.palette[0].name, "--color", "-c", help="Fill colour"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Create a blank canvas."""
    _setup_logging(verbose)
    background = _color_index(color)
    try:
        if cubes:
            grid = Grid.from_cubes(width, height, _DEFAULTS)
            grid.cells[:] = background
        else:
            grid = Grid.blank(width, height, _DEFAULTS, fill=background)
    except CanvasError as err:
        raise _fail(err) from err
    _save(grid, output)


# -- convert -----------------------------------------------------------

@app.command()
def convert(
    image: Path = typer.Argument(..., help="Photo to import"),
    output: Path = typer.Option(
        _DEFAULTS.output_dir / "canvas.png", "--output", "-o", help="Canvas file",
    ),
    width: int = typer.Option(_DEFAULTS.min_size, "--width", "-W", help="Width in cells"),
    height: int = typer.Option(_DEFAULTS.min_size, "--height", "-H", help="Height in cells"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Quantize a photo onto a palette canvas."""
    _setup_logging(verbose)

    if image.suffix.lower() not in _DEFAULTS.SUPPORTED_EXTENSIONS:
        raise _fail(ValueError(f"Unsupported image type: {image.suffix}"))
    try:
        with Image.open(image) as img:
            grid = quantize_image(img, width, height, _DEFAULTS)
            logger.info("Imported %s (%dx%d source)", image.name, img.width, img.height)
    except (CanvasError, FileNotFoundError, UnidentifiedImageError) as err:
        raise _fail(err) from err
    _save(grid, output)


# -- brush / fill ------------------------------------------------------

@app.command()
def brush(
    canvas: Path = typer.Argument(..., help="Canvas file"),
    row: int = typer.Argument(..., help="Target row"),
    col: int = typer.Argument(..., help="Target column"),
    color: str = typer.Option(..., "--color", "-c", help="Palette colour name or #RRGGBB"),
    size: int = typer.Option(_DEFAULTS.min_brush, "--size", "-s", help="Brush side in cells"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Default: overwrite CANVAS"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Stamp a square brush centred on ROW, COL."""
    _setup_logging(verbose)
    grid = _load(canvas)
    idx = _color_index(color)
    try:
        _DEFAULTS.validate_brush(size)
    except CanvasError as err:
        raise _fail(err) from err
    _save(apply_brush(grid, row, col, size, idx), output or canvas)


@app.command()
def fill(
    canvas: Path = typer.Argument(..., help="Canvas file"),
    row: int = typer.Argument(..., help="Seed row"),
    col: int = typer.Argument(..., help="Seed column"),
    color: str = typer.Option(..., "--color", "-c", help="Palette colour name or #RRGGBB"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Default: overwrite CANVAS"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Bucket-fill the region containing ROW, COL."""
    _setup_logging(verbose)
    grid = _load(canvas)
    idx = _color_index(color)
    try:
        result = flood_fill(grid, row, col, idx)
    except CanvasError as err:
        raise _fail(err) from err
    _save(result, output or canvas)


# -- export ------------------------------------------------------------

@app.command()
def export(
    canvas: Path = typer.Argument(..., help="Canvas file"),
    output: Path | None = typer.Option(
        None, "--output", "-o",
        help=f"Image to write (default: {_DEFAULTS.output_dir}/drawing_WxH.{_DEFAULTS.output_format})",
    ),
    upscale: int = typer.Option(
        _DEFAULTS.pixel_upscale, "--upscale", "-u", help="Pixel upscale factor",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Write an upscaled copy of the canvas for sharing."""
    _setup_logging(verbose)
    grid = _load(canvas)
    if output is None:
        output = _DEFAULTS.output_dir / default_filename(grid, _DEFAULTS.output_format)
    output.parent.mkdir(parents=True, exist_ok=True)
    try:
        save_grid(grid, output, upscale)
    except ValueError as err:
        raise _fail(err) from err
    console.print(f"[green]✓[/green] Exported {output}  [dim]x{upscale}[/dim]")


# -- guide -------------------------------------------------------------

@app.command()
def guide(
    canvas: Path = typer.Argument(..., help="Canvas file"),
    output: Path = typer.Option(
        _DEFAULTS.output_dir / "guide.pdf", "--output", "-o",
        help="'.pdf' for one document, any image suffix for one file per page",
    ),
    tile_size: int = typer.Option(_DEFAULTS.tile_size, "--tile-size", help="Tile side in cells"),
    super_tile_size: int = typer.Option(
        _DEFAULTS.super_tile_size, "--page-tiles", help="Tiles per page side",
    ),
    cell_px: int = typer.Option(_DEFAULTS.guide_cell_px, "--cell-px", help="Cell size on the page"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Render a printable block-by-block assembly guide."""
    _setup_logging(verbose)
    grid = _load(canvas)
    t0 = time.perf_counter()
    try:
        super_tiles = decompose(grid, tile_size, super_tile_size)
    except ValueError as err:
        raise _fail(err) from err
    pages = render_guide(grid, super_tiles, tile_size, super_tile_size, cell_px)
    output.parent.mkdir(parents=True, exist_ok=True)
    written = save_guide(pages, output)

    n_tiles = sum(len(st.tiles) for st in super_tiles)
    console.print(Panel.fit(
        f"[bold green]GUIDE READY[/bold green]\n"
        f"Tiles: {n_tiles}  |  Pages: {len(pages)}  |  "
        f"Files: {len(written)}  |  time={time.perf_counter() - t0:.1f}s",
        border_style="green",
    ))


# -- info --------------------------------------------------------------

@app.command()
def info(
    canvas: Path = typer.Argument(..., help="Canvas file"),
) -> None:
    """Show cell counts and region counts per colour."""
    grid = _load(canvas)
    regions = count_regions(grid)

    table = Table(title=f"{canvas.name}  ({grid.width}x{grid.height})")
    table.add_column("Colour")
    table.add_column("Cells", justify="right")
    table.add_column("Regions", justify="right")
    for name, count in bill_of_materials(grid):
        table.add_row(name, str(count), str(regions.get(name, 0)))
    console.print(table)


# -- publish -----------------------------------------------------------

@app.command()
def publish(
    canvas: Path = typer.Argument(..., help="Canvas file"),
    name: str = typer.Option("", "--name", "-n", help="Project name"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    dest: Path = typer.Option(Path("published"), "--dest", help="Folder to publish into"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Package the canvas as PNG + JSON metadata."""
    _setup_logging(verbose)
    grid = _load(canvas)
    png_path, meta_path = write_payload(build_payload(grid, name, description), dest)
    console.print(f"[green]✓[/green] Published {png_path.name} (+ {meta_path.name})")


if __name__ == "__main__":
    app()
