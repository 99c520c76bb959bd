"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pixel_canvas.errors import InvalidBrush, InvalidDimensions
from pixel_canvas.palette import DEFAULT_PALETTE, Palette


@dataclass(frozen=True)
class CanvasConfig:
    """All tuneable parameters for an editing session.

    Attributes:
        min_size:        Smallest allowed width / height in cells.
        max_size:        Largest allowed width / height in cells.
        size_step:       Width and height must be multiples of this.
        cube_size:       Cells per cube side in the cube-based variant.
        min_cubes:       Fewest cubes along an axis (cube variant).
        max_cubes:       Most cubes along an axis (cube variant).
        min_brush:       Smallest brush side.
        max_brush:       Largest brush side.
        tile_size:       Side of one assembly tile, in cells.
        super_tile_size: Side of one guide page, in tiles.
        palette:         Ordered set of allowed colours.
        pixel_upscale:   Each cell becomes n x n pixels in `export` output.
        guide_cell_px:   Cell side in rendered guide pages.
        output_format:   Suffix of the default `export` file name.
        output_dir:      Folder for results.
    """

    # Free-size grid
    min_size: int = 15
    max_size: int = 51
    size_step: int = 3

    # Cube-based grid: side = cubes * cube_size
    cube_size: int = 3
    min_cubes: int = 5
    max_cubes: int = 30

    # Brush
    min_brush: int = 1
    max_brush: int = 10

    # Block decomposition
    tile_size: int = 3
    super_tile_size: int = 3

    palette: Palette = DEFAULT_PALETTE

    # Output
    pixel_upscale: int = 12
    guide_cell_px: int = 24
    output_format: str = "png"
    output_dir: Path = field(default_factory=lambda: Path("output"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".gif", ".tiff", ".tif", ".webp"}
    )

    def is_valid_size(self, value: int) -> bool:
        return (
            self.min_size <= value <= self.max_size
            and value % self.size_step == 0
        )

    def validate_dimensions(self, width: int, height: int) -> None:
        """Raise :class:`InvalidDimensions` unless both sides are allowed."""
        if not (self.is_valid_size(width) and self.is_valid_size(height)):
            msg = (
                f"Both width and height must be between {self.min_size} and "
                f"{self.max_size}, and multiples of {self.size_step} "
                f"(got {width}x{height})"
            )
            raise InvalidDimensions(msg)

    def dimensions_from_cubes(self, cubes_x: int, cubes_y: int) -> tuple[int, int]:
        """Return ``(width, height)`` in cells for a cube-based canvas."""
        for count in (cubes_x, cubes_y):
            if not self.min_cubes <= count <= self.max_cubes:
                msg = (
                    f"Cube count must be between {self.min_cubes} and "
                    f"{self.max_cubes} (got {cubes_x}x{cubes_y})"
                )
                raise InvalidDimensions(msg)
        return cubes_x * self.cube_size, cubes_y * self.cube_size

    def is_cube_size(self, value: int) -> bool:
        cubes, rem = divmod(value, self.cube_size)
        return rem == 0 and self.min_cubes <= cubes <= self.max_cubes

    def validate_canvas(self, width: int, height: int) -> None:
        """Accept either a free-size or a cube-based canvas."""
        if self.is_cube_size(width) and self.is_cube_size(height):
            return
        self.validate_dimensions(width, height)

    def validate_brush(self, size: int) -> None:
        if not self.min_brush <= size <= self.max_brush:
            msg = (
                f"Brush size must be between {self.min_brush} and "
                f"{self.max_brush} (got {size})"
            )
            raise InvalidBrush(msg)
