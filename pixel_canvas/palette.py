"""Fixed colour palette and nearest-colour mapping."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

import numpy as np

from pixel_canvas.errors import UnknownColor


def _hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
    """Parse '#RRGGBB' to an ``(r, g, b)`` tuple."""
    h = hex_str.lstrip("#")
    if len(h) != 6:
        msg = f"Expected a '#RRGGBB' colour, got {hex_str!r}"
        raise ValueError(msg)
    r, g, b = (int(h[i : i + 2], 16) for i in (0, 2, 4))
    return r, g, b


@dataclass(frozen=True)
class PaletteColor:
    """One named palette entry."""

    name: str
    hex: str

    @property
    def rgb(self) -> tuple[int, int, int]:
        return _hex_to_rgb(self.hex)


@dataclass(frozen=True)
class Palette:
    """Immutable, ordered, non-empty set of allowed colours.

    Order matters: nearest-colour ties resolve to the lowest index, and
    index 0 is the background colour of a blank canvas.
    """

    colors: tuple[PaletteColor, ...]

    def __post_init__(self) -> None:
        if not self.colors:
            msg = "Palette must contain at least one colour"
            raise ValueError(msg)
        names = [c.name.lower() for c in self.colors]
        if len(set(names)) != len(names):
            msg = f"Duplicate colour names in palette: {names}"
            raise ValueError(msg)
        # Parse every hex up front so a bad entry fails here
        for c in self.colors:
            _hex_to_rgb(c.hex)

    @classmethod
    def from_hex(cls, entries: list[tuple[str, str]]) -> Palette:
        """Build a palette from ``[(name, "#RRGGBB"), ...]``."""
        return cls(tuple(PaletteColor(name, hex_) for name, hex_ in entries))

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> PaletteColor:
        return self.colors[index]

    def __iter__(self):
        return iter(self.colors)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.colors]

    @cached_property
    def rgb_array(self) -> np.ndarray:
        """(K, 3) uint8 array, row *i* is palette entry *i*."""
        arr = np.array([c.rgb for c in self.colors], dtype=np.uint8)
        arr.flags.writeable = False
        return arr

    def index_of(self, color: str) -> int:
        """Resolve a colour by case-insensitive name or ``#RRGGBB`` code."""
        key = color.strip().lower()
        for i, c in enumerate(self.colors):
            if c.name.lower() == key or c.hex.lower() == key:
                return i
        available = ", ".join(self.names)
        msg = f"Unknown colour '{color}'. Available: {available}"
        raise UnknownColor(msg)

    def nearest_indices(self, pixels: np.ndarray, chunk_size: int = 4096) -> np.ndarray:
        """Map RGB pixels to the index of their nearest palette entry.

        Distances are squared Euclidean in plain RGB, computed in integers
        so equal distances compare equal; ``argmin`` then returns the first
        (lowest-index) entry among ties.

        Args:
            pixels: (N, 3) RGB values, any integer dtype.
            chunk_size: Rows computed per batch (controls peak RAM).

        Returns:
            (N,) uint8 palette indices.
        """
        flat = np.asarray(pixels).reshape(-1, 3).astype(np.int32)
        pal = self.rgb_array.astype(np.int32)

        n = len(flat)
        out = np.empty(n, dtype=np.uint8)
        for i in range(0, n, chunk_size):
            j = min(i + chunk_size, n)
            diff = flat[i:j, np.newaxis, :] - pal[np.newaxis, :, :]
            dist = np.sum(diff * diff, axis=2)
            out[i:j] = np.argmin(dist, axis=1)
        return out

    def nearest_index(self, r: int, g: int, b: int) -> int:
        return int(self.nearest_indices(np.array([[r, g, b]]))[0])

    def nearest_color(self, r: int, g: int, b: int) -> PaletteColor:
        """Palette entry closest to ``(r, g, b)``, first entry on ties."""
        return self.colors[self.nearest_index(r, g, b)]


# White first: it is the blank-canvas colour
DEFAULT_PALETTE = Palette.from_hex([
    ("White", "#FFFFFF"),
    ("Yellow", "#FFFF00"),
    ("Red", "#FF0000"),
    ("Blue", "#0000FF"),
    ("Green", "#00FF00"),
    ("Orange", "#FFA500"),
    ("Black", "#000000"),
])
