"""Publish handoff: PNG blob plus metadata for an external catalogue."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from pixel_canvas.grid import Grid
from pixel_canvas.image_io import grid_to_png_bytes

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class PublishPayload:
    """What a storage service receives on publish."""

    filename: str
    png: bytes = field(repr=False)
    metadata: dict


def _slug(name: str) -> str:
    slug = _UNSAFE.sub("_", name.strip()).strip("_")
    return slug or "drawing"


def build_payload(
    grid: Grid,
    name: str = "",
    description: str = "",
    now: datetime | None = None,
) -> PublishPayload:
    """Encode *grid* and describe it.

    The filename is ``<name>_<epoch ms>_<W>x<H>.png``, with ``drawing``
    standing in for an empty name.
    """
    now = now or datetime.now(timezone.utc)
    stamp = int(now.timestamp() * 1000)
    filename = f"{_slug(name)}_{stamp}_{grid.width}x{grid.height}.png"
    metadata = {
        "name": name,
        "description": description,
        "created_at": now.isoformat(),
        "width": grid.width,
        "height": grid.height,
    }
    return PublishPayload(filename, grid_to_png_bytes(grid), metadata)


def write_payload(payload: PublishPayload, directory: str | Path) -> tuple[Path, Path]:
    """Store the PNG and a same-stem JSON sidecar in *directory*."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    png_path = directory / payload.filename
    meta_path = png_path.with_suffix(".json")
    png_path.write_bytes(payload.png)
    meta_path.write_text(json.dumps(payload.metadata, indent=2), encoding="utf-8")
    logger.info("Published %s", png_path)
    return png_path, meta_path
