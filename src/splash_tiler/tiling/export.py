"""Path and persistence helpers for finished tiles."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

from splash_tiler.config_defaults import (
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MERGED_NAME,
)
from splash_tiler.constants import (
    COLOR_BLACK,
    COLOR_MODE_RGB,
    JPEG_SUFFIXES,
    OUTPUT_FORMAT,
    OUTPUT_SUFFIX,
)
from splash_tiler.errors import EncodeError, InvalidInputError
from splash_tiler.image_io import load_image, read_native_resolution
from splash_tiler.logging_utils import logger
from splash_tiler.runtime.validation import validate_container
from splash_tiler.tiling.compositor import composite_tiles
from splash_tiler.tiling.solver import find_optimal_layout

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from splash_tiler.type_defs import Resolution, StrPath


def _ensure_jpg(name: str) -> str:
    """Return ``name`` with a JPEG suffix, keeping one that is present."""
    if Path(name).suffix.lower() in JPEG_SUFFIXES:
        return name
    return f"{name}{OUTPUT_SUFFIX}"


def tile_output_path(first_path: StrPath, name: str) -> Path:
    """Place the tile named ``name`` next to the first source image."""
    if not name or not name.strip():
        msg = "Tile name must not be empty"
        raise InvalidInputError(msg)
    return Path(first_path).parent / _ensure_jpg(name.strip())


def save_canvas(
    canvas: np.ndarray | Image.Image,
    out_path: StrPath,
    *,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """
    Encode ``canvas`` as JPEG at ``out_path``.

    Raises:
        EncodeError: If the directory cannot be created or written, or
            the encoder rejects the image.

    """
    out_path = Path(out_path)
    image = canvas if isinstance(canvas, Image.Image) else Image.fromarray(
        np.ascontiguousarray(canvas, dtype=np.uint8),
    )
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        image.convert(COLOR_MODE_RGB).save(
            out_path, format=OUTPUT_FORMAT, quality=quality,
        )
    except (OSError, ValueError) as exc:
        raise EncodeError(out_path, exc) from exc
    return out_path


def build_tile(  # noqa: PLR0913
    paths: Sequence[StrPath],
    container: Resolution,
    name: str,
    *,
    min_count: int | None = None,
    min_tile_resolution: Resolution = (0, 0),
    quality: int = DEFAULT_JPEG_QUALITY,
    workers: int = 0,
    progress: bool = False,
) -> Path | None:
    """
    Solve, composite, and save one tile covering ``container``.

    The native resolution is read from the first image; all sources are
    expected to share its aspect ratio. ``min_count`` defaults to the
    number of sources so every image gets at least one cell.

    Returns the written path, or None when ``paths`` is empty or no
    layout satisfies the constraints. Decode and encode failures raise
    with the offending path.
    """
    validate_container(container)
    sources = [Path(p) for p in paths]
    if not sources:
        logger.warning("No source images given; nothing to tile")
        return None

    out_path = tile_output_path(sources[0], name)
    native = read_native_resolution(sources[0])
    required = len(sources) if min_count is None else min_count

    logger.info("Calculating optimal tile for %dx%d...", *container)
    layout = find_optimal_layout(
        native, container, required, min_tile_resolution,
    )
    if layout is None:
        logger.warning(
            "No layout for %dx%d fits %d images with tiles of at least %dx%d",
            *container, required, *min_tile_resolution,
        )
        return None
    logger.info(
        "Building %dx%d grid of %dx%d tiles (crop %dx%d)...",
        *layout.grid, *layout.cropped_resolution, *layout.crop_adjust,
    )

    canvas = composite_tiles(
        sources, layout, workers=workers, progress=progress,
    )
    save_canvas(canvas, out_path, quality=quality)
    logger.info("Tile saved to: %s", out_path)
    return out_path


def merge_side_by_side(
    left_path: StrPath,
    right_path: StrPath,
    name: str = DEFAULT_MERGED_NAME,
    *,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """
    Join two tiles horizontally for a wallpaper spanning two monitors.

    The canvas is as tall as the taller tile; the uncovered strip below
    the shorter one stays black. Saved next to ``left_path``.
    """
    left = load_image(left_path)
    right = load_image(right_path)
    width = left.width + right.width
    height = max(left.height, right.height)

    merged = Image.new(COLOR_MODE_RGB, (width, height), COLOR_BLACK)
    merged.paste(left, (0, 0))
    merged.paste(right, (left.width, 0))

    out_path = tile_output_path(left_path, name)
    save_canvas(merged, out_path, quality=quality)
    logger.info("Merged tile saved to: %s", out_path)
    return out_path
