"""
Compositing of resized splash tiles onto a single canvas.

Tiles are prepared (decoded, resized, center-cropped) on a thread pool
since each one is independent; Pillow drops the GIL while resampling.
Painting then runs sequentially, row-major, into a numpy buffer whose
cells never overlap.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import TYPE_CHECKING

import numpy as np
from tqdm import tqdm

from splash_tiler.constants import RESAMPLE_FILTER, RGB_CHANNELS
from splash_tiler.errors import InvalidInputError
from splash_tiler.image_io import load_image
from splash_tiler.logging_utils import logger
from splash_tiler.runtime.validation import resolve_workers

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence

    from PIL import Image

    from splash_tiler.tiling.solver import Layout
    from splash_tiler.type_defs import StrPath


def crop_tile(image: Image.Image, layout: Layout) -> Image.Image:
    """
    Resize ``image`` to the layout's tile size and trim the overfit.

    Half of the crop adjustment comes off each side; when it is odd the
    extra pixel is taken from the right or bottom edge.
    """
    resized = image.resize(layout.tile_resolution, RESAMPLE_FILTER)
    dx, dy = layout.crop_adjust
    keep_w, keep_h = layout.cropped_resolution
    left, top = dx // 2, dy // 2
    return resized.crop((left, top, left + keep_w, top + keep_h))


def prepare_tile(path: StrPath, layout: Layout) -> Image.Image:
    """Decode one source image and turn it into a ready-to-paint tile."""
    return crop_tile(load_image(path), layout)


def prepare_tiles(
    paths: Sequence[StrPath],
    layout: Layout,
    *,
    workers: int = 0,
    progress: bool = False,
) -> list[Image.Image]:
    """
    Prepare every source image in parallel, preserving input order.

    The first decode failure propagates and aborts the build.

    Args:
        paths: Ordered source image paths.
        layout: Accepted layout providing tile and crop sizes.
        workers: Thread count, values <= 0 use one per CPU core.
        progress: Show a tqdm progress bar while tiles are prepared.

    Returns:
        Cropped RGB tiles, one per path, in the order given.

    """
    n_workers = min(resolve_workers(workers), max(1, len(paths)))
    logger.debug("Preparing %d tiles on %d workers", len(paths), n_workers)
    with ThreadPoolExecutor(max_workers=n_workers) as executor:
        results = executor.map(partial(prepare_tile, layout=layout), paths)
        return list(tqdm(
            results,
            total=len(paths),
            desc="Preparing tiles",
            unit="img",
            disable=not progress,
        ))


def paint_canvas(tiles: Sequence[Image.Image], layout: Layout) -> np.ndarray:
    """
    Paint tiles into a fresh canvas in row-major grid order.

    Cell ``i * columns + j`` receives ``tiles[(i * columns + j) % len(tiles)]``
    so fewer tiles than cells simply wrap around.
    """
    if not tiles:
        msg = "No tiles to paint"
        raise InvalidInputError(msg)
    if layout.cell_count <= 0:
        msg = f"Layout grid {layout.columns}x{layout.rows} has no cells"
        raise InvalidInputError(msg)

    tile_w, tile_h = layout.cropped_resolution
    pixels = [np.asarray(tile, dtype=np.uint8) for tile in tiles]
    for idx, arr in enumerate(pixels):
        if arr.shape != (tile_h, tile_w, RGB_CHANNELS):
            msg = (f"Tile {idx} has shape {arr.shape}, expected "
                   f"{(tile_h, tile_w, RGB_CHANNELS)}")
            raise InvalidInputError(msg)

    canvas_w, canvas_h = layout.canvas_size
    canvas = np.zeros((canvas_h, canvas_w, RGB_CHANNELS), dtype=np.uint8)
    count = 0
    for i in range(layout.rows):
        for j in range(layout.columns):
            src = pixels[count % len(pixels)]
            y, x = i * tile_h, j * tile_w
            canvas[y:y + tile_h, x:x + tile_w] = src
            count += 1
    return canvas


def composite_tiles(
    paths: Sequence[StrPath],
    layout: Layout,
    *,
    workers: int = 0,
    progress: bool = False,
) -> np.ndarray | None:
    """
    Build the composite canvas for ``layout`` from ``paths``.

    Returns None for an empty path list without allocating anything.
    """
    if not paths:
        return None
    if layout.cell_count <= 0:
        msg = f"Layout grid {layout.columns}x{layout.rows} has no cells"
        raise InvalidInputError(msg)
    tiles = prepare_tiles(paths, layout, workers=workers, progress=progress)
    return paint_canvas(tiles, layout)
