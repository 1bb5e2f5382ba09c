"""
Tiling pipeline split into layout solving, compositing, and export.

The package re-exports the entry points callers use most so
``from splash_tiler.tiling import build_tile`` keeps working if the
submodules are reorganized.
"""

from __future__ import annotations

from . import compositor, export, solver
from .compositor import (
    composite_tiles,
    crop_tile,
    paint_canvas,
    prepare_tile,
    prepare_tiles,
)
from .export import (
    build_tile,
    merge_side_by_side,
    save_canvas,
    tile_output_path,
)
from .solver import (
    Layout,
    find_optimal_layout,
    fit_height_biased,
    fit_width_biased,
)

__all__ = [
    "Layout",
    "build_tile",
    "composite_tiles",
    "compositor",
    "crop_tile",
    "export",
    "find_optimal_layout",
    "fit_height_biased",
    "fit_width_biased",
    "merge_side_by_side",
    "paint_canvas",
    "prepare_tile",
    "prepare_tiles",
    "save_canvas",
    "solver",
    "tile_output_path",
]
