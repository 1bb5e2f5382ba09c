"""Public package exports for the splash tiler."""

from __future__ import annotations

from .errors import DecodeError, EncodeError, InvalidInputError, TilingError
from .tiling import Layout, build_tile, find_optimal_layout, merge_side_by_side

__all__ = [
    "DecodeError",
    "EncodeError",
    "InvalidInputError",
    "Layout",
    "TilingError",
    "build_tile",
    "find_optimal_layout",
    "merge_side_by_side",
]
