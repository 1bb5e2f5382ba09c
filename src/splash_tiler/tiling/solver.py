"""
Grid layout search for covering a container with same-aspect tiles.

Two evaluators fit a grid to the container: the width-biased one
divides the container width exactly into columns and lets the rows
overshoot, the height-biased one does the mirror image. The overshoot
on the non-bias axis is removed by cropping every tile. The solver
walks the looseness parameter (extra columns or rows beyond the
tightest fit) upward until the cheaper of the two candidates has
enough cells, or until tiles shrink below the requested floor.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from splash_tiler.constants import FIT_TOLERANCE
from splash_tiler.errors import InvalidInputError
from splash_tiler.logging_utils import logger
from splash_tiler.runtime.validation import validate_resolution

if TYPE_CHECKING:  # pragma: no cover
    from splash_tiler.type_defs import Resolution

_NO_FLOOR: Resolution = (0, 0)


@dataclass(frozen=True, slots=True)
class Layout:
    """
    Accepted grid arrangement for one tile build.

    ``tile_resolution`` is the size each source is resized to and
    ``crop_adjust`` the total number of pixels trimmed from it per axis.
    Only the non-bias axis is ever cropped.
    """

    grid: Resolution
    tile_resolution: Resolution
    crop_adjust: Resolution = (0, 0)
    looseness: int = 0

    @property
    def columns(self) -> int:
        """Tiles across."""
        return self.grid[0]

    @property
    def rows(self) -> int:
        """Tiles down."""
        return self.grid[1]

    @property
    def cell_count(self) -> int:
        """Total number of grid cells."""
        return self.columns * self.rows

    @property
    def cropped_resolution(self) -> Resolution:
        """Size of one tile after the crop adjustment."""
        return (
            self.tile_resolution[0] - self.crop_adjust[0],
            self.tile_resolution[1] - self.crop_adjust[1],
        )

    @property
    def canvas_size(self) -> Resolution:
        """Exact pixel size of the composite painted from this layout."""
        tile_w, tile_h = self.cropped_resolution
        return self.columns * tile_w, self.rows * tile_h

    def covers(self, container: Resolution) -> bool:
        """Return True when the composite leaves no gap in ``container``."""
        canvas_w, canvas_h = self.canvas_size
        return canvas_w >= container[0] and canvas_h >= container[1]

    def meets_floor(self, floor: Resolution) -> bool:
        """Return True when cropped tiles are at least ``floor`` each way."""
        tile_w, tile_h = self.cropped_resolution
        return tile_w >= floor[0] and tile_h >= floor[1]


def _ceil_fit(value: float) -> int:
    """Round a real-valued tile count up, never below one."""
    return max(1, math.ceil(value - FIT_TOLERANCE))


def _ceil_div(total: int, parts: int) -> int:
    return -(-total // parts)


def _fit_axis(
    native: Resolution,
    container: Resolution,
    looseness: int,
) -> tuple[Resolution, Resolution, int]:
    """
    Fit the first axis of ``native``/``container`` exactly.

    Returns ``(counts, tile, crop)`` where ``counts`` and ``tile`` are
    ``(bias, other)`` pairs and ``crop`` is the trim on the other axis.
    Retained tile sizes are ceiling-divided from the container so
    ``count * retained >= container`` holds on both axes.
    """
    native_bias, native_other = native
    container_bias, container_other = container

    bias_count = _ceil_fit(container_bias / native_bias) + looseness
    new_bias = container_bias / bias_count
    new_other = new_bias * native_other / native_bias

    other_count = _ceil_fit(container_other / new_other)
    keep_bias = _ceil_div(container_bias, bias_count)
    keep_other = _ceil_div(container_other, other_count)

    # The resized tile may round below what the rows must cover.
    tile_other = max(round(new_other), keep_other)
    return (
        (bias_count, other_count),
        (keep_bias, tile_other),
        tile_other - keep_other,
    )


def _check_fit_args(
    native: Resolution,
    container: Resolution,
    looseness: int,
) -> None:
    validate_resolution(native, "Native resolution")
    validate_resolution(container, "Container resolution")
    if looseness < 0:
        msg = f"looseness must be non-negative, got {looseness}"
        raise InvalidInputError(msg)


def fit_width_biased(
    native: Resolution,
    container: Resolution,
    looseness: int = 0,
) -> Layout:
    """
    Fit columns exactly to the container width.

    Rows are rounded up to cover the height; the overshoot is cropped
    from each tile's height.
    """
    _check_fit_args(native, container, looseness)
    (columns, rows), (tile_w, tile_h), crop = _fit_axis(
        native, container, looseness,
    )
    return Layout(
        grid=(columns, rows),
        tile_resolution=(tile_w, tile_h),
        crop_adjust=(0, crop),
        looseness=looseness,
    )


def fit_height_biased(
    native: Resolution,
    container: Resolution,
    looseness: int = 0,
) -> Layout:
    """
    Fit rows exactly to the container height.

    Columns are rounded up to cover the width; the overshoot is cropped
    from each tile's width.
    """
    _check_fit_args(native, container, looseness)
    (rows, columns), (tile_h, tile_w), crop = _fit_axis(
        (native[1], native[0]), (container[1], container[0]), looseness,
    )
    return Layout(
        grid=(columns, rows),
        tile_resolution=(tile_w, tile_h),
        crop_adjust=(crop, 0),
        looseness=looseness,
    )


def find_optimal_layout(
    native: Resolution,
    container: Resolution,
    min_count: int = 0,
    min_tile_resolution: Resolution = _NO_FLOOR,
) -> Layout | None:
    """
    Search for the tightest layout with more than ``min_count`` cells.

    Looseness starts at zero and grows by one per step. At each step
    the width- and height-biased candidates are compared by their crop
    (``x.crop_adjust[1]`` against ``y.crop_adjust[0]``) and the cheaper
    one is kept. Growing looseness only ever adds cells and shrinks
    tiles, so the loop ends either on acceptance or once the kept
    candidate's cropped tile falls below ``min_tile_resolution``.

    Args:
        native: Resolution of the source images.
        container: Resolution the composite must cover.
        min_count: The accepted grid must have strictly more cells.
        min_tile_resolution: Smallest acceptable cropped tile size,
            ``(0, 0)`` for no floor.

    Returns:
        The accepted layout, or None when no looseness satisfies both
        constraints.

    Raises:
        InvalidInputError: For non-positive resolutions or a negative
            ``min_count``.

    """
    if min_count < 0:
        msg = f"min_count must be non-negative, got {min_count}"
        raise InvalidInputError(msg)

    looseness = 0
    while True:
        x_fit = fit_width_biased(native, container, looseness)
        y_fit = fit_height_biased(native, container, looseness)
        best = y_fit if x_fit.crop_adjust[1] > y_fit.crop_adjust[0] else x_fit

        above_floor = best.meets_floor(min_tile_resolution)
        logger.debug(
            "looseness=%d grid=%dx%d tile=%dx%d crop=%dx%d",
            looseness, *best.grid, *best.tile_resolution, *best.crop_adjust,
        )
        if best.cell_count > min_count and above_floor:
            return best
        if not above_floor:
            logger.debug(
                "Tile %dx%d dropped below floor %dx%d; no feasible layout",
                *best.cropped_resolution, *min_tile_resolution,
            )
            return None
        looseness += 1
