"""Input validation helpers for runtime configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from splash_tiler.errors import InvalidInputError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from splash_tiler.type_defs import StrPath


def validate_image_paths(paths: Iterable[StrPath]) -> list[Path]:
    """Ensure every source path points to a file and return them as Paths."""
    resolved = [Path(p) for p in paths]
    for path in resolved:
        if not path.is_file():
            msg = f"Source image not found: {path}"
            raise FileNotFoundError(msg)
    return resolved


def validate_resolution(resolution: tuple[int, int], label: str) -> None:
    """Reject resolutions that are not two strictly positive integers."""
    width, height = resolution
    if width <= 0 or height <= 0:
        msg = f"{label} must be positive, got {width}x{height}"
        raise InvalidInputError(msg)


def validate_container(container: tuple[int, int]) -> None:
    """Reject zero-area containers before any image work begins."""
    validate_resolution(container, "Container resolution")


def resolve_workers(workers: int) -> int:
    """Map a non-positive worker count to one worker per CPU core."""
    if workers <= 0:
        return os.cpu_count() or 1
    return workers
