"""
Exception types raised by the tiling pipeline.

Each error also derives from the built-in exception a caller would
naturally catch (``ValueError`` for bad arguments, ``OSError`` for
file problems) so callers that predate these classes keep working.
A layout search that finds nothing is not an error; the solver and
``build_tile`` return ``None`` for it.
"""

from __future__ import annotations

from pathlib import Path


class TilingError(Exception):
    """Base class for every failure raised by the splash tiler."""


class InvalidInputError(TilingError, ValueError):
    """Arguments were rejected before any image work started."""


class DecodeError(TilingError, OSError):
    """A source image could not be opened or decoded."""

    def __init__(self, path: str | Path, reason: object) -> None:
        msg = f"Error loading image '{path}': {reason!s}"
        super().__init__(msg)
        self.path = Path(path)


class EncodeError(TilingError, OSError):
    """The composite image could not be written."""

    def __init__(self, path: str | Path, reason: object) -> None:
        msg = f"Error writing tile '{path}': {reason!s}"
        super().__init__(msg)
        self.path = Path(path)
