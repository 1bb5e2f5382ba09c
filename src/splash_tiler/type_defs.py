"""
Defines shared type aliases for the splash tiler.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from os import PathLike

# (width, height) in pixels
Resolution = tuple[int, int]
StrPath = str | PathLike[str]
