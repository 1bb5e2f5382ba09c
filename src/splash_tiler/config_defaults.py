"""Shared default values for user-facing configuration settings."""

# Tile
DEFAULT_TILE_NAME = "tile"
DEFAULT_MIN_COUNT: int | None = None  # None means "one cell per image"
DEFAULT_MIN_TILE_WIDTH = 0
DEFAULT_MIN_TILE_HEIGHT = 0
DEFAULT_MERGED_NAME = "merged"

# Output
DEFAULT_JPEG_QUALITY = 90

# Performance
DEFAULT_WORKERS = 0  # one per CPU core
DEFAULT_PROGRESS = True
