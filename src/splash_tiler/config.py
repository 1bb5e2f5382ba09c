"""
Configuration schema and loader for the splash tiler.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, Field

from splash_tiler.config_defaults import (
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MIN_COUNT,
    DEFAULT_MIN_TILE_HEIGHT,
    DEFAULT_MIN_TILE_WIDTH,
    DEFAULT_PROGRESS,
    DEFAULT_TILE_NAME,
    DEFAULT_WORKERS,
)
from splash_tiler.constants import JPEG_QUALITY_MAX, JPEG_QUALITY_MIN


class TileConfig(BaseModel):
    """Control the layout constraints and the name of the tile."""

    name: str = Field(DEFAULT_TILE_NAME, min_length=1)
    min_count: int | None = Field(DEFAULT_MIN_COUNT, ge=0)
    min_tile_width: int = Field(DEFAULT_MIN_TILE_WIDTH, ge=0)
    min_tile_height: int = Field(DEFAULT_MIN_TILE_HEIGHT, ge=0)

    @property
    def min_tile_resolution(self) -> tuple[int, int]:
        """Floor for the cropped tile size as ``(width, height)``."""
        return self.min_tile_width, self.min_tile_height


class OutputConfig(BaseModel):
    """Configure how the composite is encoded."""

    jpeg_quality: int = Field(
        DEFAULT_JPEG_QUALITY,
        ge=JPEG_QUALITY_MIN,
        le=JPEG_QUALITY_MAX,
    )


class PerformanceConfig(BaseModel):
    """Worker pool sizing and progress reporting."""

    workers: int = Field(DEFAULT_WORKERS, ge=0)
    progress: bool = DEFAULT_PROGRESS


class TilerConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of config.toml, grouping related parameters
    under logical categories.
    """

    # model_validate({}) lets Pydantic populate every Field default while
    # keeping type checkers from flagging missing constructor arguments.
    tile: TileConfig = Field(
        default_factory=lambda: TileConfig.model_validate({}),
    )
    output: OutputConfig = Field(
        default_factory=lambda: OutputConfig.model_validate({}),
    )
    performance: PerformanceConfig = Field(
        default_factory=lambda: PerformanceConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str | Path) -> TilerConfig:
        """
        Load a tiler configuration from a TOML file.

        Returns a validated TilerConfig instance based on the file
        contents.
        """
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return TilerConfig.model_validate(doc.unwrap())


# CLI destination -> (section, field)
_CLI_OVERRIDES: dict[str, tuple[str, str]] = {
    "name": ("tile", "name"),
    "min_count": ("tile", "min_count"),
    "quality": ("output", "jpeg_quality"),
    "workers": ("performance", "workers"),
}


def build_config_from_cli(
    cli_args: dict[str, Any],
    base_config: TilerConfig | None = None,
) -> TilerConfig:
    """
    Merge parsed CLI values over a base config and revalidate.

    Only keys present in ``cli_args`` override the base; argparse
    options declared with ``default=argparse.SUPPRESS`` are absent when
    not given on the command line.
    """
    base = base_config or TilerConfig.model_validate({})
    data = base.model_dump()

    for dest, (section, field) in _CLI_OVERRIDES.items():
        if dest in cli_args and cli_args[dest] is not None:
            data[section][field] = cli_args[dest]

    min_tile = cli_args.get("min_tile")
    if min_tile is not None:
        data["tile"]["min_tile_width"], data["tile"]["min_tile_height"] = (
            min_tile
        )
    if cli_args.get("no_progress"):
        data["performance"]["progress"] = False

    return TilerConfig.model_validate(data)
