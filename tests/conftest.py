"""
Test configuration and shared fixtures for splash_tiler.

This module defines reusable pytest fixtures for generating source
splash images on disk and for making the shared logger observable via
caplog. These fixtures support all test modules in the test suite.

Note:
    This file is automatically loaded by pytest and should not be
    renamed.

"""
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from splash_tiler.constants import COLOR_MODE_RGB
from splash_tiler.logging_utils import logger
from splash_tiler.tiling import Layout

SPLASH_COLORS = ["red", "green", "blue", "yellow", "purple"]


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a sample 160x90 red RGB PIL image."""
    return Image.new(COLOR_MODE_RGB, (160, 90), color="red")


@pytest.fixture
def make_image_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a solid-color image into tmp_path."""

    def _make(
        size: tuple[int, int] = (160, 90),
        color: str | tuple[int, ...] = "red",
        name: str = "splash.png",
        mode: str = COLOR_MODE_RGB,
    ) -> Path:
        path = tmp_path / name
        Image.new(mode, size, color=color).save(path)
        return path

    return _make


@pytest.fixture
def splash_paths(make_image_file: Callable[..., Path]) -> list[Path]:
    """Five 16:9 PNG splashes with distinct solid colors."""
    return [
        make_image_file(color=color, name=f"{idx}_{color}.png")
        for idx, color in enumerate(SPLASH_COLORS)
    ]


@pytest.fixture
def small_layout() -> Layout:
    """A 3x2 grid of 40x30 tiles cropped to 30x30."""
    return Layout(grid=(3, 2), tile_resolution=(40, 30), crop_adjust=(10, 0))


@pytest.fixture(autouse=True)
def enable_logger_propagation(monkeypatch: pytest.MonkeyPatch) -> None:
    """Enable propagation for the tiler logger to allow caplog to work."""
    monkeypatch.setattr(logger, "propagate", True)
