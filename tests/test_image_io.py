"""
Tests for image loading in splash_tiler.

Covers:
- Loading images and converting them to RGB
- Header-only resolution reads
- Error handling for missing and corrupt files
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

import splash_tiler.image_io as st_image_io
from splash_tiler.constants import COLOR_MODE_RGB
from splash_tiler.errors import DecodeError


class TestImageLoading:
    """Test image loading and format normalization."""

    def test_load_image_valid(
        self,
        make_image_file: Callable[..., Path],
    ) -> None:
        """Test loading a valid image path."""
        img = st_image_io.load_image(make_image_file())
        assert isinstance(img, Image.Image)
        assert img.mode == COLOR_MODE_RGB

    def test_load_image_invalid_path(self, tmp_path: Path) -> None:
        """Test that a nonexistent path raises DecodeError (an OSError)."""
        missing = tmp_path / "nonexistent_image.jpg"
        with pytest.raises(OSError, match="file not found") as excinfo:
            st_image_io.load_image(missing)
        assert isinstance(excinfo.value, DecodeError)
        assert excinfo.value.path == missing

    def test_load_image_invalid_data(self, tmp_path: Path) -> None:
        """Test that invalid image content raises DecodeError."""
        path = tmp_path / "bad.jpg"
        path.write_bytes(b"not an image data")
        with pytest.raises(DecodeError, match="Error loading image"):
            st_image_io.load_image(path)

    @pytest.mark.parametrize("mode", ["L", "P", "CMYK"])
    def test_non_rgb_modes_converted(
        self,
        mode: str,
        make_image_file: Callable[..., Path],
    ) -> None:
        suffix = "jpg" if mode == "CMYK" else "png"
        path = make_image_file(mode=mode, color=0, name=f"m.{suffix}")
        assert st_image_io.load_image(path).mode == COLOR_MODE_RGB

    def test_transparency_composited_on_black(self) -> None:
        img = Image.new("RGBA", (4, 4), (255, 255, 255, 0))
        img.putpixel((1, 1), (0, 255, 0, 255))
        rgb = st_image_io.to_rgb(img)
        assert rgb.mode == COLOR_MODE_RGB
        assert rgb.getpixel((0, 0)) == (0, 0, 0)
        assert rgb.getpixel((1, 1)) == (0, 255, 0)

    def test_to_rgb_custom_background(self) -> None:
        la = Image.new("LA", (2, 2), (0, 0))
        rgb = st_image_io.to_rgb(la, bg_color=(10, 20, 30))
        assert rgb.getpixel((0, 0)) == (10, 20, 30)

    def test_rgb_passthrough(self, sample_image: Image.Image) -> None:
        assert st_image_io.to_rgb(sample_image) is sample_image


class TestNativeResolution:
    @pytest.mark.parametrize("size", [(1215, 717), (308, 560), (16, 9)])
    def test_reads_size(
        self,
        size: tuple[int, int],
        make_image_file: Callable[..., Path],
    ) -> None:
        path = make_image_file(size=size)
        assert st_image_io.read_native_resolution(path) == size

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(DecodeError, match="file not found"):
            st_image_io.read_native_resolution(tmp_path / "nope.png")

    def test_corrupt(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.png"
        path.write_bytes(b"garbage")
        with pytest.raises(DecodeError) as excinfo:
            st_image_io.read_native_resolution(path)
        assert excinfo.value.__cause__ is not None
