"""Image loading and color-mode normalization for source splash art."""
from __future__ import annotations

from typing import TYPE_CHECKING

from PIL import Image

from splash_tiler.constants import COLOR_BLACK, COLOR_MODE_RGB
from splash_tiler.errors import DecodeError

if TYPE_CHECKING:  # pragma: no cover
    from splash_tiler.type_defs import Resolution, StrPath

_RGB = tuple[int, int, int]


def to_rgb(img: Image.Image, *, bg_color: _RGB = COLOR_BLACK) -> Image.Image:
    """Convert PIL image to RGB, alpha compositing if needed."""
    if img.mode == COLOR_MODE_RGB:
        return img
    if img.mode in ("RGBA", "LA", "PA"):
        bg = Image.new("RGBA", img.size, (*bg_color, 255))
        comp = Image.alpha_composite(bg, img.convert("RGBA"))
        return comp.convert(COLOR_MODE_RGB)
    return img.convert(COLOR_MODE_RGB)


def load_image(path: StrPath) -> Image.Image:
    """
    Load an image from a file path and convert to RGB.

    The pixel data is read eagerly so the file handle is closed before
    the image is returned.

    Args:
        path: Path to the image file

    Returns:
        PIL Image in RGB mode

    Raises:
        DecodeError: If the file is missing, unreadable, or not an image

    """
    try:
        with Image.open(path) as img:
            img.load()
            return to_rgb(img)
    except FileNotFoundError as e:
        raise DecodeError(path, "file not found") from e
    except OSError as e:
        raise DecodeError(path, e) from e


def read_native_resolution(path: StrPath) -> Resolution:
    """
    Return the (width, height) of an image without decoding its pixels.

    Pillow only parses the header on open, which keeps this cheap for
    the large splash files the solver is sized from.
    """
    try:
        with Image.open(path) as img:
            width, height = img.size
    except FileNotFoundError as e:
        raise DecodeError(path, "file not found") from e
    except OSError as e:
        raise DecodeError(path, e) from e
    return int(width), int(height)

