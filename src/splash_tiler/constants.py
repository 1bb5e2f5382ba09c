"""
Constants used internally by the splash tiler.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

from PIL import Image

# Lanczos-class filter used when shrinking splash art to tile size
RESAMPLE_FILTER = Image.Resampling.LANCZOS

# Output encoding
OUTPUT_FORMAT = "JPEG"
OUTPUT_SUFFIX = ".jpg"
JPEG_SUFFIXES = (".jpg", ".jpeg")
JPEG_QUALITY_MIN = 1
JPEG_QUALITY_MAX = 95

# Internal color constants
COLOR_MODE_RGB = "RGB"
COLOR_BLACK = (0, 0, 0)
RGB_CHANNELS = 3

# Grid counts within this distance above an integer are treated as exact
# fits so float noise (e.g. 2.0000000000000004) does not add a row.
FIT_TOLERANCE = 1e-9

# Parsing
RESOLUTION_PARTS = 2
