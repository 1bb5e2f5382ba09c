"""Runtime utilities for validation, worker sizing, and version lookup."""

from .validation import (
    resolve_workers,
    validate_container,
    validate_image_paths,
    validate_resolution,
)
from .version import resolve_project_version

__all__ = [
    "resolve_project_version",
    "resolve_workers",
    "validate_container",
    "validate_image_paths",
    "validate_resolution",
]
