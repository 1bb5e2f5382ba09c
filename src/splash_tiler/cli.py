"""Command-line entry point for building, planning, and merging tiles."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import splash_tiler.config as st_config
from splash_tiler.config_defaults import DEFAULT_MERGED_NAME
from splash_tiler.constants import RESOLUTION_PARTS
from splash_tiler.errors import TilingError
from splash_tiler.logging_utils import logger, set_verbosity
from splash_tiler.runtime import (
    resolve_project_version,
    validate_image_paths,
)
from splash_tiler.tiling import (
    build_tile,
    find_optimal_layout,
    merge_side_by_side,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Sequence

_MERGE_COUNT = 2
EXIT_OK = 0
EXIT_NO_LAYOUT = 1


def non_negative_int(text: str) -> int:
    """Argparse-style validator that rejects negative integers."""
    try:
        value = int(text)
    except ValueError as exc:
        msg = "must be an integer"
        raise ValueError(msg) from exc
    if value < 0:
        msg = "must not be negative"
        raise ValueError(msg)
    return value


def size_2d(text: str) -> tuple[int, int]:
    """Parse ``WxH`` strings into integer tuples and validate positivity."""
    parts = text.lower().split("x")
    if len(parts) != RESOLUTION_PARTS:
        msg = "must look like WxH, e.g., 3840x1600"
        raise ValueError(msg)
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError as exc:
        msg = "width and height must be integers"
        raise ValueError(msg) from exc
    if width <= 0 or height <= 0:
        msg = "width and height must be positive"
        raise ValueError(msg)
    return width, height


def floor_2d(text: str) -> tuple[int, int]:
    """Parse a ``WxH`` tile floor; ``0x0`` is allowed and means none."""
    if text.lower() in {"0x0", "none"}:
        return 0, 0
    return size_2d(text)


T = TypeVar("T")


def _wrap_validator(
    validator: Callable[[str], T],
    error_cls: type[argparse.ArgumentTypeError] = argparse.ArgumentTypeError,
) -> Callable[[str], T]:
    """Convert ``ValueError`` from a validator into ``ArgumentTypeError``."""

    def wrapper(text: str) -> T:
        try:
            return validator(text)
        except ValueError as exc:
            raise error_cls(str(exc)) from exc

    return wrapper


def _add_constraint_args(parser: argparse.ArgumentParser) -> None:
    """Options shared by ``build`` and ``plan``."""
    parser.add_argument(
        "--container",
        action="append",
        required=True,
        type=_wrap_validator(size_2d),
        help="Target resolution as WxH; repeat once per monitor.",
    )
    parser.add_argument(
        "--min-count",
        type=_wrap_validator(non_negative_int),
        default=argparse.SUPPRESS,
        help=(
            "Grid must have more cells than this "
            "(default: number of images)."
        ),
    )
    parser.add_argument(
        "--min-tile",
        type=_wrap_validator(floor_2d),
        default=None,
        help="Smallest acceptable cropped tile as WxH (default: no floor).",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Path to a config.toml file.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser for the tiling tool."""
    parser = argparse.ArgumentParser(
        prog="splash-tiler",
        description=(
            "Arrange same-aspect splash images into one wallpaper that "
            "covers a monitor with no gaps."
        ),
    )
    parser.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log every step of the layout search.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build a tile from source images.")
    build.add_argument("images", nargs="+", type=Path)
    _add_constraint_args(build)
    build.add_argument(
        "--name", type=str, default=argparse.SUPPRESS,
        help="Output file name, written next to the first image.",
    )
    build.add_argument(
        "--quality", type=int, default=argparse.SUPPRESS,
        help="JPEG quality (1-95).",
    )
    build.add_argument(
        "--workers", type=_wrap_validator(non_negative_int),
        default=argparse.SUPPRESS,
        help="Resize threads; 0 uses one per CPU core.",
    )
    build.add_argument(
        "--no-progress", action="store_true",
        help="Hide the progress bar.",
    )
    build.add_argument(
        "--merge", action="store_true",
        help="Join exactly two tiles (two containers) side by side.",
    )

    plan = sub.add_parser(
        "plan", help="Print the layout the solver would choose.",
    )
    plan.add_argument(
        "--native", required=True, type=_wrap_validator(size_2d),
        help="Resolution of the source images as WxH.",
    )
    _add_constraint_args(plan)

    merge = sub.add_parser("merge", help="Join two tiles side by side.")
    merge.add_argument("left", type=Path)
    merge.add_argument("right", type=Path)
    merge.add_argument("--name", type=str, default=DEFAULT_MERGED_NAME)
    return parser


def _load_config(args: argparse.Namespace) -> st_config.TilerConfig:
    base_cfg = None
    if args.config is not None:
        base_cfg = st_config.ConfigLoader.load(args.config)
        logger.info("Loaded config from: %s", args.config)
    return st_config.build_config_from_cli(vars(args), base_config=base_cfg)


def _tile_name(base: str, index: int, total: int) -> str:
    """Suffix tile names with the monitor index when there are several."""
    return base if total == 1 else f"{base}_{index}"


def run_build(args: argparse.Namespace) -> int:
    """Build one tile per requested container."""
    cfg = _load_config(args)
    images = validate_image_paths(args.images)
    containers: list[tuple[int, int]] = args.container
    if args.merge and len(containers) != _MERGE_COUNT:
        msg = "--merge needs exactly two --container values"
        raise ValueError(msg)

    written: list[Path] = []
    for index, container in enumerate(containers):
        out = build_tile(
            images,
            container,
            _tile_name(cfg.tile.name, index, len(containers)),
            min_count=cfg.tile.min_count,
            min_tile_resolution=cfg.tile.min_tile_resolution,
            quality=cfg.output.jpeg_quality,
            workers=cfg.performance.workers,
            progress=cfg.performance.progress,
        )
        if out is None:
            return EXIT_NO_LAYOUT
        written.append(out)

    if args.merge:
        merge_side_by_side(
            written[0], written[1], f"{cfg.tile.name}_merged",
            quality=cfg.output.jpeg_quality,
        )
    return EXIT_OK


def run_plan(args: argparse.Namespace) -> int:
    """Run the solver only and print the chosen layout per container."""
    cfg = _load_config(args)
    min_count = cfg.tile.min_count or 0
    status = EXIT_OK
    for container in args.container:
        layout = find_optimal_layout(
            args.native, container, min_count, cfg.tile.min_tile_resolution,
        )
        if layout is None:
            print(f"{container[0]}x{container[1]}: no feasible layout")
            status = EXIT_NO_LAYOUT
            continue
        print(
            f"{container[0]}x{container[1]}: "
            f"grid {layout.columns}x{layout.rows}, "
            f"tile {layout.tile_resolution[0]}x{layout.tile_resolution[1]}, "
            f"crop {layout.crop_adjust[0]}x{layout.crop_adjust[1]}, "
            f"canvas {layout.canvas_size[0]}x{layout.canvas_size[1]}, "
            f"looseness {layout.looseness}",
        )
    return status


def run_merge(args: argparse.Namespace) -> int:
    """Join two existing tiles."""
    merge_side_by_side(args.left, args.right, args.name)
    return EXIT_OK


_COMMANDS: dict[str, Callable[[argparse.Namespace], int]] = {
    "build": run_build,
    "plan": run_plan,
    "merge": run_merge,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Parse command-line arguments and dispatch to the sub-command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    set_verbosity(verbose=args.verbose)

    try:
        return _COMMANDS[args.command](args)
    except (FileNotFoundError, ValueError, TilingError) as exc:
        parser.error(str(exc))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
