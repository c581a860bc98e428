from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from lut_conv.color import LutGrid
from lut_conv.config import OUTPUT_TYPES, AppConfig, default_config, load_config
from lut_conv.decode import ReaderRegistry, kind_for_path
from lut_conv.service import ConversionSession
from lut_conv.utils.logging_utils import configure_logging
from lut_conv.write import write_cube, write_lut_image


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lut-conv")
    parser.add_argument("--log-level", default=None, help="Override log level (DEBUG, INFO, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Convert a .cube file or LUT image, optionally resizing it")
    convert.add_argument("input", help="Input .cube file or LUT image")
    convert.add_argument("--config", default=None, help="Optional path to YAML config")
    convert.add_argument("--to", choices=OUTPUT_TYPES, default=None, help="Output type")
    convert.add_argument("--size", type=int, nargs=3, metavar=("W", "H", "D"), default=None, help="Output LUT size")
    convert.add_argument("--mode", choices=("nearest", "linear"), default=None, help="Resize filter mode")
    convert.add_argument(
        "--image-size",
        type=int,
        nargs=2,
        metavar=("W", "H"),
        default=None,
        help="Output image size (default: 64x64 for 16^3, 512x512 for 64^3)",
    )
    convert.add_argument(
        "--lut-size",
        type=int,
        nargs=3,
        metavar=("W", "H", "D"),
        default=None,
        help="LUT size of an input image that is not 64x64 or 512x512",
    )
    convert.add_argument("--title", default=None, help="Cube header text")
    convert.add_argument("--out", default=None, help="Output path (default: next to the input)")

    info = sub.add_parser("info", help="Show the size of a .cube file or LUT image")
    info.add_argument("input", help="Input .cube file or LUT image")
    info.add_argument("--lut-size", type=int, nargs=3, metavar=("W", "H", "D"), default=None)
    info.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    identity = sub.add_parser("identity", help="Write an identity LUT (.cube or image, by extension)")
    identity.add_argument("output", help="Output path")
    identity.add_argument("--size", type=int, default=33, help="Cube edge length")
    identity.add_argument("--image-size", type=int, nargs=2, metavar=("W", "H"), default=None)

    return parser


def _load_app_config(args: argparse.Namespace) -> AppConfig:
    config_path = getattr(args, "config", None)
    config = load_config(config_path) if config_path else default_config()
    configure_logging(args.log_level or config.log_level, config.log_file)
    return config


def _cmd_convert(args: argparse.Namespace) -> int:
    config = _load_app_config(args)
    convert = config.convert
    if args.image_size is not None:
        convert.image_size = tuple(args.image_size)
    if args.lut_size is not None:
        convert.lut_size = tuple(args.lut_size)
    if args.title is not None:
        convert.header = args.title

    input_path = Path(args.input).expanduser().resolve()
    out_path = Path(args.out).expanduser().resolve() if args.out else None
    output_type = args.to
    if output_type is None and out_path is not None and out_path.suffix:
        output_type = kind_for_path(out_path)

    session = ConversionSession(config=convert)
    loaded = session.load_input(input_path)
    grid = session.generate(
        output_type=output_type,
        size=tuple(args.size) if args.size else None,
        mode=args.mode,
    )
    written = session.save(out_path)

    src = loaded.grid
    print(f"Input: {input_path} ({loaded.kind} {src.width}x{src.height}x{src.depth})")
    print(f"Output: {written} ({session.output_type} {grid.width}x{grid.height}x{grid.depth})")
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    configure_logging(args.log_level or "WARNING")

    input_path = Path(args.input).expanduser().resolve()
    loaded = ReaderRegistry().read(input_path, lut_size=tuple(args.lut_size) if args.lut_size else None)
    payload = loaded.describe()

    if args.json:
        print(json.dumps(payload, indent=2))
        return 0

    print(f"File: {payload['source']}")
    print(f"Type: {payload['kind']}")
    print(f"Size: {payload['width']}x{payload['height']}x{payload['depth']}")
    if "image_width" in payload:
        print(f"Image: {payload['image_width']}x{payload['image_height']}")
    return 0


def _cmd_identity(args: argparse.Namespace) -> int:
    configure_logging(args.log_level or "INFO")

    out_path = Path(args.output).expanduser().resolve()
    grid = LutGrid.identity(args.size, args.size, args.size)
    if kind_for_path(out_path) == "cube":
        write_cube(out_path, grid)
    else:
        write_lut_image(out_path, grid, image_size=tuple(args.image_size) if args.image_size else None)
    print(str(out_path))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "convert":
            return _cmd_convert(args)
        if args.command == "info":
            return _cmd_info(args)
        if args.command == "identity":
            return _cmd_identity(args)

        parser.error(f"unknown command: {args.command}")
        return 2
    except Exception as exc:
        logger.exception("fatal error")
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
