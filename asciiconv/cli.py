"""Командная строка: конвертация файла изображения без графического интерфейса.

    asciiconv-cli photo.jpg --width 80 --detail low --output photo.txt
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from asciiconv.errors import DecodeError, InvalidConfiguration
from asciiconv.models.config_model import (
    DEFAULT_BLUR_SIGMA,
    DEFAULT_CONTRAST,
    DEFAULT_WIDTH,
    ConversionConfig,
)
from asciiconv.services.conversion_service import AsciiConversionService
from asciiconv.services.image_service import ImageService
from asciiconv.settings import Settings, configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="asciiconv-cli", description="Convert an image to ASCII art.")
    parser.add_argument("image", help="path to the source image")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="glyph grid width (default: %(default)s)")
    parser.add_argument("--detail", choices=("low", "high"), default="high", help="glyph set (default: %(default)s)")
    parser.add_argument("--contrast", type=float, default=DEFAULT_CONTRAST, help="contrast factor (default: %(default)s)")
    parser.add_argument("--blur", type=float, default=DEFAULT_BLUR_SIGMA, help="gaussian blur sigma (default: %(default)s)")
    parser.add_argument("-o", "--output", help="write the result to this file instead of stdout")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
        help="logging level (default: %(default)s)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    configure_logging(args.log_level)

    try:
        config = ConversionConfig.from_params(args.width, args.detail, args.contrast, args.blur).validate()
    except InvalidConfiguration as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    path = Path(args.image)
    try:
        _name, _content_type, data = ImageService().read_file(path)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if len(data) > settings.max_upload_bytes:
        print(f"error: {path} is larger than {settings.max_upload_bytes} bytes", file=sys.stderr)
        return EXIT_USAGE

    try:
        result = AsciiConversionService().convert(data, config)
    except DecodeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if args.output:
        Path(args.output).write_text(result.text + "\n", encoding="utf-8")
        logger.info("Wrote %dx%d result to %s", result.width, result.height, args.output)
    else:
        sys.stdout.write(result.text + "\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
