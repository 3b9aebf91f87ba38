#!/usr/bin/env python3
"""Print text in a speech bubble, spoken by the mascot or by a pixel image."""

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Optional, Sequence

from .bubble import DEFAULT_WIDTH
from .image_to_blocks import PixelMode
from .say import say, say_from_image

INPUT_ERROR = "Failed to read input to the program"
IMAGE_ERROR = "Failed to display with image"
STDOUT_ERROR = "Failed to write stdout"


def positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pixel-says",
        description="Prints out input text with a pixel image",
    )
    parser.add_argument(
        "text",
        nargs="*",
        help="Text to say (default: read from stdin)",
    )
    parser.add_argument(
        "-f",
        "--files",
        action="append",
        type=Path,
        default=None,
        help="Set the input files to use (repeatable)",
    )
    parser.add_argument(
        "-w",
        "--width",
        type=positive_int,
        default=DEFAULT_WIDTH,
        help=f"Set the width of the text box (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "-i",
        "--image",
        type=Path,
        default=None,
        help="Path to the pixel image file",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=[m.value for m in PixelMode],
        default=PixelMode.TRUECOLOR.value,
        help="How image pixels are drawn (default: truecolor)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: WARNING)",
    )
    return parser


def setup_logging(level_name: str) -> None:
    numeric_level = getattr(logging, level_name.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    # stderr, so log lines never end up inside the rendered art
    logging.basicConfig(
        stream=sys.stderr, level=numeric_level, format="%(levelname)s: %(message)s"
    )


def read_messages(args: argparse.Namespace, stdin) -> list[str]:
    """Collect the message(s) to say: files, then CLI text, then stdin."""
    try:
        if args.files:
            return [f.read_text(encoding="utf-8") for f in args.files]
        if args.text:
            return [" ".join(args.text)]
        return [stdin.read()]
    except (OSError, UnicodeDecodeError) as e:
        raise RuntimeError(INPUT_ERROR) from e


def run(args: argparse.Namespace, stdin, out: BinaryIO) -> None:
    logger = logging.getLogger(__name__)
    mode = PixelMode.parse(args.mode)

    for message in read_messages(args, stdin):
        if args.image is not None:
            logger.info("Saying with image %s (mode=%s width=%d)", args.image, mode.value, args.width)
            try:
                say_from_image(args.image, message, args.width, mode, out)
            except Exception as e:
                raise RuntimeError(f"{IMAGE_ERROR}: {e}") from e
        else:
            logger.info("Saying with the mascot (width=%d)", args.width)
            try:
                say(message, args.width, out)
            except OSError as e:
                raise RuntimeError(STDOUT_ERROR) from e
    out.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the pixel-says CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        run(args, sys.stdin, sys.stdout.buffer)
    except Exception as e:
        logging.getLogger(__name__).debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
