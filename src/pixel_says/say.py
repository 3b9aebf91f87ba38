"""Speech bubble + picture entry points."""

import logging
from typing import BinaryIO

from PIL import Image

from .bubble import CONNECTOR, MASCOT, frame
from .image_to_blocks import ImageSource, PixelMode, load_image, render

LOG = logging.getLogger(__name__)


def say(message: str, max_width: int, sink: BinaryIO) -> None:
    """Print `message` in a bubble above the built-in mascot."""
    LOG.debug("Saying %d chars with the mascot", len(message))
    frame(message, max_width, sink, connector=MASCOT)


def render_text_bubble(message: str, max_width: int, sink: BinaryIO) -> None:
    """Print only the bubble and the connector that leads into image art."""
    frame(message, max_width, sink, connector=CONNECTOR)


def say_from_dynamic_image(
    img: Image.Image,
    message: str,
    max_width: int,
    mode: PixelMode,
    sink: BinaryIO,
) -> None:
    """
    Print `message` in a bubble followed by `img` drawn in block characters.

    Args:
        img: Decoded image, left untouched
        message: Text for the bubble
        max_width: Wrap width in terminal columns
        mode: How pixels turn into glyphs
        sink: Binary writer receiving UTF-8 output
    """
    render_text_bubble(message, max_width, sink)
    render(img, mode, sink)


def say_from_image(
    image_source: ImageSource,
    message: str,
    max_width: int,
    mode: PixelMode,
    sink: BinaryIO,
) -> None:
    """Like say_from_dynamic_image, but loads the image from a path or bytes first.

    Raises ImageDecodeError before anything is written if the image can't be read.
    """
    img = load_image(image_source)
    say_from_dynamic_image(img, message, max_width, mode, sink)


# Names used by callers that think in terms of the three bubble shapes.
render_default_bubble = say
render_image_bubble = say_from_image
