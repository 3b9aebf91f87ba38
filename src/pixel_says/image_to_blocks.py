"""Render images as rows of terminal block characters."""

import io
import logging
import os
from enum import Enum
from typing import BinaryIO, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

ESC = "\x1b"
BLOCK = "██"
BLANK = "  "

MAX_SIZE = 80
ALPHA_THRESHOLD = 128
LUMINANCE_THRESHOLD = 128

# ITU-R BT.709 luma weights
_LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float32)

LOG = logging.getLogger(__name__)

ImageSource = Union[str, os.PathLike, bytes, Image.Image]


class ImageDecodeError(ValueError):
    """The image could not be opened or decoded."""


class PixelMode(Enum):
    TRUECOLOR = "truecolor"
    MONOCHROME = "monochrome"
    INVERT = "invert"

    @classmethod
    def parse(cls, name: str) -> "PixelMode":
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown pixel mode: {name} (choose from {choices})") from None


# -----------------------------
# Loading / sizing
# -----------------------------


def load_image(source: ImageSource) -> Image.Image:
    """Open a path or raw bytes with Pillow; decoded images pass through."""
    if isinstance(source, Image.Image):
        return source

    try:
        if isinstance(source, (bytes, bytearray)):
            img = Image.open(io.BytesIO(source))
        else:
            img = Image.open(source)
        # Force the decode now so truncated files fail here, not mid-render.
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Unable to load image: {e}") from e

    LOG.debug("Loaded image %s size=%s mode=%s", getattr(img, "filename", "") or "<bytes>", img.size, img.mode)
    return img


def fit_dimensions(width: int, height: int, max_size: int = MAX_SIZE) -> tuple[int, int]:
    """Shrink (width, height) so neither exceeds max_size, keeping aspect."""
    if width <= max_size and height <= max_size:
        return width, height

    # Integer scaling so the long side lands on max_size exactly
    longest = max(width, height)
    return max(1, width * max_size // longest), max(1, height * max_size // longest)


def downsample(img: Image.Image, max_size: int = MAX_SIZE) -> Image.Image:
    """Return an RGBA copy no larger than max_size cells on either side."""
    rgba = img.convert("RGBA")
    size = fit_dimensions(rgba.width, rgba.height, max_size)
    if size == rgba.size:
        # convert() always hands back a new image
        return rgba

    LOG.debug("Downsampling %dx%d -> %dx%d", rgba.width, rgba.height, size[0], size[1])
    return rgba.resize(size, resample=Image.Resampling.NEAREST)


# -----------------------------
# Pixel -> glyph mapping
# -----------------------------


def luminance(rgb: np.ndarray) -> np.ndarray:
    """
    rgb: ...x3 array of 0..255 channels
    returns integer luminance, truncated like a cast to u8
    """
    lum = rgb.astype(np.float32) @ _LUMA_WEIGHTS
    return np.clip(lum, 0, 255).astype(np.uint8)


def _truecolor_row(row: np.ndarray, opaque: np.ndarray) -> str:
    cells = []
    for (r, g, b, _), solid in zip(row, opaque):
        if solid:
            cells.append(f"{ESC}[38;2;{r};{g};{b}m{BLOCK}{ESC}[0m")
        else:
            cells.append(BLANK)
    return "".join(cells)


def _threshold_row(filled: np.ndarray) -> str:
    return "".join(BLOCK if f else BLANK for f in filled)


def image_rows(img: Image.Image, mode: PixelMode):
    """Yield one rendered text row (with trailing newline) per image row."""
    small = downsample(img)
    px = np.asarray(small, dtype=np.uint8)  # H x W x 4

    opaque = px[..., 3] >= ALPHA_THRESHOLD
    if mode is PixelMode.TRUECOLOR:
        for y in range(px.shape[0]):
            yield _truecolor_row(px[y], opaque[y]) + "\n"
        return

    bright = luminance(px[..., :3]) > LUMINANCE_THRESHOLD
    if mode is PixelMode.MONOCHROME:
        filled = opaque & bright
    elif mode is PixelMode.INVERT:
        filled = opaque & ~bright
    else:
        raise ValueError(f"unknown pixel mode: {mode}")

    for y in range(filled.shape[0]):
        yield _threshold_row(filled[y]) + "\n"


def image_to_blocks(img: Image.Image, mode: PixelMode = PixelMode.TRUECOLOR) -> str:
    """Render an image as block characters, two per pixel."""
    return "".join(image_rows(img, mode))


def render(img: Image.Image, mode: PixelMode, sink: BinaryIO) -> None:
    """Write the rendered image to `sink`, one write per row."""
    LOG.debug("Rendering %dx%d image in %s mode", img.width, img.height, mode.value)
    for row in image_rows(img, mode):
        sink.write(row.encode("utf-8"))
