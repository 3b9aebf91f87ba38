"""Wrap a message and frame it in a cowsay-style speech bubble."""

import logging
import re
from typing import BinaryIO, Sequence

from wcwidth import wcwidth

DEFAULT_WIDTH = 40

# Runs of whitespace other than line breaks
_WHITESPACE_RUN = re.compile(r"[^\S\r\n]+")

# Leads into image art printed right below the bubble
CONNECTOR = "\n" "        \\\n" "         \\\n"

MASCOT = r"""
        \
         \
            _~^~^~_
        \) /  o o  \ (/
          '_   -   _'
          / '-----' \
"""


# =============================
# Text Measurement
# =============================


def merge_white_spaces(text: str) -> str:
    """Collapse every run of spaces/tabs into one space, keeping line breaks."""
    return _WHITESPACE_RUN.sub(" ", text)


def display_width(text: str) -> int:
    """Number of terminal columns `text` occupies."""
    # wcwidth() is -1 for control characters; they take no column.
    return sum(max(0, wcwidth(ch)) for ch in text)


def longest_line(lines: Sequence[str]) -> int:
    return max((display_width(line) for line in lines), default=0)


# =============================
# Word Wrapping
# =============================


def _wrap_paragraph(paragraph: str, max_width: int) -> list[str]:
    lines: list[str] = []
    current: list[str] = []
    current_w = 0

    for word in paragraph.split(" "):
        if not word:
            continue
        word_w = display_width(word)
        if current and current_w + 1 + word_w <= max_width:
            current.append(word)
            current_w += 1 + word_w
            continue
        if current:
            lines.append(" ".join(current))
        # An overlong word still starts (and fills) its own line.
        current = [word]
        current_w = word_w

    if current:
        lines.append(" ".join(current))
    return lines or [""]


def wrap_text(text: str, max_width: int) -> list[str]:
    """
    Greedy word wrap measured in display columns.

    Explicit newlines start a new line. Words are never split: a word wider
    than `max_width` is placed alone on a line and overflows.

    Args:
        text: Text to wrap (whitespace already normalized)
        max_width: Column budget per line, must be positive

    Returns:
        Wrapped lines, without trailing newlines
    """
    if max_width < 1:
        raise ValueError(f"max_width must be positive, got {max_width}")

    paragraphs = text.split("\n")
    # "abc\n" is one line, not a line followed by an empty one
    if paragraphs[-1] == "":
        paragraphs.pop()

    lines: list[str] = []
    for paragraph in paragraphs:
        if paragraph.endswith("\r"):
            paragraph = paragraph[:-1]
        lines.extend(_wrap_paragraph(paragraph, max_width))
    return lines


# =============================
# Bubble Drawing
# =============================


def _delimiters(index: int, count: int) -> tuple[str, str]:
    if count == 1:
        return "< ", " >"
    if index == 0:
        return "/ ", " \\"
    if index == count - 1:
        return "\\ ", " /"
    return "| ", " |"


def frame_lines(lines: Sequence[str]) -> str:
    """Draw the bubble around already wrapped lines (no trailing newline)."""
    width = longest_line(lines)
    count = len(lines)

    result = [" " + "_" * (width + 2)]
    for i, line in enumerate(lines):
        left, right = _delimiters(i, count)
        padding = " " * (width - display_width(line))
        result.append(left + line + padding + right)
    result.append(" " + "-" * (width + 2))

    return "\n".join(result)


def text_to_bubble(message: str, max_width: int = DEFAULT_WIDTH) -> str:
    """Normalize, wrap and frame a message."""
    lines = wrap_text(merge_white_spaces(message), max_width)
    logging.getLogger(__name__).debug(
        "Framing %d line(s) at width %d (max_width=%d)",
        len(lines),
        longest_line(lines),
        max_width,
    )
    return frame_lines(lines)


def frame(message: str, max_width: int, sink: BinaryIO, connector: str = CONNECTOR) -> None:
    """Write the bubble and its connector to `sink` in a single write."""
    sink.write((text_to_bubble(message, max_width) + connector).encode("utf-8"))
