"""Pixel Says - cowsay-style speech bubbles spoken by pixel images."""

__version__ = "0.1.0"

"""
Expose lightweight lazy wrappers to avoid importing submodules at package
import time. Importing submodules in `__init__` causes `runpy` to warn when
executing `python -m pixel_says.cli` because the submodule may already appear
in `sys.modules` before execution. Wrappers import on-demand.
"""


def say(*args, **kwargs):
    from .say import say as _f

    return _f(*args, **kwargs)


def say_from_image(*args, **kwargs):
    from .say import say_from_image as _f

    return _f(*args, **kwargs)


def say_from_dynamic_image(*args, **kwargs):
    from .say import say_from_dynamic_image as _f

    return _f(*args, **kwargs)


def main(*args, **kwargs):
    from .cli import main as _m

    return _m(*args, **kwargs)


__all__ = [
    "main",
    "say",
    "say_from_dynamic_image",
    "say_from_image",
]
