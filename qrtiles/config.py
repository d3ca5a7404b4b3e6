# -*- coding: utf-8 -*-
"""
Render Configuration Module

Immutable, validated settings shared by every style. Values are checked when
they are introduced, either by the constructor or by one of the ``with_*``
steps, which return a new instance and never touch the receiver.

Functions:
    parse_color: Normalize a ``#RRGGBB`` string or an RGB sequence
    validate_rate: Range check used for the photo style ratios
"""

import math
from dataclasses import dataclass, replace
from typing import Sequence, Tuple, Union

from .errors import ValidationError

RGB = Tuple[int, int, int]
ColorLike = Union[str, Sequence[int]]

# One quiet-zone block, 8px blocks, black on white
DEFAULT_BLOCK_SIZE = 8
DEFAULT_BORDER = 1
DEFAULT_FOREGROUND: RGB = (0, 0, 0)
DEFAULT_BACKGROUND: RGB = (255, 255, 255)


def parse_color(value: ColorLike) -> RGB:
    """
    Convert a color given as ``#RRGGBB`` (leading ``#`` optional) or as a
    sequence of three 0-255 integers into an RGB tuple.

    Args:
        value: Hex string or RGB sequence

    Returns:
        RGB: ``(r, g, b)`` tuple

    Raises:
        ValidationError: If the value is not a valid color

    Example:
        >>> parse_color("#ff8000")
        (255, 128, 0)
    """
    if isinstance(value, str):
        text = value[1:] if value.startswith("#") else value
        if len(text) != 6:
            raise ValidationError(f"Color must be in #RRGGBB format, got {value!r}")
        try:
            return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)
        except ValueError as exc:
            raise ValidationError(f"Color must be in #RRGGBB format, got {value!r}") from exc

    channels = tuple(value)
    if len(channels) != 3:
        raise ValidationError(f"Color must have 3 channels, got {len(channels)}")
    for channel in channels:
        if not isinstance(channel, int) or not 0 <= channel <= 255:
            raise ValidationError(f"Color channel out of range 0-255: {channel!r}")
    return channels  # type: ignore[return-value]


def validate_rate(name: str, rate: float, low: float = 0.0, high: float = 1.0) -> float:
    """Return ``rate`` as float if ``low <= rate <= high``, else raise."""
    rate = float(rate)
    if math.isnan(rate):
        raise ValidationError(f"{name} is not a number")
    if rate < low:
        raise ValidationError(f"{name} < {low:.0%}")
    if rate > high:
        raise ValidationError(f"{name} > {high:.0%}")
    return rate


@dataclass(frozen=True)
class StyleConfig:
    """
    Pixel and color settings handed to a style's ``render``.

    Attributes:
        block_size: Pixel size of one block (>= 1)
        border: Quiet-zone width in blocks (>= 0)
        foreground: RGB color of true cells
        background: RGB color of false cells
    """

    block_size: int = DEFAULT_BLOCK_SIZE
    border: int = DEFAULT_BORDER
    foreground: RGB = DEFAULT_FOREGROUND
    background: RGB = DEFAULT_BACKGROUND

    def __post_init__(self):
        if int(self.block_size) < 1:
            raise ValidationError("block_size < 1")
        if int(self.border) < 0:
            raise ValidationError("border < 0")
        object.__setattr__(self, 'block_size', int(self.block_size))
        object.__setattr__(self, 'border', int(self.border))
        object.__setattr__(self, 'foreground', parse_color(self.foreground))
        object.__setattr__(self, 'background', parse_color(self.background))

    def with_block_size(self, block_size: int) -> "StyleConfig":
        return replace(self, block_size=block_size)

    def with_border(self, border: int) -> "StyleConfig":
        return replace(self, border=border)

    def with_foreground(self, color: ColorLike) -> "StyleConfig":
        return replace(self, foreground=color)

    def with_background(self, color: ColorLike) -> "StyleConfig":
        return replace(self, background=color)

    def canvas_size(self, side: int) -> int:
        """Pixel width (and height) of the canvas for a grid of ``side`` blocks."""
        return side * self.block_size
