# -*- coding: utf-8 -*-
"""
Adaptive Color Blending Module

Helpers of the photo-background style. A dot is painted in the target color
pulled toward the mean color of the photo pixels it covers; the stronger the
pull, the better the code blends in and the worse it scans.

Functions:
    dot_size: Pixel size of the indicator dot inside a block
    mean_color: Truncated mean RGB of a pixel rectangle
    blend_color: Interpolate between a sampled mean and a target color
    fill_blended: Paint a rectangle with the blended color
"""

import numpy as np
from typing import Tuple

from .config import RGB

# Rates at or below this are treated as 0 and skip pixel sampling
_RATE_EPSILON = 1e-9


def dot_size(block_size: int, rate: float) -> int:
    """
    Compute the even dot size for a block.

    The product ``block_size * rate`` is truncated, bumped to the next even
    number when odd, then clamped to ``[2, block_size]``.

    Args:
        block_size (int): Pixel size of a block
        rate (float): Dot size as a fraction of the block (0.05 - 1.00)

    Returns:
        int: Dot size in pixels

    Example:
        >>> dot_size(8, 0.05)
        2
        >>> dot_size(8, 1.0)
        8
    """
    size = int(block_size * rate)
    if size % 2 == 1:
        size += 1
    return min(max(size, 2), block_size)


def dot_offset(block_size: int, size: int) -> int:
    """Offset that centers a ``size`` dot inside a block."""
    return (block_size - size) // 2


def mean_color(pixels: np.ndarray, x: int, y: int, width: int, height: int) -> RGB:
    """
    Mean RGB of ``pixels[y:y+height, x:x+width]``, each channel truncated.

    Args:
        pixels: ``(H, W, 3)`` uint8 array
    """
    region = pixels[y:y + height, x:x + width, :3].reshape(-1, 3)
    totals = region.sum(axis=0, dtype=np.int64)
    count = width * height
    return int(totals[0]) // count, int(totals[1]) // count, int(totals[2]) // count


def blend_color(mean: RGB, target: RGB, rate: float) -> RGB:
    """Per channel ``int(mean * rate + target * (1 - rate))``."""
    return tuple(int(m * rate + t * (1.00 - rate)) for m, t in zip(mean, target))  # type: ignore[return-value]


def fill_blended(
    pixels: np.ndarray,
    x: int,
    y: int,
    width: int,
    height: int,
    target: RGB,
    rate: float,
) -> Tuple[int, int, int]:
    """
    Fill a rectangle of ``pixels`` in place with ``target`` blended toward the
    pixels it replaces.

    With ``rate`` 0 the target color is used as is and nothing is sampled;
    with ``rate`` 1 the rectangle takes exactly its own truncated mean.

    Returns:
        The color that was painted
    """
    if rate > _RATE_EPSILON:
        color = blend_color(mean_color(pixels, x, y, width, height), target, rate)
    else:
        color = tuple(target)
    pixels[y:y + height, x:x + width, :3] = color
    return color  # type: ignore[return-value]
