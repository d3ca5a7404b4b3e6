# -*- coding: utf-8 -*-
"""
QR Code Functional Areas Module

Geometry of the three finder patterns ("eyes") inside a padded occupancy
matrix. Styles never tile or dot these zones; they paint them separately.

Functions:
    eye_zone_origins: Top-left (x, y) block of each finder zone
    in_eye_zone: Test whether a block falls inside any finder zone
"""

from typing import Tuple

from .errors import InternalInvariantError

# Finder patterns are always 7x7 modules
EYE_SIZE = 7

EyeOrigin = Tuple[int, int]


def eye_zone_origins(side: int, border: int) -> Tuple[EyeOrigin, EyeOrigin, EyeOrigin]:
    """
    Return the (x, y) origins of the top-left, top-right and bottom-left
    finder zones of a padded matrix.

    Args:
        side (int): Padded matrix size in blocks (encoded size + 2 * border)
        border (int): Quiet zone size in blocks

    Returns:
        Tuple of three (x, y) origins

    Raises:
        InternalInvariantError: If the matrix is too small to hold a finder zone

    Example:
        >>> eye_zone_origins(25, 1)
        ((1, 1), (17, 1), (1, 17))
    """
    far = side - border - EYE_SIZE
    if far < border:
        raise InternalInvariantError(
            f"A {side}x{side} matrix with border {border} cannot hold {EYE_SIZE}x{EYE_SIZE} finder zones"
        )
    return (
        (border, border),
        (far, border),
        (border, far),
    )


def in_eye_zone(x: int, y: int, side: int, border: int) -> bool:
    """Return True if block (x, y) lies inside one of the three finder zones."""
    for (x0, y0) in eye_zone_origins(side, border):
        if x0 <= x < x0 + EYE_SIZE and y0 <= y < y0 + EYE_SIZE:
            return True
    return False
