# -*- coding: utf-8 -*-
"""
Built-in tiled styles drawn with Pillow.

Tiles are drawn on a transparent canvas at ``TILE_PX`` pixels per block and
scaled at render time, so presets work with any block size.

Functions:
    rounded_style: Dots, capsules and rounded squares
    bars_style: Vertical and horizontal bars
    all_presets_style: Every preset merged into one style
"""

import logging
from typing import Tuple

from PIL import Image, ImageDraw

from .catalog import TiledStyleBuilder
from .config import ColorLike, parse_color
from .functional_areas import EYE_SIZE
from .styles import TiledStyle

logger = logging.getLogger(__name__)

TILE_PX = 32
TRANSPARENT = (0, 0, 0, 0)


def _canvas(width: int, height: int) -> Tuple[Image.Image, ImageDraw.ImageDraw]:
    img = Image.new('RGBA', (width * TILE_PX, height * TILE_PX), TRANSPARENT)
    return img, ImageDraw.Draw(img)


def _rounded(width: int, height: int, fill, radius: int, inset: int = 1) -> Image.Image:
    img, draw = _canvas(width, height)
    draw.rounded_rectangle(
        [inset, inset, width * TILE_PX - 1 - inset, height * TILE_PX - 1 - inset],
        radius=radius, fill=fill,
    )
    return img


def _eye(fill, radius: int) -> Image.Image:
    """Finder pattern: 7x7 ring, 1 block wide, around a 3x3 center."""
    img, draw = _canvas(EYE_SIZE, EYE_SIZE)
    span = EYE_SIZE * TILE_PX
    draw.rounded_rectangle([0, 0, span - 1, span - 1], radius=radius * 2, fill=fill)
    draw.rounded_rectangle([TILE_PX, TILE_PX, span - TILE_PX - 1, span - TILE_PX - 1],
                           radius=radius, fill=TRANSPARENT)
    draw.rounded_rectangle([2 * TILE_PX, 2 * TILE_PX, span - 2 * TILE_PX - 1, span - 2 * TILE_PX - 1],
                           radius=radius, fill=fill)
    return img


def rounded_style(color: ColorLike = (0, 0, 0)) -> TiledStyle:
    """
    Style made of round modules: circles for single blocks, capsules for
    1x2 and 2x1 runs, rounded squares for 2x2 clusters.
    """
    fill = parse_color(color) + (255,)
    half = TILE_PX // 2
    return (TiledStyleBuilder()
            .tile(1, 1, _rounded(1, 1, fill, radius=half))
            .tile(2, 1, _rounded(2, 1, fill, radius=half))
            .tile(1, 2, _rounded(1, 2, fill, radius=half))
            .tile(2, 2, _rounded(2, 2, fill, radius=half // 2))
            .eye(_eye(fill, radius=half))
            .build())


def bars_style(color: ColorLike = (0, 0, 0)) -> TiledStyle:
    """
    Style joining runs of modules into bars up to four blocks long.
    """
    fill = parse_color(color) + (255,)
    radius = TILE_PX // 4
    builder = TiledStyleBuilder()
    for length in (4, 3, 2):
        builder = builder.tile(1, length, _rounded(1, length, fill, radius=radius))
        builder = builder.tile(length, 1, _rounded(length, 1, fill, radius=radius))
    return (builder
            .tile(1, 1, _rounded(1, 1, fill, radius=radius))
            .eye(_eye(fill, radius=radius))
            .build())


def all_presets_style(color: ColorLike = (0, 0, 0)) -> TiledStyle:
    """Every preset merged; eyes are picked among all presets."""
    return TiledStyle.merge(rounded_style(color), bars_style(color))


PRESETS = {
    'rounded': rounded_style,
    'bars': bars_style,
    'all': all_presets_style,
}
