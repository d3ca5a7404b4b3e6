# -*- coding: utf-8 -*-
"""
QR Code Styles Module

A style turns a padded boolean matrix into an RGB raster. Every render call
creates its own canvas and occupancy grid; style objects hold only immutable
settings and can be shared between calls and threads.

Classes:
    QRStyle: Base class
    SolidStyle: Flat foreground/background blocks, the reference rendering
    TiledStyle: Eyes and greedy tile images
    PhotoStyle: Photographic background with indicator dots
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

import numpy as np
from PIL import Image, ImageDraw

from .assets import RESAMPLE_FILTER, ImageSource, load_image
from .blend import dot_offset, dot_size, fill_blended
from .catalog import EyeImageSet, TileCatalog
from .config import StyleConfig, validate_rate
from .functional_areas import in_eye_zone
from .grid import OccupancyGrid
from .tiler import RandomSource, make_rng, tile_grid
from .eyes import place_eyes

logger = logging.getLogger(__name__)

Matrix = Sequence[Sequence[bool]]


class QRStyle:
    """Interface of all styles."""

    name = 'base'

    def render(self, matrix: Matrix, config: StyleConfig,
               rng: Optional[RandomSource] = None, seed=None) -> Image.Image:
        """
        Render ``matrix`` to an RGB image of ``side * block_size`` pixels.

        Args:
            matrix: Padded square matrix, True = foreground
            config: Block size, border and colors
            rng: Randomness provider for styles that pick images
            seed: Seed for the per-call generator when ``rng`` is None
        """
        raise NotImplementedError


class SolidStyle(QRStyle):
    """Every block painted flat in the foreground or background color."""

    name = 'solid'

    def render(self, matrix, config, rng=None, seed=None):
        grid = OccupancyGrid(matrix)
        size = config.block_size
        px = config.canvas_size(grid.side)
        img = Image.new('RGB', (px, px), config.background)
        draw = ImageDraw.Draw(img)

        for y, row in enumerate(grid.rows):
            for x, cell in enumerate(row):
                if not cell:
                    continue
                x0 = x * size
                y0 = y * size
                draw.rectangle([x0, y0, x0 + size - 1, y0 + size - 1], fill=config.foreground)
        return img


@dataclass(frozen=True, repr=False)
class TiledStyle(QRStyle):
    """
    Foreground blocks replaced by tile images, finder zones by eye images.

    Build instances with ``TiledStyleBuilder``; ``TiledStyle.merge`` combines
    several of them.
    """

    catalog: TileCatalog
    eyes: EyeImageSet

    name = 'tiled'

    def __repr__(self):
        return f"TiledStyle(entries={len(self.catalog)}, eyes={len(self.eyes)})"

    @classmethod
    def merge(cls, *styles: "TiledStyle") -> "TiledStyle":
        """
        Combine the tile entries and eye images of several styles.

        Entries are concatenated (same footprints are not coalesced) and
        re-sorted by descending area, keeping input order on ties. Eye
        images keep their input order. The inputs are not modified.
        """
        entries = [entry for style in styles for entry in style.catalog.entries]
        eyes = tuple(image for style in styles for image in style.eyes.images)
        merged = cls(TileCatalog.from_entries(entries), EyeImageSet(eyes))
        logger.info("Merged %d styles into %r", len(styles), merged)
        return merged

    def render(self, matrix, config, rng=None, seed=None):
        rng = make_rng(rng, seed)
        grid = OccupancyGrid(matrix)
        size = config.block_size
        px = config.canvas_size(grid.side)
        img = Image.new('RGB', (px, px), config.background)

        place_eyes(grid, self.eyes, img, size, config.border, rng)
        placements = tile_grid(grid, self.catalog, img, size, config.border, rng)
        logger.debug("Rendered tiled QR: %d blocks, %d stamps", grid.side, len(placements))
        return img


@dataclass(frozen=True)
class PhotoStyle(QRStyle):
    """
    A photo as canvas with a small dot per block conveying the QR bit.

    Attributes:
        image: Background photo
        img_border: Paint the photo under the quiet zone too (else background color)
        dot_size_rate: Dot size as a fraction of the block (0.05 - 1.00)
        adaptive_color_rate: Pull of dot colors toward the photo (0 - 1)
        eye_adaptive_color_rate: Same for finder-zone blocks (0 - 1)

    Higher adaptive rates look better and scan worse.
    """

    image: Image.Image
    img_border: bool = True
    dot_size_rate: float = 0.20
    adaptive_color_rate: float = 0.00
    eye_adaptive_color_rate: float = 0.00

    name = 'photo'

    def __post_init__(self):
        object.__setattr__(self, 'dot_size_rate', validate_rate('dot_size_rate', self.dot_size_rate, 0.05, 1.00))
        object.__setattr__(self, 'adaptive_color_rate',
                           validate_rate('adaptive_color_rate', self.adaptive_color_rate))
        object.__setattr__(self, 'eye_adaptive_color_rate',
                           validate_rate('eye_adaptive_color_rate', self.eye_adaptive_color_rate))

    @classmethod
    def from_source(cls, source: ImageSource, **options) -> "PhotoStyle":
        return cls(load_image(source), **options)

    def with_img_border(self, img_border: bool = True) -> "PhotoStyle":
        return replace(self, img_border=img_border)

    def with_dot_size_rate(self, rate: float) -> "PhotoStyle":
        return replace(self, dot_size_rate=rate)

    def with_adaptive_color_rate(self, rate: float) -> "PhotoStyle":
        return replace(self, adaptive_color_rate=rate)

    def with_eye_adaptive_color_rate(self, rate: float) -> "PhotoStyle":
        return replace(self, eye_adaptive_color_rate=rate)

    def _paint_background(self, side: int, config: StyleConfig) -> Image.Image:
        px = config.canvas_size(side)
        photo = self.image.convert('RGB')
        if self.img_border:
            return photo.resize((px, px), RESAMPLE_FILTER)

        canvas = Image.new('RGB', (px, px), config.background)
        inner = (side - 2 * config.border) * config.block_size
        if inner > 0:
            offset = config.border * config.block_size
            canvas.paste(photo.resize((inner, inner), RESAMPLE_FILTER), (offset, offset))
        return canvas

    def render(self, matrix, config, rng=None, seed=None):
        grid = OccupancyGrid(matrix)
        side = grid.side
        size = config.block_size
        border = config.border
        pixels = np.array(self._paint_background(side, config), dtype=np.uint8)

        dot = dot_size(size, self.dot_size_rate)
        start = dot_offset(size, dot)
        end = side - border

        for y in range(border, end):
            for x in range(border, end):
                if in_eye_zone(x, y, side, border):
                    continue
                color = config.foreground if grid.is_set(x, y) else config.background
                fill_blended(pixels, x * size + start, y * size + start, dot, dot,
                             color, self.adaptive_color_rate)
                grid.consume(x, y)

        # Eyes last, as full blocks, so they are not hidden by dots
        for y in range(border, end):
            for x in range(border, end):
                if not in_eye_zone(x, y, side, border):
                    continue
                color = config.foreground if grid.is_set(x, y) else config.background
                fill_blended(pixels, x * size, y * size, size, size,
                             color, self.eye_adaptive_color_rate)
                grid.consume(x, y)

        logger.debug("Rendered photo QR: %d blocks, dot %dpx", side, dot)
        return Image.fromarray(pixels)
