# -*- coding: utf-8 -*-
"""
Greedy Block Tiler

Covers every foreground cell of an occupancy grid with tile images, largest
footprint first, scanning rows top-to-bottom and columns left-to-right. There
is no backtracking: the first catalog entry that fits a cell wins, which can
leave fragments that only the 1x1 entry fills. The scan order and the
area tie-break decide the decorative layout, so they must stay as they are.

Functions:
    make_rng: Per-call randomness provider
    tile_grid: Run the greedy scan and stamp images onto a canvas
"""

import logging
import random
from typing import List, NamedTuple, Optional, Protocol, Sequence, TypeVar

from PIL import Image

from .assets import paste
from .catalog import TileCatalog
from .errors import InternalInvariantError
from .grid import OccupancyGrid

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RandomSource(Protocol):
    """Anything able to pick an element uniformly, e.g. ``random.Random``."""

    def choice(self, seq: Sequence[T]) -> T:
        ...


class Placement(NamedTuple):
    """One stamp: the image drawn over a ``width x height`` block rectangle at (x, y)."""

    x: int
    y: int
    width: int
    height: int
    image: Image.Image


def make_rng(rng: Optional[RandomSource] = None, seed=None) -> RandomSource:
    """Return ``rng`` if given, else a fresh ``random.Random(seed)`` owned by the caller."""
    if rng is not None:
        return rng
    return random.Random(seed)


def tile_grid(
    grid: OccupancyGrid,
    catalog: TileCatalog,
    canvas: Optional[Image.Image],
    block_size: int,
    border: int,
    rng: RandomSource,
) -> List[Placement]:
    """
    Greedily cover every remaining cell of ``grid`` with catalog images.

    Args:
        grid: Occupancy grid, eye zones already consumed
        catalog: Tile entries sorted by descending area
        canvas: Image to stamp onto, or None to only compute placements
        block_size: Pixel size of one block
        border: Quiet-zone width in blocks; border cells are not scanned
        rng: Source used to pick one image per stamp

    Returns:
        List[Placement]: Stamps in the order they were made

    Raises:
        InternalInvariantError: If a cell fits no entry (catalog without 1x1)
    """
    placements: List[Placement] = []
    end = grid.side - border

    for y in range(border, end):
        for x in range(border, end):
            if not grid.is_set(x, y):
                continue

            for entry in catalog.entries:
                if grid.can_place(x, y, entry.width, entry.height):
                    image = rng.choice(entry.images)
                    if canvas is not None:
                        paste(canvas, image, x * block_size, y * block_size,
                              entry.width * block_size, entry.height * block_size)
                    placements.append(Placement(x, y, entry.width, entry.height, image))
                    break
            else:
                raise InternalInvariantError(f"No tile entry fits cell ({x}, {y})")

    logger.debug("Tiled %d stamps over a %dx%d grid", len(placements), grid.side, grid.side)
    return placements
