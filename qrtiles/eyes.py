# -*- coding: utf-8 -*-
"""
Finder pattern ("eye") placement for the tiled style.

Each of the three finder zones gets its own randomly chosen eye image, so a
single code may show different eyes in its corners. The zones are then
removed from the occupancy grid so the tiler never stamps over them.
"""

import logging
from typing import List, Optional

from PIL import Image

from .assets import paste
from .catalog import EyeImageSet
from .functional_areas import EYE_SIZE, eye_zone_origins
from .grid import OccupancyGrid
from .tiler import Placement, RandomSource

logger = logging.getLogger(__name__)


def place_eyes(
    grid: OccupancyGrid,
    eyes: EyeImageSet,
    canvas: Optional[Image.Image],
    block_size: int,
    border: int,
    rng: RandomSource,
) -> List[Placement]:
    """
    Paint the three finder zones and mark them consumed in ``grid``.

    Cells are consumed whatever their original bit, the light ring inside a
    finder pattern included.

    Returns:
        List[Placement]: One placement per zone (top-left, top-right, bottom-left)
    """
    span = EYE_SIZE * block_size
    placements = []

    for (x0, y0) in eye_zone_origins(grid.side, border):
        image = rng.choice(eyes.images)
        if canvas is not None:
            paste(canvas, image, x0 * block_size, y0 * block_size, span, span)
        placements.append(Placement(x0, y0, EYE_SIZE, EYE_SIZE, image))

    # Consumed after painting all three; the zones overlap on tiny grids
    for placement in placements:
        grid.consume_rect(placement.x, placement.y, EYE_SIZE, EYE_SIZE)

    logger.debug("Placed eyes at %s", [(p.x, p.y) for p in placements])
    return placements
