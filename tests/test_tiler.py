# -*- coding: utf-8 -*-
import random

import pytest

from qrtiles.catalog import EyeImageSet, TileCatalog, TileEntry
from qrtiles.errors import ConfigurationError, InternalInvariantError
from qrtiles.eyes import place_eyes
from qrtiles.functional_areas import in_eye_zone
from qrtiles.grid import OccupancyGrid
from qrtiles.tiler import make_rng, tile_grid

from conftest import BLUE, GREEN, RED, FirstChoice, assert_color, random_matrix, solid


def catalog(*footprints):
    return TileCatalog.from_entries(TileEntry(w, h, (solid(RED),)) for w, h in footprints)


def test_largest_fitting_entry_wins():
    grid = OccupancyGrid([[1 <= x <= 2 and 1 <= y <= 2 for x in range(5)] for y in range(5)])
    placements = tile_grid(grid, catalog((1, 1), (2, 2)), None, 8, 0, FirstChoice())

    assert [(p.x, p.y, p.width, p.height) for p in placements] == [(1, 1, 2, 2)]
    assert grid.remaining() == 0


def test_greedy_scan_leaves_fragments_for_unit_tiles():
    grid = OccupancyGrid([[True, True, True], [False, False, False], [False, False, False]])
    placements = tile_grid(grid, catalog((1, 1), (2, 1)), None, 8, 0, FirstChoice())

    assert [(p.x, p.y, p.width, p.height) for p in placements] == [(0, 0, 2, 1), (2, 0, 1, 1)]


def test_scan_is_row_major():
    grid = OccupancyGrid([[True, False], [True, True]])
    placements = tile_grid(grid, catalog((1, 1), (1, 2)), None, 8, 0, FirstChoice())

    assert [(p.x, p.y, p.width, p.height) for p in placements] == [(0, 0, 1, 2), (1, 1, 1, 1)]


def test_border_cells_are_not_scanned():
    matrix = [[True] * 4 for _ in range(4)]
    grid = OccupancyGrid(matrix)
    placements = tile_grid(grid, catalog((1, 1)), None, 8, 1, FirstChoice())

    assert {(p.x, p.y) for p in placements} == {(1, 1), (2, 1), (1, 2), (2, 2)}


def test_one_image_is_chosen_per_stamp():
    rng = FirstChoice()
    grid = OccupancyGrid([[True] * 3 for _ in range(3)])
    placements = tile_grid(grid, catalog((1, 1)), None, 8, 0, rng)
    assert rng.calls == len(placements) == 9


@pytest.mark.parametrize('border', [0, 1, 2, 4])
@pytest.mark.parametrize('size', [8, 13, 21, 25])
def test_tiling_always_covers_every_cell(size, border):
    side = size + 2 * border
    cat = catalog((1, 1), (2, 1), (1, 2), (2, 2), (3, 2), (1, 4))
    eyes = EyeImageSet((solid(GREEN),))
    for seed in range(3):
        grid = OccupancyGrid(random_matrix(side, border, seed=seed, density=0.6))
        rng = random.Random(seed)
        place_eyes(grid, eyes, None, 8, border, rng)
        placements = tile_grid(grid, cat, None, 8, border, rng)

        assert grid.remaining() == 0
        for p in placements:
            for y in range(p.y, p.y + p.height):
                for x in range(p.x, p.x + p.width):
                    assert not in_eye_zone(x, y, side, border)


def test_no_stamp_inside_eye_zones_for_25_grid():
    side, border = 25, 1
    grid = OccupancyGrid([[True] * side for _ in range(side)])
    place_eyes(grid, EyeImageSet((solid(GREEN),)), None, 8, border, FirstChoice())
    placements = tile_grid(grid, catalog((1, 1), (2, 2)), None, 8, border, FirstChoice())

    covered = set()
    for p in placements:
        for y in range(p.y, p.y + p.height):
            for x in range(p.x, p.x + p.width):
                assert (x, y) not in covered
                covered.add((x, y))
    for (x0, y0) in [(1, 1), (17, 1), (1, 17)]:
        for y in range(y0, y0 + 7):
            for x in range(x0, x0 + 7):
                assert (x, y) not in covered


def test_stamps_are_painted_on_canvas():
    from PIL import Image

    grid = OccupancyGrid([[True, True, False], [True, True, False], [False, False, True]])
    cat = TileCatalog.from_entries([TileEntry(1, 1, (solid(RED),)), TileEntry(2, 2, (solid(BLUE),))])
    canvas = Image.new('RGB', (12, 12), (255, 255, 255))
    tile_grid(grid, cat, canvas, 4, 0, FirstChoice())

    assert_color(canvas.getpixel((3, 3)), BLUE)
    assert canvas.getpixel((9, 9)) == RED
    assert canvas.getpixel((9, 1)) == (255, 255, 255)


def test_catalog_without_unit_entry_is_rejected():
    with pytest.raises(ConfigurationError):
        catalog((2, 2), (2, 1))


def test_uncoverable_cell_is_an_invariant_error():
    # bypasses from_entries validation on purpose
    cat = TileCatalog((TileEntry(2, 2, (solid(RED),)),))
    grid = OccupancyGrid([[True, False], [False, False]])
    with pytest.raises(InternalInvariantError):
        tile_grid(grid, cat, None, 8, 0, FirstChoice())


def test_make_rng_is_seedable():
    a = make_rng(seed=42)
    b = make_rng(seed=42)
    assert [a.choice(range(100)) for _ in range(10)] == [b.choice(range(100)) for _ in range(10)]
    rng = FirstChoice()
    assert make_rng(rng, seed=1) is rng
