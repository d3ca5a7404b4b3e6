# -*- coding: utf-8 -*-
import pytest
from PIL import Image

from qrtiles.config import StyleConfig
from qrtiles.errors import ValidationError
from qrtiles.functional_areas import in_eye_zone
from qrtiles.styles import PhotoStyle, SolidStyle

from conftest import BLACK, WHITE, CyclingChoice, assert_color, solid

PHOTO = (100, 150, 200)


def block_pixel(x, y, block_size, dx=0, dy=0):
    return x * block_size + dx, y * block_size + dy


def test_solid_style_paints_every_block(qr_matrix):
    config = StyleConfig(block_size=4, border=1)
    img = SolidStyle().render(qr_matrix, config)

    side = len(qr_matrix)
    assert side == 27
    assert img.size == (side * 4, side * 4)
    assert img.mode == 'RGB'
    for y in range(side):
        for x in range(side):
            expected = BLACK if qr_matrix[y][x] else WHITE
            assert img.getpixel(block_pixel(x, y, 4)) == expected
            assert img.getpixel(block_pixel(x, y, 4, 3, 3)) == expected


def test_solid_style_uses_configured_colors():
    config = StyleConfig(block_size=2, border=0, foreground='#102030', background=(1, 2, 3))
    img = SolidStyle().render([[True, False], [False, True]], config)
    assert img.getpixel((0, 0)) == (16, 32, 48)
    assert img.getpixel((2, 0)) == (1, 2, 3)


def test_tiled_style_is_reproducible_with_seed(qr_matrix, simple_style):
    config = StyleConfig(block_size=4, border=1)
    first = simple_style.render(qr_matrix, config, seed=3)
    second = simple_style.render(qr_matrix, config, seed=3)
    assert first.tobytes() == second.tobytes()
    assert first.size == (27 * 4, 27 * 4)


def test_tiled_style_keeps_background_cells(qr_matrix, simple_style):
    config = StyleConfig(block_size=4, border=1, background=(9, 9, 9))
    img = simple_style.render(qr_matrix, config, rng=CyclingChoice())
    side = len(qr_matrix)

    for y in range(side):
        for x in range(side):
            if qr_matrix[y][x] or in_eye_zone(x, y, side, 1):
                continue
            assert img.getpixel(block_pixel(x, y, 4, 1, 1)) == (9, 9, 9)


def test_tiled_style_paints_eyes(qr_matrix, simple_style):
    img = simple_style.render(qr_matrix, StyleConfig(block_size=4, border=1), seed=0)
    # center of the top-left finder zone, a light ring cell included
    assert_color(img.getpixel(block_pixel(4, 4, 4, 2, 2)), (0, 255, 0))
    assert_color(img.getpixel(block_pixel(2, 2, 4, 2, 2)), (0, 255, 0))


def photo_style(**options):
    return PhotoStyle(solid(PHOTO, (64, 64)), **options)


def test_photo_style_dots_with_full_contrast(qr_matrix):
    config = StyleConfig(block_size=8, border=1)
    img = photo_style(dot_size_rate=0.5).render(qr_matrix, config)
    side = len(qr_matrix)

    assert img.size == (side * 8, side * 8)
    for y in range(1, side - 1):
        for x in range(1, side - 1):
            if in_eye_zone(x, y, side, 1):
                continue
            expected = BLACK if qr_matrix[y][x] else WHITE
            # dot is 4px, offset 2
            assert img.getpixel(block_pixel(x, y, 8, 2, 2)) == expected
            assert img.getpixel(block_pixel(x, y, 8, 5, 5)) == expected
            assert_color(img.getpixel(block_pixel(x, y, 8, 0, 0)), PHOTO)
            assert_color(img.getpixel(block_pixel(x, y, 8, 7, 7)), PHOTO)


def test_photo_style_eyes_match_solid_rendering(qr_matrix):
    config = StyleConfig(block_size=8, border=1)
    photo = photo_style(dot_size_rate=0.2).render(qr_matrix, config)
    reference = SolidStyle().render(qr_matrix, config)
    side = len(qr_matrix)

    for y in range(side):
        for x in range(side):
            if not in_eye_zone(x, y, side, 1):
                continue
            for dx, dy in ((0, 0), (7, 7), (3, 4)):
                point = block_pixel(x, y, 8, dx, dy)
                assert photo.getpixel(point) == reference.getpixel(point)


def test_photo_style_adaptive_color_rate_half(qr_matrix):
    config = StyleConfig(block_size=8, border=1)
    img = photo_style(dot_size_rate=0.5, adaptive_color_rate=0.5).render(qr_matrix, config)
    side = len(qr_matrix)

    for y in range(1, side - 1):
        for x in range(1, side - 1):
            if in_eye_zone(x, y, side, 1):
                continue
            expected = (50, 75, 100) if qr_matrix[y][x] else (177, 202, 227)
            assert_color(img.getpixel(block_pixel(x, y, 8, 3, 3)), expected)


def test_photo_style_adaptive_color_rate_one_hides_dots(qr_matrix):
    config = StyleConfig(block_size=8, border=1)
    img = photo_style(dot_size_rate=0.5, adaptive_color_rate=1.0).render(qr_matrix, config)
    # a non-eye block in the middle of the code
    assert_color(img.getpixel(block_pixel(12, 12, 8, 3, 3)), PHOTO)


def test_photo_style_eye_rate_blends_eye_blocks(qr_matrix):
    config = StyleConfig(block_size=8, border=1)
    img = photo_style(eye_adaptive_color_rate=1.0).render(qr_matrix, config)
    assert_color(img.getpixel(block_pixel(1, 1, 8, 4, 4)), PHOTO)


def test_photo_style_border_painting(qr_matrix):
    config = StyleConfig(block_size=8, border=1, background=(5, 6, 7))
    with_border = photo_style().render(qr_matrix, config)
    without_border = photo_style(img_border=False).render(qr_matrix, config)

    assert_color(with_border.getpixel((0, 0)), PHOTO)
    assert without_border.getpixel((0, 0)) == (5, 6, 7)
    assert without_border.getpixel((without_border.width - 1, 3)) == (5, 6, 7)
    # inside the border the photo is still used
    assert_color(without_border.getpixel(block_pixel(12, 12, 8, 0, 0)), PHOTO)


def test_photo_style_accepts_rgba_photo(qr_matrix):
    style = PhotoStyle(Image.new('RGBA', (10, 10), PHOTO + (255,)))
    img = style.render(qr_matrix, StyleConfig(block_size=2, border=1))
    assert img.mode == 'RGB'


@pytest.mark.parametrize('options', [
    {'dot_size_rate': 0.01},
    {'dot_size_rate': 1.5},
    {'adaptive_color_rate': -0.1},
    {'adaptive_color_rate': 1.01},
    {'eye_adaptive_color_rate': 2},
    {'dot_size_rate': float('nan')},
    {'adaptive_color_rate': float('nan')},
    {'eye_adaptive_color_rate': float('nan')},
])
def test_photo_style_rejects_out_of_range_rates(options):
    with pytest.raises(ValidationError):
        photo_style(**options)


def test_photo_style_steps_return_new_instances():
    base = photo_style()
    changed = base.with_dot_size_rate(0.5).with_adaptive_color_rate(0.3).with_img_border(False)
    assert base.dot_size_rate == 0.20 and base.img_border is True
    assert changed.dot_size_rate == 0.5
    assert changed.adaptive_color_rate == 0.3
    assert changed.img_border is False
    with pytest.raises(ValidationError):
        base.with_eye_adaptive_color_rate(1.2)
