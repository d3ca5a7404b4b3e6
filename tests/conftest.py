# -*- coding: utf-8 -*-
import random
from io import BytesIO

import pytest
from PIL import Image

from qrtiles.catalog import TiledStyleBuilder
from qrtiles.qr_generator import make_qr, to_occupancy_matrix

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def solid(color, size=(4, 4), mode='RGB'):
    return Image.new(mode, size, color)


def png_bytes(image):
    buf = BytesIO()
    image.save(buf, format='PNG')
    return buf.getvalue()


def random_matrix(side, border, seed=0, density=0.5):
    """Square matrix with random content and an all-False border."""
    rng = random.Random(seed)
    return [
        [border <= x < side - border and border <= y < side - border and rng.random() < density
         for x in range(side)]
        for y in range(side)
    ]


def assert_color(actual, expected, tol=2):
    assert all(abs(a - e) <= tol for a, e in zip(actual[:3], expected)), (actual, expected)


class FirstChoice:
    """Deterministic rng picking the first candidate, counting calls."""

    def __init__(self):
        self.calls = 0

    def choice(self, seq):
        self.calls += 1
        return seq[0]


class CyclingChoice:
    """Picks candidates in turn, so consecutive picks differ."""

    def __init__(self):
        self.index = 0

    def choice(self, seq):
        item = seq[self.index % len(seq)]
        self.index += 1
        return item


@pytest.fixture
def qr_matrix():
    """Version 2 code (25 modules) with a 1 block border."""
    return to_occupancy_matrix(make_qr("qrtiles", ecc='M', version=2), 1)


@pytest.fixture
def simple_style():
    return (TiledStyleBuilder()
            .tile(1, 1, solid(RED))
            .tile(2, 2, solid(BLUE))
            .eye(solid(GREEN, (28, 28)))
            .build())
