# -*- coding: utf-8 -*-
"""
qrtiles - decorative QR code rendering

Re-renders a QR code's module matrix with tile images, a photographic
background or flat colors while keeping it scannable.

Modules:
    config: Validated render settings
    grid: Per-render occupancy grid
    catalog: Tile catalogs, eye image sets and the tiled style builder
    tiler: Greedy largest-fits-first tiling
    eyes: Finder pattern placement
    blend: Adaptive color blending for the photo style
    styles: Solid, tiled and photo styles
    presets: Built-in tiled styles
    qr_generator: segno encoder wrapper
    renderer: Request object, logo overlay and image output
    web: Flask application
"""

__version__ = "1.0.0"

from .assets import Resource, load_image
from .catalog import EyeImageSet, TileCatalog, TileEntry, TiledStyleBuilder
from .config import StyleConfig, parse_color
from .errors import (
    AssetLoadError,
    ConfigurationError,
    InternalInvariantError,
    QRTilesError,
    ValidationError,
)
from .grid import OccupancyGrid
from .presets import all_presets_style, bars_style, rounded_style
from .qr_generator import make_qr, to_occupancy_matrix
from .renderer import Logo, QRCodeRequest, encode_image, matrix_to_text
from .styles import PhotoStyle, QRStyle, SolidStyle, TiledStyle

__all__ = [
    'AssetLoadError',
    'ConfigurationError',
    'EyeImageSet',
    'InternalInvariantError',
    'Logo',
    'OccupancyGrid',
    'PhotoStyle',
    'QRCodeRequest',
    'QRStyle',
    'QRTilesError',
    'Resource',
    'SolidStyle',
    'StyleConfig',
    'TileCatalog',
    'TileEntry',
    'TiledStyle',
    'TiledStyleBuilder',
    'ValidationError',
    'all_presets_style',
    'bars_style',
    'encode_image',
    'load_image',
    'make_qr',
    'matrix_to_text',
    'parse_color',
    'rounded_style',
    'to_occupancy_matrix',
]
