# -*- coding: utf-8 -*-
"""
Tile Catalog Module

Immutable collections of decorative images used by the tiled style:

    TileEntry: images sharing one (width, height) block footprint
    TileCatalog: entries sorted once by descending footprint area
    EyeImageSet: finder-pattern images, each covering a 7x7 block zone
    TiledStyleBuilder: step-wise, immutable builder validating both

Catalogs are built once and shared read-only by any number of renders.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from PIL import Image

from .assets import ImageSource, load_image
from .errors import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TileEntry:
    """Images designed to cover a ``width x height`` block footprint."""

    width: int
    height: int
    images: Tuple[Image.Image, ...]

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValidationError(f"Tile footprint must be at least 1x1, got {self.width}x{self.height}")
        if not self.images:
            raise ValidationError(f"Tile entry {self.width}x{self.height} has no images")

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def footprint(self) -> Tuple[int, int]:
        return self.width, self.height


@dataclass(frozen=True)
class TileCatalog:
    """
    Tile entries in descending footprint area; ties keep insertion order.

    Use ``TileCatalog.from_entries`` to get the ordering; the constructor
    stores entries as given.
    """

    entries: Tuple[TileEntry, ...]

    @classmethod
    def from_entries(cls, entries: Iterable[TileEntry]) -> "TileCatalog":
        # sorted() is stable, so equal areas keep their relative order
        ordered = sorted(entries, key=lambda entry: entry.area, reverse=True)
        catalog = cls(tuple(ordered))
        if not catalog.has_unit_entry():
            raise ConfigurationError("A tile catalog needs at least one 1x1 image")
        return catalog

    def has_unit_entry(self) -> bool:
        return any(entry.footprint == (1, 1) for entry in self.entries)

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)


@dataclass(frozen=True)
class EyeImageSet:
    """Nonempty tuple of finder-pattern images."""

    images: Tuple[Image.Image, ...]

    def __post_init__(self):
        if not self.images:
            raise ConfigurationError("At least one eye image is required")
        for image in self.images:
            if image.width != image.height:
                logger.warning("Eye image is not square (%dx%d); it will be stretched to 7x7 blocks",
                               image.width, image.height)

    def __len__(self):
        return len(self.images)


@dataclass(frozen=True)
class TiledStyleBuilder:
    """
    Immutable builder for a tiled style.

    Each ``tile`` / ``eye`` call loads its image immediately (so asset errors
    surface at the step that introduces them) and returns a new builder.

    Example:
        >>> style = (TiledStyleBuilder()
        ...          .tile(1, 1, "tiles/dot.png")
        ...          .tile(2, 2, "tiles/square.png")
        ...          .eye("tiles/eye.png")
        ...          .build())
    """

    tiles: Tuple[Tuple[int, int, Image.Image], ...] = ()
    eyes: Tuple[Image.Image, ...] = ()

    def tile(self, width: int, height: int, source: ImageSource) -> "TiledStyleBuilder":
        if width < 1 or height < 1:
            raise ValidationError(f"Tile footprint must be at least 1x1, got {width}x{height}")
        image = load_image(source)
        return TiledStyleBuilder(self.tiles + ((width, height, image),), self.eyes)

    def eye(self, source: ImageSource) -> "TiledStyleBuilder":
        image = load_image(source)
        return TiledStyleBuilder(self.tiles, self.eyes + (image,))

    def catalog(self) -> TileCatalog:
        """Group the added images by footprint, in first-appearance order."""
        grouped: Dict[Tuple[int, int], List[Image.Image]] = {}
        for width, height, image in self.tiles:
            grouped.setdefault((width, height), []).append(image)
        return TileCatalog.from_entries(
            TileEntry(width, height, tuple(images)) for (width, height), images in grouped.items()
        )

    def build(self):
        """
        Validate and return a TiledStyle.

        Raises:
            ConfigurationError: Without a 1x1 tile or without eye images
        """
        # Imported here: styles depends on this module
        from .styles import TiledStyle

        style = TiledStyle(self.catalog(), EyeImageSet(self.eyes))
        logger.info("Built tiled style with %d tile entries and %d eye images",
                    len(style.catalog), len(style.eyes))
        return style
