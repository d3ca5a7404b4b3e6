# -*- coding: utf-8 -*-
"""
Image asset loading.

Tile, eye, photo and logo images can be given as a Pillow image, raw bytes or
a binary stream, a filesystem path, or a resource bundled inside a Python
package. Every failure is reported as AssetLoadError.
"""

import logging
import os
from importlib import resources
from io import BytesIO
from typing import BinaryIO, NamedTuple, Union

from PIL import Image, UnidentifiedImageError

from .errors import AssetLoadError

logger = logging.getLogger(__name__)

RESAMPLE_FILTER = Image.Resampling.LANCZOS


class Resource(NamedTuple):
    """An image shipped as package data, e.g. ``Resource("mypkg.imgs", "eye.png")``."""

    package: str
    name: str


ImageSource = Union[Image.Image, bytes, bytearray, BinaryIO, str, "os.PathLike[str]", Resource]


def _open(fp) -> Image.Image:
    image = Image.open(fp)
    # Decode now so a truncated file fails here instead of at render time
    image.load()
    return image


def load_image(source: ImageSource) -> Image.Image:
    """
    Load ``source`` into a Pillow image.

    Args:
        source: A Pillow image (returned as is), bytes, a readable binary
            stream, a file path or a Resource

    Returns:
        Image.Image: The decoded image

    Raises:
        AssetLoadError: If the source is missing or is not a valid image
    """
    if isinstance(source, Image.Image):
        return source

    try:
        if isinstance(source, Resource):
            ref = resources.files(source.package).joinpath(source.name)
            with ref.open('rb') as fp:
                image = _open(fp)
        elif isinstance(source, (bytes, bytearray)):
            image = _open(BytesIO(source))
        elif isinstance(source, (str, os.PathLike)):
            with open(source, 'rb') as fp:
                image = _open(fp)
        elif hasattr(source, 'read'):
            image = _open(source)
        else:
            raise AssetLoadError(f"Unsupported image source type: {type(source).__name__}")
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError,
            ModuleNotFoundError, TypeError) as exc:
        raise AssetLoadError(f"Could not load image from {_describe(source)}: {exc}") from exc

    logger.debug("Loaded image %s from %s", image.size, _describe(source))
    return image


def _describe(source) -> str:
    if isinstance(source, Resource):
        return f"resource {source.package}:{source.name}"
    if isinstance(source, (bytes, bytearray)):
        return f"{len(source)} bytes"
    if isinstance(source, (str, os.PathLike)):
        return f"file {os.fspath(source)!r}"
    return type(source).__name__


def stamp_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """Return ``image`` as RGBA resized to ``width x height`` pixels."""
    rgba = image.convert('RGBA')
    if rgba.size != (width, height):
        rgba = rgba.resize((width, height), RESAMPLE_FILTER)
    return rgba


def paste(canvas: Image.Image, image: Image.Image, x: int, y: int, width: int, height: int) -> None:
    """Scale ``image`` to the given box and composite it onto ``canvas`` at (x, y)."""
    stamp = stamp_image(image, width, height)
    canvas.paste(stamp, (x, y), stamp)
