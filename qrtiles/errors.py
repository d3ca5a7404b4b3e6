# -*- coding: utf-8 -*-
"""
Exception hierarchy for qrtiles.

Every error raised on purpose by the package derives from QRTilesError, so
callers (the Flask app included) can catch one type and report it.
"""


class QRTilesError(Exception):
    """Base class for all qrtiles errors."""


class ConfigurationError(QRTilesError):
    """A style could not be built (missing 1x1 tile entry, no eye images)."""


class ValidationError(QRTilesError, ValueError):
    """A parameter is outside its documented range."""


class AssetLoadError(QRTilesError):
    """An image source could not be read or decoded."""


class InternalInvariantError(QRTilesError, IndexError):
    """A render touched a cell outside the grid or left a cell uncovered.

    Never expected with validated inputs; it is not caught anywhere inside
    the package.
    """
