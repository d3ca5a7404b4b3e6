# -*- coding: utf-8 -*-
"""
QR Code Generator Module

Thin wrapper over segno producing the padded boolean matrix the styles
render. Encoding itself (data modes, error correction, masking) is left
entirely to segno.

Functions:
    make_qr: Generate a QR symbol with the given parameters
    to_occupancy_matrix: Pad a symbol's matrix with a quiet zone
"""

import logging
from typing import List, Optional, Union

import segno

from .errors import ValidationError

logger = logging.getLogger(__name__)

# Error correction levels and their nominal recovery capacity
ECC_LEVELS = {
    'L': 0.07,
    'M': 0.15,
    'Q': 0.25,
    'H': 0.30,
}


def normalize_ecc(ecc: str) -> str:
    """Return ``ecc`` upper-cased if it is one of L, M, Q, H."""
    level = (ecc or 'M').strip().upper()
    if level not in ECC_LEVELS:
        raise ValidationError(f"Error correction level must be one of L, M, Q, H, got {ecc!r}")
    return level


def normalize_version(version: Optional[Union[int, str]]) -> Optional[int]:
    """
    Convert a version parameter: None, 'auto' or 0 mean automatic sizing,
    otherwise an int in 1..40.
    """
    if version in (None, 'auto', '', 0, '0'):
        return None
    try:
        value = int(version)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"QR version must be 1-40 or 'auto', got {version!r}") from exc
    if not 1 <= value <= 40:
        raise ValidationError(f"QR version must be 1-40 or 'auto', got {version!r}")
    return value


def make_qr(
    text: str,
    ecc: str = 'M',
    version: Optional[Union[int, str]] = None,
    charset: str = 'utf-8',
    eci: bool = False,
) -> segno.QRCode:
    """
    Generate a QR code symbol with segno.

    Args:
        text (str): The data to encode
        ecc (str): Error correction level ('L', 'M', 'Q', 'H')
            - L: ~7% recovery capability
            - M: ~15% recovery capability (default)
            - Q: ~25% recovery capability
            - H: ~30% recovery capability
        version: QR code version (1-40), or None / 'auto' for the smallest fit
        charset (str): Character encoding for byte mode
        eci (bool): Add an ECI header naming the charset

    Returns:
        segno.QRCode: Generated QR code object

    Raises:
        ValidationError: If parameters are invalid
        segno.DataOverflowError: If data doesn't fit in the given version

    Example:
        >>> qr = make_qr("https://example.com", ecc='H')
        >>> qr.error
        'H'
    """
    if not text:
        raise ValidationError("content is empty")

    level = normalize_ecc(ecc)
    ver_arg = normalize_version(version)

    symbol = segno.make(
        text,
        error=level,
        version=ver_arg,
        encoding=charset,
        eci=bool(eci),
        boost_error=False,
        micro=False,
    )
    logger.debug("Encoded %d chars as QR %s", len(text), symbol.designator)
    return symbol


def to_occupancy_matrix(symbol: segno.QRCode, border: int) -> List[List[bool]]:
    """
    Return the symbol's modules padded by ``border`` light blocks on each side.

    Args:
        symbol: segno symbol (its matrix has no quiet zone)
        border (int): Quiet zone size in blocks

    Returns:
        List[List[bool]]: Row-major matrix of side ``symbol size + 2 * border``
    """
    if border < 0:
        raise ValidationError("border < 0")
    rows = [[bool(cell) for cell in row] for row in symbol.matrix]
    size = len(rows)
    side = size + 2 * border
    padded = [[False] * side for _ in range(side)]
    for y, row in enumerate(rows):
        padded[y + border][border:border + size] = row
    return padded
