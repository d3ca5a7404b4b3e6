# -*- coding: utf-8 -*-
"""
QR Code Renderer Module

Ties the pieces together: encodes content with segno, renders the padded
matrix with a style, pastes an optional logo and serializes the result.

Classes:
    Logo: Image pasted over the center of the code
    QRCodeRequest: Immutable description of one QR code rendering

Functions:
    encode_image: Serialize a raster to PNG, JPEG or BMP bytes
    paste_logo: Paste a logo over the center of a rendered code
    matrix_to_text: Text rendering of a padded matrix
"""

import base64
import codecs
import logging
import os
from dataclasses import dataclass, field, replace
from io import BytesIO
from typing import List, Optional, Sequence, Union

from PIL import Image

from .assets import ImageSource, load_image, paste
from .config import StyleConfig
from .errors import ValidationError
from .qr_generator import make_qr, normalize_ecc, normalize_version, to_occupancy_matrix
from .styles import QRStyle, SolidStyle
from .tiler import RandomSource

logger = logging.getLogger(__name__)

# format name -> (Pillow format, file extension, mimetype)
FORMATS = {
    'png': ('PNG', 'png', 'image/png'),
    'jpg': ('JPEG', 'jpg', 'image/jpeg'),
    'jpeg': ('JPEG', 'jpg', 'image/jpeg'),
    'bmp': ('BMP', 'bmp', 'image/bmp'),
}

DEFAULT_JPEG_QUALITY = 95


def normalize_format(fmt: str) -> str:
    key = (fmt or 'png').strip().lower().lstrip('.')
    if key not in FORMATS:
        raise ValidationError(f"Unsupported image format {fmt!r}; use png, jpg or bmp")
    return key


def encode_image(image: Image.Image, fmt: str = 'png', quality: Optional[float] = None) -> bytes:
    """
    Serialize ``image`` to bytes.

    Args:
        image: Rendered raster
        fmt (str): 'png', 'jpg'/'jpeg' or 'bmp'
        quality: JPEG only. A value strictly between 0 and 1 sets the
            compression quality; anything else keeps the default.

    Returns:
        bytes: Encoded image data
    """
    pil_format = FORMATS[normalize_format(fmt)][0]
    buf = BytesIO()
    if pil_format == 'JPEG':
        q = DEFAULT_JPEG_QUALITY
        if quality is not None and 0.0 < quality < 1.0:
            q = int(round(quality * 100))
        image.convert('RGB').save(buf, format='JPEG', quality=q, optimize=True)
    else:
        image.save(buf, format=pil_format)
    return buf.getvalue()


@dataclass(frozen=True)
class Logo:
    """A logo covering ``size`` x ``size`` blocks at the center of the code.

    Odd sizes keep the logo aligned to whole blocks.
    """

    image: Image.Image
    size: int

    def __post_init__(self):
        if self.size < 1:
            raise ValidationError("logo size < 1")

    @classmethod
    def from_source(cls, source: ImageSource, size: int) -> "Logo":
        return cls(load_image(source), size)


def paste_logo(image: Image.Image, logo: Logo, side: int, block_size: int) -> None:
    """Paste ``logo`` over the center of a rendered ``side`` x ``side`` block image."""
    start = int(((side / 2.0) - (logo.size / 2.0)) * block_size)
    span = logo.size * block_size
    paste(image, logo.image, start, start, span, span)


def matrix_to_text(matrix: Sequence[Sequence[bool]], dark: str = "  ", light: str = "██") -> str:
    """
    Render a padded matrix as text, one line per row.

    The defaults print dark modules as blanks, which reads correctly on a
    dark terminal background.
    """
    if not dark or not light:
        raise ValidationError("text cells must not be empty")
    return "".join(
        "".join(dark if cell else light for cell in row) + "\n"
        for row in matrix
    )


@dataclass(frozen=True)
class QRCodeRequest:
    """
    Everything needed to produce one styled QR code.

    All ``with_*`` methods validate their argument and return a new request.

    Example:
        >>> from qrtiles.presets import rounded_style
        >>> req = (QRCodeRequest("https://example.com")
        ...        .with_ecc('H')
        ...        .with_style(rounded_style()))
        >>> png = req.to_bytes('png', seed=7)
    """

    content: str
    ecc: str = 'M'
    version: Optional[int] = None
    charset: str = 'utf-8'
    eci: bool = False
    config: StyleConfig = field(default_factory=StyleConfig)
    style: QRStyle = field(default_factory=SolidStyle)
    logo: Optional[Logo] = None

    def __post_init__(self):
        if not self.content:
            raise ValidationError("content is empty")
        if not self.charset:
            raise ValidationError("charset is empty")
        try:
            codecs.lookup(self.charset)
        except LookupError as exc:
            raise ValidationError(f"Unknown charset {self.charset!r}") from exc
        object.__setattr__(self, 'ecc', normalize_ecc(self.ecc))
        object.__setattr__(self, 'version', normalize_version(self.version))

    # **** encoding parameters ****

    def with_ecc(self, ecc: str) -> "QRCodeRequest":
        return replace(self, ecc=ecc)

    def with_version(self, version: Optional[Union[int, str]]) -> "QRCodeRequest":
        return replace(self, version=version)

    def with_charset(self, charset: str, eci: Optional[bool] = None) -> "QRCodeRequest":
        return replace(self, charset=charset, eci=self.eci if eci is None else eci)

    # **** image parameters ****

    def with_config(self, config: StyleConfig) -> "QRCodeRequest":
        return replace(self, config=config)

    def with_block_size(self, block_size: int) -> "QRCodeRequest":
        return replace(self, config=self.config.with_block_size(block_size))

    def with_border(self, border: int) -> "QRCodeRequest":
        return replace(self, config=self.config.with_border(border))

    def with_colors(self, foreground=None, background=None) -> "QRCodeRequest":
        config = self.config
        if foreground is not None:
            config = config.with_foreground(foreground)
        if background is not None:
            config = config.with_background(background)
        return replace(self, config=config)

    def with_style(self, style: QRStyle) -> "QRCodeRequest":
        return replace(self, style=style)

    def with_logo(self, source: Optional[ImageSource], size: int = 0) -> "QRCodeRequest":
        """Attach a logo, or remove it when ``source`` is None."""
        if source is None:
            return replace(self, logo=None)
        return replace(self, logo=Logo.from_source(source, size))

    # **** outputs ****

    def to_matrix(self) -> List[List[bool]]:
        """Padded occupancy matrix (True = foreground); a fresh list each call."""
        symbol = make_qr(self.content, ecc=self.ecc, version=self.version,
                         charset=self.charset, eci=self.eci)
        return to_occupancy_matrix(symbol, self.config.border)

    def to_text(self, dark: str = "  ", light: str = "██") -> str:
        return matrix_to_text(self.to_matrix(), dark=dark, light=light)

    def to_image(self, rng: Optional[RandomSource] = None, seed=None) -> Image.Image:
        """Render the code with its style and logo."""
        matrix = self.to_matrix()
        image = self.style.render(matrix, self.config, rng=rng, seed=seed)
        if self.logo is not None:
            paste_logo(image, self.logo, len(matrix), self.config.block_size)
        logger.info("Rendered %dx%d %s QR code (ecc=%s)",
                    image.width, image.height, self.style.name, self.ecc)
        return image

    def to_bytes(self, fmt: str = 'png', quality: Optional[float] = None,
                 rng: Optional[RandomSource] = None, seed=None) -> bytes:
        return encode_image(self.to_image(rng=rng, seed=seed), fmt, quality)

    def to_base64(self, fmt: str = 'png', **kwargs) -> str:
        return base64.b64encode(self.to_bytes(fmt, **kwargs)).decode('ascii')

    def save(self, path: Union[str, "os.PathLike[str]"], fmt: Optional[str] = None,
             quality: Optional[float] = None, rng: Optional[RandomSource] = None, seed=None) -> str:
        """
        Write the rendered code to ``path``. The format defaults to the file
        extension.

        Returns:
            str: The path written
        """
        path = os.fspath(path)
        if fmt is None:
            fmt = os.path.splitext(path)[1] or 'png'
        data = self.to_bytes(fmt, quality=quality, rng=rng, seed=seed)
        with open(path, 'wb') as fp:
            fp.write(data)
        logger.info("QR code saved to %s", path)
        return path
