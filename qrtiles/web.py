#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
qrtiles - Flask Web Application

Form page plus endpoints returning styled QR codes.

Run:
    python -m qrtiles.web
Open:
    http://127.0.0.1:5000/
"""

import logging
from io import BytesIO
from typing import Any, Dict

import segno
from flask import Flask, render_template_string, request, send_file

from .config import StyleConfig
from .errors import AssetLoadError, ConfigurationError, ValidationError
from .presets import PRESETS
from .renderer import FORMATS, QRCodeRequest, normalize_format
from .styles import PhotoStyle, SolidStyle

logger = logging.getLogger(__name__)

STYLES = ('solid', 'photo') + tuple(PRESETS)

# Upper bounds on request parameters that size the output image
MAX_BORDER = 20
MAX_BLOCK_SIZE = 64
MAX_LOGO_SIZE = 177

TEMPLATE = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>qrtiles</title>
  <style>
    body{font-family:Inter, Arial, sans-serif; padding:18px; background:#fff; color:#222}
    .row{display:flex; flex-wrap:wrap; gap:16px; align-items:flex-end}
    .field{display:flex; flex-direction:column; font-size:14px}
    input[type="text"], select, input[type="number"]{padding:6px 8px; font-family:monospace; border:1px solid #ccc; border-radius:6px}
    label{font-weight:600; margin-bottom:4px}
    button{padding:10px 16px; border-radius:8px; border:1px solid #333; background:#111; color:#fff; cursor:pointer}
  </style>
</head>
<body>
  <h2>qrtiles</h2>
  <form method="post" action="/render" enctype="multipart/form-data">
    <div class="row">
      <div class="field"><label>Text</label><input type="text" name="text" size="48" required></div>
      <div class="field"><label>ECC</label>
        <select name="ecc">{% for l in ecc_levels %}<option{% if l == 'M' %} selected{% endif %}>{{ l }}</option>{% endfor %}</select>
      </div>
      <div class="field"><label>Version</label><input type="text" name="version" value="auto" size="5"></div>
      <div class="field"><label>Style</label>
        <select name="style">{% for s in styles %}<option>{{ s }}</option>{% endfor %}</select>
      </div>
      <div class="field"><label>Block size</label><input type="number" name="block_size" value="8" min="1" max="{{ max_block_size }}"></div>
      <div class="field"><label>Border</label><input type="number" name="border" value="1" min="0" max="{{ max_border }}"></div>
      <div class="field"><label>Foreground</label><input type="text" name="foreground" value="#000000" size="8"></div>
      <div class="field"><label>Background</label><input type="text" name="background" value="#ffffff" size="8"></div>
      <div class="field"><label>Format</label>
        <select name="format">{% for f in formats %}<option>{{ f }}</option>{% endfor %}</select>
      </div>
    </div>
    <div class="row">
      <div class="field"><label>Photo (style=photo)</label><input type="file" name="photo"></div>
      <div class="field"><label>Dot size rate</label><input type="text" name="dot_size_rate" value="0.20" size="5"></div>
      <div class="field"><label>Adaptive color</label><input type="text" name="adaptive_color_rate" value="0.00" size="5"></div>
      <div class="field"><label>Eye adaptive color</label><input type="text" name="eye_adaptive_color_rate" value="0.00" size="5"></div>
      <div class="field"><label>Logo</label><input type="file" name="logo"></div>
      <div class="field"><label>Logo size (blocks)</label><input type="number" name="logo_size" value="7" min="1" max="{{ max_logo_size }}"></div>
      <button type="submit">Render</button>
    </div>
  </form>
</body>
</html>
"""


def _int_param(values, name: str, default: int, low: int, high: int) -> int:
    raw = values.get(name)
    if raw in (None, ''):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be an integer, got {raw!r}") from exc
    if not low <= value <= high:
        raise ValidationError(f"{name} must be between {low} and {high}, got {value}")
    return value


def _float_param(values, name: str, default: float) -> float:
    raw = values.get(name)
    if raw in (None, ''):
        return default
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from exc


def _read_params(req) -> Dict[str, Any]:
    """Extract and validate QR rendering parameters from a Flask request."""
    values = req.values
    text = (values.get('text') or "").strip()
    if not text:
        raise ValidationError("text is required")

    style_name = (values.get('style') or 'solid').strip().lower()
    if style_name not in STYLES:
        raise ValidationError(f"Unknown style {style_name!r}; use one of {', '.join(STYLES)}")

    config = StyleConfig(
        block_size=_int_param(values, 'block_size', 8, 1, MAX_BLOCK_SIZE),
        border=_int_param(values, 'border', 1, 0, MAX_BORDER),
        foreground=(values.get('foreground') or '#000000').strip(),
        background=(values.get('background') or '#ffffff').strip(),
    )

    return {
        'text': text,
        'ecc': (values.get('ecc') or 'M').strip().upper(),
        'version': values.get('version') or 'auto',
        'charset': (values.get('charset') or 'utf-8').strip(),
        'eci': values.get('eci') == 'true',
        'style': style_name,
        'config': config,
        'format': normalize_format(values.get('format') or 'png'),
        'dot_size_rate': _float_param(values, 'dot_size_rate', 0.20),
        'adaptive_color_rate': _float_param(values, 'adaptive_color_rate', 0.00),
        'eye_adaptive_color_rate': _float_param(values, 'eye_adaptive_color_rate', 0.00),
        'img_border': values.get('img_border', 'true') != 'false',
        'logo_size': _int_param(values, 'logo_size', 7, 1, MAX_LOGO_SIZE),
        'seed': values.get('seed') or None,
    }


def _uploaded(req, name: str):
    file = req.files.get(name)
    if file is None or not file.filename:
        return None
    logger.info("Upload received: %s=%s", name, file.filename)
    return file.stream.read()


def _build_request(req, params: Dict[str, Any]) -> QRCodeRequest:
    style_name = params['style']
    if style_name == 'solid':
        style = SolidStyle()
    elif style_name == 'photo':
        photo = _uploaded(req, 'photo')
        if photo is None:
            raise ValidationError("style=photo needs an uploaded photo")
        style = PhotoStyle.from_source(
            photo,
            img_border=params['img_border'],
            dot_size_rate=params['dot_size_rate'],
            adaptive_color_rate=params['adaptive_color_rate'],
            eye_adaptive_color_rate=params['eye_adaptive_color_rate'],
        )
    else:
        style = PRESETS[style_name](params['config'].foreground)

    qr = QRCodeRequest(
        params['text'],
        ecc=params['ecc'],
        version=params['version'],
        charset=params['charset'],
        eci=params['eci'],
        config=params['config'],
        style=style,
    )
    logo = _uploaded(req, 'logo')
    if logo is not None:
        qr = qr.with_logo(logo, params['logo_size'])
    return qr


def create_app() -> Flask:
    app = Flask(__name__)

    def handle_bad_input(ex):
        logger.warning("Rejected request: %s", ex)
        return str(ex), 400

    # InternalInvariantError is left to Flask's 500 handling
    for exc_type in (ValidationError, AssetLoadError, ConfigurationError):
        app.register_error_handler(exc_type, handle_bad_input)

    @app.errorhandler(segno.DataOverflowError)
    def handle_overflow(ex):
        logger.warning("Content does not fit: %s", ex)
        return f"Content does not fit the chosen version: {ex}", 400

    @app.route('/', methods=['GET'])
    def index():
        return render_template_string(
            TEMPLATE,
            ecc_levels=('L', 'M', 'Q', 'H'),
            styles=STYLES,
            formats=('png', 'jpg', 'bmp'),
            max_block_size=MAX_BLOCK_SIZE,
            max_border=MAX_BORDER,
            max_logo_size=MAX_LOGO_SIZE,
        )

    @app.route('/render', methods=['GET', 'POST'])
    def render_qr():
        params = _read_params(request)
        qr = _build_request(request, params)
        logger.info("Rendering QR code with parameters: ecc=%s, version=%s, style=%s",
                    qr.ecc, qr.version or 'auto', params['style'])
        fmt = params['format']
        data = qr.to_bytes(fmt, seed=params['seed'])
        _, ext, mimetype = FORMATS[fmt]
        return send_file(BytesIO(data), mimetype=mimetype,
                         download_name=f"qr_{params['style']}.{ext}")

    @app.route('/text', methods=['GET'])
    def render_text():
        params = _read_params(request)
        qr = QRCodeRequest(params['text'], ecc=params['ecc'], version=params['version'],
                           charset=params['charset'], eci=params['eci'], config=params['config'])
        return qr.to_text(), 200, {'Content-Type': 'text/plain; charset=utf-8'}

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(debug=True)
