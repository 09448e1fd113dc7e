from __future__ import annotations

import base64
import io

import qrcode

from ..core.constants import QR_CONTENT_TYPE


def encode_png(data: str, *, box_size: int = 10, border: int = 2) -> bytes:
    """Render ``data`` as a black-on-white QR code PNG."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def to_data_uri(png: bytes, *, content_type: str = QR_CONTENT_TYPE) -> str:
    return f"data:{content_type};base64,{base64.b64encode(png).decode('ascii')}"
