import base64
import io
import json
from typing import Any

import qrcode
from qrcode.image.pil import PilImage


def qr_data_uri(payload: dict[str, Any]) -> str:
    """Render ``payload`` as JSON inside a PNG QR code, returned as a data URI."""
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=6,
        border=2,
    )
    qr.add_data(json.dumps(payload, separators=(",", ":")))
    qr.make(fit=True)
    image = qr.make_image(image_factory=PilImage)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"
