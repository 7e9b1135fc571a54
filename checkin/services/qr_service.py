"""Room Access Token Issuer.

Encodes a room (and optionally the sign action) as a URL to the caregiver
sign page and renders it as a printable QR code. Stateless.
"""

import base64
import html
import io
import logging
from urllib.parse import urlencode

import qrcode

from checkin.config import settings
from checkin.core.exceptions import InternalError, ValidationError
from checkin.models.sign_event import SIGN_ACTIONS

logger = logging.getLogger(__name__)


def build_room_url(room_id: int, action: str | None = None) -> str:
    """Return the sign page URL for a room, e.g. ``.../sign?room_id=2&action=in``."""
    params: dict[str, str | int] = {"room_id": room_id}
    if action is not None:
        if action not in SIGN_ACTIONS:
            raise ValidationError("Invalid action")
        params["action"] = action
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/sign?{urlencode(params)}"


def render_qr_data_url(payload: str) -> str:
    """Render a payload as a PNG QR code and return it as a data URL."""
    try:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=2,
        )
        qr.add_data(payload)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
    except Exception as exc:
        logger.exception("QR rendering failed for %r", payload)
        raise InternalError("Error generating QR code") from exc

    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def render_qr_page(room_id: int, action: str | None = None) -> str:
    """Build the printable HTML page for a room's QR code."""
    url = build_room_url(room_id, action)
    data_url = render_qr_data_url(url)

    title = f"QR Code for Room {room_id}"
    if action is not None:
        title += f" (sign {action})"
    title = html.escape(title)

    return (
        "<html>\n"
        "  <body>\n"
        f"    <h1>{title}</h1>\n"
        f'    <img src="{data_url}" alt="{title}" />\n'
        f"    <p>{html.escape(url)}</p>\n"
        '    <button onclick="window.print()">Print</button>\n'
        "  </body>\n"
        "</html>\n"
    )
