"""QR code router (teacher only)."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from checkin.core.dependencies import CurrentTeacher
from checkin.services.qr_service import render_qr_page

router = APIRouter(prefix="/qr", tags=["QR"])


@router.get("/{room_id}", response_class=HTMLResponse)
async def room_qr(room_id: int, current_teacher: CurrentTeacher):
    """Printable QR code that opens the room's sign page."""
    return HTMLResponse(render_qr_page(room_id))


@router.get("/{room_id}/{action}", response_class=HTMLResponse)
async def room_action_qr(room_id: int, action: str, current_teacher: CurrentTeacher):
    """Printable QR code that opens the sign page preset to ``in`` or ``out``."""
    return HTMLResponse(render_qr_page(room_id, action))
