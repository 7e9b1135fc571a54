"""Sign router."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.database import get_db
from checkin.schemas.sign import SignRequest, SignResponse
from checkin.services.sign_service import sign

router = APIRouter(prefix="/sign", tags=["Sign"])


@router.post("", response_model=SignResponse)
async def sign_kids(
    body: SignRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Sign one or more kids in to or out of a room."""
    return await sign(
        db,
        caregiver_contact=body.caregiver_contact,
        room_id=body.room_id,
        kid_ids=body.kid_ids,
        action=body.action,
    )
