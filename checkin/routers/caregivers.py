"""Caregiver router.

Endpoints for caregiver/kid registration and the caregiver's kid lists
shown on the sign page.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.database import get_db
from checkin.schemas.kid import CaregiverKidResponse, RoomKidResponse
from checkin.schemas.registration import RegisterRequest, RegisterResponse
from checkin.services import registration_service

router = APIRouter(tags=["Caregivers"])


@router.post("/register", response_model=RegisterResponse, response_model_exclude_none=True)
async def register(
    body: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Register a caregiver with a new kid, or link them via a family code."""
    return await registration_service.register(
        db,
        caregiver_name=body.caregiver_name,
        caregiver_contact=body.caregiver_contact,
        kid_name=body.kid_name,
        room_id=body.room_id,
        family_code=body.family_code,
    )


@router.get("/kids", response_model=list[CaregiverKidResponse])
async def list_kids(
    db: Annotated[AsyncSession, Depends(get_db)],
    contact_number: str | None = None,
):
    """List the kids linked to a caregiver."""
    return await registration_service.list_kids(db, contact_number)


@router.get("/kids-for-room", response_model=list[RoomKidResponse])
async def list_kids_for_room(
    db: Annotated[AsyncSession, Depends(get_db)],
    contact_number: str | None = None,
    room_id: int | None = None,
):
    """List a caregiver's kids in one room with today's last action."""
    return await registration_service.kids_for_room(db, contact_number, room_id)
