"""Rooms router."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.database import get_db
from checkin.schemas.room import RoomResponse
from checkin.services.registration_service import list_rooms

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get("", response_model=list[RoomResponse])
async def get_rooms(db: Annotated[AsyncSession, Depends(get_db)]):
    """List all rooms."""
    return await list_rooms(db)
