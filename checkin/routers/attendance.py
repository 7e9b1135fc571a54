"""Attendance router (teacher only)."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.core.dependencies import CurrentTeacher
from checkin.database import get_db
from checkin.schemas.attendance import AttendanceEntry, RoomAttendance
from checkin.services.attendance_service import current_attendance, room_attendance_snapshot

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.get("", response_model=list[RoomAttendance])
async def get_attendance_snapshot(
    current_teacher: CurrentTeacher,
    db: Annotated[AsyncSession, Depends(get_db)],
    day: Annotated[date | None, Query(alias="date")] = None,
):
    """Who is currently signed in, for every room."""
    return await room_attendance_snapshot(db, day)


@router.get("/{room_id}", response_model=list[AttendanceEntry])
async def get_room_attendance(
    room_id: int,
    current_teacher: CurrentTeacher,
    db: Annotated[AsyncSession, Depends(get_db)],
    day: Annotated[date | None, Query(alias="date")] = None,
):
    """Who is currently signed in to one room.

    ``date`` (YYYY-MM-DD, UTC) selects another day; defaults to today.
    """
    return await current_attendance(db, room_id, day)
