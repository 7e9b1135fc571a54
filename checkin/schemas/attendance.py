from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class AttendanceEntry(BaseModel):
    id: int
    kid_name: str
    last_action: Literal["in", "out"]
    last_action_at: datetime
    signed_in_by_name: str | None = None
    signed_in_by_contact: str | None = None
    signed_out_by_name: str | None = None
    signed_out_by_contact: str | None = None


class RoomAttendance(BaseModel):
    room_id: int
    room_name: str
    present_count: int
    kids: list[AttendanceEntry] = []
