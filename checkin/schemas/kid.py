from typing import Literal

from pydantic import BaseModel


class CaregiverKidResponse(BaseModel):
    id: int
    name: str
    room_id: int | None = None
    room_name: str | None = None


class RoomKidResponse(BaseModel):
    id: int
    name: str
    room_name: str
    last_action: Literal["in", "out"] | None = None
