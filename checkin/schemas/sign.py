from pydantic import BaseModel


class SignRequest(BaseModel):
    caregiver_contact: str | None = None
    room_id: int | None = None
    kid_ids: list[int] | None = None
    action: str | None = None  # in | out


class SignResponse(BaseModel):
    message: str
    processed: list[str] = []
