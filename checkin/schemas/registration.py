from pydantic import BaseModel


class RegisterRequest(BaseModel):
    # Presence is checked by the registration service so that missing
    # fields answer 400 with a specific message.
    caregiver_name: str | None = None
    caregiver_contact: str | None = None
    kid_name: str | None = None
    room_id: int | None = None
    family_code: str | None = None  # links to an already registered kid


class RegisterResponse(BaseModel):
    message: str
    family_code: str | None = None
