from pydantic import BaseModel, ConfigDict


class TeacherLoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class MessageResponse(BaseModel):
    message: str


class TeacherResponse(BaseModel):
    id: int
    username: str
    model_config = ConfigDict(from_attributes=True)
