"""Teacher authentication router.

Login sets a signed session cookie; the token is validated again on every
request to a teacher-only endpoint.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.config import settings
from checkin.core.dependencies import CurrentTeacher
from checkin.core.exceptions import AuthenticationError, ValidationError
from checkin.core.rate_limit import limiter, login_limit
from checkin.core.security import create_session_token
from checkin.database import get_db
from checkin.schemas.teacher import MessageResponse, TeacherLoginRequest, TeacherResponse
from checkin.services.teacher_service import authenticate

router = APIRouter(prefix="/teacher", tags=["Teacher"])


@router.post("/login", response_model=MessageResponse)
@limiter.limit(login_limit)
async def login(
    request: Request,
    response: Response,
    body: TeacherLoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Check teacher credentials and start a session."""
    if not body.username or not body.password:
        raise ValidationError("Missing credentials")

    teacher = await authenticate(db, body.username, body.password)
    if teacher is None:
        raise AuthenticationError("Invalid credentials")

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token({"sub": str(teacher.id)}),
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return {"message": "Login successful"}


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """End the session by clearing the cookie."""
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}


@router.get("/me", response_model=TeacherResponse)
async def get_me(current_teacher: CurrentTeacher):
    """Return the currently authenticated teacher."""
    return current_teacher
