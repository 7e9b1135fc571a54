from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.config import settings
from checkin.core.exceptions import AuthenticationError
from checkin.core.security import SESSION_TOKEN_TYPE, decode_token
from checkin.database import get_db
from checkin.models.teacher import Teacher

session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_teacher(
    db: Annotated[AsyncSession, Depends(get_db)],
    cookie_token: Annotated[str | None, Depends(session_cookie)],
    bearer: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Teacher:
    """Resolve the authenticated teacher for this request.

    The session token is read from the session cookie set at login, or from
    an ``Authorization: Bearer`` header. It is validated on every request.

    Raises:
        AuthenticationError: If the token is missing, invalid, expired, or
            the teacher no longer exists.
    """
    token = cookie_token or (bearer.credentials if bearer is not None else None)
    if not token:
        raise AuthenticationError("Unauthorized")

    try:
        payload = decode_token(token)
    except JWTError:
        raise AuthenticationError("Unauthorized")

    teacher_id = payload.get("sub")
    if teacher_id is None or payload.get("type") != SESSION_TOKEN_TYPE:
        raise AuthenticationError("Unauthorized")

    try:
        teacher_pk = int(teacher_id)
    except (TypeError, ValueError):
        raise AuthenticationError("Unauthorized")

    result = await db.execute(select(Teacher).where(Teacher.id == teacher_pk))
    teacher = result.scalar_one_or_none()
    if teacher is None:
        raise AuthenticationError("Unauthorized")

    return teacher


CurrentTeacher = Annotated[Teacher, Depends(get_current_teacher)]
