"""Teacher Service.

Credential checks for the teacher login and the account administration
used by ``checkin.manage_teachers``.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.core.exceptions import NotFoundError, ValidationError
from checkin.core.security import get_password_hash, verify_password
from checkin.models.teacher import Teacher

logger = logging.getLogger(__name__)

# bcrypt only hashes the first 72 bytes and current releases reject longer input
MAX_PASSWORD_BYTES = 72


def _check_password(password: str) -> None:
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        )


async def get_teacher(db: AsyncSession, username: str) -> Teacher | None:
    result = await db.execute(select(Teacher).where(Teacher.username == username))
    return result.scalar_one_or_none()


async def authenticate(db: AsyncSession, username: str, password: str) -> Teacher | None:
    """Return the teacher when the password matches, else None."""
    teacher = await get_teacher(db, username)
    if teacher is None or not verify_password(password, teacher.password_hash):
        logger.warning("Failed teacher login for %r", username)
        return None
    return teacher


async def create_teacher(db: AsyncSession, username: str, password: str) -> Teacher:
    username = username.strip()
    if not username or not password:
        raise ValidationError("Username and password are required")
    _check_password(password)
    if await get_teacher(db, username) is not None:
        raise ValidationError(f"Teacher {username} already exists")

    teacher = Teacher(username=username, password_hash=get_password_hash(password))
    db.add(teacher)
    await db.flush()
    logger.info("Teacher %s created", username)
    return teacher


async def update_teacher_password(
    db: AsyncSession, username: str, new_password: str
) -> Teacher:
    if not new_password:
        raise ValidationError("Password is required")
    _check_password(new_password)
    teacher = await get_teacher(db, username)
    if teacher is None:
        raise NotFoundError(f"Teacher {username} not found")

    teacher.password_hash = get_password_hash(new_password)
    await db.flush()
    logger.info("Password for teacher %s updated", username)
    return teacher


async def delete_teacher(db: AsyncSession, username: str) -> None:
    teacher = await get_teacher(db, username)
    if teacher is None:
        raise NotFoundError(f"Teacher {username} not found")

    await db.delete(teacher)
    await db.flush()
    logger.info("Teacher %s deleted", username)


async def list_teachers(db: AsyncSession) -> list[Teacher]:
    result = await db.execute(select(Teacher).order_by(Teacher.username))
    return list(result.scalars().all())
