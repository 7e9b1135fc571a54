"""Seed data applied at startup: the rooms and the initial teacher account."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.config import settings
from checkin.core.exceptions import ValidationError
from checkin.models.room import Room
from checkin.services.teacher_service import create_teacher, get_teacher

logger = logging.getLogger(__name__)


async def seed_rooms(db: AsyncSession, names: list[str]) -> int:
    """Insert rooms 1..n by id, leaving existing rows untouched."""
    existing = set((await db.execute(select(Room.id))).scalars().all())
    created = 0
    for room_id, name in enumerate(names, start=1):
        if room_id in existing:
            continue
        db.add(Room(id=room_id, name=name))
        created += 1
    await db.flush()
    return created


async def seed_teacher(db: AsyncSession, username: str, password: str | None) -> bool:
    """Create the initial teacher account unless it already exists."""
    if await get_teacher(db, username) is not None:
        return False
    if not password:
        logger.warning(
            "SEED_TEACHER_PASSWORD not set, teacher account %r not created", username
        )
        return False
    try:
        await create_teacher(db, username, password)
    except ValidationError as exc:
        logger.error("Teacher account %r not seeded: %s", username, exc.detail)
        return False
    return True


async def seed_defaults(db: AsyncSession) -> None:
    rooms = await seed_rooms(db, settings.SEED_ROOMS)
    teacher = await seed_teacher(
        db, settings.SEED_TEACHER_USERNAME, settings.SEED_TEACHER_PASSWORD
    )
    logger.info("Seed: %d rooms created, teacher %s", rooms, "created" if teacher else "unchanged")
