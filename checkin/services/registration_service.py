"""Registration Service.

Creates or updates caregivers, registers kids under a family code, and
links additional caregivers to an existing kid through that code.
"""

import logging
import secrets

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.core.exceptions import InternalError, NotFoundError, ValidationError
from checkin.models.caregiver import Caregiver
from checkin.models.kid import CaregiverKidLink, Kid
from checkin.models.room import Room
from checkin.services.attendance_service import derive_day_states, today_utc

logger = logging.getLogger(__name__)

FAMILY_CODE_BYTES = 4  # 8 hex characters


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _generate_code() -> str:
    """Generate a family code like '9f86d081'."""
    return secrets.token_hex(FAMILY_CODE_BYTES)


async def _family_code_taken(db: AsyncSession, code: str) -> bool:
    result = await db.execute(select(Kid.id).where(Kid.family_code == code))
    return result.scalar_one_or_none() is not None


async def generate_family_code(db: AsyncSession) -> str:
    """Generate a family code not used by any kid, retrying on collision."""
    for _ in range(10):
        code = _generate_code()
        if not await _family_code_taken(db, code):
            return code

    # Extremely unlikely: 10 collisions in a row
    raise InternalError("Failed to generate unique family code")


async def get_caregiver_by_contact(
    db: AsyncSession, contact_number: str
) -> Caregiver | None:
    result = await db.execute(
        select(Caregiver).where(Caregiver.contact_number == contact_number)
    )
    return result.scalar_one_or_none()


async def get_room(db: AsyncSession, room_id: int) -> Room | None:
    result = await db.execute(select(Room).where(Room.id == room_id))
    return result.scalar_one_or_none()


async def upsert_caregiver(db: AsyncSession, name: str, contact_number: str) -> Caregiver:
    """Create the caregiver, or rename the one that owns this contact number."""
    caregiver = await get_caregiver_by_contact(db, contact_number)
    if caregiver is None:
        caregiver = Caregiver(name=name, contact_number=contact_number)
        db.add(caregiver)
    else:
        caregiver.name = name
    await db.flush()
    return caregiver


async def link_caregiver(db: AsyncSession, kid_id: int, caregiver_id: int) -> bool:
    """Link a caregiver to a kid. Returns False when the link already existed.

    The insert ignores an existing (kid, caregiver) row at the storage level,
    so two requests linking the same pair both succeed.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql_insert(CaregiverKidLink)
    elif dialect == "sqlite":
        stmt = sqlite_insert(CaregiverKidLink)
    else:
        raise InternalError(f"Unsupported database dialect {dialect!r}")

    result = await db.execute(
        stmt.values(kid_id=kid_id, caregiver_id=caregiver_id).on_conflict_do_nothing()
    )
    return result.rowcount == 1


async def register(
    db: AsyncSession,
    caregiver_name: str | None,
    caregiver_contact: str | None,
    kid_name: str | None = None,
    room_id: int | None = None,
    family_code: str | None = None,
) -> dict:
    """Register a caregiver and either a new kid or a link to an existing one.

    With a ``family_code`` the caregiver is linked to the kid holding that
    code. Without one, ``kid_name`` and ``room_id`` are required and a new
    kid is created under a freshly generated family code.

    Raises:
        ValidationError: Caregiver fields missing, or kid fields missing
            when no family code is given.
        NotFoundError: Unknown family code or room.
    """
    caregiver_name = _clean(caregiver_name)
    caregiver_contact = _clean(caregiver_contact)
    if caregiver_name is None or caregiver_contact is None:
        raise ValidationError("Missing caregiver information")

    caregiver = await upsert_caregiver(db, caregiver_name, caregiver_contact)

    family_code = _clean(family_code)
    if family_code is not None:
        result = await db.execute(select(Kid).where(Kid.family_code == family_code))
        kid = result.scalar_one_or_none()
        if kid is None:
            raise NotFoundError("Family code not found")

        created = await link_caregiver(db, kid.id, caregiver.id)
        logger.info(
            "Caregiver %s linked to kid %s (%s)",
            caregiver.id, kid.id, "new link" if created else "already linked",
        )
        return {"message": "Linked to existing kid"}

    kid_name = _clean(kid_name)
    if kid_name is None:
        raise ValidationError("Missing kid name")
    if room_id is None:
        raise ValidationError("Missing room")

    room = await get_room(db, room_id)
    if room is None:
        raise NotFoundError("Room not found")

    code = await generate_family_code(db)
    kid = Kid(name=kid_name, family_code=code, room_id=room.id)
    db.add(kid)
    await db.flush()

    await link_caregiver(db, kid.id, caregiver.id)
    logger.info("Kid %s registered in room %s by caregiver %s", kid.id, room.id, caregiver.id)
    return {"message": "Registration successful", "family_code": code}


async def list_rooms(db: AsyncSession) -> list[Room]:
    result = await db.execute(select(Room).order_by(Room.id))
    return list(result.scalars().all())


async def list_kids(db: AsyncSession, contact_number: str | None) -> list[dict]:
    """List the kids linked to the caregiver with this contact number."""
    contact_number = _clean(contact_number)
    if contact_number is None:
        raise ValidationError("Missing contact number")

    caregiver = await get_caregiver_by_contact(db, contact_number)
    if caregiver is None:
        raise NotFoundError("Caregiver not found")

    result = await db.execute(
        select(Kid.id, Kid.name, Kid.room_id, Room.name.label("room_name"))
        .join(CaregiverKidLink, CaregiverKidLink.kid_id == Kid.id)
        .outerjoin(Room, Room.id == Kid.room_id)
        .where(CaregiverKidLink.caregiver_id == caregiver.id)
        .order_by(Kid.name, Kid.id)
    )
    return [dict(row._mapping) for row in result.all()]


async def kids_for_room(
    db: AsyncSession, contact_number: str | None, room_id: int | None
) -> list[dict]:
    """List the caregiver's kids assigned to a room with today's last action."""
    contact_number = _clean(contact_number)
    if contact_number is None or room_id is None:
        raise ValidationError("Missing contact number or room")

    caregiver = await get_caregiver_by_contact(db, contact_number)
    if caregiver is None:
        raise NotFoundError("Caregiver not found")

    room = await get_room(db, room_id)
    if room is None:
        raise NotFoundError("Room not found")

    result = await db.execute(
        select(Kid)
        .join(CaregiverKidLink, CaregiverKidLink.kid_id == Kid.id)
        .where(
            CaregiverKidLink.caregiver_id == caregiver.id,
            Kid.room_id == room.id,
        )
        .order_by(Kid.name, Kid.id)
    )
    kids = result.scalars().all()
    if not kids:
        return []

    states = await derive_day_states(
        db, room.id, today_utc(), kid_ids=[kid.id for kid in kids]
    )
    return [
        {
            "id": kid.id,
            "name": kid.name,
            "room_name": room.name,
            "last_action": states[kid.id]["last"].action if kid.id in states else None,
        }
        for kid in kids
    ]
