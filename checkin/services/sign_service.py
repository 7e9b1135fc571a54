"""Sign Service.

Validates that a caregiver may sign the requested kids and appends
sign-in/out events to the log. Events are never updated or deleted.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from checkin.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from checkin.models.kid import CaregiverKidLink, Kid
from checkin.models.sign_event import SIGN_ACTIONS, SignEvent
from checkin.services.registration_service import get_caregiver_by_contact, get_room

logger = logging.getLogger(__name__)

_ACTION_VERBS = {"in": "signed in to", "out": "signed out of"}


async def sign(
    db: AsyncSession,
    caregiver_contact: str | None,
    room_id: int | None,
    kid_ids: list[int] | None,
    action: str | None,
) -> dict:
    """Record a sign-in or sign-out for a batch of kids.

    Every kid must be linked to the caregiver; the first unlinked kid aborts
    the whole batch before anything is written. Linked kids assigned to a
    different room are skipped.

    Raises:
        ValidationError: Missing fields or an action other than in/out.
        NotFoundError: Unknown room or caregiver, or no kid in the batch
            belongs to the room.
        AuthorizationError: A kid is not linked to the caregiver.
    """
    caregiver_contact = (caregiver_contact or "").strip()
    if not caregiver_contact or room_id is None or not kid_ids or action not in SIGN_ACTIONS:
        raise ValidationError("Invalid request data")

    room = await get_room(db, room_id)
    if room is None:
        raise NotFoundError("Room not found")

    caregiver = await get_caregiver_by_contact(db, caregiver_contact)
    if caregiver is None:
        raise NotFoundError("Caregiver not found")

    # Collapse duplicates, keep request order
    requested = list(dict.fromkeys(kid_ids))

    linked = set(
        (
            await db.execute(
                select(CaregiverKidLink.kid_id).where(
                    CaregiverKidLink.caregiver_id == caregiver.id,
                    CaregiverKidLink.kid_id.in_(requested),
                )
            )
        ).scalars().all()
    )
    for kid_id in requested:
        if kid_id not in linked:
            logger.warning(
                "Caregiver %s tried to sign unlinked kid %s", caregiver.id, kid_id
            )
            raise AuthorizationError(f"Not authorized to sign kid {kid_id}")

    kids = {
        kid.id: kid
        for kid in (
            await db.execute(select(Kid).where(Kid.id.in_(requested)))
        ).scalars().all()
    }

    now = datetime.now(timezone.utc)
    processed = []
    for kid_id in requested:
        kid = kids[kid_id]
        if kid.room_id != room.id:
            logger.debug("Kid %s is not assigned to room %s, skipped", kid.id, room.id)
            continue
        db.add(SignEvent(
            kid_id=kid.id,
            room_id=room.id,
            caregiver_id=caregiver.id,
            action=action,
            timestamp=now,
        ))
        processed.append(f"{kid.name} {_ACTION_VERBS[action]} {room.name}")

    if not processed:
        raise NotFoundError("No kids found for this room")

    await db.flush()
    logger.info(
        "Caregiver %s signed %s %d kid(s) in room %s",
        caregiver.id, action, len(processed), room.id,
    )
    return {"message": "; ".join(processed), "processed": processed}
