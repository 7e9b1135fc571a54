"""Attendance Query Engine.

Attendance is never stored: a kid's presence in a room is derived from the
most recent sign event of the day for that (kid, room) pair.
"""

from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from checkin.core.exceptions import NotFoundError
from checkin.models.kid import Kid
from checkin.models.room import Room
from checkin.models.sign_event import SignEvent


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def _day_bounds(d: date) -> tuple[datetime, datetime]:
    """Return (start-of-day UTC, start-of-next-day UTC) for a given date."""
    start = datetime.combine(d, time.min, tzinfo=timezone.utc)
    end = start + timedelta(days=1)
    return start, end


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------

async def derive_day_states(
    db: AsyncSession,
    room_id: int,
    day: date,
    kid_ids: list[int] | None = None,
) -> dict[int, dict]:
    """Fold one day's sign events for a room into per-kid state.

    Returns ``{kid_id: {"last": event, "last_in": event | None,
    "last_out": event | None}}`` for every kid with at least one event that
    day. Events are ordered by timestamp with the event id as tie-break, so
    an event carrying an older timestamp never overrides a newer one even
    when it was inserted later.
    """
    start, end = _day_bounds(day)
    stmt = (
        select(SignEvent)
        .options(selectinload(SignEvent.caregiver))
        .where(
            SignEvent.room_id == room_id,
            SignEvent.timestamp >= start,
            SignEvent.timestamp < end,
        )
        .order_by(SignEvent.timestamp, SignEvent.id)
    )
    if kid_ids is not None:
        stmt = stmt.where(SignEvent.kid_id.in_(kid_ids))

    states: dict[int, dict] = {}
    for event in (await db.execute(stmt)).scalars().all():
        state = states.setdefault(
            event.kid_id, {"last": event, "last_in": None, "last_out": None}
        )
        state["last"] = event
        state["last_in" if event.action == "in" else "last_out"] = event
    return states


def _caregiver_fields(event: SignEvent | None) -> tuple[str | None, str | None]:
    if event is None or event.caregiver is None:
        return None, None
    return event.caregiver.name, event.caregiver.contact_number


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

async def current_attendance(
    db: AsyncSession,
    room_id: int,
    day: date | None = None,
) -> list[dict]:
    """Kids assigned to the room whose latest event of the day is a sign-in.

    Raises:
        NotFoundError: If the room does not exist.
    """
    room = (await db.execute(select(Room).where(Room.id == room_id))).scalar_one_or_none()
    if room is None:
        raise NotFoundError("Room not found")

    return await _present_kids(db, room, day or today_utc())


async def _present_kids(db: AsyncSession, room: Room, day: date) -> list[dict]:
    kids = (
        await db.execute(
            select(Kid).where(Kid.room_id == room.id).order_by(Kid.name, Kid.id)
        )
    ).scalars().all()
    states = await derive_day_states(db, room.id, day)

    present = []
    for kid in kids:
        state = states.get(kid.id)
        if state is None or state["last"].action != "in":
            continue
        in_name, in_contact = _caregiver_fields(state["last_in"])
        out_name, out_contact = _caregiver_fields(state["last_out"])
        present.append({
            "id": kid.id,
            "kid_name": kid.name,
            "last_action": state["last"].action,
            "last_action_at": _as_utc(state["last"].timestamp),
            "signed_in_by_name": in_name,
            "signed_in_by_contact": in_contact,
            "signed_out_by_name": out_name,
            "signed_out_by_contact": out_contact,
        })
    return present


async def room_attendance_snapshot(
    db: AsyncSession,
    day: date | None = None,
) -> list[dict]:
    """Current attendance for every room, for the multi-room dashboard."""
    day = day or today_utc()
    rooms = (await db.execute(select(Room).order_by(Room.id))).scalars().all()

    snapshot = []
    for room in rooms:
        kids = await _present_kids(db, room, day)
        snapshot.append({
            "room_id": room.id,
            "room_name": room.name,
            "present_count": len(kids),
            "kids": kids,
        })
    return snapshot
