from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from checkin.database import Base

SIGN_ACTIONS = ("in", "out")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SignEvent(Base):
    """Append-only sign-in/out log entry. Attendance is derived from these rows."""

    __tablename__ = "sign_in_out_records"
    __table_args__ = (
        CheckConstraint("action IN ('in', 'out')", name="ck_sign_action"),
        Index("ix_sign_events_room_timestamp", "room_id", "timestamp"),
        Index("ix_sign_events_kid_room_timestamp", "kid_id", "room_id", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kid_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("kids.id"), nullable=False
    )
    room_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("rooms.id"), nullable=False
    )
    caregiver_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("caregivers.id"), nullable=True
    )
    action: Mapped[str] = mapped_column(String(3), nullable=False)  # 'in' or 'out'
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    # Relationships
    kid: Mapped["Kid"] = relationship()  # noqa: F821
    room: Mapped["Room"] = relationship()  # noqa: F821
    caregiver: Mapped["Caregiver | None"] = relationship()  # noqa: F821

    def __repr__(self) -> str:
        return f"<SignEvent(id={self.id}, kid_id={self.kid_id}, action={self.action!r})>"
