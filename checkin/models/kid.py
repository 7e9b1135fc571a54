from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from checkin.database import Base


class Kid(Base):
    __tablename__ = "kids"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    family_code: Mapped[str] = mapped_column(String(16), unique=True, nullable=False)
    room_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("rooms.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    room: Mapped["Room | None"] = relationship(back_populates="kids")  # noqa: F821
    caregiver_links: Mapped[list["CaregiverKidLink"]] = relationship(
        back_populates="kid"
    )

    def __repr__(self) -> str:
        return f"<Kid(id={self.id}, name={self.name!r}, room_id={self.room_id})>"


class CaregiverKidLink(Base):
    __tablename__ = "kid_caregiver"

    kid_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("kids.id"), primary_key=True
    )
    caregiver_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("caregivers.id"), primary_key=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    kid: Mapped["Kid"] = relationship(back_populates="caregiver_links")
    caregiver: Mapped["Caregiver"] = relationship(back_populates="kid_links")  # noqa: F821

    def __repr__(self) -> str:
        return f"<CaregiverKidLink(kid_id={self.kid_id}, caregiver_id={self.caregiver_id})>"
