from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from checkin.database import Base


class Caregiver(Base):
    __tablename__ = "caregivers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Natural key: re-registering with the same number updates the name
    contact_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    kid_links: Mapped[list["CaregiverKidLink"]] = relationship(  # noqa: F821
        back_populates="caregiver"
    )

    def __repr__(self) -> str:
        return f"<Caregiver(id={self.id}, contact_number={self.contact_number!r})>"
