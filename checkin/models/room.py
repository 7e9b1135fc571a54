from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from checkin.database import Base


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Relationships
    kids: Mapped[list["Kid"]] = relationship(back_populates="room")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, name={self.name!r})>"
