import uuid
from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import DateTime, Enum, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ...core.timeutils import utc_now
from ..session import Base
from ..types import StringList


class InstructorStatus(str, PyEnum):
    active = "active"
    archived = "archived"


class Instructor(Base):
    __tablename__ = "instructors"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    specialization: Mapped[list[str] | None] = mapped_column(StringList, default=list)
    bio: Mapped[str | None] = mapped_column(Text)
    photo_url: Mapped[str | None] = mapped_column(String(512))
    status: Mapped[InstructorStatus] = mapped_column(
        Enum(InstructorStatus, native_enum=False, length=16), default=InstructorStatus.active
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now()
    )

    classes = relationship("ScheduledClass", back_populates="instructor")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
