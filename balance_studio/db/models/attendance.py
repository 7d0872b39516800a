import uuid
from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import DateTime, Enum, ForeignKey, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ...core.timeutils import utc_now
from ..session import Base


class AttendanceStatus(str, PyEnum):
    booked = "booked"
    visited = "visited"
    cancelled = "cancelled"


class AttendanceRecord(Base):
    __tablename__ = "attendance"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), index=True
    )
    class_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("classes.id", ondelete="SET NULL"), index=True
    )
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, index=True)
    status: Mapped[AttendanceStatus] = mapped_column(
        Enum(AttendanceStatus, native_enum=False, length=16), default=AttendanceStatus.visited
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now()
    )

    client = relationship("Client", back_populates="attendance")
    scheduled_class = relationship("ScheduledClass", back_populates="attendance")

    @property
    def client_name(self) -> str | None:
        return self.client.full_name if self.client else None

    @property
    def class_name(self) -> str | None:
        return self.scheduled_class.name if self.scheduled_class else None

    @property
    def class_start_time(self) -> datetime | None:
        return self.scheduled_class.start_time if self.scheduled_class else None
