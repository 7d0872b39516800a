import uuid
from datetime import datetime
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ...core.timeutils import utc_now
from ..session import Base


class ScheduledClass(Base):
    __tablename__ = "classes"
    __table_args__ = (
        CheckConstraint("max_capacity > 0", name="ck_classes_capacity_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    instructor_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("instructors.id", ondelete="SET NULL")
    )
    max_capacity: Mapped[int] = mapped_column(Integer, default=10)
    room: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now()
    )

    instructor = relationship("Instructor", back_populates="classes")
    attendance = relationship("AttendanceRecord", back_populates="scheduled_class")

    @property
    def instructor_name(self) -> str | None:
        return self.instructor.full_name if self.instructor else None
