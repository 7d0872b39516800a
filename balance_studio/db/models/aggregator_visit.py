import uuid
from datetime import datetime
from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ...core.timeutils import utc_now
from ..session import Base


class AggregatorVisit(Base):
    __tablename__ = "aggregator_visits"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    aggregator_name: Mapped[str] = mapped_column(String(64), nullable=False)
    class_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("classes.id", ondelete="SET NULL"))
    revenue: Mapped[int] = mapped_column(Integer, default=0)
    note: Mapped[str | None] = mapped_column(Text)
    visit_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, index=True)

    scheduled_class = relationship("ScheduledClass")

    @property
    def class_name(self) -> str | None:
        return self.scheduled_class.name if self.scheduled_class else None

    @property
    def class_start_time(self) -> datetime | None:
        return self.scheduled_class.start_time if self.scheduled_class else None
