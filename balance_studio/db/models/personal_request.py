import uuid
from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import DateTime, Enum, ForeignKey, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ...core.timeutils import utc_now
from ..session import Base


class PersonalRequestStatus(str, PyEnum):
    new = "new"
    processed = "processed"


class PersonalRequest(Base):
    __tablename__ = "personal_requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("clients.id", ondelete="CASCADE"))
    preferred_time: Mapped[str] = mapped_column(String(512), nullable=False)
    status: Mapped[PersonalRequestStatus] = mapped_column(
        Enum(PersonalRequestStatus, native_enum=False, length=16), default=PersonalRequestStatus.new
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now()
    )

    client = relationship("Client")
