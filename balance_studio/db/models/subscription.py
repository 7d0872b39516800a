import uuid
from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ...core.constants import LOW_BALANCE_THRESHOLD
from ...core.timeutils import utc_now
from ..session import Base


class SubscriptionStatus(str, PyEnum):
    active = "active"
    expired = "expired"
    frozen = "frozen"


class Subscription(Base):
    """Subscription sold directly to a client; NULL session counts mean unlimited."""

    __tablename__ = "subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), index=True
    )
    type: Mapped[str] = mapped_column(String(128), nullable=False)
    price: Mapped[int] = mapped_column(Integer, default=0)
    sessions_total: Mapped[int | None] = mapped_column(Integer)
    sessions_remaining: Mapped[int | None] = mapped_column(Integer)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    status: Mapped[SubscriptionStatus] = mapped_column(
        Enum(SubscriptionStatus, native_enum=False, length=16), default=SubscriptionStatus.active
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now()
    )

    client = relationship("Client", back_populates="subscriptions")

    @property
    def is_unlimited(self) -> bool:
        return self.sessions_remaining is None

    @property
    def low_balance(self) -> bool:
        return (
            self.sessions_remaining is not None
            and self.sessions_remaining < LOW_BALANCE_THRESHOLD
        )
