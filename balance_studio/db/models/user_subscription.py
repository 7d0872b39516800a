import uuid
from datetime import datetime
from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ...core.timeutils import utc_now
from ..session import Base


class UserSubscription(Base):
    __tablename__ = "user_subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"), index=True
    )
    plan_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("subscription_plans.id"))
    sessions_left: Mapped[int] = mapped_column(Integer, default=0)
    purchase_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    is_active_on_first_visit: Mapped[bool] = mapped_column(Boolean, default=False)
    activation_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now()
    )

    profile = relationship("Profile", back_populates="subscriptions")
    plan = relationship("SubscriptionPlan")

    @property
    def plan_name(self) -> str | None:
        return self.plan.name if self.plan else None
