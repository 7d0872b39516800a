import uuid
from datetime import datetime
from pydantic import BaseModel, Field


class Profile(BaseModel):
    id: uuid.UUID
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class PlanIssue(BaseModel):
    plan_id: uuid.UUID
    sessions_left: int | None = Field(default=None, ge=0)
    days_valid: int | None = Field(default=None, gt=0)
    is_active_on_first_visit: bool = False


class UserSubscription(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    plan_id: uuid.UUID
    plan_name: str | None = None
    sessions_left: int
    purchase_date: datetime
    is_active_on_first_visit: bool
    activation_date: datetime | None = None
    end_date: datetime | None = None

    class Config:
        from_attributes = True
