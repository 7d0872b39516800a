import uuid
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator

from ...core.constants import (
    DEFAULT_SUBSCRIPTION_DAYS,
    DEFAULT_SUBSCRIPTION_SESSIONS,
    TRIAL_DEFAULT_PRICE,
)
from ..models.subscription import SubscriptionStatus
from ._validators import blank_to_none, strip_required
from .client import ClientShort


class SubscriptionForm(BaseModel):
    client_id: uuid.UUID | None = None
    type: str = ""
    price: int = Field(default=0, ge=0)
    sessions: int = Field(default=DEFAULT_SUBSCRIPTION_SESSIONS, ge=0)
    unlimited: bool = False
    start_date: date | None = None
    duration_days: int = Field(default=DEFAULT_SUBSCRIPTION_DAYS, ge=0)


class Subscription(BaseModel):
    id: uuid.UUID
    client_id: uuid.UUID
    type: str
    price: int
    sessions_total: int | None = None
    sessions_remaining: int | None = None
    start_date: datetime
    end_date: datetime
    status: SubscriptionStatus
    created_at: datetime
    client: ClientShort | None = None
    low_balance: bool = False

    class Config:
        from_attributes = True


class TrialCreate(BaseModel):
    first_name: str
    last_name: str
    phone: str | None = None
    price: int = Field(default=TRIAL_DEFAULT_PRICE, ge=0)

    @field_validator("first_name", "last_name")
    @classmethod
    def require_name(cls, value: str) -> str:
        return strip_required(value, "First and last name are required")

    @field_validator("phone")
    @classmethod
    def empty_phone(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class TrialClient(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    phone: str | None = None

    class Config:
        from_attributes = True


class Trial(BaseModel):
    id: uuid.UUID
    type: str
    price: int
    start_date: datetime
    sessions_remaining: int | None = None
    created_at: datetime
    client: TrialClient | None = None

    class Config:
        from_attributes = True
