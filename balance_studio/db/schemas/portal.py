import uuid
from datetime import date, datetime
from pydantic import BaseModel

from .client import Client
from .news import News
from .scheduled_class import ClassOccupancy
from .subscription import Subscription


class PortalHome(BaseModel):
    client: Client
    active_subscription: Subscription | None = None
    news: list[News]


class PortalClass(ClassOccupancy):
    is_booked: bool = False


class PortalSchedule(BaseModel):
    day: date
    days: list[date]
    classes: list[PortalClass]


class BookingRequest(BaseModel):
    class_id: uuid.UUID


class MyBooking(BaseModel):
    id: uuid.UUID
    status: str
    class_id: uuid.UUID
    class_name: str
    start_time: datetime
    minutes_left: int
    can_cancel: bool


class PersonalRequestCreate(BaseModel):
    preferred_time: str = ""
    note: str = ""


class PersonalRequest(BaseModel):
    id: uuid.UUID
    preferred_time: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True
