import uuid
from datetime import date, datetime, time
from pydantic import BaseModel, Field, field_validator

from ...core.constants import DEFAULT_CLASS_CAPACITY, DEFAULT_CLASS_DURATION_MIN, DEFAULT_ROOM
from ._validators import strip_required


class ClassForm(BaseModel):
    name: str
    date: date
    time: time
    duration: int = Field(default=DEFAULT_CLASS_DURATION_MIN, gt=0)
    instructor_id: uuid.UUID | None = None
    max_capacity: int = Field(default=DEFAULT_CLASS_CAPACITY, gt=0)
    room: str = DEFAULT_ROOM

    @field_validator("name")
    @classmethod
    def require_name(cls, value: str) -> str:
        return strip_required(value, "Class name is required")


class ScheduledClass(BaseModel):
    id: uuid.UUID
    name: str
    start_time: datetime
    end_time: datetime
    instructor_id: uuid.UUID | None = None
    instructor_name: str | None = None
    max_capacity: int
    room: str | None = None

    class Config:
        from_attributes = True


class ClassOccupancy(BaseModel):
    id: uuid.UUID
    name: str
    start_time: datetime
    end_time: datetime | None = None
    instructor_id: uuid.UUID | None = None
    max_capacity: int
    room: str | None = None
    booked_count: int = 0
    spots_left: int
    is_full: bool


class WeekSchedule(BaseModel):
    week_start: date
    classes: list[ClassOccupancy]


class DuplicateWeekResult(BaseModel):
    source_week_start: date
    next_week_start: date
