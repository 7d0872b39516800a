import uuid
from datetime import datetime
from pydantic import BaseModel

from ..models.attendance import AttendanceStatus


class CheckIn(BaseModel):
    client_id: uuid.UUID
    class_id: uuid.UUID


class PinCheck(BaseModel):
    pin: str


class AttendanceRecord(BaseModel):
    id: uuid.UUID
    client_id: uuid.UUID
    class_id: uuid.UUID | None = None
    date: datetime
    status: AttendanceStatus
    client_name: str | None = None
    class_name: str | None = None

    class Config:
        from_attributes = True
