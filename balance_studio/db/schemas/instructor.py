import uuid
from datetime import datetime
from pydantic import BaseModel, field_validator

from ..models.instructor import InstructorStatus
from ._validators import split_list, strip_required


class InstructorBase(BaseModel):
    first_name: str
    last_name: str
    specialization: list[str] = []
    bio: str | None = None
    photo_url: str | None = None


class InstructorCreate(InstructorBase):
    @field_validator("first_name", "last_name")
    @classmethod
    def require_name(cls, value: str) -> str:
        return strip_required(value, "First and last name are required")

    @field_validator("specialization", mode="before")
    @classmethod
    def parse_specialization(cls, value: object) -> list[str]:
        return split_list(value, ",")


class InstructorUpdate(InstructorCreate):
    status: InstructorStatus = InstructorStatus.active


class Instructor(InstructorBase):
    id: uuid.UUID
    specialization: list[str] | None = None
    status: InstructorStatus
    created_at: datetime

    class Config:
        from_attributes = True
