import uuid
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from ._validators import split_list


class PlanBase(BaseModel):
    name: str = Field(min_length=1)
    price: int = Field(ge=0)
    sessions_count: int = Field(ge=0)
    duration_days: int = Field(default=30, gt=0)
    description: str | None = None
    features: list[str] = []
    is_active: bool = True

    @field_validator("features", mode="before")
    @classmethod
    def parse_features(cls, value: object) -> list[str]:
        return split_list(value, "\n")


class PlanCreate(PlanBase):
    pass


class PlanUpdate(PlanBase):
    pass


class Plan(PlanBase):
    id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True
