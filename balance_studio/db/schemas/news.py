import uuid
from datetime import datetime
from pydantic import BaseModel, field_validator

from ._validators import strip_required


class NewsCreate(BaseModel):
    title: str
    content: str

    @field_validator("title", "content")
    @classmethod
    def require_text(cls, value: str) -> str:
        return strip_required(value, "Title and content are required")


class NewsToggle(BaseModel):
    is_active: bool


class News(NewsCreate):
    id: uuid.UUID
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
