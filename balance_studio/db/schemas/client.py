import uuid
from datetime import date, datetime
from pydantic import BaseModel, field_validator

from ...core.constants import DEFAULT_CLIENT_SOURCE
from ..models.client import ClientStatus
from ._validators import blank_to_none, strip_required

_NAME_REQUIRED = "First and last name are required"


class ClientBase(BaseModel):
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None


class ClientCreate(ClientBase):
    source: str = DEFAULT_CLIENT_SOURCE

    @field_validator("first_name", "last_name")
    @classmethod
    def require_name(cls, value: str) -> str:
        return strip_required(value, _NAME_REQUIRED)

    @field_validator("email", "phone")
    @classmethod
    def empty_contacts(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class ClientUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    source: str | None = None
    status: ClientStatus | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def require_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return strip_required(value, _NAME_REQUIRED)

    @field_validator("email", "phone")
    @classmethod
    def empty_contacts(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class ClientSelfUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def require_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return strip_required(value, _NAME_REQUIRED)

    @field_validator("phone")
    @classmethod
    def empty_phone(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class ClientStatusUpdate(BaseModel):
    status: ClientStatus


class ClientShort(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str

    class Config:
        from_attributes = True


class Client(ClientBase):
    id: uuid.UUID
    user_id: uuid.UUID | None = None
    status: ClientStatus
    source: str | None = None
    registration_date: date | None = None
    created_at: datetime

    class Config:
        from_attributes = True
