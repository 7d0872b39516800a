from pydantic import BaseModel, Field

from ...core.constants import MIN_PASSWORD_LENGTH


class AdminLogin(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class PortalCredentials(BaseModel):
    phone: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class PortalRegistration(PortalCredentials):
    full_name: str = ""


class RefreshRequest(BaseModel):
    refresh_token: str


class PasswordResetRequest(BaseModel):
    email: str = Field(min_length=3)


class SessionUser(BaseModel):
    id: str
    email: str | None = None


class TokenResponse(BaseModel):
    access_token: str | None = None
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    user: SessionUser | None = None


class AdminSession(SessionUser):
    is_admin: bool = True
