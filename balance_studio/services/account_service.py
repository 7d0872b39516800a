import re
from typing import Any

from ..config import get_settings
from ..core.constants import MIN_PHONE_DIGITS
from ..db import schemas


class AccountError(Exception):
    pass


def normalize_phone(phone: str) -> str:
    digits = re.sub(r"\D", "", phone or "")
    if len(digits) < MIN_PHONE_DIGITS:
        raise AccountError("Enter a valid phone number")
    return digits


def portal_email(phone: str) -> str:
    """Portal clients sign in with a technical e-mail derived from the phone."""
    return f"{normalize_phone(phone)}@{get_settings().portal_email_domain}"


def session_response(payload: dict[str, Any] | None) -> schemas.TokenResponse:
    payload = payload or {}
    user = payload.get("user") or {}
    # Sign-up answers with the bare user when e-mail confirmation is pending.
    if not user and payload.get("id"):
        user = payload
    return schemas.TokenResponse(
        access_token=payload.get("access_token"),
        refresh_token=payload.get("refresh_token"),
        token_type=payload.get("token_type") or "bearer",
        expires_in=payload.get("expires_in"),
        user=schemas.SessionUser(id=str(user["id"]), email=user.get("email")) if user.get("id") else None,
    )
