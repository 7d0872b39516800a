from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt

from ..config import get_settings

ALGORITHM = "HS256"
AUDIENCE = "authenticated"


@dataclass(frozen=True, slots=True)
class AuthUser:
    """Identity carried by a verified access token of the auth service."""

    id: str
    email: str | None
    role: str = AUDIENCE
    claims: Dict[str, Any] = field(default_factory=dict, compare=False)


def decode_access_token(token: str) -> AuthUser:
    """Verify an access token issued by the auth service.

    Raises ``jose.JWTError`` when the signature, expiry or audience is invalid
    and ``KeyError`` when the token carries no subject.
    """
    settings = get_settings()
    payload = jwt.decode(
        token,
        settings.supabase_jwt_secret,
        algorithms=[ALGORITHM],
        audience=AUDIENCE,
    )
    return AuthUser(
        id=payload["sub"],
        email=payload.get("email"),
        role=payload.get("role", AUDIENCE),
        claims=payload,
    )


def create_access_token(data: Dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Sign a token the way the auth service does; used by seeds and tests."""
    settings = get_settings()
    to_encode = {"aud": AUDIENCE, "role": AUDIENCE, **data}
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=15))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.supabase_jwt_secret, algorithm=ALGORITHM)
