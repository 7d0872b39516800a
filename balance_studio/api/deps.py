import logging
from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from ..core import security
from ..core.auth_client import AuthClient, get_auth_client
from ..db.session import get_db
from ..db import models
from ..services import admin, client_service


logger = logging.getLogger(__name__)


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")


def get_access_token(token: Annotated[str, Depends(oauth2_scheme)]) -> str:
    return token


def get_current_user(token: Annotated[str, Depends(get_access_token)]) -> security.AuthUser:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        return security.decode_access_token(token)
    except (JWTError, KeyError) as exc:
        raise credentials_exception from exc


def get_current_admin(
    user: Annotated[security.AuthUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> security.AuthUser:
    if not admin.is_admin(db, user.email):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Access denied: {user.email or 'this account'} is not on the administrator list",
        )
    return user


def get_current_client(
    user: Annotated[security.AuthUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> models.Client:
    client = client_service.get_by_user_id(db, user.id)
    if client is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client profile not found")
    return client


def auth_client() -> AuthClient:
    return get_auth_client()


def delete_or_conflict(db: Session, row, detail: str) -> None:
    """Delete ``row``; rows still referenced elsewhere answer 409."""
    try:
        db.delete(row)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Delete refused: %s", detail, extra={"table": row.__tablename__})
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail) from exc
