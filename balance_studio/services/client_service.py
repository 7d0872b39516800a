import logging
import uuid

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..core.constants import CLIENT_SEARCH_LIMIT
from ..db import models, schemas

logger = logging.getLogger(__name__)


class ClientError(Exception):
    pass


def list_clients(
    db: Session,
    q: str | None = None,
    status: models.ClientStatus | None = None,
) -> list[models.Client]:
    query = db.query(models.Client)
    if q and q.strip():
        pattern = f"%{q.strip()}%"
        query = query.filter(
            or_(
                models.Client.first_name.ilike(pattern),
                models.Client.last_name.ilike(pattern),
                models.Client.email.ilike(pattern),
            )
        )
    if status:
        query = query.filter(models.Client.status == status)
    return query.order_by(models.Client.created_at.desc()).all()


def search_clients(db: Session, q: str, limit: int = CLIENT_SEARCH_LIMIT) -> list[models.Client]:
    pattern = f"%{q.strip()}%"
    return (
        db.query(models.Client)
        .filter(
            or_(
                models.Client.first_name.ilike(pattern),
                models.Client.last_name.ilike(pattern),
            )
        )
        .order_by(models.Client.last_name.asc())
        .limit(limit)
        .all()
    )


def active_clients(db: Session) -> list[models.Client]:
    return (
        db.query(models.Client)
        .filter(models.Client.status == models.ClientStatus.active)
        .order_by(models.Client.last_name.asc(), models.Client.first_name.asc())
        .all()
    )


def create_client(
    db: Session,
    payload: schemas.ClientCreate,
    *,
    commit: bool = True,
) -> models.Client:
    client = models.Client(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        phone=payload.phone,
        source=payload.source,
        status=models.ClientStatus.active,
    )
    db.add(client)
    if commit:
        db.commit()
        db.refresh(client)
        logger.info("Created client", extra={"client_id": str(client.id)})
    else:
        db.flush()
    return client


def update_client(
    db: Session,
    client: models.Client,
    payload: schemas.ClientUpdate | schemas.ClientSelfUpdate,
) -> models.Client:
    for key, value in payload.model_dump(exclude_unset=True).items():
        if key in {"first_name", "last_name", "status"} and value is None:
            raise ClientError(f"{key} cannot be empty")
        setattr(client, key, value)
    db.commit()
    db.refresh(client)
    return client


def set_status(db: Session, client: models.Client, status: models.ClientStatus) -> models.Client:
    client.status = status
    db.commit()
    db.refresh(client)
    logger.info("Client status changed", extra={"client_id": str(client.id), "status": status.value})
    return client


def get_by_user_id(db: Session, user_id: str | uuid.UUID) -> models.Client | None:
    try:
        key = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(str(user_id))
    except ValueError:
        return None
    return db.query(models.Client).filter(models.Client.user_id == key).first()


def client_subscriptions(db: Session, client: models.Client) -> list[models.Subscription]:
    return (
        db.query(models.Subscription)
        .filter(models.Subscription.client_id == client.id)
        .order_by(models.Subscription.created_at.desc())
        .all()
    )


__all__ = [
    "ClientError",
    "list_clients",
    "search_clients",
    "active_clients",
    "create_client",
    "update_client",
    "set_status",
    "get_by_user_id",
    "client_subscriptions",
]
