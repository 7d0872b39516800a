"""Read models and self-service actions for the client portal."""
import logging
from datetime import datetime

from sqlalchemy.orm import Session

from ..core.constants import PERSONAL_REQUEST_NOTE_SEPARATOR
from ..db import models, schemas
from . import client_service, subscription_service

logger = logging.getLogger(__name__)


class PortalError(Exception):
    pass


def active_news(db: Session) -> list[models.NewsItem]:
    return (
        db.query(models.NewsItem)
        .filter(models.NewsItem.is_active.is_(True))
        .order_by(models.NewsItem.created_at.desc())
        .all()
    )


def active_plans(db: Session) -> list[models.SubscriptionPlan]:
    return (
        db.query(models.SubscriptionPlan)
        .filter(models.SubscriptionPlan.is_active.is_(True))
        .order_by(models.SubscriptionPlan.price.asc())
        .all()
    )


def active_instructors(db: Session) -> list[models.Instructor]:
    return (
        db.query(models.Instructor)
        .filter(models.Instructor.status == models.InstructorStatus.active)
        .order_by(models.Instructor.first_name.asc())
        .all()
    )


def home(db: Session, client: models.Client, now: datetime | None = None) -> dict:
    return {
        "client": client,
        "active_subscription": subscription_service.active_subscription_for(db, client, now),
        "news": active_news(db),
    }


def update_profile(
    db: Session, client: models.Client, payload: schemas.ClientSelfUpdate
) -> models.Client:
    try:
        return client_service.update_client(db, client, payload)
    except client_service.ClientError as exc:
        raise PortalError("First and last name are required") from exc


def compose_preferred_time(preferred_time: str, note: str) -> str:
    preferred_time = preferred_time.strip()
    note = note.strip()
    if not preferred_time:
        raise PortalError("Describe when you would like to train")
    return f"{preferred_time}{PERSONAL_REQUEST_NOTE_SEPARATOR}{note}"


def create_personal_request(
    db: Session, client: models.Client, payload: schemas.PersonalRequestCreate
) -> models.PersonalRequest:
    request = models.PersonalRequest(
        client_id=client.id,
        preferred_time=compose_preferred_time(payload.preferred_time, payload.note),
        status=models.PersonalRequestStatus.new,
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    logger.info("Personal session requested", extra={"client_id": str(client.id)})
    return request
