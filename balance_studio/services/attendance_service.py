import hmac
import logging
import uuid
from datetime import date

from sqlalchemy.orm import Session, selectinload

from ..config import get_settings
from ..core.constants import RECENT_ATTENDANCE_LIMIT
from ..core.timeutils import day_bounds, local_date, studio_today
from ..db import models
from . import rpc

logger = logging.getLogger(__name__)


class AttendanceError(Exception):
    pass


class AttendanceNotFound(AttendanceError):
    pass


class PastDateLocked(AttendanceError):
    pass


def is_past(day: date, today: date | None = None) -> bool:
    return day < (today or studio_today())


def check_pin(pin: str | None) -> bool:
    if not pin:
        return False
    expected = get_settings().attendance_edit_pin
    return hmac.compare_digest(pin.encode(), expected.encode())


def ensure_editable(day: date, pin: str | None, today: date | None = None) -> None:
    """Days before today are archived and need the admin PIN to change."""
    if is_past(day, today) and not check_pin(pin):
        raise PastDateLocked("Archived day: enter the admin PIN to edit attendance")


def recent_log(db: Session, limit: int = RECENT_ATTENDANCE_LIMIT) -> list[models.AttendanceRecord]:
    return (
        db.query(models.AttendanceRecord)
        .options(
            selectinload(models.AttendanceRecord.client),
            selectinload(models.AttendanceRecord.scheduled_class),
        )
        .order_by(models.AttendanceRecord.date.desc())
        .limit(limit)
        .all()
    )


def check_in(
    db: Session,
    client_id: uuid.UUID,
    class_id: uuid.UUID,
    pin: str | None = None,
) -> None:
    scheduled = db.get(models.ScheduledClass, class_id)
    if scheduled is None:
        raise AttendanceNotFound("Class not found")
    if db.get(models.Client, client_id) is None:
        raise AttendanceNotFound("Client not found")
    ensure_editable(local_date(scheduled.start_time), pin)
    rpc.register_visit(db, client_id, class_id)
    logger.info(
        "Registered visit",
        extra={"client_id": str(client_id), "class_id": str(class_id)},
    )


def delete_visit(db: Session, record: models.AttendanceRecord, pin: str | None = None) -> None:
    ensure_editable(local_date(record.date), pin)
    db.delete(record)
    db.commit()
    logger.info("Deleted visit", extra={"attendance_id": str(record.id)})


def visits_on(db: Session, day: date) -> int:
    start, end = day_bounds(day)
    return (
        db.query(models.AttendanceRecord)
        .filter(models.AttendanceRecord.date >= start)
        .filter(models.AttendanceRecord.date < end)
        .count()
    )


__all__ = [
    "AttendanceError",
    "AttendanceNotFound",
    "PastDateLocked",
    "is_past",
    "check_pin",
    "ensure_editable",
    "recent_log",
    "check_in",
    "delete_visit",
    "visits_on",
]
