"""Client-side booking flow of the portal.

Booking and cancelling are delegated to the backend procedures, which own the
capacity and balance rules. Only the portal's own eligibility checks live here.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session, selectinload

from ..config import get_settings
from ..core.constants import PORTAL_SCHEDULE_DAYS
from ..core.security import AuthUser
from ..core.timeutils import ensure_aware, local_date, studio_today, utc_now
from ..db import models
from . import rpc, schedule_service

logger = logging.getLogger(__name__)

OUTSIDE_WINDOW = f"Only the next {PORTAL_SCHEDULE_DAYS} days are open for booking"


class BookingError(Exception):
    pass


class BookingNotFound(BookingError):
    pass


class CancellationClosed(BookingError):
    pass


def minutes_until(starts_at: datetime, now: datetime | None = None) -> int:
    delta = ensure_aware(starts_at) - ensure_aware(now or utc_now())
    seconds = delta.total_seconds()
    # Whole minutes, truncated toward zero.
    return int(seconds / 60)


def can_cancel(starts_at: datetime, now: datetime | None = None, cutoff_min: int | None = None) -> bool:
    cutoff = get_settings().cancellation_cutoff_min if cutoff_min is None else cutoff_min
    return minutes_until(starts_at, now) >= cutoff


def schedule_days(today: date | None = None) -> list[date]:
    first = today or studio_today()
    return [first + timedelta(days=offset) for offset in range(PORTAL_SCHEDULE_DAYS)]


def booked_class_ids(db: Session, client: models.Client) -> set[str]:
    rows = (
        db.query(models.AttendanceRecord.class_id)
        .filter(models.AttendanceRecord.client_id == client.id)
        .filter(models.AttendanceRecord.status != models.AttendanceStatus.cancelled)
        .all()
    )
    return {str(class_id) for (class_id,) in rows if class_id is not None}


def portal_schedule(
    db: Session,
    client: models.Client,
    day: date | None = None,
    now: datetime | None = None,
) -> tuple[date, list[date], list[dict[str, Any]]]:
    current = ensure_aware(now or utc_now())
    days = schedule_days(studio_today(current))
    selected = day or days[0]
    if selected not in days:
        raise BookingError(OUTSIDE_WINDOW)
    rows = schedule_service.day_occupancy(db, selected)
    booked = booked_class_ids(db, client)
    classes = []
    for row in rows:
        starts_at = row["start_time"]
        if isinstance(starts_at, str):
            starts_at = datetime.fromisoformat(starts_at)
        if ensure_aware(starts_at) <= current:
            continue
        classes.append({**row, "is_booked": str(row["id"]) in booked})
    return selected, days, classes


def book(db: Session, user: AuthUser, class_id: Any, now: datetime | None = None) -> None:
    current = ensure_aware(now or utc_now())
    scheduled = db.get(models.ScheduledClass, class_id)
    if scheduled is None:
        raise BookingNotFound("Class not found")
    if ensure_aware(scheduled.start_time) <= current:
        raise BookingError("The class has already started")
    if local_date(scheduled.start_time) not in schedule_days(studio_today(current)):
        raise BookingError(OUTSIDE_WINDOW)
    rpc.client_book_class(db, class_id, user.claims or {"sub": user.id})
    logger.info("Client booked class", extra={"user_id": user.id, "class_id": str(class_id)})


def my_bookings(
    db: Session,
    client: models.Client,
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    current = ensure_aware(now or utc_now())
    records = (
        db.query(models.AttendanceRecord)
        .options(selectinload(models.AttendanceRecord.scheduled_class))
        .filter(models.AttendanceRecord.client_id == client.id)
        .filter(models.AttendanceRecord.status == models.AttendanceStatus.booked)
        .all()
    )
    bookings = []
    for record in records:
        scheduled = record.scheduled_class
        if scheduled is None or ensure_aware(scheduled.start_time) <= current:
            continue
        bookings.append(
            {
                "id": record.id,
                "status": record.status.value,
                "class_id": scheduled.id,
                "class_name": scheduled.name,
                "start_time": ensure_aware(scheduled.start_time),
                "minutes_left": minutes_until(scheduled.start_time, current),
                "can_cancel": can_cancel(scheduled.start_time, current),
            }
        )
    bookings.sort(key=lambda item: item["start_time"])
    return bookings


def cancel(
    db: Session,
    user: AuthUser,
    client: models.Client,
    attendance_id: Any,
    now: datetime | None = None,
) -> None:
    record = db.get(models.AttendanceRecord, attendance_id)
    if record is None or record.client_id != client.id:
        raise BookingNotFound("Booking not found")
    if record.status != models.AttendanceStatus.booked:
        raise BookingError("Only active bookings can be cancelled")
    scheduled = record.scheduled_class
    if scheduled is None:
        raise BookingNotFound("Class not found")
    if not can_cancel(scheduled.start_time, now):
        cutoff = get_settings().cancellation_cutoff_min
        raise CancellationClosed(f"Cancellation closes {cutoff} minutes before the class")
    rpc.client_cancel_booking(db, record.id, user.claims or {"sub": user.id})
    logger.info(
        "Client cancelled booking",
        extra={"user_id": user.id, "attendance_id": str(record.id)},
    )


__all__ = [
    "BookingError",
    "BookingNotFound",
    "CancellationClosed",
    "minutes_until",
    "can_cancel",
    "schedule_days",
    "booked_class_ids",
    "portal_schedule",
    "book",
    "my_bookings",
    "cancel",
]
