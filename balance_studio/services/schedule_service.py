import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable

from sqlalchemy.orm import Session, selectinload

from ..core.timeutils import combine_local, day_bounds, week_bounds, week_start
from ..db import models, schemas
from . import rpc

logger = logging.getLogger(__name__)


class ScheduleError(Exception):
    pass


def class_times(day: date, at: time, duration_min: int) -> tuple[datetime, datetime]:
    start = combine_local(day, at)
    return start, start + timedelta(minutes=duration_min)


def _apply_form(db: Session, scheduled: models.ScheduledClass, payload: schemas.ClassForm) -> None:
    if payload.instructor_id is not None and db.get(models.Instructor, payload.instructor_id) is None:
        raise ScheduleError("Instructor not found")
    start, end = class_times(payload.date, payload.time, payload.duration)
    scheduled.name = payload.name
    scheduled.start_time = start
    scheduled.end_time = end
    scheduled.instructor_id = payload.instructor_id
    scheduled.max_capacity = payload.max_capacity
    scheduled.room = payload.room


def create_class(db: Session, payload: schemas.ClassForm) -> models.ScheduledClass:
    scheduled = models.ScheduledClass()
    _apply_form(db, scheduled, payload)
    db.add(scheduled)
    db.commit()
    db.refresh(scheduled)
    logger.info("Created class", extra={"class_id": str(scheduled.id)})
    return scheduled


def update_class(
    db: Session, scheduled: models.ScheduledClass, payload: schemas.ClassForm
) -> models.ScheduledClass:
    _apply_form(db, scheduled, payload)
    db.commit()
    db.refresh(scheduled)
    return scheduled


def with_occupancy(rows: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    result = []
    for row in rows:
        booked = int(row.get("booked_count") or 0)
        capacity = int(row.get("max_capacity") or 0)
        result.append(
            {
                **row,
                "booked_count": booked,
                "spots_left": max(capacity - booked, 0),
                "is_full": booked >= capacity,
            }
        )
    return result


def week_classes(db: Session, day: date) -> tuple[date, list[dict[str, Any]]]:
    start, end = week_bounds(day)
    rows = rpc.get_classes_with_occupancy(db, start, end)
    return week_start(day), with_occupancy(rows)


def day_occupancy(db: Session, day: date) -> list[dict[str, Any]]:
    start, end = day_bounds(day)
    return with_occupancy(rpc.get_classes_with_occupancy(db, start, end))


def day_classes(db: Session, day: date) -> list[models.ScheduledClass]:
    start, end = day_bounds(day)
    return (
        db.query(models.ScheduledClass)
        .options(selectinload(models.ScheduledClass.instructor))
        .filter(models.ScheduledClass.start_time >= start)
        .filter(models.ScheduledClass.start_time < end)
        .order_by(models.ScheduledClass.start_time.asc())
        .all()
    )


def duplicate_week(db: Session, day: date) -> tuple[date, date]:
    """Copy the week containing ``day`` onto the following week."""
    monday = week_start(day)
    rpc.duplicate_week_schedule(db, monday)
    logger.info("Duplicated week schedule", extra={"week_start": monday.isoformat()})
    return monday, monday + timedelta(days=7)


def active_instructors(db: Session) -> list[models.Instructor]:
    return (
        db.query(models.Instructor)
        .filter(models.Instructor.status == models.InstructorStatus.active)
        .order_by(models.Instructor.last_name.asc())
        .all()
    )


__all__ = [
    "ScheduleError",
    "class_times",
    "create_class",
    "update_class",
    "with_occupancy",
    "week_classes",
    "day_occupancy",
    "day_classes",
    "duplicate_week",
    "active_instructors",
]
