import logging
from datetime import date, datetime

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from ..core.timeutils import day_bounds, next_month_start, utc_now
from ..db import models, schemas

logger = logging.getLogger(__name__)


class AggregatorError(Exception):
    pass


def list_visits(db: Session) -> list[models.AggregatorVisit]:
    return (
        db.query(models.AggregatorVisit)
        .options(selectinload(models.AggregatorVisit.scheduled_class))
        .order_by(models.AggregatorVisit.visit_date.desc())
        .all()
    )


def total_revenue(visits: list[models.AggregatorVisit]) -> int:
    return sum(visit.revenue or 0 for visit in visits)


def record_visit(
    db: Session,
    payload: schemas.AggregatorVisitCreate,
    now: datetime | None = None,
) -> models.AggregatorVisit:
    if payload.class_id is None:
        raise AggregatorError("Select a class")
    if db.get(models.ScheduledClass, payload.class_id) is None:
        raise AggregatorError("Class not found")
    aggregator = payload.aggregator.strip()
    if not aggregator:
        raise AggregatorError("Aggregator name is required")
    visit = models.AggregatorVisit(
        aggregator_name=aggregator,
        class_id=payload.class_id,
        note=payload.note,
        revenue=payload.revenue,
        visit_date=now or utc_now(),
    )
    db.add(visit)
    db.commit()
    db.refresh(visit)
    logger.info(
        "Recorded aggregator visit",
        extra={"aggregator": aggregator, "class_id": str(payload.class_id)},
    )
    return visit


def monthly_summary(db: Session, year: int, month: int) -> list[dict]:
    """Revenue and visit counts per partner for a calendar month."""
    try:
        first = date(year, month, 1)
    except ValueError as exc:
        raise AggregatorError("Invalid month") from exc
    start, _ = day_bounds(first)
    end, _ = day_bounds(next_month_start(first))
    rows = (
        db.query(
            models.AggregatorVisit.aggregator_name,
            func.count(models.AggregatorVisit.id),
            func.coalesce(func.sum(models.AggregatorVisit.revenue), 0),
        )
        .filter(models.AggregatorVisit.visit_date >= start)
        .filter(models.AggregatorVisit.visit_date < end)
        .group_by(models.AggregatorVisit.aggregator_name)
        .order_by(models.AggregatorVisit.aggregator_name.asc())
        .all()
    )
    return [
        {"aggregator_name": name, "visits": int(count), "revenue": int(revenue or 0)}
        for name, count, revenue in rows
    ]
