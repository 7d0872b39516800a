from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..core.timeutils import day_bounds, ensure_aware, month_start, studio_today, utc_now
from ..db import models
from . import attendance_service


def collect_stats(db: Session, now: datetime | None = None) -> dict[str, int]:
    current = ensure_aware(now or utc_now())
    today = studio_today(current)
    month_from, _ = day_bounds(month_start(today))

    active_clients = (
        db.query(models.Client)
        .filter(models.Client.status == models.ClientStatus.active)
        .count()
    )
    revenue = (
        db.query(func.coalesce(func.sum(models.Subscription.price), 0))
        .filter(models.Subscription.created_at >= month_from)
        .scalar()
    )
    active_subscriptions = (
        db.query(models.Subscription)
        .filter(models.Subscription.status == models.SubscriptionStatus.active)
        .count()
    )
    return {
        "active_clients": active_clients,
        "revenue": int(revenue or 0),
        "visits_today": attendance_service.visits_on(db, today),
        "active_subscriptions": active_subscriptions,
    }
