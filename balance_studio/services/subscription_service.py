from __future__ import annotations

import logging
from datetime import datetime, time, timedelta

from sqlalchemy.orm import Session, selectinload

from ..core.constants import TRIAL_LIST_LIMIT, TRIAL_SOURCE, TRIAL_SUBSCRIPTION_TYPE, TRIAL_TYPE_MARKER
from ..core.timeutils import combine_local, studio_today, utc_now
from ..db import models, schemas
from . import client_service

logger = logging.getLogger(__name__)


class SubscriptionError(Exception):
    pass


def compute_end_date(start: datetime, duration_days: int) -> datetime:
    return start + timedelta(days=duration_days)


def resolve_sessions(unlimited: bool, sessions: int | None) -> int | None:
    """Unlimited subscriptions carry no session count at all."""
    if unlimited:
        return None
    return sessions


def _form_values(payload: schemas.SubscriptionForm) -> dict:
    if payload.client_id is None:
        raise SubscriptionError("Select a client")
    subscription_type = payload.type.strip()
    if not subscription_type:
        raise SubscriptionError("Enter the subscription name")
    start_day = payload.start_date or studio_today()
    start = combine_local(start_day, time.min)
    return {
        "client_id": payload.client_id,
        "type": subscription_type,
        "start_date": start,
        "end_date": compute_end_date(start, payload.duration_days),
        "price": payload.price,
        "sessions_remaining": resolve_sessions(payload.unlimited, payload.sessions),
        "status": models.SubscriptionStatus.active,
    }


def _ensure_client(db: Session, client_id) -> None:
    if db.get(models.Client, client_id) is None:
        raise SubscriptionError("Client not found")


def list_subscriptions(db: Session) -> list[models.Subscription]:
    return (
        db.query(models.Subscription)
        .options(selectinload(models.Subscription.client))
        .order_by(models.Subscription.end_date.asc())
        .all()
    )


def create_subscription(db: Session, payload: schemas.SubscriptionForm) -> models.Subscription:
    values = _form_values(payload)
    _ensure_client(db, values["client_id"])
    # The purchased amount is only recorded once, at creation.
    subscription = models.Subscription(**values, sessions_total=values["sessions_remaining"])
    db.add(subscription)
    db.commit()
    db.refresh(subscription)
    logger.info(
        "Issued subscription",
        extra={"subscription_id": str(subscription.id), "client_id": str(subscription.client_id)},
    )
    return subscription


def update_subscription(
    db: Session,
    subscription: models.Subscription,
    payload: schemas.SubscriptionForm,
) -> models.Subscription:
    values = _form_values(payload)
    _ensure_client(db, values["client_id"])
    for key, value in values.items():
        setattr(subscription, key, value)
    db.commit()
    db.refresh(subscription)
    return subscription


def active_subscription_for(
    db: Session,
    client: models.Client,
    now: datetime | None = None,
) -> models.Subscription | None:
    current = now or utc_now()
    return (
        db.query(models.Subscription)
        .filter(models.Subscription.client_id == client.id)
        .filter(models.Subscription.status == models.SubscriptionStatus.active)
        .filter(models.Subscription.end_date > current)
        .order_by(models.Subscription.end_date.asc())
        .first()
    )


def list_trials(db: Session, limit: int = TRIAL_LIST_LIMIT) -> list[models.Subscription]:
    return (
        db.query(models.Subscription)
        .options(selectinload(models.Subscription.client))
        .filter(models.Subscription.type.ilike(f"%{TRIAL_TYPE_MARKER}%"))
        .order_by(models.Subscription.created_at.desc())
        .limit(limit)
        .all()
    )


def register_trial(
    db: Session,
    payload: schemas.TrialCreate,
    now: datetime | None = None,
) -> models.Subscription:
    """Create the client and a one-session trial valid for today only."""
    current = now or utc_now()
    try:
        client = client_service.create_client(
            db,
            schemas.ClientCreate(
                first_name=payload.first_name,
                last_name=payload.last_name,
                phone=payload.phone,
                source=TRIAL_SOURCE,
            ),
            commit=False,
        )
        subscription = models.Subscription(
            client_id=client.id,
            type=TRIAL_SUBSCRIPTION_TYPE,
            start_date=current,
            end_date=current,
            sessions_total=1,
            sessions_remaining=1,
            price=payload.price,
            status=models.SubscriptionStatus.active,
        )
        db.add(subscription)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(subscription)
    logger.info("Registered trial", extra={"client_id": str(client.id)})
    return subscription


def issue_plan(
    db: Session,
    profile: models.Profile,
    payload: schemas.PlanIssue,
    now: datetime | None = None,
) -> models.UserSubscription:
    plan = db.get(models.SubscriptionPlan, payload.plan_id)
    if plan is None or not plan.is_active:
        raise SubscriptionError("Plan not found or inactive")
    current = now or utc_now()
    days_valid = payload.days_valid or plan.duration_days
    sessions_left = payload.sessions_left if payload.sessions_left is not None else plan.sessions_count

    activation_date = None
    end_date = None
    # Deferred subscriptions are activated by the backend on the first visit.
    if not payload.is_active_on_first_visit:
        activation_date = current
        end_date = compute_end_date(current, days_valid)

    subscription = models.UserSubscription(
        user_id=profile.id,
        plan_id=plan.id,
        sessions_left=sessions_left,
        purchase_date=current,
        is_active_on_first_visit=payload.is_active_on_first_visit,
        activation_date=activation_date,
        end_date=end_date,
    )
    db.add(subscription)
    db.commit()
    db.refresh(subscription)
    logger.info(
        "Issued plan",
        extra={"profile_id": str(profile.id), "plan_id": str(plan.id)},
    )
    return subscription


def profile_subscriptions(db: Session, profile: models.Profile) -> list[models.UserSubscription]:
    return (
        db.query(models.UserSubscription)
        .options(selectinload(models.UserSubscription.plan))
        .filter(models.UserSubscription.user_id == profile.id)
        .order_by(models.UserSubscription.created_at.desc())
        .all()
    )


__all__ = [
    "SubscriptionError",
    "compute_end_date",
    "resolve_sessions",
    "list_subscriptions",
    "create_subscription",
    "update_subscription",
    "active_subscription_for",
    "list_trials",
    "register_trial",
    "issue_plan",
    "profile_subscriptions",
]
