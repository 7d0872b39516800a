from datetime import date, datetime, timedelta, timezone

import pytest

from balance_studio.api.routes import subscriptions, trials
from balance_studio.db import models, schemas
from balance_studio.services import subscription_service

from conftest import add_client


def test_end_date_adds_duration():
    start = datetime(2024, 3, 1, tzinfo=timezone.utc)
    assert subscription_service.compute_end_date(start, 30) == datetime(2024, 3, 31, tzinfo=timezone.utc)


def test_unlimited_nulls_sessions(db_session):
    client = add_client(db_session)
    payload = schemas.SubscriptionForm(
        client_id=client.id, type="Безлимит", unlimited=True, sessions=8, start_date=date(2024, 5, 1)
    )

    subscription = subscription_service.create_subscription(db_session, payload)

    assert subscription.sessions_remaining is None
    assert subscription.sessions_total is None
    assert subscription.is_unlimited
    assert subscription.end_date - subscription.start_date == timedelta(days=30)


def test_update_keeps_sessions_total(db_session):
    client = add_client(db_session)
    form = {"client_id": client.id, "type": "12 занятий", "sessions": 12}
    subscription = subscription_service.create_subscription(db_session, schemas.SubscriptionForm(**form))

    updated = subscription_service.update_subscription(
        db_session, subscription, schemas.SubscriptionForm(**{**form, "sessions": 2})
    )

    assert updated.sessions_total == 12
    assert updated.sessions_remaining == 2
    assert updated.low_balance


def test_client_and_type_are_required(db_session):
    with pytest.raises(subscription_service.SubscriptionError, match="Select a client"):
        subscription_service.create_subscription(db_session, schemas.SubscriptionForm(type="Месяц"))
    client = add_client(db_session)
    with pytest.raises(subscription_service.SubscriptionError):
        subscription_service.create_subscription(
            db_session, schemas.SubscriptionForm(client_id=client.id, type="  ")
        )


def test_register_trial_creates_client_and_single_session(db_session):
    now = datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc)
    payload = schemas.TrialCreate(first_name="Айгерим", last_name="Нурланова", phone="77015550000")

    trial = subscription_service.register_trial(db_session, payload, now=now)

    assert trial.type == "Пробное занятие"
    assert trial.sessions_remaining == 1
    assert trial.price == 2000
    client = db_session.get(models.Client, trial.client_id)
    assert client.source == "Пробное"
    assert [t.id for t in subscription_service.list_trials(db_session)] == [trial.id]


def test_issue_plan_activation(db_session):
    profile = models.Profile(first_name="Анна", last_name="Ким")
    plan = models.SubscriptionPlan(name="8 занятий", price=24000, sessions_count=8, duration_days=30)
    db_session.add_all([profile, plan])
    db_session.commit()
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)

    immediate = subscription_service.issue_plan(
        db_session, profile, schemas.PlanIssue(plan_id=plan.id), now=now
    )
    deferred = subscription_service.issue_plan(
        db_session,
        profile,
        schemas.PlanIssue(plan_id=plan.id, is_active_on_first_visit=True, sessions_left=4),
        now=now,
    )

    assert immediate.sessions_left == 8
    assert immediate.end_date.replace(tzinfo=timezone.utc) == now + timedelta(days=30)
    assert deferred.activation_date is None
    assert deferred.end_date is None
    assert deferred.sessions_left == 4


def test_issue_inactive_plan_fails(db_session):
    profile = models.Profile(first_name="Анна", last_name="Ким")
    plan = models.SubscriptionPlan(name="Архив", price=1, sessions_count=1, is_active=False)
    db_session.add_all([profile, plan])
    db_session.commit()

    with pytest.raises(subscription_service.SubscriptionError):
        subscription_service.issue_plan(db_session, profile, schemas.PlanIssue(plan_id=plan.id))


def test_subscriptions_api(make_client, session_factory):
    db = session_factory()
    client = add_client(db)
    client_id = str(client.id)
    db.close()
    api = make_client(subscriptions, trials)

    missing = api.post("/api/v1/subscriptions", json={"type": "Месяц"})
    assert missing.status_code == 400

    created = api.post(
        "/api/v1/subscriptions",
        json={"client_id": client_id, "type": "Месяц", "price": 30000, "sessions": 2},
    )
    assert created.status_code == 201
    body = created.json()
    assert body["low_balance"] is True
    assert body["client"]["first_name"] == "Анна"

    trial = api.post("/api/v1/trials", json={"first_name": "Дана", "last_name": "Ли"})
    assert trial.status_code == 201
    listed = api.get("/api/v1/trials").json()
    assert listed[0]["client"]["first_name"] == "Дана"
