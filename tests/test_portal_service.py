from datetime import datetime, timedelta, timezone

import pytest

from balance_studio.db import models, schemas
from balance_studio.services import portal_service

from conftest import add_client


def test_personal_request_joins_note(db_session):
    client = add_client(db_session)

    request = portal_service.create_personal_request(
        db_session,
        client,
        schemas.PersonalRequestCreate(preferred_time="Вторник вечер", note="Спина"),
    )

    assert request.preferred_time == "Вторник вечер | Комментарий: Спина"
    assert request.status == models.PersonalRequestStatus.new


def test_personal_request_needs_time(db_session):
    client = add_client(db_session)

    with pytest.raises(portal_service.PortalError):
        portal_service.create_personal_request(
            db_session, client, schemas.PersonalRequestCreate(preferred_time=" ", note="Любое время")
        )


def test_home_picks_soonest_active_subscription(db_session):
    now = datetime(2024, 6, 10, tzinfo=timezone.utc)
    client = add_client(db_session)
    for name, days, status in (
        ("Истёк", -1, models.SubscriptionStatus.active),
        ("Поздний", 20, models.SubscriptionStatus.active),
        ("Ранний", 5, models.SubscriptionStatus.active),
        ("Заморожен", 2, models.SubscriptionStatus.frozen),
    ):
        db_session.add(
            models.Subscription(
                client_id=client.id,
                type=name,
                start_date=now - timedelta(days=30),
                end_date=now + timedelta(days=days),
                status=status,
            )
        )
    db_session.add_all(
        [
            models.NewsItem(title="Открыто", content="..."),
            models.NewsItem(title="Скрыто", content="...", is_active=False),
        ]
    )
    db_session.commit()

    home = portal_service.home(db_session, client, now=now)

    assert home["active_subscription"].type == "Ранний"
    assert [item.title for item in home["news"]] == ["Открыто"]


def test_update_profile_keeps_names(db_session):
    client = add_client(db_session)

    updated = portal_service.update_profile(
        db_session, client, schemas.ClientSelfUpdate(phone=" 77019998877 ")
    )
    assert updated.phone == "77019998877"
    assert updated.first_name == "Анна"

    with pytest.raises(portal_service.PortalError):
        portal_service.update_profile(
            db_session, client, schemas.ClientSelfUpdate.model_validate({"last_name": None})
        )


def test_personal_request_without_note_keeps_comment_label(db_session):
    client = add_client(db_session)

    request = portal_service.create_personal_request(
        db_session, client, schemas.PersonalRequestCreate(preferred_time="Суббота утро")
    )

    assert request.preferred_time == "Суббота утро | Комментарий: "
