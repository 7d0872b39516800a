import uuid
from datetime import datetime, timedelta, timezone

import pytest

from balance_studio.api.routes import portal
from balance_studio.core import security
from balance_studio.db import models
from balance_studio.services import booking_service, rpc

from conftest import add_client, bearer

NOW = datetime(2024, 6, 10, 6, 0, tzinfo=timezone.utc)


def _add_class(db, starts_at: datetime, name: str = "Виньяса") -> models.ScheduledClass:
    scheduled = models.ScheduledClass(
        name=name, start_time=starts_at, end_time=starts_at + timedelta(hours=1), max_capacity=2
    )
    db.add(scheduled)
    db.commit()
    return scheduled


def _occupancy_rows(db):
    rows = []
    for scheduled in db.query(models.ScheduledClass).all():
        rows.append(
            {
                "id": scheduled.id,
                "name": scheduled.name,
                "start_time": scheduled.start_time,
                "end_time": scheduled.end_time,
                "instructor_id": None,
                "max_capacity": scheduled.max_capacity,
                "room": None,
                "booked_count": 2 if scheduled.name == "Полный" else 0,
            }
        )
    return rows


@pytest.mark.parametrize(
    ("minutes", "allowed"),
    [(91, True), (90, True), (89, False), (10, False), (-5, False)],
)
def test_cancellation_cutoff(minutes, allowed):
    starts_at = NOW + timedelta(minutes=minutes)
    assert booking_service.can_cancel(starts_at, NOW) is allowed


def test_schedule_days_cover_a_week():
    days = booking_service.schedule_days(NOW.date())

    assert len(days) == 7
    assert days[0] == NOW.date()
    assert days[-1] == NOW.date() + timedelta(days=6)


def test_portal_schedule_hides_started_and_marks_bookings(db_session, monkeypatch):
    client = add_client(db_session)
    started = _add_class(db_session, NOW - timedelta(minutes=30), name="Утро")
    booked = _add_class(db_session, NOW + timedelta(hours=2), name="День")
    _add_class(db_session, NOW + timedelta(hours=4), name="Полный")
    db_session.add(models.AttendanceRecord(client_id=client.id, class_id=booked.id, status=models.AttendanceStatus.booked))
    db_session.commit()
    monkeypatch.setattr(
        booking_service.schedule_service.rpc,
        "get_classes_with_occupancy",
        lambda db, start, end: _occupancy_rows(db),
    )

    selected, days, classes = booking_service.portal_schedule(db_session, client, now=NOW)

    assert selected == days[0]
    names = {row["name"]: row for row in classes}
    assert started.name not in names
    assert names["День"]["is_booked"] is True
    assert names["Полный"]["is_full"] is True
    assert names["Полный"]["spots_left"] == 0


def test_portal_schedule_rejects_days_outside_window(db_session):
    client = add_client(db_session)

    with pytest.raises(booking_service.BookingError):
        booking_service.portal_schedule(db_session, client, NOW.date() + timedelta(days=7), now=NOW)


def test_my_bookings_are_future_and_sorted(db_session):
    client = add_client(db_session)
    later = _add_class(db_session, NOW + timedelta(days=1), name="Вечер")
    soon = _add_class(db_session, NOW + timedelta(minutes=30), name="Скоро")
    past = _add_class(db_session, NOW - timedelta(days=1), name="Вчера")
    for scheduled in (later, soon, past):
        db_session.add(
            models.AttendanceRecord(
                client_id=client.id, class_id=scheduled.id, status=models.AttendanceStatus.booked
            )
        )
    db_session.commit()

    bookings = booking_service.my_bookings(db_session, client, now=NOW)

    assert [item["class_name"] for item in bookings] == ["Скоро", "Вечер"]
    assert bookings[0]["can_cancel"] is False
    assert bookings[0]["minutes_left"] == 30
    assert bookings[1]["can_cancel"] is True


def test_cancel_checks_owner_and_cutoff(db_session, monkeypatch):
    owner = add_client(db_session, user_id=uuid.uuid4())
    stranger = add_client(db_session, first_name="Дана", user_id=uuid.uuid4())
    scheduled = _add_class(db_session, NOW + timedelta(minutes=60))
    record = models.AttendanceRecord(
        client_id=owner.id, class_id=scheduled.id, status=models.AttendanceStatus.booked
    )
    db_session.add(record)
    db_session.commit()
    cancelled = []
    monkeypatch.setattr(
        rpc, "client_cancel_booking", lambda db, attendance_id, claims: cancelled.append(attendance_id)
    )
    user = security.AuthUser(id=str(owner.user_id), email=None, claims={"sub": str(owner.user_id)})

    with pytest.raises(booking_service.BookingNotFound):
        booking_service.cancel(db_session, user, stranger, record.id, now=NOW)
    with pytest.raises(booking_service.CancellationClosed):
        booking_service.cancel(db_session, user, owner, record.id, now=NOW)

    booking_service.cancel(db_session, user, owner, record.id, now=NOW - timedelta(hours=1))
    assert cancelled == [record.id]


def test_portal_booking_api(make_client, session_factory, monkeypatch):
    user_id = uuid.uuid4()
    db = session_factory()
    add_client(db, user_id=user_id)
    now = datetime.now(timezone.utc)
    upcoming = _add_class(db, now + timedelta(days=1))
    closing = _add_class(db, now + timedelta(minutes=45), name="Скоро")
    client = db.query(models.Client).filter_by(user_id=user_id).one()
    late_booking = models.AttendanceRecord(
        client_id=client.id, class_id=closing.id, status=models.AttendanceStatus.booked
    )
    db.add(late_booking)
    db.commit()
    upcoming_id, late_id = upcoming.id, late_booking.id
    db.close()

    claims_seen = []

    def fake_book(db, class_id, claims):
        claims_seen.append(claims["sub"])
        raise rpc.ProcedureError(rpc.CLIENT_BOOK_CLASS, "Class is full")

    monkeypatch.setattr(rpc, "client_book_class", fake_book)
    api = make_client(portal, admin=False)
    headers = bearer(str(user_id), "77011234567@balance.yoga")

    full = api.post("/api/v1/portal/bookings", json={"class_id": str(upcoming_id)}, headers=headers)
    assert full.status_code == 409
    assert full.json()["detail"] == "Class is full"
    assert claims_seen == [str(user_id)]

    refused = api.delete(f"/api/v1/portal/bookings/{late_id}", headers=headers)
    assert refused.status_code == 409
    assert "90" in refused.json()["detail"]

    bookings = api.get("/api/v1/portal/bookings", headers=headers).json()
    assert bookings[0]["can_cancel"] is False


def test_portal_requires_linked_client(make_client):
    api = make_client(portal, admin=False)

    assert api.get("/api/v1/portal/home").status_code == 401
    response = api.get("/api/v1/portal/home", headers=bearer(str(uuid.uuid4())))
    assert response.status_code == 404
    assert response.json()["detail"] == "Client profile not found"


def test_book_refuses_classes_beyond_the_window(db_session, monkeypatch):
    client = add_client(db_session, user_id=uuid.uuid4())
    far = _add_class(db_session, NOW + timedelta(days=30), name="Через месяц")
    next_week = _add_class(db_session, NOW + timedelta(days=6), name="Через неделю")
    booked = []
    monkeypatch.setattr(rpc, "client_book_class", lambda db, class_id, claims: booked.append(class_id))
    user = security.AuthUser(id=str(client.user_id), email=None, claims={"sub": str(client.user_id)})

    with pytest.raises(booking_service.BookingError, match="Only the next 7 days"):
        booking_service.book(db_session, user, far.id, now=NOW)
    booking_service.book(db_session, user, next_week.id, now=NOW)

    assert booked == [next_week.id]
