from datetime import date, datetime, time, timedelta, timezone

import pytest

from balance_studio.api.routes import attendance
from balance_studio.core.timeutils import combine_local, studio_today
from balance_studio.db import models
from balance_studio.services import attendance_service, rpc

from conftest import add_client


def _add_class(db, day: date, hour: int = 19) -> models.ScheduledClass:
    start = combine_local(day, time(hour=hour))
    scheduled = models.ScheduledClass(
        name="Хатха", start_time=start, end_time=start + timedelta(hours=1), max_capacity=10
    )
    db.add(scheduled)
    db.commit()
    return scheduled


@pytest.fixture()
def recorded_visits(monkeypatch):
    calls = []

    def fake_register_visit(db, client_id, class_id):
        calls.append((client_id, class_id))
        return []

    monkeypatch.setattr(rpc, "register_visit", fake_register_visit)
    return calls


def test_past_days_need_pin():
    today = date(2024, 6, 10)

    attendance_service.ensure_editable(today, None, today=today)
    with pytest.raises(attendance_service.PastDateLocked):
        attendance_service.ensure_editable(today - timedelta(days=1), None, today=today)
    with pytest.raises(attendance_service.PastDateLocked):
        attendance_service.ensure_editable(today - timedelta(days=1), "1234", today=today)
    attendance_service.ensure_editable(today - timedelta(days=1), "7777", today=today)


def test_check_in_today_calls_register_visit(db_session, recorded_visits):
    client = add_client(db_session)
    scheduled = _add_class(db_session, studio_today())

    attendance_service.check_in(db_session, client.id, scheduled.id)

    assert recorded_visits == [(client.id, scheduled.id)]


def test_check_in_for_past_class_is_locked(db_session, recorded_visits):
    client = add_client(db_session)
    scheduled = _add_class(db_session, studio_today() - timedelta(days=2))

    with pytest.raises(attendance_service.PastDateLocked):
        attendance_service.check_in(db_session, client.id, scheduled.id)
    attendance_service.check_in(db_session, client.id, scheduled.id, pin="7777")

    assert len(recorded_visits) == 1


def test_recent_log_is_newest_first(db_session):
    client = add_client(db_session)
    now = datetime.now(timezone.utc)
    older = models.AttendanceRecord(client_id=client.id, date=now - timedelta(days=3))
    newer = models.AttendanceRecord(client_id=client.id, date=now)
    db_session.add_all([older, newer])
    db_session.commit()

    log = attendance_service.recent_log(db_session)

    assert [record.id for record in log] == [newer.id, older.id]
    assert log[0].client_name == "Анна Ким"


def test_attendance_api_gate(make_client, session_factory, recorded_visits):
    db = session_factory()
    client = add_client(db)
    past_class = _add_class(db, studio_today() - timedelta(days=1))
    old_visit = models.AttendanceRecord(
        client_id=client.id, class_id=past_class.id, date=past_class.start_time
    )
    db.add(old_visit)
    db.commit()
    payload = {"client_id": str(client.id), "class_id": str(past_class.id)}
    visit_id = old_visit.id
    db.close()
    api = make_client(attendance)

    locked = api.post("/api/v1/attendance/check-in", json=payload)
    assert locked.status_code == 403

    unlocked = api.post(
        "/api/v1/attendance/check-in", json=payload, headers={"X-Attendance-Pin": "7777"}
    )
    assert unlocked.status_code == 201

    assert api.delete(f"/api/v1/attendance/{visit_id}").status_code == 403
    deleted = api.delete(f"/api/v1/attendance/{visit_id}", headers={"X-Attendance-Pin": "7777"})
    assert deleted.json() == {"status": "deleted"}


def test_unlock_checks_pin(make_client):
    api = make_client(attendance)

    assert api.post("/api/v1/attendance/unlock", json={"pin": "0000"}).status_code == 403
    assert api.post("/api/v1/attendance/unlock", json={"pin": "7777"}).json() == {"unlocked": True}


def test_backend_rejection_maps_to_conflict(make_client, session_factory, monkeypatch):
    db = session_factory()
    client = add_client(db)
    scheduled = _add_class(db, studio_today())
    payload = {"client_id": str(client.id), "class_id": str(scheduled.id)}
    db.close()

    def reject(*_args, **_kwargs):
        raise rpc.ProcedureError(rpc.REGISTER_VISIT, "No active subscription")

    monkeypatch.setattr(rpc, "register_visit", reject)
    api = make_client(attendance)

    response = api.post("/api/v1/attendance/check-in", json=payload)

    assert response.status_code == 409
    assert response.json()["detail"] == "No active subscription"
