from balance_studio.api.routes import instructors, news, plans, profiles, settings
from balance_studio.db import models


def test_plans_sorted_by_price_and_features_parsed(make_client):
    api = make_client(plans)

    api.post("/api/v1/plans", json={"name": "Безлимит", "price": 45000, "sessions_count": 0})
    created = api.post(
        "/api/v1/plans",
        json={
            "name": "4 занятия",
            "price": 14000,
            "sessions_count": 4,
            "features": "Коврик бесплатно\n\n Заморозка 7 дней ",
        },
    )
    assert created.status_code == 201
    assert created.json()["features"] == ["Коврик бесплатно", "Заморозка 7 дней"]

    names = [plan["name"] for plan in api.get("/api/v1/plans").json()]
    assert names == ["4 занятия", "Безлимит"]


def test_instructor_specialization_from_text(make_client):
    api = make_client(instructors)

    created = api.post(
        "/api/v1/instructors",
        json={"first_name": "Алия", "last_name": "Серикова", "specialization": "Хатха, Йин ,"},
    )
    assert created.status_code == 201
    body = created.json()
    assert body["specialization"] == ["Хатха", "Йин"]
    assert body["status"] == "active"

    archived = api.put(
        f"/api/v1/instructors/{body['id']}",
        json={"first_name": "Алия", "last_name": "Серикова", "status": "archived"},
    )
    assert archived.json()["status"] == "archived"
    assert api.post("/api/v1/instructors", json={"first_name": "", "last_name": "X"}).status_code == 422


def test_news_toggle_and_delete(make_client):
    api = make_client(news)

    item = api.post("/api/v1/news", json={"title": "Летнее расписание", "content": "С 1 июля"}).json()
    assert item["is_active"] is True

    hidden = api.patch(f"/api/v1/news/{item['id']}", json={"is_active": False})
    assert hidden.json()["is_active"] is False
    assert api.post("/api/v1/news", json={"title": "", "content": "x"}).status_code == 422
    assert api.delete(f"/api/v1/news/{item['id']}").json() == {"status": "deleted"}
    assert api.get("/api/v1/news").json() == []


def test_studio_settings_defaults_and_upsert(make_client):
    api = make_client(settings)

    assert api.get("/api/v1/settings/studio").json()["name"] == "Balance Yoga Studio"

    updated = api.put(
        "/api/v1/settings/studio",
        json={"name": "Balance", "address": "Алматы, Абая 10", "instagram": "@balance"},
    )
    assert updated.json()["address"] == "Алматы, Абая 10"
    assert api.get("/api/v1/settings/studio").json()["name"] == "Balance"


def test_profile_card_issues_plans(make_client, session_factory):
    db = session_factory()
    profile = models.Profile(first_name="Анна", last_name="Ким")
    plan = models.SubscriptionPlan(name="8 занятий", price=24000, sessions_count=8, duration_days=30)
    db.add_all([profile, plan])
    db.commit()
    profile_id, plan_id = str(profile.id), str(plan.id)
    db.close()
    api = make_client(profiles)

    issued = api.post(
        f"/api/v1/profiles/{profile_id}/subscriptions",
        json={"plan_id": plan_id, "is_active_on_first_visit": True},
    )
    assert issued.status_code == 201
    assert issued.json()["end_date"] is None

    listed = api.get(f"/api/v1/profiles/{profile_id}/subscriptions").json()
    assert listed[0]["plan_name"] == "8 занятий"
    assert api.get("/api/v1/profiles/0b7d9d3c-6b36-4bd4-9dd3-53a3d1ad1f0e").status_code == 404


def test_blank_news_is_rejected_before_saving(make_client):
    api = make_client(news)

    blank_title = api.post("/api/v1/news", json={"title": "   ", "content": "x"})
    blank_content = api.post("/api/v1/news", json={"title": "Анонс", "content": " \n "})

    assert blank_title.status_code == 422
    assert blank_content.status_code == 422
    assert api.get("/api/v1/news").json() == []

    stripped = api.post("/api/v1/news", json={"title": "  Анонс ", "content": " Текст "}).json()
    assert stripped["title"] == "Анонс"
    assert stripped["content"] == "Текст"


def test_issued_plan_cannot_be_deleted(make_client, enforce_foreign_keys):
    db = enforce_foreign_keys()
    profile = models.Profile(first_name="Анна", last_name="Ким")
    plan = models.SubscriptionPlan(name="8 занятий", price=24000, sessions_count=8, duration_days=30)
    db.add_all([profile, plan])
    db.commit()
    db.add(models.UserSubscription(user_id=profile.id, plan_id=plan.id, sessions_left=8))
    db.commit()
    plan_id = str(plan.id)
    db.close()
    api = make_client(plans)

    response = api.delete(f"/api/v1/plans/{plan_id}")

    assert response.status_code == 409
    assert response.json()["detail"] == "Plan has been issued to clients and cannot be deleted"
    assert [item["id"] for item in api.get("/api/v1/plans").json()] == [plan_id]
