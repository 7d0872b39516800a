import pytest
from pydantic import ValidationError

from balance_studio.api.routes import clients
from balance_studio.db import models, schemas
from balance_studio.services import client_service

from conftest import add_client


def test_client_requires_non_blank_names():
    with pytest.raises(ValidationError):
        schemas.ClientCreate(first_name="   ", last_name="Ким")
    with pytest.raises(ValidationError):
        schemas.ClientCreate(first_name="Анна", last_name="")


def test_create_client_defaults(db_session):
    payload = schemas.ClientCreate(first_name=" Анна ", last_name="Ким", email="  ", phone="")

    client = client_service.create_client(db_session, payload)

    assert client.first_name == "Анна"
    assert client.email is None
    assert client.phone is None
    assert client.source == "Администратор"
    assert client.status == models.ClientStatus.active


def test_list_filters_by_query_and_status(db_session):
    add_client(db_session, first_name="Мария", last_name="Иванова", email="maria@example.com")
    add_client(db_session, first_name="Дана", last_name="Омарова", status=models.ClientStatus.frozen)

    assert [c.first_name for c in client_service.list_clients(db_session, q="MARIA")] == ["Мария"]
    frozen = client_service.list_clients(db_session, status=models.ClientStatus.frozen)
    assert [c.first_name for c in frozen] == ["Дана"]


def test_search_matches_names_only_and_limits(db_session):
    for index in range(7):
        add_client(db_session, first_name=f"Ольга{index}", last_name="Петрова")
    add_client(db_session, first_name="Ирина", last_name="Смирнова", email="olga@example.com")

    found = client_service.search_clients(db_session, "Ольга")

    assert len(found) == 5
    assert all(c.first_name.startswith("Ольга") for c in found)


def test_update_rejects_clearing_names(db_session):
    client = add_client(db_session)

    with pytest.raises(client_service.ClientError):
        client_service.update_client(
            db_session, client, schemas.ClientUpdate.model_validate({"first_name": None})
        )


def test_clients_api_crud(make_client):
    api = make_client(clients)

    created = api.post("/api/v1/clients", json={"first_name": "Анна", "last_name": "Ким"})
    assert created.status_code == 201
    client_id = created.json()["id"]

    rejected = api.post("/api/v1/clients", json={"first_name": " ", "last_name": "Ким"})
    assert rejected.status_code == 422

    frozen = api.post(f"/api/v1/clients/{client_id}/status", json={"status": "frozen"})
    assert frozen.json()["status"] == "frozen"

    patched = api.patch(f"/api/v1/clients/{client_id}", json={"phone": "77010000000"})
    assert patched.status_code == 200
    assert patched.json()["phone"] == "77010000000"
    assert patched.json()["first_name"] == "Анна"

    assert api.get("/api/v1/clients/search", params={"q": "А"}).status_code == 422
    assert len(api.get("/api/v1/clients/search", params={"q": "Ан"}).json()) == 1

    assert api.delete(f"/api/v1/clients/{client_id}").json() == {"status": "deleted"}
    assert api.get(f"/api/v1/clients/{client_id}").status_code == 404
