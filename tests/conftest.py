import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-secret")

import uuid
from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from balance_studio.api import deps
from balance_studio.core import security
from balance_studio.db import models
from balance_studio.db.session import Base, get_db

ADMIN = security.AuthUser(id=str(uuid.uuid4()), email="admin@balance.yoga")


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    return TestingSessionLocal


@pytest.fixture()
def enforce_foreign_keys(session_factory):
    # StaticPool keeps a single connection, so the pragma sticks for the test.
    engine = session_factory.kw["bind"]
    with engine.connect() as connection:
        connection.exec_driver_sql("PRAGMA foreign_keys=ON")
    return session_factory


@pytest.fixture()
def make_client(session_factory):
    """Build a TestClient over the given routers with the database swapped out."""
    apps = []

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    def factory(*route_modules, admin=True, user=None):
        test_app = FastAPI()
        for module in route_modules:
            test_app.include_router(module.router, prefix="/api/v1")
        test_app.dependency_overrides[get_db] = override_get_db
        if admin:
            test_app.dependency_overrides[deps.get_current_admin] = lambda: ADMIN
        if user is not None:
            test_app.dependency_overrides[deps.get_current_user] = lambda: user
        apps.append(test_app)
        return TestClient(test_app)

    yield factory
    for test_app in apps:
        test_app.dependency_overrides.clear()


def bearer(sub: str, email: str | None = None, expires: timedelta | None = None) -> dict[str, str]:
    token = security.create_access_token({"sub": sub, "email": email}, expires)
    return {"Authorization": f"Bearer {token}"}


def add_client(db, **kwargs) -> models.Client:
    values = {"first_name": "Анна", "last_name": "Ким", "phone": "77011234567"}
    values.update(kwargs)
    client = models.Client(**values)
    db.add(client)
    db.commit()
    return client
