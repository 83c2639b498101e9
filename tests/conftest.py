from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

# Settings are read at import time, so the environment goes first.
os.environ["ENV"] = "local"
os.environ["AUTH_MODE"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["NOTIFICATIONS_BACKEND"] = "log"
os.environ.setdefault("JWT_SECRET", "test_jwt_secret_32_chars_minimum")
os.environ.setdefault("LOG_FORMAT", "console")

from eventhub.db import SessionLocal, engine  # noqa: E402
from eventhub.main import app  # noqa: E402
from eventhub.models import Base, Profile  # noqa: E402
from eventhub.models.profile import Role  # noqa: E402
from eventhub.notifications import get_dispatcher  # noqa: E402
from tests.factories import RecordingDispatcher, make_profile  # noqa: E402

Base.metadata.create_all(engine)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def clean_db():
    yield
    db = SessionLocal()
    try:
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
    finally:
        db.close()


@pytest.fixture
def dispatcher():
    recorder = RecordingDispatcher()
    app.dependency_overrides[get_dispatcher] = lambda: recorder
    yield recorder
    app.dependency_overrides.pop(get_dispatcher, None)


@pytest.fixture
def organizer(db_session) -> Profile:
    return make_profile(db_session, "org@example.com", Role.ORGANIZER, "Olivia Organizer")


@pytest.fixture
def attendee(db_session) -> Profile:
    return make_profile(db_session, "ann@example.com", Role.ATTENDEE, "Ann Attendee")


@pytest.fixture
def volunteer(db_session) -> Profile:
    return make_profile(db_session, "vic@example.com", Role.VOLUNTEER, "Vic Volunteer")
