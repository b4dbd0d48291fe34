"""
Pytest configuration and shared fixtures.

Settings are read at import time, so the environment is prepared before any
``app`` module is imported. Every test gets a fresh in-memory SQLite schema.
"""

import os

os.environ["BANKSYSTEM_DATABASE_URL"] = "sqlite://"
os.environ["BANKSYSTEM_JWT_SECRET"] = "test_secret_key_at_least_32_characters_long"
os.environ["BANKSYSTEM_SENDGRID_API_KEY"] = ""
os.environ["BANKSYSTEM_LOG_JSON"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.api.deps import get_email_sender  # noqa: E402
from app.core.email import EmailSender  # noqa: E402
from app.db.session import SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base  # noqa: E402


class RecordingEmailSender(EmailSender):
    def __init__(self):
        self.sent = []

    def send_email(self, receiver, subject, html_message):
        self.sent.append((receiver, subject, html_message))
        return True


@pytest.fixture
def db_session():
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture
def client(db_session, email_sender):
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
