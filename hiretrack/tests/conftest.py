"""
Pytest fixtures for HireTrack API tests.
Uses in-memory SQLite, mocks Redis, records outgoing email, provides test users and auth tokens.
"""
import os
import tempfile
from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Set before config/session load; must override any .env values
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["REDIS_URL"] = ""
os.environ["SMTP_HOST"] = ""
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["AWS_ACCESS_KEY_ID"] = ""
os.environ["AWS_SECRET_ACCESS_KEY"] = ""
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="hiretrack-cvs-")

from hiretrack.app.db.base import Base
from hiretrack.main import app
from hiretrack.app.core.dependencies import get_db
from hiretrack.app.core.exceptions import DeliveryFailure
from hiretrack.app.core.security import create_access_token, get_password_hash
from hiretrack.app.models.application import Application
from hiretrack.app.models.reminder import Reminder
from hiretrack.app.models.user import User
from hiretrack.app.utils.dates import utcnow

# In-memory SQLite for tests - StaticPool ensures all sessions share same DB
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Patch the session module so the app and the tasks use our test engine
import hiretrack.app.db.session as session_module
session_module.engine = engine
session_module.SessionLocal = TestingSessionLocal


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


class RecordingSender:
    """Stands in for EmailSender: records every send, fails for addresses in `fail_for`."""

    def __init__(self, fail_for=()):
        self.sent = []
        self.attempts = []
        self.fail_for = set(fail_for)
        self.before_send = None

    def send(self, to, subject, body_html):
        self.attempts.append({"to": to, "subject": subject, "html": body_html})
        if self.before_send:
            self.before_send(to, subject)
        if to in self.fail_for:
            raise DeliveryFailure(f"Mailbox unavailable: {to}")
        message_id = f"<test-{len(self.attempts)}@hiretrack>"
        self.sent.append({"to": to, "subject": subject, "html": body_html, "messageId": message_id})
        return {"success": True, "messageId": message_id}


@pytest.fixture(scope="function")
def db_session():
    """Create tables and a fresh DB session per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


def _make_user(db, user_id, email, first_name="Test"):
    user = User(
        id=user_id,
        first_name=first_name,
        last_name="User",
        email=email,
        hashed_password=get_password_hash("testpass123"),
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_user(db_session):
    """Create a test user in the DB."""
    return _make_user(db_session, 1, "test@example.com")


@pytest.fixture
def other_user(db_session):
    """A second tenant, for ownership checks."""
    return _make_user(db_session, 2, "other@example.com", first_name="Other")


@pytest.fixture
def auth_headers(test_user):
    """Bearer token for test user."""
    token = create_access_token(data={"sub": str(test_user.id), "email": test_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user):
    token = create_access_token(data={"sub": str(other_user.id), "email": other_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(db_session, test_user):
    """TestClient with DB and test user pre-seeded."""
    return TestClient(app)


@pytest.fixture
def make_application(db_session):
    def _make(user, job_title="Backend Engineer", company="Acme", status="APPLIED"):
        application = Application(user_id=user.id, job_title=job_title, company=company, status=status)
        db_session.add(application)
        db_session.commit()
        db_session.refresh(application)
        return application

    return _make


@pytest.fixture
def make_reminder(db_session):
    def _make(application, reminder_date=None, title="Follow up", description="", **flags):
        reminder = Reminder(
            user_id=application.user_id,
            application_id=application.id,
            title=title,
            description=description,
            reminder_date=reminder_date or utcnow() - timedelta(hours=1),
            **flags,
        )
        db_session.add(reminder)
        db_session.commit()
        db_session.refresh(reminder)
        return reminder

    return _make


@pytest.fixture
def make_sender():
    """Factory for recording senders passed explicitly to sweeps."""
    return RecordingSender


@pytest.fixture
def sender():
    """Recording sender installed as the process-wide email sender."""
    recording = RecordingSender()
    with patch("hiretrack.app.services.notification_service.get_email_sender", return_value=recording):
        yield recording


@pytest.fixture(autouse=True)
def mock_redis():
    """Mock Redis cache: get returns None (cache miss), set/delete no-op. Skip connect."""
    with patch("hiretrack.app.utils.cache.get", new_callable=AsyncMock, return_value=None), \
         patch("hiretrack.app.utils.cache.set", new_callable=AsyncMock), \
         patch("hiretrack.app.utils.cache.delete", new_callable=AsyncMock), \
         patch("hiretrack.app.utils.cache.connect", new_callable=AsyncMock):
        yield
