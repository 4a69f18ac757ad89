"""
Test configuration and fixtures.

Environment overrides must be set BEFORE any tattoo_workshop import,
since settings and the engine are created at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["NOTIFICATION_WORKER_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from tattoo_workshop.core.auth import create_access_token, hash_password  # noqa: E402
from tattoo_workshop.core.rate_limit import LoginRateLimiter, get_login_rate_limiter  # noqa: E402
from tattoo_workshop.database import engine  # noqa: E402
from tattoo_workshop.main import app  # noqa: E402
from tattoo_workshop.models.user import User  # noqa: E402
from tattoo_workshop.repositories.appointment_repo import AppointmentRepository  # noqa: E402
from tattoo_workshop.repositories.email_repo import EmailRepository  # noqa: E402
from tattoo_workshop.repositories.setting_repo import SettingRepository  # noqa: E402
from tattoo_workshop.schemas.email import EmailConfigUpdate  # noqa: E402
from tattoo_workshop.services.email_service import EmailService  # noqa: E402
from tattoo_workshop.services.email_templates import seed_default_templates  # noqa: E402
from tattoo_workshop.services.notification_queue import (  # noqa: E402
    get_email_service,
    get_notification_queue,
)
from tattoo_workshop.services.settings_service import SettingsService  # noqa: E402

ADMIN_PASSWORD = "Admin1234"
STAFF_PASSWORD = "Staff1234"


class RecordingQueue:
    """Stands in for NotificationQueue; remembers what routes enqueue."""

    def __init__(self):
        self.jobs: list[tuple[str, int, object]] = []

    def enqueue(self, kind, appointment_id, old_date=None):
        self.jobs.append((kind, appointment_id, old_date))

    def kinds(self) -> list[str]:
        return [kind for kind, _, _ in self.jobs]


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh schema plus default templates for every test."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        seed_default_templates(session)
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session():
    with Session(engine) as session:
        yield session


@pytest.fixture
def recording_queue():
    return RecordingQueue()


@pytest.fixture
def limiter():
    return LoginRateLimiter()


@pytest.fixture
def sender():
    """Replaces the SMTP send function."""
    return MagicMock(return_value=None)


@pytest.fixture
def email_service(sender):
    return EmailService(
        EmailRepository(),
        AppointmentRepository(),
        SettingsService(SettingRepository()),
        sender=sender,
    )


@pytest.fixture
def client(recording_queue, limiter, email_service):
    app.dependency_overrides[get_notification_queue] = lambda: recording_queue
    app.dependency_overrides[get_login_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_email_service] = lambda: email_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _create_user(session: Session, email: str, password: str, role: str, **kwargs) -> User:
    user = User(
        name=kwargs.pop("name", email.split("@")[0].title()),
        email=email,
        password_hash=hash_password(password),
        role=role,
        **kwargs,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def admin_user(session):
    return _create_user(session, "admin@example.com", ADMIN_PASSWORD, "admin")


@pytest.fixture
def staff_user(session):
    return _create_user(session, "reception@example.com", STAFF_PASSWORD, "receptionist")


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token(admin_user)}"}


@pytest.fixture
def staff_headers(staff_user):
    return {"Authorization": f"Bearer {create_access_token(staff_user)}"}


@pytest.fixture
def configure_email(session):
    """Enable email sending (SMTP itself is mocked by `sender`)."""

    def _configure(**overrides):
        values = dict(
            enabled=True,
            smtp_host="smtp.example.com",
            smtp_port=587,
            from_address="studio@example.com",
            reminders_enabled=True,
        )
        values.update(overrides)
        SettingsService(SettingRepository()).update_email_config(
            session, EmailConfigUpdate(**values)
        )

    return _configure
