"""
Pytest configuration and fixtures for Session Surf Club API tests.
"""
import os
import tempfile

# Settings are read at import time, so the environment is prepared first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="surf_club_uploads_")
os.environ["SMTP_USER"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from surf_club.config import settings
from surf_club.database import Base, get_db
from surf_club.main import app
from surf_club.models import User
from surf_club.services.email_service import email_service
from surf_club.utils.security import get_password_hash, create_access_token

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None

DEFAULT_PASSWORD = "surfpassword"

SESSION_FORM = {
    "title": "Dawn patrol",
    "description": "Glassy and uncrowded",
    "location": "Mundaka",
    "wave_height": "1.5",
    "wave_period": "11",
    "wind_speed": "8",
    "wind_direction": "SW",
    "tide_type": "rising",
    "rating": "4",
}


def get_test_db():
    """Get the shared test database session."""
    global _test_session
    try:
        yield _test_session
    finally:
        pass


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    """Capture outgoing emails instead of talking to SMTP."""
    sent = []

    def fake_send_email(to_email, subject, html_content, text_content=None):
        sent.append({"to": to_email, "subject": subject, "html": html_content, "text": text_content})
        return True

    monkeypatch.setattr(email_service, "send_email", fake_send_email)
    return sent


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    """Store uploads in a per-test directory."""
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    return path


@pytest.fixture(scope="function")
def make_user(db):
    """Factory creating users directly in the database."""

    def _make_user(username="kelly", email=None, password=DEFAULT_PASSWORD, verified=True):
        user = User(
            email=email or f"{username}@example.com",
            username=username,
            password_hash=get_password_hash(password),
            email_verified=verified,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture(scope="function")
def auth_headers_for():
    """Build bearer auth headers for a user."""

    def _headers(user):
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture(scope="function")
def create_session(client, auth_headers_for):
    """Factory posting a session through the API and returning its JSON."""

    def _create(user, **overrides):
        data = {**SESSION_FORM, **overrides}
        response = client.post("/api/sessions", data=data, headers=auth_headers_for(user))
        assert response.status_code == 201, response.text
        return response.json()["session"]

    return _create
