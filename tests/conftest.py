"""Pytest configuration and fixtures."""

import os
import re

# Use test database - PostgreSQL when TEST_DATABASE_URL is set, SQLite locally
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from authgate import models  # noqa: E402, F401
from authgate.database import Base, get_db  # noqa: E402
from authgate.errors import DeliveryError  # noqa: E402
from authgate.main import app  # noqa: E402
from authgate.services.mailer import get_email_sender  # noqa: E402

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PROFILE = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "password": "correct horse battery",
    "phone": "+44 20 7946 0000",
    "dob": "1990-12-10",
    "address": "12 St James's Square, London",
}


class FakeEmailSender:
    """Records outgoing mail instead of talking to SMTP."""

    def __init__(self):
        self.sent: list[tuple[str, str, str]] = []
        self.fail = False

    async def send(self, to_address: str, subject: str, body: str) -> None:
        if self.fail:
            raise DeliveryError()
        self.sent.append((to_address, subject, body))

    def last_code(self, email: str) -> int:
        """Code from the most recent message sent to ``email``."""
        for to_address, _, body in reversed(self.sent):
            if to_address == email:
                return int(re.search(r"\d{6}", body).group())
        raise AssertionError(f"No mail sent to {email}")


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def outbox():
    """Fake email sender shared by the app and the test."""
    return FakeEmailSender()


@pytest.fixture(scope="function")
def client(db, outbox):
    """Create a test client with database and mailer overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: outbox
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def verified(client, outbox):
    """Run send-code and verify-email; return a callable giving the verified token."""

    def _verify(email: str = "ada@example.com") -> str:
        response = client.post("/api/v1/auth/send-code", json={"email": email})
        assert response.status_code == 200
        pending_token = response.json()["token"]

        response = client.post(
            "/api/v1/auth/verify-email",
            json={"email": email, "code": outbox.last_code(email), "token": pending_token},
        )
        assert response.status_code == 200
        return response.json()["token"]

    return _verify


@pytest.fixture
def auth_headers(client, verified):
    """Register a user and return bearer auth headers."""
    email = "ada@example.com"
    token = verified(email)
    response = client.post("/api/v1/auth/register", json={**PROFILE, "email": email, "token": token})
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def profile():
    """Registration fields without email or token."""
    return dict(PROFILE)
