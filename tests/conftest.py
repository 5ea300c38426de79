"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("MAIL_BACKEND", "console")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from ecobite import models  # noqa: E402, F401
from ecobite.api.dependencies import get_mail_backend  # noqa: E402
from ecobite.database import Base, get_db  # noqa: E402
from ecobite.main import app  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores user_id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


class RecordingMailer:
    """Mail backend that keeps messages in memory."""

    def __init__(self):
        self.sent: list[dict] = []
        self.fail = False

    def deliver(self, to: str, subject: str, body: str) -> bool:
        if self.fail:
            return False
        self.sent.append({"to": to, "subject": subject, "body": body})
        return True

    def last_code(self, email: str) -> str:
        """Pull the code out of the newest message sent to an address."""
        message = next(m for m in reversed(self.sent) if m["to"] == email)
        return message["body"].split("<h1>")[1].split("</h1>")[0]


SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
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
def mailer():
    return RecordingMailer()


@pytest.fixture(scope="function")
def client(db, mailer):
    """Create a test client with database and mail overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_backend] = lambda: mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client, mailer):
    """Run the send-code + register flow and return the response."""

    def _register(email: str, password: str = "testpass123"):
        response = client.post("/auth/send-code", json={"email": email})
        assert response.status_code == 200
        return client.post(
            "/auth/register",
            json={
                "email": email,
                "password": password,
                "verificationCode": mailer.last_code(email),
            },
        )

    return _register


@pytest.fixture
def auth_headers(register):
    """Create a user and return auth headers with user info."""
    response = register("test@example.com")
    assert response.status_code == 201
    data = response.json()

    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def other_auth_headers(register):
    """A second, unrelated user."""
    response = register("other@example.com")
    assert response.status_code == 201
    data = response.json()

    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def other_db(db):
    """A second, independent session on the same database."""
    session = TestingSessionLocal()
    yield session
    session.rollback()
    session.close()
