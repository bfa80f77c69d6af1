import pytest
from fastapi.testclient import TestClient

from account_service.auth import PasswordHasher, TokenIssuer
from account_service.config import Settings
from account_service.db import Database
from account_service.main import create_app
from account_service.store import UserStore

TEST_SECRET = "test-secret"


@pytest.fixture
def settings():
    # In-memory database and a cheap work factor keep each test isolated and fast
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        JWT_SECRET=TEST_SECRET,
        PASSWORD_HASH_ROUNDS=1000,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def database(settings):
    db = Database(settings)
    db.init_db()
    yield db
    db.close()


@pytest.fixture
def db_session(database):
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store(db_session):
    return UserStore(db_session)


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=1000)


@pytest.fixture
def tokens():
    return TokenIssuer(secret=TEST_SECRET)


def register_user(client, name="Test User", email="test@example.com", password="password123"):
    return client.post(
        "/api/users/register",
        json={"name": name, "email": email, "password": password},
    )
