# tests/conftest.py
import os

# Settings are read when ticketdesk.main is imported
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

import pytest
from fastapi.testclient import TestClient

from ticketdesk.auth.passwords import PasswordHasher
from ticketdesk.auth.tokens import TokenService
from ticketdesk.core.config import Settings
from ticketdesk.core.database import Database
from ticketdesk.main import create_app

SECRET = "test-secret-not-for-production"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'tickets.db'}",
        JWT_SECRET=SECRET,
        BCRYPT_ROUNDS=4,
        COOKIE_SECURE=True,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    # https so the secure session cookie is sent back
    with TestClient(app, base_url="https://testserver") as c:
        yield c


@pytest.fixture
def other_client(client):
    # Shares the app and its database, keeps its own cookie jar
    return TestClient(client.app, base_url="https://testserver")


@pytest.fixture
def database(settings):
    database = Database(settings.DATABASE_URL)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    with database.session() as session:
        yield session


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret=SECRET)


def register(client: TestClient, email: str, password: str = "secret1"):
    return client.post("/auth/register", json={"email": email, "password": password})
