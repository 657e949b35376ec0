# tests/conftest.py

from datetime import date

import pytest
from fastapi.testclient import TestClient

from taskboard.database import Database
from taskboard.dependencies import get_today
from taskboard.main import create_app
from taskboard.repositories import CredentialStore, TaskRepository
from taskboard.security import PasswordHasher

TEST_SECRET = "test-secret-key"
TEST_ROUNDS = 4  # bcrypt minimum, keeps the suite fast
TODAY = date(2024, 5, 15)  # a Wednesday


@pytest.fixture()
def database():
    db = Database("sqlite://")
    db.open()
    yield db
    db.close()


@pytest.fixture()
def session(database):
    with database.session() as session:
        yield session


@pytest.fixture()
def users(session):
    return CredentialStore(session)


@pytest.fixture()
def tasks(session):
    return TaskRepository(session)


@pytest.fixture()
def hasher():
    return PasswordHasher(rounds=TEST_ROUNDS)


@pytest.fixture()
def app(database):
    app = create_app(database=database, secret_key=TEST_SECRET, bcrypt_rounds=TEST_ROUNDS)
    app.dependency_overrides[get_today] = lambda: TODAY
    return app


@pytest.fixture()
def client(app):
    with TestClient(app) as client:
        yield client


def register(client, name="Ana", email="a@x.com", password="secret"):
    return client.post(
        "/cadastro",
        json={"name": name, "email": email, "password": password, "confirmPassword": password},
    )


def login(client, email="a@x.com", password="secret"):
    return client.post("/login", json={"email": email, "password": password})


@pytest.fixture()
def make_user(client, app):
    """Register and log in a user; returns (user id, auth headers)."""

    def _make_user(name="Ana", email="a@x.com", password="secret"):
        assert register(client, name, email, password).status_code == 201
        token = login(client, email, password).json()["token"]
        claims = app.state.token_service.verify(token)
        return claims.id, {"Authorization": f"Bearer {token}"}

    return _make_user
