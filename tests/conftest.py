"""
Shared fixtures: settings with a fixture secret, an in-memory SQLite
database and a TestClient around a fresh app.
"""

import pytest
from fastapi.testclient import TestClient

from stockroom.api.app import create_app
from stockroom.auth import AccessGuard, TokenIssuer
from stockroom.config import Settings
from stockroom.storage import create_db_engine, create_session_factory, init_db

SECRET = "test-secret-0123456789abcdef0123456789abcdef"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        jwt_secret=SECRET,
        database_url="sqlite://",
        environment="test",
        sentry_dsn="",
    )


@pytest.fixture
def auth_config(settings):
    return settings.auth_config()


@pytest.fixture
def issuer(auth_config):
    return TokenIssuer(auth_config)


@pytest.fixture
def guard(auth_config):
    return AccessGuard(auth_config)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = create_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def client(settings, engine):
    app = create_app(settings, engine=engine)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def token(client):
    response = client.post("/signup", json={"username": "alice", "password": "pw1"})
    assert response.status_code == 201
    return response.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
