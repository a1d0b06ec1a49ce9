import pytest
from fastapi.testclient import TestClient

from chatrelay.main import create_app


@pytest.fixture
def app():
    # fresh in-memory database per test
    return create_app("sqlite://")


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client, app):
    """Session on the same database the client talks to (tables already created)."""
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def register(client):
    def _register(*names):
        for name in names:
            r = client.post("/participants", json={"name": name})
            assert r.status_code == 201, r.text
    return _register
