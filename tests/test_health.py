from chatrelay.core.db import Base


def test_ping(client):
    r = client.get("/health/ping")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_store_counts(client, register):
    register("Alice", "Bob")
    client.post(
        "/messages",
        json={"to": "Todos", "text": "hi", "type": "broadcast"},
        headers={"User": "Alice"},
    )
    assert client.get("/health/store").json() == {"ok": True, "participants": 2, "messages": 3}


def test_routes_listed(client):
    routes = {r["path"]: r["methods"] for r in client.get("/health/routes").json()["routes"]}
    assert routes["/participants"] == ["GET", "POST"]
    assert routes["/messages"] == ["GET", "POST"]
    assert routes["/status"] == ["POST"]
    assert routes["/health/ping"] == ["GET"]


def test_store_failure_is_500_with_diagnostic(app, client):
    Base.metadata.drop_all(app.state.engine)
    r = client.get("/participants")
    assert r.status_code == 500
    assert "participants" in r.json()["detail"]
