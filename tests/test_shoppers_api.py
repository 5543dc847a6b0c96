"""Integration tests for the /shoppers endpoints and the documentation routes."""
from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from shopper_api.app import create_app
from shopper_api.repositories.sql_repository import SQLRepository
from shopper_api.services.shopper_service import ShopperService


@pytest.fixture()
def client(temp_db):
    with TestClient(create_app()) as test_client:
        yield test_client


def _body(username: str = "alice", **overrides) -> dict:
    data = {
        "username": username,
        "fullName": f"{username.title()} Example",
        "email": f"{username}@example.com",
        "street": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zipCode": "62701",
    }
    data.update(overrides)
    return data


def _today() -> str:
    return datetime.now().strftime("%Y-%m-%d")


def test_create_returns_201_with_server_date(client):
    response = client.post("/shoppers", json=_body(dateJoined="1999-01-01"))

    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "alice"
    assert data["fullName"] == "Alice Example"
    assert data["zipCode"] == "62701"
    assert data["dateJoined"] == _today()


def test_create_duplicate_fails(client):
    assert client.post("/shoppers", json=_body()).status_code == 201

    response = client.post("/shoppers", json=_body(email="other@example.com"))

    assert response.status_code == 500
    assert response.json() == {"error": "failed to create shopper"}
    assert client.get("/shoppers/alice").json()["email"] == "alice@example.com"


def test_create_rejects_empty_username(client):
    response = client.post("/shoppers", json=_body(username=""))
    assert response.status_code == 400
    assert "error" in response.json()


def test_create_keeps_username_as_sent(client):
    response = client.post("/shoppers", json=_body(" dave "))

    assert response.status_code == 201
    assert response.json()["username"] == " dave "
    assert client.get("/shoppers/%20dave%20").status_code == 200
    assert client.get("/shoppers/dave").status_code == 404


def test_null_fields_bind_as_empty_strings(client):
    response = client.post("/shoppers", json=_body(fullName=None, zipCode=None))

    assert response.status_code == 201
    assert response.json()["fullName"] == ""
    assert response.json()["zipCode"] == ""

    updated = client.put("/shoppers/alice", json=_body(email=None))
    assert updated.status_code == 200
    assert updated.json()["email"] == ""


def test_create_rejects_malformed_json(client):
    response = client.post(
        "/shoppers",
        content=b'{"username": "alice",',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "invalid request payload"}


def test_list_returns_every_shopper(client):
    assert client.get("/shoppers").json() == {"shoppers": []}

    created = {}
    for name in ("alice", "bob", "carol"):
        created[name] = client.post("/shoppers", json=_body(name)).json()

    response = client.get("/shoppers")

    assert response.status_code == 200
    shoppers = response.json()["shoppers"]
    assert len(shoppers) == 3
    assert {s["username"]: s for s in shoppers} == created


def test_get_round_trip_matches_create(client):
    created = client.post("/shoppers", json=_body()).json()

    response = client.get("/shoppers/alice")

    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_returns_404(client):
    response = client.get("/shoppers/ghost")
    assert response.status_code == 404
    assert response.json() == {"error": "shopper not found"}


def test_update_keeps_username_and_date(client):
    created = client.post("/shoppers", json=_body()).json()

    response = client.put(
        "/shoppers/alice",
        json=_body(
            "someone-else",
            fullName="Alice Renamed",
            email="renamed@example.com",
            street="2 Elm St",
            city="Shelbyville",
            state="KY",
            zipCode="40065",
            dateJoined="1999-01-01",
        ),
    )

    assert response.status_code == 200
    assert response.json() == {
        "username": "alice",
        "fullName": "Alice Renamed",
        "email": "renamed@example.com",
        "street": "2 Elm St",
        "city": "Shelbyville",
        "state": "KY",
        "zipCode": "40065",
        "dateJoined": created["dateJoined"],
    }
    assert client.get("/shoppers/alice").json() == response.json()


def test_update_is_full_replace(client):
    client.post("/shoppers", json=_body())

    response = client.put("/shoppers/alice", json={"email": "only@example.com"})

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "only@example.com"
    assert data["fullName"] == ""
    assert data["city"] == ""


def test_update_missing_returns_404_and_does_not_create(client):
    response = client.put("/shoppers/ghost", json=_body("ghost"))
    assert response.status_code == 404
    assert response.json() == {"error": "shopper not found"}
    assert client.get("/shoppers/ghost").status_code == 404


def test_update_rejects_malformed_json(client):
    client.post("/shoppers", json=_body())
    response = client.put(
        "/shoppers/alice",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "invalid request payload"}


def test_delete_then_get_returns_404(client):
    client.post("/shoppers", json=_body())

    response = client.delete("/shoppers/alice")

    assert response.status_code == 204
    assert response.content == b""
    assert client.get("/shoppers/alice").status_code == 404


def test_delete_missing_returns_404(client):
    response = client.delete("/shoppers/ghost")
    assert response.status_code == 404
    assert response.json() == {"error": "shopper not found"}


def test_responses_carry_request_id(client):
    response = client.get("/shoppers")
    assert response.headers.get("X-Request-ID")


def test_storage_failures_return_500(broken_repository):
    app = create_app(ShopperService(broken_repository))
    with TestClient(app) as broken:
        listed = broken.get("/shoppers")
        fetched = broken.get("/shoppers/alice")

    assert listed.status_code == 500
    assert listed.json() == {"error": "could not fetch shoppers"}
    assert fetched.status_code == 500
    assert "error" in fetched.json()


def test_swagger_documents_routes(client):
    openapi = client.get("/swagger/doc.json")
    assert openapi.status_code == 200
    paths = openapi.json()["paths"]
    assert set(paths["/shoppers"]) == {"get", "post"}
    assert set(paths["/shoppers/{username}"]) == {"get", "put", "delete"}

    ui = client.get("/swagger/index.html")
    assert ui.status_code == 200
    assert "swagger-ui" in ui.text.lower()

    redirect = client.get("/swagger", follow_redirects=False)
    assert redirect.status_code == 307
    assert redirect.headers["location"] == "/swagger/index.html"


def test_broken_repository_does_not_need_a_database(broken_repository, monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with TestClient(create_app(ShopperService(broken_repository))) as broken:
        assert broken.delete("/shoppers/alice").status_code == 500


@pytest.fixture()
def failing_writes_client(failing_writes_repository):
    SQLRepository().create_shopper(
        username="alice",
        full_name="Alice Example",
        email="alice@example.com",
        street="1 Main St",
        city="Springfield",
        state="IL",
        zip_code="62701",
        date_joined="2024-01-02",
    )
    with TestClient(create_app(ShopperService(failing_writes_repository))) as test_client:
        yield test_client


def test_create_storage_failure_returns_500(failing_writes_client):
    response = failing_writes_client.post("/shoppers", json=_body("bob"))

    assert response.status_code == 500
    assert response.json() == {"error": "failed to create shopper"}


def test_update_save_failure_returns_500(failing_writes_client):
    response = failing_writes_client.put("/shoppers/alice", json=_body(city="Shelbyville"))

    assert response.status_code == 500
    assert response.json() == {"error": "failed to update shopper"}
    assert failing_writes_client.get("/shoppers/alice").json()["city"] == "Springfield"


def test_delete_failure_returns_500(failing_writes_client):
    response = failing_writes_client.delete("/shoppers/alice")

    assert response.status_code == 500
    assert response.json() == {"error": "failed to delete shopper"}
    assert failing_writes_client.get("/shoppers/alice").status_code == 200


def test_missing_keys_still_404_when_writes_fail(failing_writes_client):
    assert failing_writes_client.put("/shoppers/ghost", json=_body("ghost")).status_code == 404
    assert failing_writes_client.delete("/shoppers/ghost").status_code == 404
