"""
Tests for the HTTP routes
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from main import app
from oscar_party.api.deps import get_party_service
from oscar_party.core.config import Settings
from oscar_party.core.db import Base
from oscar_party.services.bootstrap import create_party_service

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_api.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def service():
    """Local-only service wired the same way the app wires it"""
    Base.metadata.create_all(bind=engine)
    party_service = create_party_service(Settings(USE_FIREBASE=False), session_factory=TestingSessionLocal)
    try:
        yield party_service
    finally:
        party_service.channel.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def client(service):
    app.dependency_overrides[get_party_service] = lambda: service
    try:
        # No context manager, the lifespan would build the real service
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def with_categories(client):
    response = client.put("/admin/categories", json={
        "categories": [{"name": "Best Picture", "nominees": ["A", "B"]}]
    })
    assert response.status_code == 200
    return client

def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}

def test_submit_and_lookup(with_categories):
    """A party can be submitted, then found again by any member's name"""
    response = with_categories.post("/guest/submit", json={
        "name": "Bob",
        "rsvp": "yes",
        "party_size": 2,
        "member_names": ["Ann"],
        "predictions": [{"Best Picture": "A"}, {"Best Picture": "B"}]
    })
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Thanks, Bob! Your party of 2 has been registered with 2 ballots submitted."
    party_id = body["data"]["party_id"]

    lookup = with_categories.post("/guest/lookup", json={"name": "ann"}).json()
    assert lookup["data"]["editing_party_id"] == party_id
    assert [m["name"] for m in lookup["data"]["members"]] == ["Bob", "Ann"]

def test_submit_validation_error_is_422(client):
    response = client.post("/guest/submit", json={
        "name": "Cara", "rsvp": "yes", "party_size": 2, "member_names": [""]
    })

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Please enter a name for Guest 2."
    assert body["details"] == {"field": "member_names"}

def test_lookup_unknown_guest(client):
    response = client.post("/guest/lookup", json={"name": "Nobody"})
    assert response.status_code == 404

def test_toggle_winner_and_leaderboard(with_categories):
    with_categories.post("/guest/submit", json={
        "name": "Alice", "rsvp": "yes", "predictions": [{"Best Picture": "A"}]
    })

    toggled = with_categories.post("/admin/winners/Best Picture/toggle", json={"nominee": "A"})
    assert toggled.json()["data"]["nominee"] == "A"

    leaderboard = with_categories.get("/leaderboard").json()["data"]["leaderboard"]
    assert leaderboard == [{"rank": 1, "name": "Alice", "score": 1, "party_id": leaderboard[0]["party_id"]}]

    progress = with_categories.get("/progress").json()["data"]
    assert progress["complete"] is True
    assert progress["overall_winner"]["name"] == "Alice"

    untoggled = with_categories.post("/admin/winners/Best Picture/toggle", json={"nominee": "A"})
    assert untoggled.json()["data"]["nominee"] is None

def test_winner_must_be_nominated(with_categories):
    response = with_categories.put("/admin/winners/Best Picture", json={"nominee": "Z"})
    assert response.status_code == 422

    missing = with_categories.put("/admin/winners/Best Sound", json={"nominee": "A"})
    assert missing.status_code == 404

def test_admin_guest_search_and_party_delete(client):
    client.post("/guest/submit", json={
        "name": "Bob", "rsvp": "yes", "party_size": 2, "member_names": ["Ann"]
    })
    client.post("/guest/submit", json={"name": "Dana", "rsvp": "no"})

    found = client.get("/admin/guests", params={"search": "an"}).json()["data"]
    assert sorted(g["name"] for g in found["guests"]) == ["Ann", "Dana"]
    assert found["pagination"]["total"] == 2

    party_id = next(g["party_id"] for g in found["guests"] if g["name"] == "Ann")
    deleted = client.delete(f"/admin/parties/{party_id}")
    assert deleted.json()["data"] == {"deleted": 2}

    assert client.delete(f"/admin/parties/{party_id}").status_code == 404

def test_show_date_and_stats(client):
    assert client.put("/admin/show-date", json={"show_date": "someday"}).status_code == 422

    saved = client.put("/admin/show-date", json={"show_date": "2025-03-02T23:00:00Z"})
    assert saved.status_code == 200
    assert client.get("/show-date").json()["data"]["show_date"] == "2025-03-02T23:00:00Z"

    stats = client.get("/admin/stats").json()["data"]
    assert stats["total"] == 0
    assert isinstance(stats["days_until_show"], int)

def test_exports(client):
    client.post("/guest/submit", json={"name": "Dana", "rsvp": "no"})

    csv_response = client.get("/admin/export.csv")
    assert csv_response.status_code == 200
    assert csv_response.headers["content-type"].startswith("text/csv")
    assert csv_response.text.split("\n")[1].startswith('"Dana","no"')

    xlsx_response = client.get("/admin/export.xlsx")
    assert xlsx_response.status_code == 200
    assert xlsx_response.content[:2] == b"PK"

def test_sync_errors_in_local_mode(client):
    data = client.get("/admin/sync/errors").json()["data"]
    assert data == {"enabled": False, "errors": []}

def test_websocket_ping(client):
    with client.websocket_connect("/ws/sync") as websocket:
        assert websocket.receive_json()["type"] == "connection"
        websocket.send_json({"type": "ping", "timestamp": 42})
        assert websocket.receive_json() == {"type": "pong", "timestamp": 42}
