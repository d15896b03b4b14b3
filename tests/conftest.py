import pytest
from fastapi.testclient import TestClient

from gift_planner.database import set_repository
from gift_planner.database.local_client import LocalRepository
from gift_planner.main import app
from gift_planner.store import MemoryStorage


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def repository(storage):
    repo = LocalRepository(storage)
    set_repository(repo)
    yield repo
    repo.close()
    set_repository(None)


@pytest.fixture
def client(repository, monkeypatch):
    monkeypatch.setattr(app.state.limiter, "enabled", False)
    return TestClient(app)


@pytest.fixture
def user(client):
    response = client.post("/api/auth/users", json={"name": "Alice", "email": "alice@example.com"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def other_user(client):
    response = client.post("/api/auth/users", json={"name": "Bob", "email": "bob@example.com"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {user['id']}"}


@pytest.fixture
def group(client, auth_headers):
    response = client.post("/api/groups", json={"name": "Family", "description": "Holidays"}, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def event(client, auth_headers, group):
    response = client.post(
        f"/api/groups/{group['id']}/events",
        json={"name": "Christmas", "date": "2025-12-25T00:00:00Z"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def receiver(client, auth_headers, event):
    response = client.post(f"/api/events/{event['id']}/receivers", json={"name": "Grandma"}, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def wishlist(client, auth_headers, receiver, event):
    response = client.post(
        f"/api/receivers/{receiver['id']}/wishlists",
        json={"eventId": event["id"], "name": "Books"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def gift(client, auth_headers, wishlist):
    response = client.post(
        f"/api/wishlists/{wishlist['id']}/gifts",
        json={"name": "Novel", "link": "https://shop.example.com/novel"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()
