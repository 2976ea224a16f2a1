import pytest
from fastapi.testclient import TestClient

from ledger.main import app
from ledger.store import HouseholdStore, get_store


@pytest.fixture
def store():
    return HouseholdStore(self_name="Test User", self_email="test@example.com")


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def self_id(store):
    return store.self_id


@pytest.fixture
def second_member(client):
    res = client.post("/api/members", json={"name": "User Two", "email": "user2@example.com"})
    member = res.json()
    client.post(f"/api/members/{member['id']}/accept")
    return member


@pytest.fixture
def third_member(client):
    res = client.post("/api/members", json={"name": "User Three", "email": "user3@example.com"})
    member = res.json()
    client.post(f"/api/members/{member['id']}/accept")
    return member
