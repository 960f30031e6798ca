import pytest
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture
def client():
    """Client whose startup event gives every test an empty store."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded_client(client):
    for value in ["racecar", "hello world", "Was it a car or a cat I saw", "Level", "zebra", "abcde", "noon"]:
        response = client.post("/strings", json={"value": value})
        assert response.status_code == 201
    return client
