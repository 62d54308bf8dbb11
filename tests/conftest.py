import pytest
from fastapi.testclient import TestClient

from todo_service.main import create_app
from todo_service.repositories import InMemoryRepository


@pytest.fixture()
def repo():
    return InMemoryRepository()


@pytest.fixture()
def client(repo):
    # Fresh store per test; the context manager runs the app lifespan
    with TestClient(create_app(repository=repo)) as c:
        yield c


@pytest.fixture()
def register(client):
    def _register(username="ana", name="Ana"):
        res = client.post("/users", json={"name": name, "username": username})
        assert res.status_code == 201
        return res.json()

    return _register
