"""
Pytest configuration and shared fixtures.

Environment variables are set before the package is imported, because
settings are read once at import time.
"""

import os

os.environ.setdefault("CONTACTS_STORAGE", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from contacts_api.api.app import create_app
from contacts_api.repositories import InMemoryContactRepository, SqlContactRepository


@pytest.fixture
def memory_repository():
    """Fresh in-memory contact store."""
    return InMemoryContactRepository()


@pytest.fixture
def sql_repository():
    """Fresh SQLite in-memory contact store with the table created."""
    repository = SqlContactRepository.create("sqlite://")
    yield repository
    repository.dispose()


@pytest.fixture(params=["memory", "sql"])
def repository(request):
    """Each store implementation in turn."""
    return request.getfixturevalue(f"{request.param}_repository")


@pytest.fixture
def client(repository):
    """Test client running the full app lifespan against each store."""
    with TestClient(create_app(repository=repository)) as test_client:
        yield test_client


@pytest.fixture
def seed_contacts(client):
    """Create ``count`` valid contacts through the API and return their JSON."""

    def _seed(count: int) -> list[dict]:
        created = []
        for i in range(count):
            response = client.post(
                "/contacts",
                json={"name": f"Contact Number{i:02d}", "phone": f"799{i:08d}"},
            )
            assert response.status_code == 201
            created.append(response.json())
        return created

    return _seed
