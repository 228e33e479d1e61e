"""
Tests for the contacts HTTP API.

Every test runs against both the in-memory and the SQLite store.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from contacts_api.api.app import create_app
from contacts_api.config import settings
from contacts_api.repositories import InMemoryContactRepository


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value)


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Contacts API"
    assert data["endpoints"]["contacts"] == "/contacts"


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_contact_lifecycle(client):
    """Create, read, update, delete, then read again."""
    response = client.post("/contacts", json={"name": "Artur Daniel", "phone": "79900000000"})
    assert response.status_code == 201
    created = response.json()
    assert created["id"] == 1
    assert created["name"] == "Artur Daniel"
    assert created["phone"] == "79900000000"

    response = client.get("/contacts/1")
    assert response.status_code == 200
    assert response.json() == created

    response = client.patch("/contacts/1", json={"phone": "79911111111"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["phone"] == "79911111111"
    assert updated["name"] == "Artur Daniel"
    assert updated["createdAt"] == created["createdAt"]

    response = client.delete("/contacts/1")
    assert response.status_code == 204
    assert response.content == b""

    response = client.get("/contacts/1")
    assert response.status_code == 404
    assert response.json() == {"message": "Contact not found"}


def test_create_sets_equal_timestamps(client):
    """A new contact has createdAt == updatedAt."""
    created = client.post("/contacts", json={"name": "Maria Helena", "phone": "11987654321"}).json()
    assert created["createdAt"] == created["updatedAt"]

    fetched = client.get(f"/contacts/{created['id']}").json()
    assert fetched["name"] == "Maria Helena"
    assert fetched["phone"] == "11987654321"
    assert fetched["createdAt"] == fetched["updatedAt"]


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ({}, "Name and phone are required."),
        ({"name": "Artur Daniel"}, "Name and phone are required."),
        ({"name": "", "phone": "79900000000"}, "Name and phone are required."),
        (
            {"name": "Artur Daniel", "phone": "79900000000", "email": "a@b.c", "age": 3},
            "Invalid parameters: email, age",
        ),
        (
            {"name": "Jo Al", "phone": "79900000000"},
            "Name must contain at least two words, each with a minimum of three letters.",
        ),
        (
            {"name": "Artur", "phone": "79900000000"},
            "Name must contain at least two words, each with a minimum of three letters.",
        ),
        ({"name": "Artur Daniel", "phone": "1234567890"}, "Phone must be in the format XX9XXXXXXXX."),
        ({"name": "Artur Daniel", "phone": "79800000000"}, "Phone must be in the format XX9XXXXXXXX."),
        ({"name": "Artur Daniel", "phone": 79900000000}, "Phone must be in the format XX9XXXXXXXX."),
    ],
)
def test_create_rejects_invalid_body(client, body, message):
    response = client.post("/contacts", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": message}


def test_create_rejects_non_object_body(client):
    response = client.post("/contacts", json=["Artur Daniel", "79900000000"])
    assert response.status_code == 400
    assert response.json() == {"message": "Request body must be a JSON object."}


def test_create_rejects_malformed_json(client):
    response = client.post(
        "/contacts",
        content=b'{"name": "Artur Daniel",',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Malformed JSON body."}


def test_validation_failure_does_not_persist(client):
    client.post("/contacts", json={"name": "Jo Al", "phone": "79900000000"})
    response = client.get("/contacts")
    assert response.status_code == 404


@pytest.mark.parametrize("contact_id", ["999", "abc", "1.5", "-1"])
def test_get_unknown_contact(client, seed_contacts, contact_id):
    seed_contacts(1)
    response = client.get(f"/contacts/{contact_id}")
    assert response.status_code == 404
    assert response.json() == {"message": "Contact not found"}


def test_get_accepts_integral_id_forms(client, seed_contacts):
    seed_contacts(1)
    assert client.get("/contacts/1.0").status_code == 200
    assert client.get("/contacts/01").status_code == 200


@pytest.mark.parametrize("contact_id", ["99999999999999999999", "-99999999999999999999", "1e300"])
def test_out_of_range_id_is_not_found(client, seed_contacts, contact_id):
    seed_contacts(1)

    assert client.get(f"/contacts/{contact_id}").status_code == 404
    assert client.patch(f"/contacts/{contact_id}", json={"phone": "79911111111"}).status_code == 404
    assert client.delete(f"/contacts/{contact_id}").status_code == 404
    assert client.get("/contacts").json()["total"] == 1


def test_list_paginates(client, seed_contacts):
    seed_contacts(15)

    response = client.get("/contacts", params={"page": 1, "limit": 10})
    assert response.status_code == 200
    data = response.json()
    assert data["page"] == 1
    assert data["limit"] == 10
    assert data["total"] == 15
    assert len(data["contacts"]) == 10
    assert [c["id"] for c in data["contacts"]] == list(range(1, 11))

    response = client.get("/contacts", params={"page": 2, "limit": 10})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 15
    assert [c["id"] for c in data["contacts"]] == list(range(11, 16))


def test_list_uses_defaults(client, seed_contacts):
    seed_contacts(12)
    data = client.get("/contacts").json()
    assert data["page"] == 1
    assert data["limit"] == 10
    assert len(data["contacts"]) == 10

    data = client.get("/contacts?page=&limit=").json()
    assert data["page"] == 1
    assert data["limit"] == 10


def test_list_empty_store_is_not_found(client):
    response = client.get("/contacts")
    assert response.status_code == 404
    assert response.json() == {"message": "No contacts found.", "page": 1, "limit": 10}


def test_list_page_past_the_end_is_not_found(client, seed_contacts):
    seed_contacts(3)
    response = client.get("/contacts", params={"page": 3, "limit": 2})
    assert response.status_code == 404
    assert response.json() == {"message": "No contacts found.", "page": 3, "limit": 2}


@pytest.mark.parametrize(
    ("query", "message"),
    [
        ("?sort=name", "Invalid parameters: sort"),
        ("?page=1&sort=name&order=asc", "Invalid parameters: sort, order"),
        ("?page=0", "Page must be a positive integer."),
        ("?page=abc", "Page must be a positive integer."),
        ("?page=1.5", "Page must be a positive integer."),
        ("?limit=-5", "Limit must be a positive integer."),
        ("?page=2&limit=x", "Limit must be a positive integer."),
        ("?page=99999999999999999999", "Page must be a positive integer."),
        ("?limit=99999999999999999999", "Limit must be a positive integer."),
        ("?page=4611686018427387904&limit=10", "Page must be a positive integer."),
        ("?page=abc&page=1", "Page must be a positive integer."),
        ("?page=1&page=1", "Page must be a positive integer."),
        ("?limit=5&limit=10", "Limit must be a positive integer."),
    ],
)
def test_list_rejects_invalid_query(client, seed_contacts, query, message):
    seed_contacts(1)
    response = client.get(f"/contacts{query}")
    assert response.status_code == 400
    assert response.json() == {"message": message}


def test_update_phone_only(client, seed_contacts):
    original = seed_contacts(1)[0]

    response = client.patch(f"/contacts/{original['id']}", json={"phone": "79900000000"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["name"] == original["name"]
    assert updated["phone"] == "79900000000"
    assert _ts(updated["updatedAt"]) > _ts(updated["createdAt"])


def test_update_phone_only_with_integral_id_form(client, seed_contacts):
    original = seed_contacts(1)[0]

    response = client.patch("/contacts/1.0", json={"phone": "79911111111"})
    assert response.status_code == 200
    assert response.json()["id"] == original["id"]
    assert response.json()["name"] == original["name"]
    assert client.get("/contacts/1").json()["phone"] == "79911111111"


def test_update_null_name_keeps_stored_name(client, seed_contacts):
    original = seed_contacts(1)[0]

    response = client.patch(f"/contacts/{original['id']}", json={"name": None, "phone": "79911111111"})
    assert response.status_code == 200
    assert response.json()["name"] == original["name"]


def test_update_name_only(client, seed_contacts):
    original = seed_contacts(1)[0]

    response = client.patch(f"/contacts/{original['id']}", json={"name": "Joana Prado Lima"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["name"] == "Joana Prado Lima"
    assert updated["phone"] == original["phone"]

    assert client.get(f"/contacts/{original['id']}").json() == updated


def test_update_unknown_contact_checked_before_body(client):
    response = client.patch("/contacts/42", json={"email": "x@y.z"})
    assert response.status_code == 404
    assert response.json() == {"message": "Contact not found."}


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ({"email": "x@y.z"}, "Invalid parameters: email"),
        ({"name": "Al Bo"}, "Name must contain at least two words, each with a minimum of three letters."),
        ({"name": ""}, "Name must contain at least two words, each with a minimum of three letters."),
        ({"phone": "123"}, "Phone must be in the format XX9XXXXXXXX."),
    ],
)
def test_update_rejects_invalid_body(client, seed_contacts, body, message):
    original = seed_contacts(1)[0]

    response = client.patch(f"/contacts/{original['id']}", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": message}
    assert client.get(f"/contacts/{original['id']}").json() == original


def test_update_empty_phone_keeps_stored_phone(client, seed_contacts):
    original = seed_contacts(1)[0]

    response = client.patch(f"/contacts/{original['id']}", json={"name": "Novo Nome", "phone": ""})
    assert response.status_code == 200
    assert response.json()["phone"] == original["phone"]


def test_delete_unknown_contact(client):
    response = client.delete("/contacts/7")
    assert response.status_code == 404
    assert response.json() == {"message": "Contact not found."}


def test_delete_removes_only_that_contact(client, seed_contacts):
    seed_contacts(3)
    assert client.delete("/contacts/2").status_code == 204

    data = client.get("/contacts").json()
    assert data["total"] == 2
    assert [c["id"] for c in data["contacts"]] == [1, 3]


def test_unknown_route_uses_message_body(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_cors_preflight(client):
    response = client.options(
        "/contacts",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "PATCH",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "PATCH" in response.headers["access-control-allow-methods"]


def test_openapi_documents_contact_routes(client):
    schema = client.get("/openapi.json").json()
    assert set(schema["paths"]["/contacts"]) == {"get", "post"}
    assert set(schema["paths"]["/contacts/{id}"]) == {"get", "patch", "delete"}
    assert "requestBody" in schema["paths"]["/contacts"]["post"]


def test_default_app_starts_with_configured_store():
    with TestClient(create_app()) as test_client:
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "storage": settings.storage_backend}

        created = test_client.post("/contacts", json={"name": "Artur Daniel", "phone": "79900000000"})
        assert created.status_code == 201
        assert test_client.get(f"/contacts/{created.json()['id']}").status_code == 200


class _BrokenRepository(InMemoryContactRepository):
    def find_by_id(self, contact_id):
        raise RuntimeError("database is down")


def test_store_failure_returns_generic_500():
    app = create_app(repository=_BrokenRepository())
    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/contacts/1")
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
