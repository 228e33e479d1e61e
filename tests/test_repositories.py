"""Contract tests run against every ContactStore implementation."""

from dataclasses import replace
from datetime import timedelta

import pytest

from contacts_api.config import get_engine
from contacts_api.protocols import ContactStore
from contacts_api.repositories import (
    InMemoryContactRepository,
    SqlContactRepository,
    create_repository,
)


def test_implementations_satisfy_protocol(memory_repository, sql_repository):
    assert isinstance(memory_repository, ContactStore)
    assert isinstance(sql_repository, ContactStore)


def test_insert_assigns_ids_and_equal_timestamps(repository):
    first = repository.insert("Artur Daniel", "79900000000")
    second = repository.insert("Maria Helena", "11987654321")

    assert (first.id, second.id) == (1, 2)
    assert first.created_at == first.updated_at
    assert first.created_at.tzinfo is not None


def test_find_by_id(repository):
    created = repository.insert("Artur Daniel", "79900000000")

    assert repository.find_by_id(created.id) == created
    assert repository.find_by_id(99) is None
    assert repository.find_by_id(None) is None


def test_find_page_orders_by_id(repository):
    for i in range(5):
        repository.insert(f"Person Number{i}", f"119{i:08d}")

    contacts, total = repository.find_page(skip=2, take=2)
    assert total == 5
    assert [c.id for c in contacts] == [3, 4]

    contacts, total = repository.find_page(skip=10, take=2)
    assert contacts == []
    assert total == 5


def test_update_overwrites_fields_but_not_created_at(repository):
    created = repository.insert("Artur Daniel", "79900000000")
    later = created.updated_at + timedelta(minutes=5)

    stored = repository.update(
        replace(created, name="Artur Daniel Souza", updated_at=later, created_at=later)
    )
    assert stored is not None
    assert stored.name == "Artur Daniel Souza"
    assert stored.updated_at == later
    assert stored.created_at == created.created_at
    assert repository.find_by_id(created.id) == stored


def test_update_missing_contact_returns_none(repository):
    created = repository.insert("Artur Daniel", "79900000000")
    repository.delete(created.id)

    assert repository.update(created) is None


def test_delete(repository):
    created = repository.insert("Artur Daniel", "79900000000")

    assert repository.delete(created.id) is True
    assert repository.find_by_id(created.id) is None
    assert repository.delete(created.id) is False


def test_ids_are_not_reused_after_delete(repository):
    first = repository.insert("Artur Daniel", "79900000000")
    repository.delete(first.id)

    assert repository.insert("Maria Helena", "11987654321").id == 2


def test_health_check(repository):
    assert repository.health_check() is True


def test_sql_repository_persists_across_sessions(tmp_path):
    url = f"sqlite:///{tmp_path / 'contacts.db'}"
    writer = SqlContactRepository.create(url)
    created = writer.insert("Artur Daniel", "79900000000")
    writer.dispose()

    reader = SqlContactRepository(engine=get_engine(url))
    assert reader.find_by_id(created.id) == created
    reader.dispose()


def test_create_repository_selects_backend():
    assert isinstance(create_repository("memory"), InMemoryContactRepository)

    repository = create_repository("sql")
    try:
        assert isinstance(repository, SqlContactRepository)
        assert repository.health_check() is True
    finally:
        repository.dispose()


@pytest.mark.parametrize("backend", ["redis", "Mongo"])
def test_settings_reject_unknown_backend(backend):
    from contacts_api.config import Settings

    with pytest.raises(ValueError, match="CONTACTS_STORAGE"):
        Settings(storage_backend=backend)
