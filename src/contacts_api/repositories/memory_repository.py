"""In-memory implementation of ContactStore (no database)."""

import threading
from dataclasses import replace

from contacts_api.entities import ContactEntity

from .tables import utcnow


class InMemoryContactRepository:
    """Stores contacts in a dict keyed by id. Ids start at 1 and are never reused.

    Calls arrive from worker threads, so every access holds the lock.
    """

    def __init__(self) -> None:
        self._contacts: dict[int, ContactEntity] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def find_by_id(self, contact_id: int | None) -> ContactEntity | None:
        if contact_id is None:
            return None
        with self._lock:
            return self._contacts.get(contact_id)

    def find_page(self, skip: int, take: int) -> tuple[list[ContactEntity], int]:
        with self._lock:
            ordered = [self._contacts[key] for key in sorted(self._contacts)]
        return ordered[skip : skip + take], len(ordered)

    def insert(self, name: str, phone: str) -> ContactEntity:
        now = utcnow()
        with self._lock:
            contact = ContactEntity(
                id=self._next_id,
                name=name,
                phone=phone,
                created_at=now,
                updated_at=now,
            )
            self._contacts[contact.id] = contact
            self._next_id += 1
        return contact

    def update(self, contact: ContactEntity) -> ContactEntity | None:
        with self._lock:
            stored = self._contacts.get(contact.id)
            if stored is None:
                return None
            # created_at belongs to the store, never to the caller
            updated = replace(contact, created_at=stored.created_at)
            self._contacts[contact.id] = updated
        return updated

    def delete(self, contact_id: int) -> bool:
        with self._lock:
            return self._contacts.pop(contact_id, None) is not None

    def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._contacts)
