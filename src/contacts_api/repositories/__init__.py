"""Repository layer for data access.

This layer hides the storage backend behind the ContactStore protocol.
The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from contacts_api.config import settings
from contacts_api.protocols import ContactStore

from .memory_repository import InMemoryContactRepository
from .sql_repository import SqlContactRepository


def create_repository(storage_backend: str | None = None) -> ContactStore:
    """Build the repository selected by ``CONTACTS_STORAGE``.

    Args:
        storage_backend: "sql" or "memory". If None, uses settings.

    Returns:
        A ContactStore implementation
    """
    backend = storage_backend or settings.storage_backend
    if backend == "memory":
        return InMemoryContactRepository()
    return SqlContactRepository.create()


__all__ = [
    "ContactStore",
    "InMemoryContactRepository",
    "SqlContactRepository",
    "create_repository",
]
