"""Protocol interfaces for swappable implementations.

Protocols enable:
- Easy swapping of storage backends (SQLite, PostgreSQL, in-memory)
- Unit testing with in-memory implementations
- Clear separation of concerns
"""

from .contact_store import ContactStore

__all__ = [
    "ContactStore",
]
