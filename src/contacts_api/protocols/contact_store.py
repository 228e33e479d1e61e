"""Contact storage protocol.

Defines the interface for any backend that persists contacts.

Implementations can include:
- SQLAlchemy over any relational database (default)
- In-process dictionary (tests, local runs)
"""

from typing import Protocol, runtime_checkable

from contacts_api.entities import ContactEntity


@runtime_checkable
class ContactStore(Protocol):
    """Protocol for contact storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from contacts_api.protocols import ContactStore

        repo: ContactStore = SqlContactRepository.create()
        repo: ContactStore = InMemoryContactRepository()
        ```
    """

    def find_by_id(self, contact_id: int | None) -> ContactEntity | None:
        """Find a contact by its identifier.

        Args:
            contact_id: The identifier; None never matches

        Returns:
            The contact, or None if no record matches
        """
        ...

    def find_page(self, skip: int, take: int) -> tuple[list[ContactEntity], int]:
        """Fetch a slice of contacts ordered by id.

        Args:
            skip: Number of records to skip
            take: Maximum number of records to return

        Returns:
            Tuple of (contacts in the slice, total number of contacts)
        """
        ...

    def insert(self, name: str, phone: str) -> ContactEntity:
        """Persist a new contact. The store assigns id and timestamps.

        Returns:
            The stored contact
        """
        ...

    def update(self, contact: ContactEntity) -> ContactEntity | None:
        """Overwrite name, phone and updated_at of an existing contact.

        Returns:
            The stored contact after the write, or None if it no longer exists
        """
        ...

    def delete(self, contact_id: int) -> bool:
        """Permanently remove a contact.

        Returns:
            True if deleted, False if no record matched
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...
