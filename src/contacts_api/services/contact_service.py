"""Contact service for core business logic.

This service orchestrates contact operations on top of a ContactStore.
Input reaching it has already been validated by the handler layer.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from contacts_api.dto import CreateContactInput, PageQuery, UpdateContactInput
from contacts_api.entities import ContactEntity, ContactPage
from contacts_api.protocols import ContactStore
from contacts_api.repositories.tables import utcnow

logger = logging.getLogger(__name__)


class ContactService:
    """Core contact orchestration service.

    This service depends on the ContactStore PROTOCOL, not a concrete
    implementation, so the SQL repository and the in-memory one are
    interchangeable.

    Store calls are blocking, so each one runs in a worker thread and the
    calling task suspends until it completes. The service keeps no state
    between calls.

    Example:
        ```python
        from contacts_api.repositories import InMemoryContactRepository
        from contacts_api.services import ContactService

        service = ContactService(repository=InMemoryContactRepository())
        contact = await service.create(CreateContactInput(name="Artur Daniel", phone="79900000000"))
        ```
    """

    def __init__(
        self,
        repository: ContactStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the contact service.

        Args:
            repository: Contact storage backend (required).
            clock: Source of update timestamps. Defaults to the current UTC time.
        """
        self._repository = repository
        self._clock = clock or utcnow

    async def get(self, contact_id: int | None) -> ContactEntity | None:
        """Fetch one contact.

        Args:
            contact_id: Coerced identifier; None never matches

        Returns:
            ContactEntity if found, None otherwise
        """
        return await asyncio.to_thread(self._repository.find_by_id, contact_id)

    async def list_page(self, query: PageQuery) -> ContactPage:
        """Fetch one page of contacts plus the total count.

        Args:
            query: Validated page and limit

        Returns:
            ContactPage (possibly empty)
        """
        contacts, total = await asyncio.to_thread(
            self._repository.find_page, query.offset, query.limit
        )
        return ContactPage(page=query.page, limit=query.limit, total=total, contacts=contacts)

    async def create(self, data: CreateContactInput) -> ContactEntity:
        """Store a new contact.

        Args:
            data: Validated name and phone

        Returns:
            The stored contact with its assigned id
        """
        contact = await asyncio.to_thread(self._repository.insert, data.name, data.phone)
        logger.info("Created contact %s", contact.id)
        return contact

    async def update(
        self,
        contact: ContactEntity,
        changes: UpdateContactInput,
    ) -> ContactEntity | None:
        """Apply a partial update and refresh ``updated_at``.

        Business logic:
        1. Keep stored values for fields the caller did not supply
        2. Stamp ``updated_at`` with the service clock
        3. Persist via the repository

        Args:
            contact: The contact as currently stored
            changes: Validated fields to change

        Returns:
            The updated contact, or None if it was deleted in the meantime
        """
        updated = replace(
            contact,
            name=changes.name if changes.name else contact.name,
            phone=changes.phone if changes.phone else contact.phone,
            updated_at=self._clock(),
        )
        stored = await asyncio.to_thread(self._repository.update, updated)
        if stored is not None:
            logger.info("Updated contact %s", stored.id)
        return stored

    async def delete(self, contact: ContactEntity) -> bool:
        """Permanently remove a contact.

        Returns:
            True if deleted, False if it was already gone
        """
        deleted = await asyncio.to_thread(self._repository.delete, contact.id)
        if deleted:
            logger.info("Deleted contact %s", contact.id)
        return deleted

    async def is_healthy(self) -> bool:
        """Check if the contact store is reachable."""
        return await asyncio.to_thread(self._repository.health_check)

    @property
    def repository(self) -> ContactStore:
        """Get the underlying repository (for testing)."""
        return self._repository
