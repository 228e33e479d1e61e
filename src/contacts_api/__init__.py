"""Contacts API - contact management REST backend.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (ContactStore)
    - repositories: Data access implementations (SQLAlchemy, in-memory)
    - services: Business logic
    - handlers: HTTP request validation and error mapping
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from contacts_api.repositories import SqlContactRepository
    from contacts_api.services import ContactService

    service = ContactService(repository=SqlContactRepository.create())
    ```

For HTTP API:
    ```python
    from contacts_api.api.app import app
    ```
"""

from contacts_api.config import get_engine, settings
from contacts_api.dto import CreateContactInput, PageQuery, UpdateContactInput
from contacts_api.entities import ContactEntity, ContactPage
from contacts_api.exceptions import BadRequestError, ContactsApiError, NotFoundError
from contacts_api.handlers import ContactHandler
from contacts_api.protocols import ContactStore
from contacts_api.repositories import InMemoryContactRepository, SqlContactRepository
from contacts_api.services import ContactService

__all__ = [
    # Configuration
    "settings",
    "get_engine",
    # Protocols (interfaces)
    "ContactStore",
    # Services (business logic)
    "ContactService",
    # Handlers (HTTP)
    "ContactHandler",
    # Repositories (data access)
    "SqlContactRepository",
    "InMemoryContactRepository",
    # Entities (domain models)
    "ContactEntity",
    "ContactPage",
    # DTOs (API contracts)
    "CreateContactInput",
    "UpdateContactInput",
    "PageQuery",
    # Errors
    "ContactsApiError",
    "BadRequestError",
    "NotFoundError",
]
