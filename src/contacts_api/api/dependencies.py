"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - A repository placed in app.state before startup is used as-is
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from contacts_api.config import settings
from contacts_api.handlers import ContactHandler
from contacts_api.repositories import SqlContactRepository, create_repository
from contacts_api.services import ContactService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> ContactHandler:
    """Dependency injection for ContactHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "contact_handler", None)
    if handler is None:
        raise RuntimeError("ContactHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repository (data access) - from app.state.repository or CONTACTS_STORAGE
    2. Service (business logic) - stored in app.state.contact_service
    3. Handler (HTTP endpoints) - stored in app.state.contact_handler
    """
    repository = getattr(app.state, "repository", None)
    if repository is None:
        logger.info("Storage backend: %s", settings.storage_backend)
        if settings.storage_backend == "sql":
            logger.info("Database: %s", settings.safe_database_url)
        repository = create_repository()

    contact_service = ContactService(repository=repository)
    contact_handler = ContactHandler(contact_service=contact_service)

    app.state.repository = repository
    app.state.contact_service = contact_service
    app.state.contact_handler = contact_handler

    logger.info("Contacts API started (store healthy: %s)", await contact_service.is_healthy())

    yield

    if isinstance(repository, SqlContactRepository):
        repository.dispose()

    del app.state.contact_handler
    del app.state.contact_service
    del app.state.repository
    logger.info("Contacts API shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ContactHandler, Depends(get_handler)]