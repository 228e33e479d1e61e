import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from contacts_api.api.dependencies import HandlerDep, lifespan
from contacts_api.api.routes import router as contacts_router
from contacts_api.config import settings
from contacts_api.dto import HealthCheckResponse
from contacts_api.exceptions import (
    ContactsApiError,
    contacts_api_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
)
from contacts_api.protocols import ContactStore

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

API_TITLE = "Contacts API"
API_VERSION = "0.1.0"
API_DESCRIPTION = "Contact management service: create, list, update and delete contacts"

CORS_METHODS = ["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def create_app(repository: ContactStore | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        repository: Contact store to use instead of the one selected by
            CONTACTS_STORAGE (tests pass an in-memory or SQLite store).

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=lifespan,
        openapi_tags=[{"name": "Contacts", "description": "Manage contacts"}],
    )

    if repository is not None:
        app.state.repository = repository

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins_list,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    app.add_exception_handler(ContactsApiError, contacts_api_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": API_TITLE,
            "version": API_VERSION,
            "description": API_DESCRIPTION,
            "endpoints": {
                "contacts": "/contacts",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    app.include_router(contacts_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "contacts_api.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
