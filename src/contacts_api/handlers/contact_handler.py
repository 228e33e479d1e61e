"""HTTP handlers for contact operations.

Handlers turn raw request data into validated DTOs, call the service and
map outcomes to HTTP semantics. Validation failures become BadRequestError
(400) and missing records become NotFoundError (404); anything else
propagates to the application's generic 500 handler.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from contacts_api.config import settings
from contacts_api.dto import ContactListResponse, ContactResponse, HealthCheckResponse
from contacts_api.exceptions import BadRequestError, NotFoundError, ServiceUnavailableError
from contacts_api.services import ContactService
from contacts_api.validation import (
    Invalid,
    ValidationResult,
    coerce_id,
    parse_json_body,
    validate_create_body,
    validate_id_params,
    validate_page_query,
    validate_update_body,
)

T = TypeVar("T")


def _unwrap(result: ValidationResult[T]) -> T:
    if isinstance(result, Invalid):
        raise BadRequestError(result.message)
    return result.value


class ContactHandler:
    """HTTP handlers for contact operations.

    This handler delegates business logic to ContactService
    and handles HTTP-specific concerns like:
    - Validating path params, query string and JSON body
    - Converting entities to DTOs
    - Raising the errors that decide the status code

    Example:
        ```python
        handler = ContactHandler(contact_service=service)

        @app.get("/contacts/{id}", response_model=ContactResponse)
        async def get_contact(request: Request):
            return await handler.get_contact(request.path_params)
        ```
    """

    def __init__(self, contact_service: ContactService) -> None:
        """Initialize the contact handler.

        Args:
            contact_service: The contact service for business logic (required).
        """
        self._contacts = contact_service

    async def get_contact(self, path_params: Mapping[str, Any]) -> ContactResponse:
        """Handle GET /contacts/{id} requests.

        Raises:
            BadRequestError: If ``id`` is missing or other path params are present
            NotFoundError: If no contact matches
        """
        contact_id = _unwrap(validate_id_params(path_params))

        contact = await self._contacts.get(contact_id)
        if contact is None:
            raise NotFoundError("Contact not found")

        return ContactResponse.from_entity(contact)

    async def list_contacts(self, query: Mapping[str, Any]) -> ContactListResponse:
        """Handle GET /contacts requests.

        An empty page is reported as 404 with the requested page and limit,
        whether or not any contacts exist at all.

        Raises:
            BadRequestError: If the query has unknown keys or bad page/limit
            NotFoundError: If the page holds no contacts
        """
        page_query = _unwrap(validate_page_query(query))

        page = await self._contacts.list_page(page_query)
        if page.is_empty:
            raise NotFoundError(
                "No contacts found.",
                details={"page": page.page, "limit": page.limit},
            )

        return ContactListResponse.from_page(page)

    async def create_contact(self, raw_body: bytes) -> ContactResponse:
        """Handle POST /contacts requests.

        Raises:
            BadRequestError: If the body is not a valid new contact
        """
        body = _unwrap(parse_json_body(raw_body))
        data = _unwrap(validate_create_body(body))

        contact = await self._contacts.create(data)
        return ContactResponse.from_entity(contact)

    async def update_contact(self, path_params: Mapping[str, Any], raw_body: bytes) -> ContactResponse:
        """Handle PATCH /contacts/{id} requests.

        The contact is looked up before its fields are validated, so an
        unknown id is reported as 404 even when the body is also invalid.

        Raises:
            NotFoundError: If no contact matches
            BadRequestError: If the body has unknown fields or bad values
        """
        body = _unwrap(parse_json_body(raw_body))

        contact = await self._contacts.get(coerce_id(path_params.get("id")))
        if contact is None:
            raise NotFoundError("Contact not found.")

        changes = _unwrap(validate_update_body(body))

        updated = await self._contacts.update(contact, changes)
        if updated is None:
            raise NotFoundError("Contact not found.")

        return ContactResponse.from_entity(updated)

    async def delete_contact(self, path_params: Mapping[str, Any]) -> None:
        """Handle DELETE /contacts/{id} requests.

        Raises:
            BadRequestError: If ``id`` is missing or other path params are present
            NotFoundError: If no contact matches
        """
        contact_id = _unwrap(validate_id_params(path_params))

        contact = await self._contacts.get(contact_id)
        if contact is None or not await self._contacts.delete(contact):
            raise NotFoundError("Contact not found.")

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Raises:
            ServiceUnavailableError: If the contact store is unreachable
        """
        if not await self._contacts.is_healthy():
            raise ServiceUnavailableError("Contact store is unavailable")

        return HealthCheckResponse(status="healthy", storage=settings.storage_backend)
