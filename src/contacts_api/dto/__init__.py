"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CreateContactInput, PageQuery, UpdateContactInput
from .responses import (
    ContactListResponse,
    ContactResponse,
    EmptyPageResponse,
    ErrorResponse,
    HealthCheckResponse,
)

__all__ = [
    "CreateContactInput",
    "UpdateContactInput",
    "PageQuery",
    "ContactResponse",
    "ContactListResponse",
    "EmptyPageResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
