"""Response DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from contacts_api.entities import ContactEntity, ContactPage


class ContactResponse(BaseModel):
    """A single contact as returned by the API (camelCase timestamps)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Contact identifier", examples=[1])
    name: str = Field(..., description="Full name", examples=["Artur Daniel"])
    phone: str = Field(..., description="Mobile number", examples=["79900000000"])
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update timestamp")

    @classmethod
    def from_entity(cls, contact: ContactEntity) -> "ContactResponse":
        return cls(
            id=contact.id,
            name=contact.name,
            phone=contact.phone,
            created_at=contact.created_at,
            updated_at=contact.updated_at,
        )


class ContactListResponse(BaseModel):
    """Response DTO for a non-empty page of contacts."""

    page: int = Field(..., description="Page number", ge=1)
    limit: int = Field(..., description="Page size", ge=1)
    total: int = Field(..., description="Total number of stored contacts", ge=0)
    contacts: list[ContactResponse] = Field(default_factory=list)

    @classmethod
    def from_page(cls, page: ContactPage) -> "ContactListResponse":
        return cls(
            page=page.page,
            limit=page.limit,
            total=page.total,
            contacts=[ContactResponse.from_entity(c) for c in page.contacts],
        )


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    message: str = Field(..., description="Human-readable error message")


class EmptyPageResponse(ErrorResponse):
    """404 body returned when a page query yields no contacts."""

    page: int = Field(..., description="Requested page number")
    limit: int = Field(..., description="Requested page size")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    storage: str = Field(..., description="Configured storage backend")
