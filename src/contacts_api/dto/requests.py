"""Request DTOs produced by the validators.

Raw request data (path params, query string, JSON body) is checked by
``contacts_api.validation``; only input that passed is turned into these
models, so the service layer never sees unvalidated data.
"""

from pydantic import BaseModel, ConfigDict, Field


class CreateContactInput(BaseModel):
    """Validated body of ``POST /contacts``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Full name, at least two words of three or more letters")
    phone: str = Field(..., description="Mobile number in the XX9XXXXXXXX format")


class UpdateContactInput(BaseModel):
    """Validated body of ``PATCH /contacts/{id}``. Omitted fields stay unchanged."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(None, description="New full name")
    phone: str | None = Field(None, description="New mobile number")


class PageQuery(BaseModel):
    """Validated query string of ``GET /contacts``."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(1, description="Page number, starting at 1", ge=1)
    limit: int = Field(10, description="Contacts per page", ge=1)

    @property
    def offset(self) -> int:
        """Number of records to skip before this page."""
        return (self.page - 1) * self.limit
