"""Contact domain entities."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ContactEntity:
    """Domain entity for a stored contact.

    This is an internal representation used by services and repositories.
    For API contracts, use the DTO classes from the dto package.

    Attributes:
        id: Surrogate key assigned by the store
        name: Full name (at least two words of three or more characters)
        phone: Mobile number in the XX9XXXXXXXX format
        created_at: When the contact was created
        updated_at: When the contact was last changed
    """

    id: int
    name: str
    phone: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ContactPage:
    """One page of contacts plus the total number of stored contacts."""

    page: int
    limit: int
    total: int
    contacts: list[ContactEntity] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.contacts
