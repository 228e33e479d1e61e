#!/usr/bin/env python3
"""
Demo script for the contacts service.

Walks through create, list, update and delete against the store selected by
CONTACTS_STORAGE (``sql`` writes to DATABASE_URL, ``memory`` keeps nothing).
"""

import asyncio

from contacts_api.dto import CreateContactInput
from contacts_api.exceptions import ContactsApiError
from contacts_api.handlers import ContactHandler
from contacts_api.repositories import create_repository
from contacts_api.services import ContactService


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_service(service: ContactService) -> None:
    """Demonstrate service-level operations."""
    print_section("Service Operations")

    people = [
        ("Artur Daniel", "79900000000"),
        ("Maria Helena", "11987654321"),
        ("Joao Pedro Alves", "21991234567"),
    ]

    print("\n📝 Creating contacts...")
    for name, phone in people:
        contact = await service.create(CreateContactInput(name=name, phone=phone))
        print(f"  ✓ #{contact.id}: {contact.name} ({contact.phone})")


async def demo_handler(handler: ContactHandler) -> None:
    """Demonstrate request handling, including rejected input."""
    print_section("Request Handling")

    page = await handler.list_contacts({"page": "1", "limit": "2"})
    print(f"\n📄 Page {page.page} of size {page.limit}, {page.total} contacts in total:")
    for contact in page.contacts:
        print(f"  - #{contact.id} {contact.name}")

    first_id = str(page.contacts[0].id)
    updated = await handler.update_contact({"id": first_id}, b'{"phone": "79911111111"}')
    print(f"\n✏️  Updated #{updated.id}: phone is now {updated.phone}")

    print("\n🚫 Rejected requests:")
    bad_requests = [
        b'{"name": "Jo Al", "phone": "79900000000"}',
        b'{"name": "Artur Daniel", "phone": "1234567890"}',
        b'{"name": "Artur Daniel", "phone": "79900000000", "email": "x"}',
    ]
    for body in bad_requests:
        try:
            await handler.create_contact(body)
        except ContactsApiError as e:
            print(f"  {e.status_code}: {e.message}")

    await handler.delete_contact({"id": first_id})
    try:
        await handler.get_contact({"id": first_id})
    except ContactsApiError as e:
        print(f"\n🗑️  Deleted #{first_id}; fetching it again gives {e.status_code}: {e.message}")


async def main() -> None:
    """Run all demos."""
    service = ContactService(repository=create_repository())
    handler = ContactHandler(contact_service=service)

    await demo_service(service)
    await demo_handler(handler)


if __name__ == "__main__":
    asyncio.run(main())
