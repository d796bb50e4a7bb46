"""
Contact store: public CRUD + query API over the persisted collection.

Listing:   normalize query -> latency -> ensure seeded -> filter -> sort
Mutations: latency reset/delay -> normalize -> read-modify-write collection

Mutations rewrite the whole collection without isolation; concurrent writers
race and the last write wins.
"""

import time
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from contactbook.infrastructure.observability.logging import get_logger
from contactbook.models.domain.contact_domain import Contact, ContactUpdate
from contactbook.repositories.contact_repository import ContactRepository
from contactbook.services.contact_filters import apply_filters
from contactbook.services.contact_sorting import sort_contacts
from contactbook.services.latency_simulator import LatencySimulator
from contactbook.services.query_normalizer import RawQuery, normalize_query
from contactbook.services.record_normalizer import new_contact, normalize_update

logger = get_logger(__name__)

MAX_ID_ATTEMPTS = 10


class ContactStoreError(Exception):
    """Base exception for contact store operations."""

    pass


class ContactNotFoundError(ContactStoreError):
    """No contact exists with the requested id."""

    def __init__(self, contact_id: str):
        self.contact_id = contact_id
        super().__init__(f"No contact found for {contact_id}")


def _default_id() -> str:
    return uuid.uuid4().hex[:12]


class ContactStore:
    """Facade composing the repository, normalizers, filters and sorting."""

    def __init__(
        self,
        repository: ContactRepository,
        latency: LatencySimulator | None = None,
        clock: Callable[[], int] | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        self.repository = repository
        self.latency = latency or LatencySimulator.disabled()
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._id_factory = id_factory or _default_id

    async def list_contacts(self, raw_query: RawQuery = None) -> list[Contact]:
        query = normalize_query(raw_query)
        await self.latency.delay(f"list_contacts:{query.cache_key()}")

        contacts = await self.repository.ensure_seeded()
        result = apply_filters(contacts, query)
        result = sort_contacts(result, query.sort_by)

        logger.debug(
            "Contacts listed",
            count=len(result),
            total=len(contacts),
            sort_by=query.sort_by,
            searched=bool(query.q),
        )
        return result

    async def list_all_contacts(self) -> list[Contact]:
        """Whole collection, unfiltered and unsorted."""
        await self.latency.delay("list_contacts:all")
        contacts = await self.repository.ensure_seeded()
        return list(contacts)

    async def create_contact(self) -> Contact:
        self.latency.reset()
        await self.latency.delay()

        contacts = await self.repository.ensure_seeded()
        contact = new_contact(self._unique_id(contacts), created_at=self._clock())
        contacts.insert(0, contact)
        await self.repository.save(contacts)

        logger.info("Contact created", contact_id=contact.id, total=len(contacts))
        return contact.model_copy(deep=True)

    async def get_contact(self, contact_id: str) -> Contact | None:
        await self.latency.delay(f"contact:{contact_id}")
        contacts = await self.repository.ensure_seeded()
        return _find(contacts, contact_id)

    async def update_contact(
        self, contact_id: str, updates: ContactUpdate | Mapping[str, Any]
    ) -> Contact:
        """
        Merge normalized fields into an existing contact and persist.

        Raises:
            ContactNotFoundError: no contact with ``contact_id``; nothing is written
        """
        self.latency.reset()
        await self.latency.delay()

        contacts = await self.repository.ensure_seeded()
        contact = _find(contacts, contact_id)
        if contact is None:
            logger.warning("Update for unknown contact", contact_id=contact_id)
            raise ContactNotFoundError(contact_id)

        changes = normalize_update(updates)
        for field, value in changes.items():
            setattr(contact, field, value)
        await self.repository.save(contacts)

        logger.info("Contact updated", contact_id=contact_id, fields=sorted(changes))
        return contact.model_copy(deep=True)

    async def delete_contact(self, contact_id: str) -> bool:
        self.latency.reset()

        contacts = await self.repository.ensure_seeded()
        remaining = [contact for contact in contacts if contact.id != contact_id]
        if len(remaining) == len(contacts):
            logger.info("Delete for unknown contact", contact_id=contact_id)
            return False

        await self.repository.save(remaining)
        logger.info("Contact deleted", contact_id=contact_id, total=len(remaining))
        return True

    def _unique_id(self, contacts: list[Contact]) -> str:
        existing = {contact.id for contact in contacts}
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate not in existing:
                return candidate

        logger.warning("Contact id factory kept colliding", attempts=MAX_ID_ATTEMPTS)
        return uuid.uuid4().hex


def _find(contacts: list[Contact], contact_id: str) -> Contact | None:
    return next((contact for contact in contacts if contact.id == contact_id), None)
