"""
contact_repository.py
---------------------
Purpose:
    Persistence adapter for the contact collection.

Storage contract:
    - One key (default "contacts") holds the whole ordered collection as a
      JSON array of camelCase records.
    - Reads and writes always move the entire collection.
    - A missing or empty collection is seeded with the sample set on first read.

Errors raised by the underlying store propagate unchanged; there are no retries.
"""

import json
import time
from collections.abc import Callable

from pydantic import ValidationError

from contactbook.infrastructure.observability.logging import get_logger
from contactbook.models.domain.contact_domain import Contact
from contactbook.repositories.sample_contacts import build_sample_contacts
from contactbook.services.kv_store import KeyValueStore

logger = get_logger(__name__)

CONTACTS_KEY = "contacts"


class ContactStorageError(Exception):
    """The persisted collection exists but cannot be decoded."""

    pass


class ContactRepository:
    """Async get/set of the whole contact collection, with first-read seeding."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str = CONTACTS_KEY,
        sample_factory: Callable[[int], list[Contact]] = build_sample_contacts,
        clock: Callable[[], int] | None = None,
    ):
        self.store = store
        self.key = key
        self._sample_factory = sample_factory
        self._clock = clock or (lambda: int(time.time() * 1000))

    async def load(self) -> list[Contact] | None:
        """
        Read the stored collection.

        Returns:
            list of contacts, or None when nothing usable is stored

        Raises:
            ContactStorageError: stored value is not valid JSON or holds bad records
        """
        raw = await self.store.get(self.key)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Stored contacts are not valid JSON", key=self.key, error=str(e))
            raise ContactStorageError(f"Cannot decode stored contacts under '{self.key}'") from e

        if not isinstance(data, list):
            logger.warning(
                "Stored contacts value is not a list", key=self.key, type=type(data).__name__
            )
            return None

        try:
            return [Contact.model_validate(item) for item in data]
        except ValidationError as e:
            logger.error("Stored contact record is malformed", key=self.key, error=str(e))
            raise ContactStorageError(f"Malformed contact record under '{self.key}'") from e

    async def save(self, contacts: list[Contact]) -> None:
        payload = json.dumps([contact.to_storage() for contact in contacts], ensure_ascii=False)
        await self.store.set_with_ttl(self.key, payload)
        logger.debug("Contacts persisted", key=self.key, count=len(contacts))

    async def ensure_seeded(self) -> list[Contact]:
        """Return the stored collection, writing the sample set first if it is missing or empty."""
        contacts = await self.load()
        if contacts:
            return contacts

        contacts = self._sample_factory(self._clock())
        await self.save(contacts)
        logger.info("Seeded contact collection", key=self.key, count=len(contacts))
        return contacts
