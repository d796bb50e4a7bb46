"""
Data Export Service - download the whole contact directory as JSON.

Exports the full, unfiltered collection in its stored (camelCase) shape so the
document can be re-imported or read by other tools.

Usage:
    service = DataExportService(contact_store)
    export = await service.export_contacts()
    # Returns: {"filename": "contacts-export.json", "content": "[...]", "count": 6}
"""

import json

from contactbook.infrastructure.observability.logging import get_logger
from contactbook.services.contact_store import ContactStore

logger = get_logger(__name__)

EXPORT_FILENAME = "contacts-export.json"


class DataExportService:
    """Serializes the contact collection for download."""

    def __init__(self, contact_store: ContactStore):
        self.contact_store = contact_store

    async def export_contacts(self) -> dict:
        """
        Export every contact as an indented JSON document.

        Returns:
            dict: {
                "filename": suggested download name,
                "content": JSON text,
                "count": number of exported contacts,
            }
        """
        logger.info("Starting contact export")

        contacts = await self.contact_store.list_all_contacts()
        content = json.dumps(
            [contact.to_storage() for contact in contacts], indent=2, ensure_ascii=False
        )

        logger.info("Contact export completed", count=len(contacts), size_bytes=len(content))

        return {"filename": EXPORT_FILENAME, "content": content, "count": len(contacts)}
