"""FastAPI dependencies resolving the per-app service instances."""

from fastapi import Request

from contactbook.services.contact_store import ContactStore
from contactbook.services.data_export_service import DataExportService


def get_contact_store(request: Request) -> ContactStore:
    return request.app.state.contact_store


def get_export_service(request: Request) -> DataExportService:
    return DataExportService(request.app.state.contact_store)
