"""
contacts.py
-----------
Purpose:
    HTTP endpoints for the contact directory.

Architecture:
    - API layer: parses query parameters and maps errors to HTTP status codes
    - Service layer (ContactStore): all normalization, filtering and sorting

Usage:
    1. GET    /contacts                - list with q/favorite/category/sort/tag
    2. POST   /contacts                - create a blank contact
    3. GET    /contacts/stats          - totals, favorites, top categories
    4. GET    /contacts/categories     - category and sort options
    5. GET    /contacts/export         - download the collection as JSON
    6. GET    /contacts/{contact_id}   - fetch one contact
    7. PATCH  /contacts/{contact_id}   - partial update
    8. DELETE /contacts/{contact_id}   - remove a contact
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from contactbook.dependencies import get_contact_store, get_export_service
from contactbook.infrastructure.observability.logging import get_logger
from contactbook.models.api.contact_response import (
    ContactFilters,
    ContactListResponse,
    ContactOptionsResponse,
    DeleteContactResponse,
    OptionItem,
)
from contactbook.models.domain.contact_domain import (
    ALL_CATEGORIES,
    CATEGORY_OPTIONS,
    Contact,
    ContactUpdate,
)
from contactbook.models.domain.query_domain import DEFAULT_SORT
from contactbook.services.contact_sorting import SORT_OPTIONS
from contactbook.services.contact_stats import ContactStats, summarize_contacts
from contactbook.services.contact_store import ContactNotFoundError, ContactStore
from contactbook.services.data_export_service import DataExportService

router = APIRouter(prefix="/contacts", tags=["contacts"])
logger = get_logger(__name__)


@router.get("", response_model=ContactListResponse)
async def list_contacts(
    q: str = "",
    favorite: str = "",
    category: str = ALL_CATEGORIES,
    sort: str = DEFAULT_SORT,
    tag: str = "",
    store: ContactStore = Depends(get_contact_store),
):
    """
    List contacts matching the query parameters.

    ``favorite`` enables the favorites-only filter only when it is "true".
    """
    favorite_only = favorite == "true"
    contacts = await store.list_contacts(
        {"q": q, "favoriteOnly": favorite_only, "category": category, "sortBy": sort, "tag": tag}
    )

    return ContactListResponse(
        contacts=contacts,
        filters=ContactFilters(q=q, favorite=favorite_only, category=category, sort=sort, tag=tag),
    )


@router.post("", response_model=Contact, status_code=status.HTTP_201_CREATED)
async def create_contact(store: ContactStore = Depends(get_contact_store)):
    return await store.create_contact()


@router.get("/stats", response_model=ContactStats)
async def get_stats(store: ContactStore = Depends(get_contact_store)):
    contacts = await store.list_all_contacts()
    return summarize_contacts(contacts)


@router.get("/categories", response_model=ContactOptionsResponse)
async def get_options():
    return ContactOptionsResponse(
        categories=[OptionItem(**option) for option in CATEGORY_OPTIONS],
        sort_options=[OptionItem(**option) for option in SORT_OPTIONS],
    )


@router.get("/export")
async def export_contacts(exporter: DataExportService = Depends(get_export_service)):
    """Full collection as a downloadable JSON document."""
    export = await exporter.export_contacts()
    return Response(
        content=export["content"],
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export["filename"]}"'},
    )


@router.get("/{contact_id}", response_model=Contact)
async def get_contact(contact_id: str, store: ContactStore = Depends(get_contact_store)):
    contact = await store.get_contact(contact_id)
    if contact is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found")
    return contact


@router.patch("/{contact_id}", response_model=Contact)
async def update_contact(
    contact_id: str,
    updates: ContactUpdate,
    store: ContactStore = Depends(get_contact_store),
):
    """
    Apply a partial update. Only the fields present in the body change.

    Raises:
        404: Contact not found
    """
    try:
        return await store.update_contact(contact_id, updates)
    except ContactNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/{contact_id}", response_model=DeleteContactResponse)
async def delete_contact(contact_id: str, store: ContactStore = Depends(get_contact_store)):
    deleted = await store.delete_contact(contact_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found")
    return DeleteContactResponse(deleted=True, contact_id=contact_id)
