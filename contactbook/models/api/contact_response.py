# contactbook/models/api/contact_response.py
from pydantic import BaseModel, Field

from contactbook.models.domain.contact_domain import Contact


class ContactFilters(BaseModel):
    """Echo of the query parameters a listing was produced with."""

    q: str = ""
    favorite: bool = False
    category: str = "all"
    sort: str = "last"
    tag: str = ""


class ContactListResponse(BaseModel):
    """Response for GET /contacts"""

    contacts: list[Contact] = Field(..., description="Filtered and sorted contacts")
    filters: ContactFilters


class DeleteContactResponse(BaseModel):
    """Response for DELETE /contacts/{contact_id}"""

    deleted: bool
    contact_id: str


class OptionItem(BaseModel):
    value: str
    label: str


class ContactOptionsResponse(BaseModel):
    """Response for GET /contacts/categories"""

    categories: list[OptionItem]
    sort_options: list[OptionItem]
