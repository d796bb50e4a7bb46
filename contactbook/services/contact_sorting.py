"""Sort strategies for contact listings."""

from collections.abc import Callable
from typing import Any

from contactbook.models.domain.contact_domain import Contact
from contactbook.models.domain.query_domain import DEFAULT_SORT
from contactbook.services.contact_filters import strip_diacritics

SORT_OPTIONS: list[dict[str, str]] = [
    {"value": "last", "label": "Last name"},
    {"value": "first", "label": "First name"},
    {"value": "company", "label": "Company"},
    {"value": "recent", "label": "Recently added"},
    {"value": "favorite", "label": "Favorite status"},
]


def _locale_fold(value: str) -> str:
    """Accent- and case-insensitive comparison key."""
    return strip_diacritics(value).casefold()


SORT_KEYS: dict[str, Callable[[Contact], Any]] = {
    "last": lambda c: (c.last or "", c.first or ""),
    "first": lambda c: (c.first or "", c.last or ""),
    "company": lambda c: ((c.company or "").lower(), c.last or "", c.first or ""),
    "recent": lambda c: -(c.created_at or 0),
    "favorite": lambda c: (not c.favorite, _locale_fold(c.last or "")),
}


def sort_contacts(contacts: list[Contact], sort_by: str | None = DEFAULT_SORT) -> list[Contact]:
    """
    Return a new list ordered by the named strategy.

    Unknown strategies fall back to last name. Sorting is stable, so records
    with equal keys keep their incoming (e.g. relevance) order.
    """
    key = SORT_KEYS.get(sort_by or DEFAULT_SORT, SORT_KEYS[DEFAULT_SORT])
    return sorted(contacts, key=key)
