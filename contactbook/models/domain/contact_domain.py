"""
Domain model for a contact record and the fixed category set.

Contacts are stored and exported by their camelCase aliases (createdAt,
avatarUrl, twitterHandle) while Python code works with snake_case names.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_CATEGORY = "uncategorized"
ALL_CATEGORIES = "all"  # filter-only value, never stored

# Ordered for display; the sentinel is always last.
CATEGORY_OPTIONS: list[dict[str, str]] = [
    {"value": "work", "label": "Work"},
    {"value": "family", "label": "Family"},
    {"value": "friends", "label": "Friends"},
    {"value": "services", "label": "Services"},
    {"value": "vip", "label": "VIP"},
    {"value": "community", "label": "Community"},
    {"value": DEFAULT_CATEGORY, "label": "Uncategorized"},
]

CATEGORY_LABELS: dict[str, str] = {option["value"]: option["label"] for option in CATEGORY_OPTIONS}

NO_NAME_PLACEHOLDER = "No Name"


def category_label(value: str) -> str:
    """Display label for a stored category, falling back to the sentinel's label."""
    return CATEGORY_LABELS.get(value, CATEGORY_LABELS[DEFAULT_CATEGORY])


class Contact(BaseModel):
    """A single entry in the contact directory."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    created_at: int = 0  # epoch milliseconds
    first: str = ""
    last: str = ""
    company: str = ""
    location: str = ""
    avatar_url: str = ""
    notes: str = ""
    email: str = ""
    phone: str = ""
    twitter_handle: str = ""
    category: str = DEFAULT_CATEGORY
    favorite: bool = False
    tags: list[str] = Field(default_factory=list)

    def display_name(self) -> str:
        if not self.first and not self.last:
            return NO_NAME_PLACEHOLDER
        return f"{self.first} {self.last}".strip()

    def to_storage(self) -> dict:
        """Plain dict in the persisted (camelCase) shape."""
        return self.model_dump(by_alias=True)


class ContactUpdate(BaseModel):
    """
    Partial update payload. Unknown fields are ignored; only fields the
    caller actually supplied are applied. Values are loosely typed because
    the record normalizer coerces them rather than rejecting them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    first: str | None = None
    last: str | None = None
    company: str | None = None
    location: str | None = None
    avatar_url: str | None = None
    notes: str | None = None
    email: str | None = None
    phone: str | None = None
    twitter_handle: str | None = None
    category: str | None = None
    # left untyped so the record normalizer, not pydantic, decides coercion
    favorite: Any = None
    tags: Any = None
