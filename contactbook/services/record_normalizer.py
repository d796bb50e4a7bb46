"""
Record normalizer: coerces raw create/update input into the stored contact shape.

Nothing here rejects input. Malformed values are coerced to safe defaults so
the stored collection always satisfies the record invariants:
- category is never empty and never the reserved "all"
- favorite is always a bool
- every tag is a non-empty, trimmed string
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from contactbook.infrastructure.observability.logging import get_logger
from contactbook.models.domain.contact_domain import (
    ALL_CATEGORIES,
    DEFAULT_CATEGORY,
    Contact,
    ContactUpdate,
)

logger = get_logger(__name__)

TRUTHY_VALUES = {"true", "1"}

# Fields trimmed on write
TRIMMED_FIELDS = ("email", "phone", "notes")


def coerce_favorite(value: Any) -> bool:
    """True only for True, "true" or "1"; anything else is False."""
    if value is True:
        return True
    return isinstance(value, str) and value in TRUTHY_VALUES


def normalize_category(value: Any) -> str:
    if value is None:
        return DEFAULT_CATEGORY
    category = str(value)
    if not category or category == ALL_CATEGORIES:
        return DEFAULT_CATEGORY
    return category


def normalize_twitter_handle(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lstrip("@").strip()


def normalize_tags(value: Any) -> Any:
    """
    Lists and comma-separated strings become trimmed, non-empty tag lists.
    Order and duplicates are preserved. Any other value is returned untouched.
    """
    if isinstance(value, (list, tuple)):
        parts = [str(tag).strip() for tag in value if tag is not None]
    elif isinstance(value, str):
        parts = [tag.strip() for tag in value.split(",")]
    else:
        return value
    return [tag for tag in parts if tag]


def normalize_update(payload: ContactUpdate | Mapping[str, Any]) -> dict[str, Any]:
    """
    Normalize a partial update.

    Only fields present in the payload are returned, keyed by their
    snake_case attribute names, ready to be merged onto a Contact.
    """
    if not isinstance(payload, ContactUpdate):
        payload = _parse_update(dict(payload))

    supplied = payload.model_dump(exclude_unset=True)
    normalized: dict[str, Any] = {}

    for name, value in supplied.items():
        if name == "favorite":
            normalized[name] = coerce_favorite(value)
        elif name == "category":
            normalized[name] = normalize_category(value)
        elif name == "tags":
            tags = normalize_tags(value)
            normalized[name] = tags if isinstance(tags, list) else []
        elif name == "twitter_handle":
            normalized[name] = normalize_twitter_handle(value)
        elif name in TRIMMED_FIELDS:
            normalized[name] = "" if value is None else str(value).strip()
        else:
            normalized[name] = "" if value is None else str(value)

    return normalized


def _parse_update(data: dict[str, Any]) -> ContactUpdate:
    """Validate a raw mapping, dropping text fields whose values cannot be coerced."""
    try:
        return ContactUpdate.model_validate(data)
    except ValidationError as e:
        bad_locs = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        dropped = set()
        for name, field in ContactUpdate.model_fields.items():
            alias = field.alias or name
            if name in bad_locs or alias in bad_locs:
                dropped.update({name, alias})

        logger.warning("Dropping malformed contact fields", fields=sorted(bad_locs))
        return ContactUpdate.model_validate({k: v for k, v in data.items() if k not in dropped})


def new_contact(contact_id: str, created_at: int) -> Contact:
    """Blank, fully normalized record used when creating a contact."""
    return Contact(
        id=contact_id,
        created_at=created_at,
        first="",
        last="",
        company="",
        location="",
        avatar_url="",
        notes="",
        email="",
        phone="",
        twitter_handle="",
        category=normalize_category(DEFAULT_CATEGORY),
        favorite=False,
        tags=[],
    )


def normalize_record(raw: Mapping[str, Any]) -> Contact:
    """
    Normalize a complete raw record (for example a sample or imported entry).

    Unlike updates, an absent category falls back to the sentinel.
    """
    created_at = raw.get("createdAt", raw.get("created_at")) or 0
    base = Contact(id=str(raw.get("id") or ""), created_at=int(created_at))
    fields = normalize_update(raw)
    fields.setdefault("category", DEFAULT_CATEGORY)
    return base.model_copy(update=fields)
