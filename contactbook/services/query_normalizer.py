"""
Query normalizer: turns whatever the caller passed for a listing into a ContactQuery.

Accepted inputs:
    None                 -> no filters, sort by last name
    "text" / TextSearch  -> search term only, sort by last name
    FilterOptions        -> structured filters
    Mapping              -> structured filters with alias keys
    ContactQuery         -> returned as-is

Never raises; values are coerced on a best-effort basis.
"""

from collections.abc import Mapping
from typing import Any

from contactbook.models.domain.query_domain import (
    DEFAULT_SORT,
    ContactQuery,
    FilterOptions,
    TextSearch,
)
from contactbook.services.record_normalizer import coerce_favorite

# First alias with a non-None value wins.
QUERY_ALIASES: dict[str, tuple[str, ...]] = {
    "q": ("q", "query"),
    "favorite_only": (
        "favoriteOnly",
        "onlyFavorites",
        "favorite",
        "favorite_only",
        "only_favorites",
    ),
    "category": ("category", "categoryFilter", "category_filter"),
    "sort_by": ("sortBy", "sort", "sort_by"),
    "tag": ("tag", "tagFilter", "tag_filter"),
}

RawQuery = ContactQuery | FilterOptions | TextSearch | Mapping[str, Any] | str | None


def normalize_query(raw: RawQuery = None) -> ContactQuery:
    if isinstance(raw, ContactQuery):
        return raw
    if not raw:
        return ContactQuery(sort_by=DEFAULT_SORT)
    if isinstance(raw, str):
        return ContactQuery(q=raw, sort_by=DEFAULT_SORT)
    if isinstance(raw, TextSearch):
        return ContactQuery(q=_text(raw.text), sort_by=DEFAULT_SORT)
    if isinstance(raw, FilterOptions):
        return _from_options(
            q=raw.q,
            favorite_only=raw.favorite_only,
            category=raw.category,
            sort_by=raw.sort_by,
            tag=raw.tag,
        )
    if isinstance(raw, Mapping):
        resolved = {field: _first_present(raw, aliases) for field, aliases in QUERY_ALIASES.items()}
        return _from_options(**resolved)

    # Unrecognized input is treated like no query at all.
    return ContactQuery(sort_by=DEFAULT_SORT)


def _first_present(raw: Mapping[str, Any], aliases: tuple[str, ...]) -> Any:
    for alias in aliases:
        value = raw.get(alias)
        if value is not None:
            return value
    return None


def _from_options(
    q: Any, favorite_only: Any, category: Any, sort_by: Any, tag: Any
) -> ContactQuery:
    return ContactQuery(
        q=_text(q),
        favorite_only=coerce_favorite(favorite_only),
        category=_text(category),
        sort_by=DEFAULT_SORT if sort_by is None else str(sort_by),
        tag=_text(tag),
    )


def _text(value: Any) -> str:
    return str(value) if value else ""
