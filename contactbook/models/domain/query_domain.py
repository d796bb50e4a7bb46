"""
Query descriptors for listing contacts.

Callers describe a listing either as a raw text search or as structured
filter options; both collapse into the canonical ContactQuery.
"""

from dataclasses import asdict, dataclass
from typing import Any

DEFAULT_SORT = "last"


@dataclass(frozen=True, slots=True)
class ContactQuery:
    """Canonical filter/sort descriptor consumed by the filter pipeline."""

    q: str = ""
    favorite_only: bool = False
    category: str = ""
    sort_by: str = DEFAULT_SORT
    tag: str = ""

    def cache_key(self) -> str:
        values = asdict(self)
        return ",".join(f"{name}={values[name]!r}" for name in sorted(values))


@dataclass(frozen=True, slots=True)
class TextSearch:
    """Raw text search variant: only a search term, default sort."""

    text: str


@dataclass(frozen=True, slots=True)
class FilterOptions:
    """Structured variant; values are coerced during normalization."""

    q: Any = None
    favorite_only: Any = None
    category: Any = None
    sort_by: Any = None
    tag: Any = None
