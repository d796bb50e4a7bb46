from contactbook.models.domain.contact_domain import (
    ALL_CATEGORIES,
    CATEGORY_LABELS,
    CATEGORY_OPTIONS,
    DEFAULT_CATEGORY,
    Contact,
    ContactUpdate,
    category_label,
)
from contactbook.models.domain.query_domain import (
    DEFAULT_SORT,
    ContactQuery,
    FilterOptions,
    TextSearch,
)

__all__ = [
    "ALL_CATEGORIES",
    "CATEGORY_LABELS",
    "CATEGORY_OPTIONS",
    "DEFAULT_CATEGORY",
    "DEFAULT_SORT",
    "Contact",
    "ContactQuery",
    "ContactUpdate",
    "FilterOptions",
    "TextSearch",
    "category_label",
]
