"""
Aggregate statistics over the full contact collection.

Category counts are keyed by the stored value as-is, so "Work" and "work"
are counted separately even though the category filter treats them alike.
"""

from collections import Counter

from pydantic import BaseModel

from contactbook.models.domain.contact_domain import DEFAULT_CATEGORY, Contact, category_label

TOP_CATEGORY_LIMIT = 3


class CategoryCount(BaseModel):
    value: str
    label: str
    count: int


class ContactStats(BaseModel):
    total: int
    favorites: int
    category_counts: dict[str, int]
    top_categories: list[CategoryCount]


def summarize_contacts(contacts: list[Contact]) -> ContactStats:
    counts = Counter(contact.category or DEFAULT_CATEGORY for contact in contacts)

    # most_common keeps first-seen order among equal counts
    top = [
        CategoryCount(value=value, label=category_label(value), count=count)
        for value, count in counts.most_common(TOP_CATEGORY_LIMIT)
    ]

    return ContactStats(
        total=len(contacts),
        favorites=sum(1 for contact in contacts if contact.favorite),
        category_counts=dict(counts),
        top_categories=top,
    )
