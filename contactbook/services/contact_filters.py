"""
Filter pipeline for contact listings.

Stages run in a fixed order, each only when its descriptor field is set:
    1. search   - relevance ranking over first, last, company, email, tags
    2. favorite - favorites only
    3. category - case-insensitive equality ("all" means no restriction)
    4. tag      - any tag containing the needle, case-insensitive

The search stage ranks values on a ladder from exact equality down to a
loose in-order character match. Records below the loose-match threshold are
dropped; survivors are ordered best match first.
"""

import unicodedata
from dataclasses import dataclass

from contactbook.models.domain.contact_domain import ALL_CATEGORIES, Contact
from contactbook.models.domain.query_domain import ContactQuery

SEARCH_KEYS = ("first", "last", "company", "email", "tags")


class MatchRank:
    CASE_SENSITIVE_EQUAL = 7
    EQUAL = 6
    STARTS_WITH = 5
    WORD_STARTS_WITH = 4
    CONTAINS = 3
    ACRONYM = 2
    MATCHES = 1
    NO_MATCH = 0


@dataclass(slots=True)
class RankedContact:
    contact: Contact
    rank: float
    key_index: int
    ranked_value: str
    position: int


def apply_filters(contacts: list[Contact], query: ContactQuery) -> list[Contact]:
    """Run every enabled stage over a copy of ``contacts``."""
    result = list(contacts)

    if query.q:
        result = search_contacts(result, query.q)

    if query.favorite_only:
        result = [contact for contact in result if contact.favorite is True]

    if query.category and query.category != ALL_CATEGORIES:
        wanted = query.category.lower()
        result = [
            contact
            for contact in result
            if contact.category and contact.category.lower() == wanted
        ]

    if query.tag:
        needle = query.tag.lower()
        result = [
            contact for contact in result if any(needle in tag.lower() for tag in contact.tags)
        ]

    return result


def search_contacts(contacts: list[Contact], term: str) -> list[Contact]:
    """Keep contacts matching ``term`` on any search key, best matches first."""
    ranked = []
    for position, contact in enumerate(contacts):
        match = _rank_contact(contact, term, position)
        if match.rank >= MatchRank.MATCHES:
            ranked.append(match)

    ranked.sort(key=lambda m: (-m.rank, m.key_index, m.ranked_value.casefold(), m.position))
    return [m.contact for m in ranked]


def _search_values(contact: Contact, key: str) -> list[str]:
    value = getattr(contact, key)
    if isinstance(value, list):
        return [str(v) for v in value]
    return [value or ""]


def _rank_contact(contact: Contact, term: str, position: int) -> RankedContact:
    best = RankedContact(contact, MatchRank.NO_MATCH, -1, "", position)
    for key_index, key in enumerate(SEARCH_KEYS):
        for value in _search_values(contact, key):
            rank = get_match_ranking(value, term)
            if rank > best.rank:
                best.rank = rank
                best.key_index = key_index
                best.ranked_value = value
    return best


def strip_diacritics(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def get_match_ranking(value: str, term: str) -> float:
    """Rank how well ``value`` matches the search ``term``."""
    candidate = strip_diacritics(value)
    needle = strip_diacritics(term)

    if len(needle) > len(candidate):
        return MatchRank.NO_MATCH
    if candidate == needle:
        return MatchRank.CASE_SENSITIVE_EQUAL

    candidate = candidate.lower()
    needle = needle.lower()

    if candidate == needle:
        return MatchRank.EQUAL
    if candidate.startswith(needle):
        return MatchRank.STARTS_WITH
    if f" {needle}" in candidate:
        return MatchRank.WORD_STARTS_WITH
    if needle in candidate:
        return MatchRank.CONTAINS
    if len(needle) == 1:
        # single characters must appear as a substring to count
        return MatchRank.NO_MATCH
    if needle in _acronym(candidate):
        return MatchRank.ACRONYM

    return _closeness_ranking(candidate, needle)


def _acronym(value: str) -> str:
    letters = []
    for word in value.split(" "):
        for part in word.split("-"):
            letters.append(part[:1])
    return "".join(letters)


def _closeness_ranking(candidate: str, needle: str) -> float:
    """
    Every character of ``needle`` must appear in ``candidate`` in order.
    Tighter spreads rank closer to ACRONYM, looser ones closer to MATCHES.
    """
    first_index = candidate.find(needle[0])
    if first_index < 0:
        return MatchRank.NO_MATCH

    cursor = first_index + 1
    for char in needle[1:]:
        found = candidate.find(char, cursor)
        if found < 0:
            return MatchRank.NO_MATCH
        cursor = found + 1

    # spread >= 1: needle has at least two characters here
    spread = cursor - (first_index + 1)
    return MatchRank.MATCHES + 1 / spread
