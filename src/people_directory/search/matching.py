"""
Search Matching.

A person matches a term when any searchable field contains it,
case-insensitively. Blank terms match everybody.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from people_directory.domain.entities import Person

SEARCHABLE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "nationality",
    "country",
    "city",
)


def normalize_term(term: Optional[str]) -> str:
    """Lower-cased term without surrounding whitespace."""
    return (term or "").strip().lower()


def matches_term(person: Person, term: str) -> bool:
    """Check whether any searchable field of person contains term."""
    needle = normalize_term(term)
    if not needle:
        return True
    for field in SEARCHABLE_FIELDS:
        value = getattr(person, field)
        if value and needle in value.lower():
            return True
    return False


def filter_records(records: Sequence[Person], term: str) -> List[Person]:
    """People matching term, in input order (all of them for a blank term)."""
    needle = normalize_term(term)
    if not needle:
        return list(records)
    return [p for p in records if matches_term(p, needle)]
