"""
Grouping Engine - Partition People into Ordered, Labeled Groups.

`partition()` is a pure function of its inputs. The same algorithm
(`partition_items`) also runs inside the background worker over plain
dicts, so the field accessor is pluggable.

Ordering rules:
    - Members sorted by first name (missing first name sorts first)
    - Groups sorted by key, except "Unknown" which is always last
    - Both comparisons use `collation_key`
"""

from __future__ import annotations

import unicodedata
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from people_directory.domain.entities import GroupingCriterion, Person, PersonGroup
from people_directory.domain.lookup_tables import (
    CATCH_ALL_KEY,
    UNKNOWN_KEY,
    age_bucket_for,
    age_bucket_label,
    nationality_name,
)

FieldGetter = Callable[[Any, str], Any]

# (key, label, ordered members)
GroupRow = Tuple[str, str, List[Any]]


def attribute_getter(item: Any, field: str) -> Any:
    return getattr(item, field, None)


def mapping_getter(item: Any, field: str) -> Any:
    return item.get(field)


def collation_key(text: str) -> Tuple[str, str]:
    """
    Locale-aware sort key.

    Accents and case are ignored at the primary level ("émile" sorts with
    "Emile", before "Fred"); the original text breaks ties so the order is
    total and deterministic.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), text


def partition_key(
    item: Any,
    criterion: Optional[GroupingCriterion],
    get: FieldGetter = attribute_getter,
) -> str:
    """Partition key of one item under a criterion (None means catch-all)."""
    if criterion is GroupingCriterion.ALPHABETICAL:
        first_name = get(item, "first_name")
        return first_name[0].upper() if first_name else UNKNOWN_KEY
    if criterion is GroupingCriterion.NATIONALITY:
        return get(item, "nationality") or UNKNOWN_KEY
    if criterion is GroupingCriterion.AGE:
        return age_bucket_for(get(item, "age")).key
    if criterion is GroupingCriterion.GENDER:
        return get(item, "gender") or UNKNOWN_KEY
    return CATCH_ALL_KEY


def group_label(key: str, criterion: Optional[GroupingCriterion]) -> str:
    """Human-readable label for a partition key."""
    if key == UNKNOWN_KEY:
        return UNKNOWN_KEY
    if criterion is GroupingCriterion.NATIONALITY:
        return nationality_name(key)
    if criterion is GroupingCriterion.AGE:
        return age_bucket_label(key)
    if criterion is GroupingCriterion.GENDER:
        return key[:1].upper() + key[1:]
    return key


def _group_order(row: GroupRow) -> Tuple[bool, Tuple[str, str]]:
    key = row[0]
    return key == UNKNOWN_KEY, collation_key(key)


def partition_items(
    items: Iterable[Any],
    criterion: Union[GroupingCriterion, str],
    get: FieldGetter = attribute_getter,
) -> List[GroupRow]:
    """
    Partition arbitrary items.

    Args:
        items: People, or plain dicts with Person field names
        criterion: Grouping criterion; unknown values yield one "All" group
        get: Field accessor matching the item type

    Returns:
        Ordered (key, label, members) rows
    """
    parsed = GroupingCriterion.parse(criterion)

    buckets: Dict[str, List[Any]] = {}
    for item in items:
        buckets.setdefault(partition_key(item, parsed, get), []).append(item)

    rows: List[GroupRow] = []
    for key, members in buckets.items():
        ordered = sorted(
            members, key=lambda m: collation_key(get(m, "first_name") or "")
        )
        rows.append((key, group_label(key, parsed), ordered))

    rows.sort(key=_group_order)
    return rows


def partition(
    records: Sequence[Person],
    criterion: Union[GroupingCriterion, str],
) -> List[PersonGroup]:
    """
    Partition people by a criterion.

    Every input record lands in exactly one group; groups reference the
    input Person instances rather than copies.

    Args:
        records: People to partition
        criterion: Grouping criterion

    Returns:
        Ordered groups (empty list for empty input)
    """
    return [
        PersonGroup(key=key, label=label, members=members, count=len(members))
        for key, label, members in partition_items(records, criterion)
    ]
