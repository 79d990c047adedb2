"""
Unit Tests for the Grouping Engine.

Test Aspects Covered:
    ✅ Business Logic: Partition keys, labels, member and group ordering
    ✅ Edge Cases: Empty input, missing fields, unknown criterion
    ✅ Properties: Partition completeness, disjointness, idempotence
"""

from __future__ import annotations

from typing import List

import pytest

from people_directory.domain.entities import GroupingCriterion, Person
from people_directory.grouping.engine import (
    collation_key,
    mapping_getter,
    partition,
    partition_items,
)
from tests.fixtures.people import make_person

ALL_CRITERIA = list(GroupingCriterion)


def keys_of(groups) -> List[str]:
    return [g.key for g in groups]


class TestPartitionProperties:
    """Properties that hold for every criterion."""

    @pytest.mark.parametrize("criterion", ALL_CRITERIA)
    def test_every_record_in_exactly_one_group(
        self, sample_people: List[Person], criterion: GroupingCriterion
    ) -> None:
        """
        SCENARIO: Partition a varied directory
        EXPECTED: Counts sum to input size, groups disjoint, nothing lost
        """
        # Act
        groups = partition(sample_people, criterion)

        # Assert
        assert sum(g.count for g in groups) == len(sample_people)
        member_ids = [p.id for g in groups for p in g.members]
        assert len(member_ids) == len(set(member_ids))
        assert set(member_ids) == {p.id for p in sample_people}

    @pytest.mark.parametrize("criterion", ALL_CRITERIA)
    def test_empty_input_yields_no_groups(self, criterion: GroupingCriterion) -> None:
        assert partition([], criterion) == []

    @pytest.mark.parametrize("criterion", ALL_CRITERIA)
    def test_idempotent(self, sample_people: List[Person], criterion: GroupingCriterion) -> None:
        """
        SCENARIO: Same input partitioned twice
        EXPECTED: Same keys, labels and member order
        """
        first = partition(sample_people, criterion)
        second = partition(sample_people, criterion)

        assert [(g.key, g.label, [p.id for p in g.members]) for g in first] == [
            (g.key, g.label, [p.id for p in g.members]) for g in second
        ]

    @pytest.mark.parametrize("criterion", ALL_CRITERIA)
    def test_unknown_group_sorts_last(
        self, sample_people: List[Person], criterion: GroupingCriterion
    ) -> None:
        """
        SCENARIO: Directory with sparse records
        EXPECTED: Unknown last, everything else ascending
        """
        keys = keys_of(partition(sample_people, criterion))

        known = [k for k in keys if k != "Unknown"]
        assert known == sorted(known, key=collation_key)
        if "Unknown" in keys:
            assert keys[-1] == "Unknown"

    def test_groups_reference_input_instances(self, sample_people: List[Person]) -> None:
        groups = partition(sample_people, GroupingCriterion.GENDER)

        originals = {id(p) for p in sample_people}
        assert all(id(p) in originals for g in groups for p in g.members)


class TestAlphabetical:
    """Test alphabetical grouping."""

    def test_five_record_scenario(self) -> None:
        """
        SCENARIO: Two A names, one B name, two without first name
        EXPECTED: A (2), B (1), Unknown (2) in that order
        """
        # Arrange
        people = [
            make_person("Arne"),
            make_person(None),
            make_person("Bea"),
            make_person(""),
            make_person("Anna"),
        ]

        # Act
        groups = partition(people, GroupingCriterion.ALPHABETICAL)

        # Assert
        assert [(g.key, g.count) for g in groups] == [("A", 2), ("B", 1), ("Unknown", 2)]
        assert [p.first_name for p in groups[0].members] == ["Anna", "Arne"]
        assert all(g.label == g.key for g in groups)

    def test_lowercase_initial_is_uppercased(self) -> None:
        groups = partition([make_person("ben")], GroupingCriterion.ALPHABETICAL)

        assert keys_of(groups) == ["B"]

    def test_accented_initial_sorts_with_base_letter(self) -> None:
        """
        SCENARIO: Names starting with D, É and F
        EXPECTED: É group between D and F
        """
        people = [make_person("Fred"), make_person("Émile"), make_person("David")]

        groups = partition(people, GroupingCriterion.ALPHABETICAL)

        assert keys_of(groups) == ["D", "É", "F"]


class TestMemberOrdering:
    """Test ordering within a group."""

    def test_members_sorted_by_first_name_ignoring_accents_and_case(self) -> None:
        """
        SCENARIO: Same gender, mixed names, one missing
        EXPECTED: Missing first, then Anna, émile, Fred
        """
        people = [
            make_person("Fred", gender="male"),
            make_person("émile", gender="male"),
            make_person(None, gender="male"),
            make_person("Anna", gender="male"),
        ]

        groups = partition(people, GroupingCriterion.GENDER)

        assert len(groups) == 1
        assert [p.first_name for p in groups[0].members] == [None, "Anna", "émile", "Fred"]

    def test_equal_names_order_is_stable(self) -> None:
        first = make_person("Anna", gender="female")
        second = make_person("Anna", gender="female")

        groups = partition([first, second], GroupingCriterion.GENDER)

        assert [p.id for p in groups[0].members] == [first.id, second.id]


class TestNationality:
    """Test nationality grouping."""

    def test_keys_and_labels(self) -> None:
        """
        SCENARIO: Mapped, unmapped and missing codes
        EXPECTED: Codes as keys, table names as labels, Unknown last
        """
        people = [
            make_person(nationality="US"),
            make_person(nationality=None),
            make_person(nationality="DE"),
            make_person(nationality="XX"),
            make_person(nationality="AU"),
        ]

        groups = partition(people, GroupingCriterion.NATIONALITY)

        assert [(g.key, g.label) for g in groups] == [
            ("AU", "Australia"),
            ("DE", "Germany"),
            ("US", "United States"),
            ("XX", "XX"),
            ("Unknown", "Unknown"),
        ]


class TestAge:
    """Test age grouping."""

    def test_boundary_ages(self) -> None:
        """
        SCENARIO: Ages 17, 18, 24, 25 and a missing age
        EXPECTED: 0-17 (2), 18-24 (2), 25-34 (1)
        """
        people = [make_person(age=a) for a in (17, 18, 24, 25, None)]

        groups = partition(people, GroupingCriterion.AGE)

        assert [(g.key, g.count) for g in groups] == [("0-17", 2), ("18-24", 2), ("25-34", 1)]

    def test_oldest_and_missing_age(self) -> None:
        """
        SCENARIO: One person aged 65, one without age
        EXPECTED: 0-17 (1) and 65+ (1), with readable labels
        """
        people = [make_person("Old", age=65), make_person("Nobody", age=None)]

        groups = partition(people, GroupingCriterion.AGE)

        assert [(g.key, g.label, g.count) for g in groups] == [
            ("0-17", "Under 18", 1),
            ("65+", "65+ years", 1),
        ]


class TestGender:
    """Test gender grouping."""

    def test_labels_capitalized(self) -> None:
        people = [make_person(gender="male"), make_person(gender="female"), make_person(gender=None)]

        groups = partition(people, GroupingCriterion.GENDER)

        assert [(g.key, g.label) for g in groups] == [
            ("female", "Female"),
            ("male", "Male"),
            ("Unknown", "Unknown"),
        ]


class TestUnknownCriterion:
    """Test criterion values outside the enumeration."""

    def test_single_catch_all_group(self, sample_people: List[Person]) -> None:
        """
        SCENARIO: Unrecognized criterion
        EXPECTED: One group keyed All with every record
        """
        groups = partition(sample_people, "shoe-size")

        assert len(groups) == 1
        assert groups[0].key == "All"
        assert groups[0].label == "All"
        assert groups[0].count == len(sample_people)


class TestPartitionItems:
    """Test the dict-based variant used by the worker."""

    def test_plain_dicts_match_person_partition(self, sample_people: List[Person]) -> None:
        """
        SCENARIO: Same records as Person and as plain dicts
        EXPECTED: Identical keys, labels and member order
        """
        plain = [p.model_dump(mode="json") for p in sample_people]

        rows = partition_items(plain, "nationality", get=mapping_getter)
        groups = partition(sample_people, GroupingCriterion.NATIONALITY)

        assert [(k, label, [m["id"] for m in members]) for k, label, members in rows] == [
            (g.key, g.label, [p.id for p in g.members]) for g in groups
        ]
