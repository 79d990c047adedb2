"""
Core Domain Entities.

This module defines the fundamental entities of the People Directory domain:
the person record, the grouping criterion and the groups a partition
produces.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from people_directory.domain.lookup_tables import nationality_name

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/56?text=?"

# Namespace for identifiers derived when the upstream omits login.uuid
_PERSON_ID_NAMESPACE = uuid.UUID("6f1c3f5e-8f0b-4c1e-9d55-3c1f0c7a2b10")


class GroupingCriterion(str, Enum):
    """Axis used to partition the directory."""

    ALPHABETICAL = "alphabetical"
    NATIONALITY = "nationality"
    AGE = "age"
    GENDER = "gender"

    @property
    def label(self) -> str:
        return _CRITERION_LABELS[self][0]

    @property
    def icon(self) -> str:
        return _CRITERION_LABELS[self][1]

    @classmethod
    def parse(cls, value: Union[str, "GroupingCriterion"]) -> Optional["GroupingCriterion"]:
        """Return the matching criterion, or None for values outside the set."""
        try:
            return cls(value)
        except ValueError:
            return None


_CRITERION_LABELS = {
    GroupingCriterion.ALPHABETICAL: ("Alphabetical", "🔤"),
    GroupingCriterion.NATIONALITY: ("Nationality", "🌍"),
    GroupingCriterion.AGE: ("Age Group", "🎂"),
    GroupingCriterion.GENDER: ("Gender", "👥"),
}


def criterion_value(criterion: Union[GroupingCriterion, str]) -> str:
    """Plain string form of a criterion (enum or arbitrary string)."""
    if isinstance(criterion, GroupingCriterion):
        return criterion.value
    return str(criterion)


class Person(BaseModel):
    """A person record as shown in the directory."""

    id: str = Field(..., min_length=1, description="Stable unique identifier")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = Field(default=None, description="Medium picture URL")
    nationality: Optional[str] = Field(default=None, description="Nationality code")
    gender: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    age: Optional[int] = None
    country: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[Union[int, str]] = None
    username: Optional[str] = None

    model_config = {"frozen": True}

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Person):
            return NotImplemented
        return self.id == other.id

    @property
    def full_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or "Unknown User"

    @property
    def image_src(self) -> str:
        """Picture URL with the identifier appended so it is never served stale."""
        if not self.image:
            return PLACEHOLDER_IMAGE_URL
        return f"{self.image}?id={self.id}"

    @property
    def nationality_name(self) -> str:
        if not self.nationality:
            return "Unknown"
        return nationality_name(self.nationality)

    @property
    def gender_display(self) -> str:
        if not self.gender:
            return "Unknown"
        return self.gender[:1].upper() + self.gender[1:]

    @property
    def age_display(self) -> str:
        if self.age and self.date_of_birth:
            dob = self.date_of_birth
            return f"{self.age} years ({dob.strftime('%b')} {dob.day}, {dob.year})"
        if self.age:
            return f"{self.age} years"
        return "Unknown"

    @property
    def full_address(self) -> str:
        return ", ".join(p for p in (self.city, self.state, self.country) if p)

    @classmethod
    def from_api_result(cls, raw: Dict[str, Any], fallback_key: str = "") -> "Person":
        """
        Map one raw upstream record.

        Args:
            raw: Record as returned by the Random User API
            fallback_key: Used to derive an identifier when the record has
                neither login.uuid nor email

        Returns:
            Person built from the raw fields
        """
        if not isinstance(raw, dict):
            raise TypeError(f"record must be an object, got {type(raw).__name__}")
        name = _section(raw, "name")
        picture = _section(raw, "picture")
        dob = _section(raw, "dob")
        location = _section(raw, "location")
        login = _section(raw, "login")

        person_id = login.get("uuid") or str(
            uuid.uuid5(_PERSON_ID_NAMESPACE, raw.get("email") or fallback_key)
        )

        return cls(
            id=person_id,
            first_name=name.get("first"),
            last_name=name.get("last"),
            email=raw.get("email"),
            phone=raw.get("phone"),
            image=picture.get("medium"),
            nationality=raw.get("nat"),
            gender=raw.get("gender"),
            date_of_birth=dob.get("date"),
            age=dob.get("age"),
            country=location.get("country"),
            city=location.get("city"),
            state=location.get("state"),
            postcode=location.get("postcode"),
            username=login.get("username"),
        )


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Nested object of a raw record; absent or null means empty."""
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"{key!r} must be an object, got {type(value).__name__}")
    return value


def map_api_results(results: List[Dict[str, Any]], page: int = 1) -> List[Person]:
    """Map a page of raw upstream records to Person instances."""
    return [
        Person.from_api_result(raw, fallback_key=f"page-{page}-{position}")
        for position, raw in enumerate(results)
    ]


class PersonGroup(BaseModel):
    """A labeled, counted subset of people sharing a partition key."""

    key: str
    label: str
    members: List[Person] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_count(self) -> "PersonGroup":
        if self.count != len(self.members):
            raise ValueError(
                f"Group {self.key!r}: count {self.count} != {len(self.members)} members"
            )
        return self


class GroupingResult(BaseModel):
    """Outcome of one grouping request."""

    request_id: int
    criterion: str
    groups: List[PersonGroup] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def total_count(self) -> int:
        return sum(g.count for g in self.groups)

    def flatten(self) -> List[Person]:
        """All members in group order."""
        flat: List[Person] = []
        for group in self.groups:
            flat.extend(group.members)
        return flat
