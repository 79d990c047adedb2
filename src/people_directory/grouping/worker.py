"""
Background Grouping Channel.

The worker process operates on plain structural data only. This module
defines the typed request/response messages that cross the process
boundary, the worker entry point, and the mapping that rebuilds Person
instances from a response.

Message shapes:
    request:  {"records": [<person dict>, ...], "criterion": "<criterion>"}
    response: {"groups": [{"key", "label", "users": [<person dict>], "count"}]}
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Union

from pydantic import BaseModel, Field

from people_directory.domain.entities import (
    GroupingCriterion,
    Person,
    PersonGroup,
    criterion_value,
)
from people_directory.grouping.engine import mapping_getter, partition_items

PlainRecord = Dict[str, Any]


class GroupingRequestMessage(BaseModel):
    """Request sent to the worker."""

    records: List[PlainRecord] = Field(default_factory=list)
    criterion: str


class PlainGroup(BaseModel):
    """A group whose members are plain dicts."""

    key: str
    label: str
    users: List[PlainRecord] = Field(default_factory=list)
    count: int = Field(ge=0)


class GroupingResponseMessage(BaseModel):
    """Response returned by the worker."""

    groups: List[PlainGroup] = Field(default_factory=list)


def build_request(
    records: Sequence[Person],
    criterion: Union[GroupingCriterion, str],
) -> Dict[str, Any]:
    """Serialize people and criterion into a plain request payload."""
    message = GroupingRequestMessage(
        records=[p.model_dump(mode="json") for p in records],
        criterion=criterion_value(criterion),
    )
    return message.model_dump()


def run_grouping_job(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Worker entry point.

    Stateless: everything needed arrives in the payload, nothing is kept
    between calls.
    """
    request = GroupingRequestMessage.model_validate(payload)
    rows = partition_items(request.records, request.criterion, get=mapping_getter)
    response = GroupingResponseMessage(
        groups=[
            PlainGroup(key=key, label=label, users=members, count=len(members))
            for key, label, members in rows
        ]
    )
    return response.model_dump()


def reconstruct_groups(payload: Dict[str, Any]) -> List[PersonGroup]:
    """
    Rebuild PersonGroup/Person values from a worker response.

    Raises:
        pydantic.ValidationError: If the payload does not match the
            response message or a member is not a valid Person
    """
    response = GroupingResponseMessage.model_validate(payload)
    return [
        PersonGroup(
            key=group.key,
            label=group.label,
            members=[Person.model_validate(user) for user in group.users],
            count=group.count,
        )
        for group in response.groups
    ]
