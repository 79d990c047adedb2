"""
Grouping Backend Protocol.

A backend computes one partition asynchronously. The coordinator selects a
backend once at startup and never branches on its type afterwards.

Implementations:
    - ProcessGroupingBackend: single background worker process
    - InlineGroupingBackend: computes in the event loop, deferred a tick
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol, Sequence, Union, runtime_checkable

if TYPE_CHECKING:
    from people_directory.domain.entities import GroupingCriterion, Person, PersonGroup


@runtime_checkable
class GroupingBackend(Protocol):
    """Abstract interface for partition computation."""

    @property
    def name(self) -> str:
        ...

    async def compute(
        self,
        records: Sequence["Person"],
        criterion: Union["GroupingCriterion", str],
    ) -> List["PersonGroup"]:
        """
        Partition records; never completes within the caller's turn.

        Raises:
            GroupingBackendError: If the computation failed
        """
        ...

    def close(self) -> None:
        """Release the execution context. Idempotent."""
        ...
