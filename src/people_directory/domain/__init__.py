"""
Domain Layer - Core Business Entities and Value Objects.

This package contains the core domain model of the People Directory.
These are pure data structures with no dependencies on infrastructure.

Entities:
    - Person: A person record (immutable after construction)
    - GroupingCriterion: Closed set of grouping axes
    - PersonGroup: Labeled, counted subset of people
    - GroupingResult: Outcome of one grouping request

Value Objects:
    - PaginationState: Progress of paged acquisition
    - ApiPage / ApiInfo: Upstream page payload

Lookup Tables:
    - Nationality display names, age bucket rules
"""

from people_directory.domain.entities import (
    GroupingCriterion,
    GroupingResult,
    Person,
    PersonGroup,
    map_api_results,
)
from people_directory.domain.value_objects import ApiInfo, ApiPage, PaginationState

__all__ = [
    "GroupingCriterion",
    "GroupingResult",
    "Person",
    "PersonGroup",
    "map_api_results",
    "ApiInfo",
    "ApiPage",
    "PaginationState",
]
