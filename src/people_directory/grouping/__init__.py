"""
Grouping Package - Partitioning and Its Orchestration.

Components:
    - partition: Pure partition function (engine)
    - run_grouping_job / reconstruct_groups: Background channel (worker)
    - ProcessGroupingBackend / InlineGroupingBackend: Execution strategies
    - GroupingCoordinator: Fire-and-forget requests, result stream, loading

Design Principles:
    - One algorithm for inline and worker execution
    - Backend chosen once at startup
    - Results replace each other wholesale, never patched in place
"""

from people_directory.grouping.backends import (
    InlineGroupingBackend,
    ProcessGroupingBackend,
    select_backend,
)
from people_directory.grouping.coordinator import GroupingCoordinator
from people_directory.grouping.engine import partition
from people_directory.grouping.worker import reconstruct_groups, run_grouping_job

__all__ = [
    "GroupingCoordinator",
    "InlineGroupingBackend",
    "ProcessGroupingBackend",
    "partition",
    "reconstruct_groups",
    "run_grouping_job",
    "select_backend",
]
