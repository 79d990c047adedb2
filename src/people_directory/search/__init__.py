"""
Search Package - Matching, Debouncing and Orchestration.

Components:
    - matches_term / filter_records: Cross-field, case-insensitive matching
    - Debouncer: Quiescence-window collapsing of raw input
    - SearchOrchestrator: Stable term -> filtered records -> regrouping
"""

from people_directory.search.debouncer import Debouncer
from people_directory.search.matching import (
    SEARCHABLE_FIELDS,
    filter_records,
    matches_term,
)
from people_directory.search.orchestrator import SearchOrchestrator

__all__ = [
    "Debouncer",
    "SEARCHABLE_FIELDS",
    "SearchOrchestrator",
    "filter_records",
    "matches_term",
]
