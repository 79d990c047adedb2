"""
Search Orchestrator - Debounced Search Feeding the Grouping Coordinator.

Raw keystrokes go in through on_input(). After the quiescence window the
settled term is published, the current records are filtered with it and a
fresh grouping request is issued over the filtered set (or the full set
when the term is blank).
"""

from __future__ import annotations

import logging
from typing import List, Protocol, Sequence, Union

from people_directory.domain.entities import GroupingCriterion, Person
from people_directory.reactive.cells import ReadOnlyCell, StateCell
from people_directory.search.debouncer import Debouncer
from people_directory.search.matching import filter_records, normalize_term

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3


class GroupingRequester(Protocol):
    """What the orchestrator needs from the grouping coordinator."""

    def request_grouping(
        self,
        records: Sequence[Person],
        criterion: Union[GroupingCriterion, str],
    ) -> int:
        ...


class SearchOrchestrator:
    """Turns raw input into a stable term, filtered records and regrouping."""

    def __init__(
        self,
        grouping: GroupingRequester,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        criterion: Union[GroupingCriterion, str] = GroupingCriterion.ALPHABETICAL,
    ) -> None:
        """
        Initialize search orchestrator.

        Args:
            grouping: Receives a grouping request on every change
            debounce_seconds: Quiescence window for raw input
            criterion: Initial grouping criterion
        """
        self._grouping = grouping
        self._records: List[Person] = []
        self._search_term: StateCell[str] = StateCell("", "search.term")
        self._filtered: StateCell[List[Person]] = StateCell([], "search.filtered")
        self._criterion: StateCell[Union[GroupingCriterion, str]] = StateCell(
            criterion, "search.criterion"
        )
        self._debouncer: Debouncer[str] = Debouncer(
            debounce_seconds, self._on_stable_term, initial=""
        )

    @property
    def search_term(self) -> ReadOnlyCell[str]:
        return self._search_term.readonly()

    @property
    def filtered_records(self) -> ReadOnlyCell[List[Person]]:
        return self._filtered.readonly()

    @property
    def criterion(self) -> ReadOnlyCell[Union[GroupingCriterion, str]]:
        return self._criterion.readonly()

    @property
    def is_searching(self) -> bool:
        return bool(normalize_term(self._search_term.value))

    @property
    def input_pending(self) -> bool:
        return self._debouncer.pending

    def on_input(self, raw_text: str) -> None:
        """Feed one raw input event (unthrottled)."""
        self._debouncer.push(raw_text)

    def flush(self) -> None:
        """Settle pending input immediately."""
        self._debouncer.flush()

    def set_records(self, records: Sequence[Person]) -> None:
        """Replace the searchable records; re-filters and regroups."""
        self._records = list(records)
        self._refresh()

    def set_criterion(self, criterion: Union[GroupingCriterion, str]) -> None:
        """Switch the grouping criterion and regroup the current subset."""
        self._criterion.set(criterion)
        self._request_grouping()

    def current_subset(self) -> List[Person]:
        """Filtered records while searching, all records otherwise."""
        return self._filtered.value if self.is_searching else self._records

    def regroup(self) -> int:
        """Issue a grouping request for the current subset."""
        return self._request_grouping()

    def close(self) -> None:
        """Stop the debounce timer and complete the published cells."""
        self._debouncer.cancel()
        self._search_term.complete()
        self._filtered.complete()
        self._criterion.complete()

    def _on_stable_term(self, term: str) -> None:
        logger.debug(f"Search term settled: {term!r}")
        self._search_term.set(term)
        self._refresh()

    def _refresh(self) -> None:
        self._filtered.set(filter_records(self._records, self._search_term.value))
        self._request_grouping()

    def _request_grouping(self) -> int:
        return self._grouping.request_grouping(self.current_subset(), self._criterion.value)
