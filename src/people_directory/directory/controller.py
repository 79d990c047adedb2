"""
Directory Controller - Composition Root for One Browsing Session.

Wires the record source, pagination, search and grouping together and
exposes the consumer-facing surface: imperative operations plus read-only
cells for everything a view renders.

Data flow:
    records (pagination) -> search orchestrator -> grouping coordinator
    grouping results -> groups cell (wholesale replacement)
    pagination state -> error cell
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, List, Optional, Union

from people_directory.adapters.randomuser_client import RandomUserClient
from people_directory.config.models import DirectoryConfig
from people_directory.domain.entities import (
    GroupingCriterion,
    GroupingResult,
    Person,
    PersonGroup,
)
from people_directory.domain.value_objects import PaginationState
from people_directory.grouping.coordinator import GroupingCoordinator
from people_directory.interfaces.record_source import RecordSource
from people_directory.observability.observability_manager import ObservabilityManager
from people_directory.pagination.auto_continuation import AutoContinuationPolicy
from people_directory.pagination.controller import PaginationController
from people_directory.reactive.cells import ReadOnlyCell, StateCell, Subscription
from people_directory.resilience.errors import DirectoryClosedError
from people_directory.search.orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)


class DirectoryController:
    """One directory session: load, search, group, browse."""

    def __init__(
        self,
        source: RecordSource,
        config: Optional[DirectoryConfig] = None,
        coordinator: Optional[GroupingCoordinator] = None,
        observability: Optional[ObservabilityManager] = None,
        policy: Optional[AutoContinuationPolicy] = None,
    ) -> None:
        """
        Initialize directory controller.

        Args:
            source: Record source (owned; closed by close())
            config: Session configuration (defaults if None)
            coordinator: Grouping coordinator (built from config if None)
            observability: Structured event log (built from config if None)
            policy: Auto-continuation policy (built from config if None)
        """
        self.config = config or DirectoryConfig()
        self._observability = observability or ObservabilityManager(
            use_json=self.config.logging.use_json,
            log_level=getattr(logging, self.config.logging.level),
        )
        self.correlation_id = self._observability.generate_correlation_id()

        self._source = source
        self._coordinator = coordinator or GroupingCoordinator(
            observability=self._observability,
            backend_mode=self.config.grouping.backend,
        )
        self._pagination = PaginationController(
            source,
            seed=self.config.api.seed,
            page_size=self.config.pagination.page_size,
            observability=self._observability,
        )
        self._search = SearchOrchestrator(
            self._coordinator,
            debounce_seconds=self.config.search.debounce_seconds,
            criterion=self.config.grouping.default_criterion,
        )
        self._policy = policy or AutoContinuationPolicy.from_config(
            self.config.auto_continuation
        )

        self._groups: StateCell[List[PersonGroup]] = StateCell([], "directory.groups")
        self._error: StateCell[Optional[str]] = StateCell(None, "directory.error")
        self._show_grouped: StateCell[bool] = StateCell(True, "directory.show_grouped")
        self._expanded: StateCell[Optional[str]] = StateCell(None, "directory.expanded")

        self._subscriptions: List[Subscription] = []
        self._auto_task: Optional[asyncio.Task] = None
        self._wired = False
        self._closed = False
        self.stale_results_dropped = 0

    @classmethod
    def from_config(
        cls,
        config: DirectoryConfig,
        source: Optional[RecordSource] = None,
    ) -> "DirectoryController":
        """Build a session, talking to the live API unless a source is given."""
        return cls(source or RandomUserClient.from_config(config.api), config=config)

    # -------------------------------------------------------------------------
    # Reactive surface
    # -------------------------------------------------------------------------

    @property
    def groups(self) -> ReadOnlyCell[List[PersonGroup]]:
        return self._groups.readonly()

    @property
    def grouping_loading(self) -> ReadOnlyCell[bool]:
        return self._coordinator.loading

    @property
    def pagination(self) -> ReadOnlyCell[PaginationState]:
        return self._pagination.state

    @property
    def error(self) -> ReadOnlyCell[Optional[str]]:
        return self._error.readonly()

    @property
    def records(self) -> ReadOnlyCell[List[Person]]:
        return self._pagination.records

    @property
    def search_term(self) -> ReadOnlyCell[str]:
        return self._search.search_term

    @property
    def criterion(self) -> ReadOnlyCell[Union[GroupingCriterion, str]]:
        return self._search.criterion

    @property
    def show_grouped(self) -> ReadOnlyCell[bool]:
        return self._show_grouped.readonly()

    @property
    def expanded_person(self) -> ReadOnlyCell[Optional[str]]:
        return self._expanded.readonly()

    @property
    def coordinator(self) -> GroupingCoordinator:
        return self._coordinator

    @property
    def observability(self) -> ObservabilityManager:
        return self._observability

    @property
    def auto_continuation_task(self) -> Optional[asyncio.Task]:
        return self._auto_task

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # Derived views
    # -------------------------------------------------------------------------

    def visible_records(self) -> List[Person]:
        """Grouped flat list in grouped view, else the searched subset."""
        if self._show_grouped.value:
            return [person for group in self._groups.value for person in group.members]
        return list(self._search.current_subset())

    @property
    def total_records(self) -> int:
        return len(self._pagination.current_records())

    @property
    def total_groups(self) -> int:
        return len(self._groups.value)

    def nationality_count(self, person: Person) -> int:
        """How many loaded records share this person's nationality."""
        return sum(
            1
            for other in self._pagination.current_records()
            if other.nationality == person.nationality
        )

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def start(self) -> List[Person]:
        """Load page 1, then start auto-continuation if enabled."""
        self._ensure_open()
        self._wire()
        logger.info(
            f"Starting directory session {self.correlation_id} "
            f"(seed={self.config.api.seed}, page_size={self.config.pagination.page_size}, "
            f"backend={self._coordinator.backend_name})"
        )
        records = await self._pagination.reset_and_load()

        if self.config.auto_continuation.enabled and not self._closed:
            self._cancel_auto_continuation()
            self._auto_task = asyncio.get_running_loop().create_task(
                self._policy.run(self._pagination),
                name="auto-continuation",
            )
        return records

    def on_search_input(self, text: str) -> None:
        self._ensure_open()
        self._wire()
        self._search.on_input(text)

    def set_criterion(self, criterion: Union[GroupingCriterion, str]) -> None:
        """Switch grouping; unrecognized names group everything under "All"."""
        self._ensure_open()
        self._wire()
        self._search.set_criterion(GroupingCriterion.parse(criterion) or criterion)

    async def load_more(self) -> List[Person]:
        self._ensure_open()
        self._wire()
        return await self._pagination.load_next_page()

    async def retry(self) -> List[Person]:
        """Clear the error and reload from page 1."""
        self._ensure_open()
        self._wire()
        self._error.set(None)
        return await self._pagination.reset_and_load()

    def toggle_grouped_view(self) -> bool:
        self._show_grouped.update(lambda shown: not shown)
        return self._show_grouped.value

    def toggle_expanded(self, person_id: str) -> Optional[str]:
        self._expanded.update(lambda current: None if current == person_id else person_id)
        return self._expanded.value

    async def close(self) -> None:
        """Tear the session down. Idempotent."""
        if self._closed:
            return
        self._closed = True

        task = self._cancel_auto_continuation()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()

        self._search.close()
        self._coordinator.close()
        self._pagination.close()
        for cell in (self._groups, self._error, self._show_grouped, self._expanded):
            cell.complete()

        await self._source.close()
        logger.info(f"Directory session {self.correlation_id} closed")

    async def __aenter__(self) -> "DirectoryController":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Wiring
    # -------------------------------------------------------------------------

    def _wire(self) -> None:
        """Subscribe to collaborators once, from inside the running loop."""
        if self._wired:
            return
        self._wired = True
        self._subscriptions = [
            self._coordinator.results.subscribe(self._on_grouping_result),
            self._pagination.state.subscribe(self._on_pagination_state),
            self._pagination.records.subscribe(self._search.set_records),
        ]

    def _on_grouping_result(self, result: GroupingResult) -> None:
        if (
            self.config.grouping.discard_stale_results
            and result.request_id != self._coordinator.latest_request_id
        ):
            self.stale_results_dropped += 1
            logger.debug(
                f"Dropping stale grouping result {result.request_id} "
                f"(latest {self._coordinator.latest_request_id})"
            )
            return
        self._groups.set(result.groups)

    def _on_pagination_state(self, state: PaginationState) -> None:
        if state.error != self._error.value:
            self._error.set(state.error)

    def _cancel_auto_continuation(self) -> Optional[asyncio.Task]:
        task, self._auto_task = self._auto_task, None
        if task is not None and not task.done():
            task.cancel()
        return task

    def _ensure_open(self) -> None:
        if self._closed:
            raise DirectoryClosedError("Directory controller is closed")
