"""
Grouping Coordinator - Asynchronous Grouping Requests.

Owns the grouping backend for its whole lifetime and exposes a
fire-and-forget request operation. Results are published on a stream and
progress on a loading cell; nothing is returned to the caller directly
because the computation may finish in another process or a later tick.

Design Notes:
    - Loading flips to True synchronously inside request_grouping()
    - Exactly one result per successful request, then loading -> False
    - Failed requests are logged, loading -> False, no result
    - No sequencing: concurrent requests deliver in completion order.
      Each result carries its request_id so consumers can compare it with
      latest_request_id.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional, Sequence, Set, Union

from people_directory.domain.entities import (
    GroupingCriterion,
    GroupingResult,
    Person,
    criterion_value,
)
from people_directory.grouping.backends import select_backend
from people_directory.interfaces.grouping_backend import GroupingBackend
from people_directory.observability.observability_manager import ObservabilityManager
from people_directory.reactive.cells import (
    EventStream,
    ReadOnlyCell,
    ReadOnlyStream,
    StateCell,
)
from people_directory.resilience.errors import CoordinatorClosedError

logger = logging.getLogger(__name__)


class GroupingCoordinator:
    """Issues grouping requests and publishes their results."""

    def __init__(
        self,
        backend: Optional[GroupingBackend] = None,
        observability: Optional[ObservabilityManager] = None,
        backend_mode: str = "auto",
    ) -> None:
        """
        Initialize coordinator.

        Args:
            backend: Grouping backend (selected from backend_mode if None)
            observability: Optional structured event log
            backend_mode: "auto", "process" or "inline"
        """
        self._backend = backend or select_backend(backend_mode)
        self._observability = observability
        self._results: EventStream[GroupingResult] = EventStream("grouping.results")
        self._loading: StateCell[bool] = StateCell(False, "grouping.loading")
        self._tasks: Set[asyncio.Task] = set()
        self._last_request_id = 0
        self._closed = False

        self.requests_issued = 0
        self.results_delivered = 0
        self.requests_failed = 0
        self.last_duration_seconds: Optional[float] = None

    @property
    def backend_name(self) -> str:
        return self._backend.name

    @property
    def results(self) -> ReadOnlyStream[GroupingResult]:
        return self._results.readonly()

    @property
    def loading(self) -> ReadOnlyCell[bool]:
        return self._loading.readonly()

    @property
    def latest_request_id(self) -> int:
        return self._last_request_id

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    @property
    def closed(self) -> bool:
        return self._closed

    def request_grouping(
        self,
        records: Sequence[Person],
        criterion: Union[GroupingCriterion, str],
    ) -> int:
        """
        Request a partition of records. Must be called from the event loop.

        Args:
            records: People to partition (snapshotted at call time)
            criterion: Grouping criterion

        Returns:
            Request id of the scheduled computation

        Raises:
            CoordinatorClosedError: After close()
        """
        if self._closed:
            raise CoordinatorClosedError("Grouping coordinator is closed")

        self._last_request_id += 1
        request_id = self._last_request_id
        self.requests_issued += 1
        self._loading.set(True)

        snapshot: List[Person] = list(records)
        task = asyncio.get_running_loop().create_task(
            self._run(request_id, snapshot, criterion),
            name=f"grouping-{request_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        if self._observability:
            self._observability.log_event(
                "grouping_requested",
                {
                    "request_id": request_id,
                    "criterion": criterion_value(criterion),
                    "record_count": len(snapshot),
                    "backend": self._backend.name,
                },
                level="debug",
            )
        return request_id

    async def _run(
        self,
        request_id: int,
        records: List[Person],
        criterion: Union[GroupingCriterion, str],
    ) -> None:
        started = time.perf_counter()
        try:
            groups = await self._backend.compute(records, criterion)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.requests_failed += 1
            logger.error(f"Grouping request {request_id} failed on {self._backend.name} backend: {e}")
            if self._observability:
                self._observability.log_event(
                    "grouping_failed",
                    {"request_id": request_id, "error": str(e)},
                    level="error",
                )
            if not self._closed:
                self._loading.set(False)
            return

        if self._closed:
            return

        duration = time.perf_counter() - started
        self.last_duration_seconds = duration
        result = GroupingResult(
            request_id=request_id,
            criterion=criterion_value(criterion),
            groups=groups,
        )
        self._results.emit(result)
        self.results_delivered += 1
        self._loading.set(False)

        if self._observability:
            self._observability.record_timing("grouping_duration_seconds", duration)
            self._observability.log_event(
                "grouping_delivered",
                {
                    "request_id": request_id,
                    "group_count": len(groups),
                    "record_count": result.total_count,
                    "duration_seconds": round(duration, 4),
                },
                level="debug",
            )

    def close(self) -> None:
        """Release the backend and stop publishing. Idempotent."""
        if self._closed:
            return
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        self._backend.close()
        self._results.complete()
        self._loading.complete()
        logger.debug(
            f"Grouping coordinator closed ({self.requests_issued} issued, "
            f"{self.results_delivered} delivered, {self.requests_failed} failed)"
        )
