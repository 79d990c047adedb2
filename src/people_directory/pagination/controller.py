"""
Pagination Controller - Paged Acquisition of Person Records.

Fetches pages from a RecordSource with the session seed, accumulates the
mapped records and publishes both the record list and the pagination
state through cells.

Design Notes:
    - At most one fetch in flight: load_next_page() is a no-op while loading
    - has_more is decided by comparing received and requested counts
    - Every failure stops pagination and keeps what was loaded so far;
      loading always ends False with a message, whatever the exception
    - No automatic retry; a new attempt starts from reset_and_load()
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional

from pydantic import ValidationError

from people_directory.domain.entities import Person, map_api_results
from people_directory.domain.value_objects import ApiPage, PaginationState
from people_directory.interfaces.record_source import RecordSource
from people_directory.observability.observability_manager import ObservabilityManager
from people_directory.reactive.cells import ReadOnlyCell, StateCell
from people_directory.resilience.error_classifier import classify_error
from people_directory.resilience.errors import MalformedResponseError, UpstreamError
from people_directory.validation.request_validator import PageRequestValidator

logger = logging.getLogger(__name__)

DEFAULT_SEED = "awork"
DEFAULT_PAGE_SIZE = 5000


class PaginationController:
    """Loads pages on demand and tracks progress."""

    def __init__(
        self,
        source: RecordSource,
        seed: str = DEFAULT_SEED,
        page_size: int = DEFAULT_PAGE_SIZE,
        validator: Optional[PageRequestValidator] = None,
        observability: Optional[ObservabilityManager] = None,
    ) -> None:
        """
        Initialize pagination controller.

        Args:
            source: Where pages come from
            seed: Session seed, fixed for the controller's lifetime
            page_size: Default number of records per page
            validator: Page request validator (default limits if None)
            observability: Optional structured event log
        """
        self._source = source
        self.seed = seed
        self._validator = validator or PageRequestValidator()
        self._validator.validate(1, page_size, seed)
        self.page_size = page_size
        self._observability = observability
        self._records: StateCell[List[Person]] = StateCell([], "pagination.records")
        self._state: StateCell[PaginationState] = StateCell(
            PaginationState(page_size=page_size), "pagination.state"
        )
        self._closed = False

    @property
    def records(self) -> ReadOnlyCell[List[Person]]:
        return self._records.readonly()

    @property
    def state(self) -> ReadOnlyCell[PaginationState]:
        return self._state.readonly()

    @property
    def closed(self) -> bool:
        return self._closed

    def current_records(self) -> List[Person]:
        return self._records.value

    def current_state(self) -> PaginationState:
        return self._state.value

    async def fetch_page(self, page: int, page_size: Optional[int] = None) -> ApiPage:
        """
        Fetch one page without touching controller state.

        Raises:
            PageRequestError: Invalid page or page size
            UpstreamError: Any fetch failure (see RecordSource)
        """
        size = page_size or self.page_size
        self._validator.validate(page, size, self.seed)
        return await self._source.fetch_page(page, size, self.seed)

    async def load_next_page(self, page_size: Optional[int] = None) -> List[Person]:
        """
        Fetch and accumulate the next page.

        Returns the accumulated list unchanged when a load is already in
        flight, when pagination is exhausted, or after close(). Fetch and
        mapping failures of any kind are converted into state; they do not
        propagate. Only PageRequestError (a caller bug) is raised.
        """
        state = self._state.value
        if self._closed or state.loading or not state.has_more:
            return self._records.value

        size = page_size or self.page_size
        page = state.page
        self._validator.validate(page, size, self.seed)

        self._state.set(state.evolve(loading=True, error=None, page_size=size))
        started = time.perf_counter()

        try:
            api_page = await self._source.fetch_page(page, size, self.seed)
            people = self._map_page(api_page, page)
        except UpstreamError as e:
            if not self._closed:
                self._fail(page, e)
            return self._records.value
        except Exception as e:
            logger.exception(f"Unexpected {type(e).__name__} while loading page {page}")
            if not self._closed:
                self._fail(page, e)
            return self._records.value

        if self._closed:
            return self._records.value

        combined = people if page == 1 else self._records.value + people
        has_more = len(api_page.results) == size
        self._records.set(combined)
        self._state.set(
            self._state.value.evolve(page=page + 1, has_more=has_more, loading=False)
        )

        duration = time.perf_counter() - started
        logger.info(
            f"Loaded page {page}: {len(people)} records "
            f"({len(combined)} total, has_more={has_more})"
        )
        if self._observability:
            self._observability.record_timing("page_fetch_seconds", duration)
            self._observability.log_event(
                "page_loaded",
                {
                    "page": page,
                    "page_size": size,
                    "received": len(people),
                    "total": len(combined),
                    "has_more": has_more,
                    "duration_seconds": round(duration, 4),
                },
            )
        return combined

    async def reset_and_load(self, page_size: Optional[int] = None) -> List[Person]:
        """Clear everything and load page 1."""
        if self._closed:
            return self._records.value
        size = page_size or self.page_size
        self._records.set([])
        self._state.set(PaginationState(page_size=size))
        return await self.load_next_page(size)

    def close(self) -> None:
        """Stop publishing. The record source is owned by the caller."""
        if self._closed:
            return
        self._closed = True
        self._records.complete()
        self._state.complete()

    def _map_page(self, api_page: ApiPage, page: int) -> List[Person]:
        try:
            return map_api_results(api_page.results, page)
        except (ValidationError, TypeError) as e:
            raise MalformedResponseError(f"Unmappable record on page {page}: {e}") from e

    def _fail(self, page: int, error: Exception) -> None:
        classification = classify_error(error)
        self._state.set(
            self._state.value.evolve(
                loading=False, has_more=False, error=classification.message
            )
        )

        if classification.is_rate_limit:
            logger.warning(f"Rate limited while loading page {page}: {error}")
            event_type, level = "rate_limited", "warning"
        else:
            logger.error(f"Failed to load page {page}: {error}")
            event_type, level = "page_failed", "error"

        if self._observability:
            self._observability.log_event(
                event_type,
                {
                    "page": page,
                    "kind": classification.kind.value,
                    "status_code": classification.status_code,
                    "message": classification.message,
                },
                level=level,
            )
