"""
Unit Tests for PaginationController.

Test Aspects Covered:
    ✅ Business Logic: Replace on page 1, append afterwards, end-of-data
    ✅ Concurrency: At most one fetch in flight
    ✅ Error Handling: Rate limits, network errors, malformed records,
       unexpected exceptions (loading always ends False)
    ✅ Lifecycle: Reset, close
"""

from __future__ import annotations

import asyncio
from typing import List

import httpx
import pytest

from people_directory.adapters.mock_provider import MockRecordSource
from people_directory.adapters.randomuser_client import RandomUserClient
from people_directory.domain.value_objects import ApiInfo, ApiPage, PaginationState
from people_directory.observability.observability_manager import ObservabilityManager
from people_directory.pagination.controller import PaginationController
from people_directory.resilience.error_classifier import (
    MALFORMED_MESSAGE,
    NETWORK_MESSAGE,
    RATE_LIMIT_BODY_MESSAGE,
    RATE_LIMIT_STATUS_MESSAGE,
)
from people_directory.resilience.errors import NetworkError, PageRequestError, RateLimitError
from tests.fixtures.people import make_raw_record


class StaticSource:
    """Returns the same page for every call."""

    def __init__(self, results: List[dict]) -> None:
        self.results = results

    async def fetch_page(self, page: int, page_size: int, seed: str) -> ApiPage:
        return ApiPage(results=self.results, info=ApiInfo(seed=seed, page=page))

    async def close(self) -> None:
        pass


@pytest.fixture
def controller(mock_source: MockRecordSource, observability: ObservabilityManager) -> PaginationController:
    return PaginationController(mock_source, page_size=100, observability=observability)


class TestLoading:
    """Test successful loads."""

    @pytest.mark.asyncio
    async def test_first_page(self, controller: PaginationController) -> None:
        """
        SCENARIO: Load page 1 of a 250-record dataset
        EXPECTED: 100 records, next page 2, more available
        """
        # Act
        records = await controller.load_next_page()

        # Assert
        assert len(records) == 100
        state = controller.current_state()
        assert state.page == 2
        assert state.has_more is True
        assert state.loading is False
        assert state.error is None

    @pytest.mark.asyncio
    async def test_appends_until_short_page(
        self, controller: PaginationController, mock_source: MockRecordSource
    ) -> None:
        """
        SCENARIO: Keep loading until the dataset runs out
        EXPECTED: 250 records, short third page ends pagination
        """
        for _ in range(3):
            await controller.load_next_page()

        assert len(controller.current_records()) == 250
        assert len({p.id for p in controller.current_records()}) == 250
        assert controller.current_state().has_more is False
        assert mock_source.call_count == 3

    @pytest.mark.asyncio
    async def test_no_fetch_after_end_of_data(
        self, controller: PaginationController, mock_source: MockRecordSource
    ) -> None:
        for _ in range(3):
            await controller.load_next_page()

        records = await controller.load_next_page()

        assert len(records) == 250
        assert mock_source.call_count == 3

    @pytest.mark.asyncio
    async def test_exact_multiple_needs_empty_page(self) -> None:
        """
        SCENARIO: Dataset size is a multiple of the page size
        EXPECTED: Full pages keep has_more; an empty page ends it
        """
        controller = PaginationController(MockRecordSource(total_records=200), page_size=100)

        await controller.load_next_page()
        await controller.load_next_page()
        assert controller.current_state().has_more is True

        await controller.load_next_page()
        assert controller.current_state().has_more is False
        assert len(controller.current_records()) == 200

    @pytest.mark.asyncio
    async def test_reset_replaces_records(
        self, controller: PaginationController, mock_source: MockRecordSource
    ) -> None:
        await controller.load_next_page()
        await controller.load_next_page()

        records = await controller.reset_and_load()

        assert len(records) == 100
        assert controller.current_state().page == 2
        assert mock_source.calls[-1]["page"] == 1

    @pytest.mark.asyncio
    async def test_session_seed_sent(self, mock_source: MockRecordSource) -> None:
        controller = PaginationController(mock_source, seed="session-1", page_size=10)

        await controller.load_next_page()

        assert mock_source.calls[0]["seed"] == "session-1"

    @pytest.mark.asyncio
    async def test_state_transitions_published(self, controller: PaginationController) -> None:
        states: List[PaginationState] = []
        controller.state.subscribe(states.append)

        await controller.load_next_page()

        assert [s.loading for s in states] == [False, True, False]
        assert [s.page for s in states] == [1, 1, 2]

    @pytest.mark.asyncio
    async def test_page_loaded_event(
        self, controller: PaginationController, observability: ObservabilityManager
    ) -> None:
        await controller.load_next_page()

        event = observability.get_events("page_loaded")[0]
        assert event["page"] == 1
        assert event["received"] == 100
        assert event["has_more"] is True


class TestInFlightGuard:
    """Test the single in-flight fetch rule."""

    @pytest.mark.asyncio
    async def test_load_while_loading_is_noop(self) -> None:
        """
        SCENARIO: Second load requested while the first is in flight
        EXPECTED: Returns the unchanged set without fetching
        """
        # Arrange
        source = MockRecordSource(total_records=250, latency_seconds=0.05)
        controller = PaginationController(source, page_size=100)
        first = asyncio.ensure_future(controller.load_next_page())
        await asyncio.sleep(0)
        assert controller.current_state().loading is True

        # Act
        during = await controller.load_next_page()

        # Assert
        assert during == []
        assert source.call_count == 1
        assert len(await first) == 100


class TestErrors:
    """Test failure handling."""

    @pytest.mark.asyncio
    async def test_rate_limit_status_stops_pagination(
        self,
        controller: PaginationController,
        mock_source: MockRecordSource,
        observability: ObservabilityManager,
    ) -> None:
        """
        SCENARIO: 429 on the second page
        EXPECTED: has_more False, rate-limit message, first page kept
        """
        # Arrange
        mock_source.fail_on_call(2, RateLimitError("Too Many Requests", status_code=429))
        await controller.load_next_page()

        # Act
        records = await controller.load_next_page()

        # Assert
        state = controller.current_state()
        assert state.has_more is False
        assert state.loading is False
        assert state.error == RATE_LIMIT_STATUS_MESSAGE
        assert state.page == 2
        assert len(records) == 100
        assert observability.get_events("rate_limited")[0]["status_code"] == 429

    @pytest.mark.asyncio
    async def test_rate_limit_body_message(
        self, controller: PaginationController, mock_source: MockRecordSource
    ) -> None:
        mock_source.fail_on_call(1, RateLimitError("Please ease up"))

        await controller.load_next_page()

        assert controller.current_state().error == RATE_LIMIT_BODY_MESSAGE

    @pytest.mark.asyncio
    async def test_network_error(
        self,
        controller: PaginationController,
        mock_source: MockRecordSource,
        observability: ObservabilityManager,
    ) -> None:
        mock_source.fail_on_call(1, NetworkError("ConnectError: refused"))

        records = await controller.load_next_page()

        assert records == []
        assert controller.current_state().error == NETWORK_MESSAGE
        assert controller.current_state().has_more is False
        assert observability.get_events("page_failed")[0]["kind"] == "network"

    @pytest.mark.asyncio
    async def test_no_automatic_retry(
        self, controller: PaginationController, mock_source: MockRecordSource
    ) -> None:
        mock_source.fail_on_call(1, NetworkError("down"))
        await controller.load_next_page()

        await controller.load_next_page()
        await asyncio.sleep(0.01)

        assert mock_source.call_count == 1

    @pytest.mark.asyncio
    async def test_reset_after_error_clears_it(
        self, controller: PaginationController, mock_source: MockRecordSource
    ) -> None:
        """
        SCENARIO: Manual retry after a failure
        EXPECTED: Error cleared, page 1 loaded
        """
        mock_source.fail_on_call(1, NetworkError("down"))
        await controller.load_next_page()

        records = await controller.reset_and_load()

        assert len(records) == 100
        assert controller.current_state().error is None
        assert controller.current_state().has_more is True

    @pytest.mark.asyncio
    async def test_unmappable_record_is_malformed(self) -> None:
        """
        SCENARIO: Page whose record has a non-numeric age
        EXPECTED: Malformed-response message, nothing appended
        """
        source = StaticSource([make_raw_record(1, dob={"date": None, "age": "old"})])
        controller = PaginationController(source, page_size=1)

        records = await controller.load_next_page()

        assert records == []
        assert controller.current_state().error == MALFORMED_MESSAGE

    @pytest.mark.asyncio
    async def test_non_object_section_is_malformed(self) -> None:
        """
        SCENARIO: Record whose name is a plain string
        EXPECTED: Loading ends, pagination stops, malformed message set
        """
        # Arrange
        source = StaticSource([{"name": "Alice", "login": {"uuid": "u1"}}])
        controller = PaginationController(source, page_size=1)

        # Act
        records = await controller.load_next_page()

        # Assert
        state = controller.current_state()
        assert records == []
        assert state.loading is False
        assert state.has_more is False
        assert state.error == MALFORMED_MESSAGE
        assert await controller.load_next_page() == []
        assert controller.current_state().loading is False

    @pytest.mark.asyncio
    async def test_unexpected_source_exception_becomes_state(
        self,
        controller: PaginationController,
        mock_source: MockRecordSource,
        observability: ObservabilityManager,
    ) -> None:
        """
        SCENARIO: Record source raises something outside the upstream errors
        EXPECTED: Not raised; loading ends with a message, first page kept
        """
        # Arrange
        mock_source.fail_on_call(2, RuntimeError("socket pool exhausted"))
        await controller.load_next_page()

        # Act
        records = await controller.load_next_page()

        # Assert
        state = controller.current_state()
        assert len(records) == 100
        assert state.loading is False
        assert state.has_more is False
        assert state.error == "API Error: socket pool exhausted"
        assert observability.get_events("page_failed")[0]["kind"] == "api"

    @pytest.mark.asyncio
    async def test_redirect_loop_from_http_client_becomes_state(self) -> None:
        """
        SCENARIO: HTTP source stuck in a redirect loop
        EXPECTED: Loading ends with an error message instead of raising
        """
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"Location": str(request.url)})

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
        source = RandomUserClient(base_url="https://randomuser.test/api/", client=http)
        controller = PaginationController(source, page_size=10)

        await controller.load_next_page()

        state = controller.current_state()
        assert state.loading is False
        assert state.has_more is False
        assert state.error.startswith("API Error: TooManyRedirects")
        await http.aclose()

    @pytest.mark.asyncio
    async def test_invalid_page_size_raises(self, controller: PaginationController) -> None:
        with pytest.raises(PageRequestError):
            await controller.load_next_page(page_size=6000)

        assert controller.current_state().loading is False

    def test_invalid_default_page_size_rejected(self, mock_source: MockRecordSource) -> None:
        with pytest.raises(PageRequestError):
            PaginationController(mock_source, page_size=0)


class TestFetchPage:
    """Test the raw fetch operation."""

    @pytest.mark.asyncio
    async def test_fetch_page_leaves_state_untouched(
        self, controller: PaginationController
    ) -> None:
        api_page = await controller.fetch_page(3, 100)

        assert len(api_page.results) == 50
        assert controller.current_records() == []
        assert controller.current_state().page == 1

    @pytest.mark.asyncio
    async def test_fetch_page_propagates_errors(
        self, controller: PaginationController, mock_source: MockRecordSource
    ) -> None:
        mock_source.fail_on_call(1, RateLimitError("ease up"))

        with pytest.raises(RateLimitError):
            await controller.fetch_page(1)

    @pytest.mark.asyncio
    async def test_fetch_page_validates(self, controller: PaginationController) -> None:
        with pytest.raises(PageRequestError):
            await controller.fetch_page(0, 10)


class TestClose:
    """Test teardown."""

    @pytest.mark.asyncio
    async def test_load_after_close_is_noop(
        self, controller: PaginationController, mock_source: MockRecordSource
    ) -> None:
        controller.close()
        controller.close()

        records = await controller.load_next_page()

        assert records == []
        assert mock_source.call_count == 0
        assert controller.records.completed is True

    @pytest.mark.asyncio
    async def test_close_during_fetch_discards_page(self) -> None:
        source = MockRecordSource(latency_seconds=0.02)
        controller = PaginationController(source, page_size=10)
        pending = asyncio.ensure_future(controller.load_next_page())
        await asyncio.sleep(0)

        controller.close()
        records = await pending

        assert records == []
