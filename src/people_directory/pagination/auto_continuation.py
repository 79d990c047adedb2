"""
Auto-Continuation Policy - Follow-Up Loading After a Small First Page.

When the initial load comes back with fewer records than the low-water
mark (typically because the upstream throttled a large request), further
pages are requested with pauses in between until the policy says stop.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from people_directory.config.models import AutoContinuationConfig
from people_directory.domain.value_objects import PaginationState
from people_directory.pagination.controller import PaginationController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoContinuationPolicy:
    """Thresholds and pacing for follow-up page loads."""

    low_water_mark: int = 1000
    target_total: int = 5000
    initial_delay: float = 3.0
    step_delay: float = 1.0
    follow_up_delay: float = 2.0

    @classmethod
    def from_config(cls, config: AutoContinuationConfig) -> "AutoContinuationPolicy":
        return cls(
            low_water_mark=config.low_water_mark,
            target_total=config.target_total,
            initial_delay=config.initial_delay_seconds,
            step_delay=config.step_delay_seconds,
            follow_up_delay=config.follow_up_delay_seconds,
        )

    def should_continue(self, record_count: int, state: PaginationState) -> bool:
        return (
            0 < record_count < self.low_water_mark
            and record_count < self.target_total
            and state.has_more
            and not state.loading
        )

    async def run(self, pagination: PaginationController) -> int:
        """
        Drive follow-up loads until the policy stops.

        Runs as one task; cancelling it stops the chain at the next pause.

        Returns:
            Number of follow-up pages requested
        """
        await asyncio.sleep(self.initial_delay)
        requested = 0

        while self._check(pagination):
            await asyncio.sleep(self.step_delay)
            if not self._check(pagination):
                break
            requested += 1
            logger.info(
                f"Auto-continuation: {len(pagination.current_records())} records "
                f"below {self.low_water_mark}, loading page {pagination.current_state().page}"
            )
            await pagination.load_next_page()
            await asyncio.sleep(self.follow_up_delay)

        logger.debug(f"Auto-continuation finished after {requested} follow-up loads")
        return requested

    def _check(self, pagination: PaginationController) -> bool:
        if pagination.closed:
            return False
        return self.should_continue(
            len(pagination.current_records()), pagination.current_state()
        )
