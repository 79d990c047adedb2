"""
Helpers for waiting on asynchronous state in tests.
"""

from __future__ import annotations

import asyncio
from typing import Callable

from people_directory.grouping.coordinator import GroupingCoordinator


async def wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Poll the event loop until predicate() holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("Condition not met before timeout")
        await asyncio.sleep(0.005)


async def settle_grouping(coordinator: GroupingCoordinator, timeout: float = 2.0) -> None:
    """Wait until no grouping request is outstanding."""
    await wait_for(
        lambda: coordinator.pending_count == 0 and not coordinator.loading.value,
        timeout,
    )
