"""
Grouping Backends - Where a Partition Gets Computed.

Two strategies behind the GroupingBackend protocol:
    - ProcessGroupingBackend: one worker process, plain-data messages
    - InlineGroupingBackend: same engine in the event loop, one tick later

`select_backend()` picks one at startup from configuration and a runtime
capability check.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Executor, ProcessPoolExecutor
from typing import List, Optional, Sequence, Union

from people_directory.domain.entities import GroupingCriterion, Person, PersonGroup
from people_directory.grouping.engine import partition
from people_directory.grouping.worker import (
    build_request,
    reconstruct_groups,
    run_grouping_job,
)
from people_directory.interfaces.grouping_backend import GroupingBackend
from people_directory.resilience.errors import GroupingBackendError

logger = logging.getLogger(__name__)

BACKEND_MODES = ("auto", "process", "inline")


class InlineGroupingBackend:
    """Computes in the event loop after yielding once to the scheduler."""

    name = "inline"

    async def compute(
        self,
        records: Sequence[Person],
        criterion: Union[GroupingCriterion, str],
    ) -> List[PersonGroup]:
        await asyncio.sleep(0)
        return partition(records, criterion)

    def close(self) -> None:
        pass


class ProcessGroupingBackend:
    """
    Runs the grouping job in a single background worker process.

    The worker receives serialized plain dicts and returns plain dicts;
    members are rebuilt into Person instances on the way back.
    """

    name = "process"

    def __init__(self, executor: Optional[Executor] = None) -> None:
        """
        Initialize process backend.

        Args:
            executor: Executor to submit jobs to (default: one-worker
                ProcessPoolExecutor)

        Raises:
            NotImplementedError / OSError: If the platform cannot host
                worker processes
        """
        self._executor = executor or ProcessPoolExecutor(max_workers=1)
        self._closed = False

    async def compute(
        self,
        records: Sequence[Person],
        criterion: Union[GroupingCriterion, str],
    ) -> List[PersonGroup]:
        payload = build_request(records, criterion)
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(self._executor, run_grouping_job, payload)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            raise GroupingBackendError(f"Worker failed: {e!r}") from e
        return reconstruct_groups(response)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=False, cancel_futures=True)
        logger.debug("Grouping worker released")


def select_backend(mode: str = "auto") -> GroupingBackend:
    """
    Select the grouping strategy once at startup.

    Args:
        mode: "process", "inline" or "auto" (process when available)

    Returns:
        Ready-to-use backend
    """
    if mode not in BACKEND_MODES:
        raise ValueError(f"Unknown grouping backend {mode!r}, expected one of {BACKEND_MODES}")

    if mode == "inline":
        return InlineGroupingBackend()

    if mode == "process":
        return ProcessGroupingBackend()

    try:
        backend = ProcessGroupingBackend()
    except (ImportError, NotImplementedError, OSError) as e:
        logger.warning(f"Falling back to inline grouping: {e}")
        return InlineGroupingBackend()
    logger.info("Using background worker process for grouping")
    return backend
