"""
Debouncer - Collapse Bursts of Input into One Value.

A value is delivered only after `delay_seconds` pass with no newer input,
and only if it differs from the last delivered value. Timers run on the
event loop (`loop.call_later`); there is no queueing or backpressure.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NOTHING: Any = object()


class Debouncer(Generic[T]):
    """Quiescence-window debouncer with distinct-until-changed."""

    def __init__(
        self,
        delay_seconds: float,
        callback: Callable[[T], None],
        initial: Any = _NOTHING,
    ) -> None:
        """
        Initialize debouncer.

        Args:
            delay_seconds: Quiescence window
            callback: Receives each settled, changed value
            initial: Treated as already delivered (suppresses an identical
                first value)
        """
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self.delay_seconds = delay_seconds
        self._callback = callback
        self._last: Any = initial
        self._pending_value: Any = _NOTHING
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: T) -> None:
        """Register new input; restarts the quiescence window."""
        if self._handle is not None:
            self._handle.cancel()
        self._pending_value = value
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay_seconds, self._fire)

    def flush(self) -> None:
        """Deliver pending input now instead of waiting for the window."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def cancel(self) -> None:
        """Drop pending input without delivering it."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending_value = _NOTHING

    def _fire(self) -> None:
        value = self._pending_value
        self._handle = None
        self._pending_value = _NOTHING
        if value is _NOTHING:
            return
        if value == self._last:
            logger.debug("Debounced value unchanged, not re-emitting")
            return
        self._last = value
        self._callback(value)
