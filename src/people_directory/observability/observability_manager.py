"""
Observability Manager - Structured Events and Timings.

Provides:
    - Structured logging via structlog (JSON or console rendering)
    - Correlation ID propagation per directory session
    - In-memory event and timing records for inspection

Design Notes:
    - Correlation ID kept in a ContextVar and bound into structlog
    - Used by the grouping coordinator and the pagination controller
"""

from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> Optional[str]:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set correlation ID in context."""
    _correlation_id.set(correlation_id)


class ObservabilityManager:
    """
    Structured event log for one directory session.

    Events are rendered through structlog and also kept in memory so
    callers (and tests) can inspect what happened.
    """

    def __init__(
        self,
        service_name: str = "people_directory",
        use_json: bool = True,
        log_level: int = logging.INFO,
    ) -> None:
        """
        Initialize observability manager.

        Args:
            service_name: Service name for log entries
            use_json: Render events as JSON (console rendering otherwise)
            log_level: Minimum level for rendered events
        """
        self.service_name = service_name
        self.use_json = use_json
        self.log_level = log_level
        self._events: List[Dict[str, Any]] = []
        self._timings: Dict[str, List[float]] = {}

        self._configure_structlog()
        self._logger = structlog.get_logger(service_name)

    def _configure_structlog(self) -> None:
        processors: List[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

        if self.use_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(self.log_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=False,
        )

    def set_correlation_id(self, correlation_id: str) -> None:
        """
        Set correlation ID for current context.

        Args:
            correlation_id: Unique ID for the session
        """
        set_correlation_id(correlation_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    def generate_correlation_id(self) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())
        self.set_correlation_id(correlation_id)
        return correlation_id

    def log_event(
        self,
        event_type: str,
        data: Optional[Dict[str, Any]] = None,
        level: str = "info",
    ) -> None:
        """
        Log a structured event.

        Args:
            event_type: Type of event (e.g., "page_loaded", "rate_limited")
            data: Additional event data
            level: Log level (debug, info, warning, error)
        """
        event_data = {
            "event_type": event_type,
            "timestamp": datetime.now().isoformat(),
            "correlation_id": get_correlation_id(),
            **(data or {}),
        }
        self._events.append(event_data)

        log_method = getattr(self._logger, level.lower(), self._logger.info)
        log_method(event_type, **{k: v for k, v in event_data.items() if k != "event_type"})

    def record_timing(self, name: str, duration_seconds: float) -> None:
        """Record a duration sample."""
        self._timings.setdefault(name, []).append(duration_seconds)

    def get_events(self, event_type: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get recorded events, optionally only one type."""
        if event_type is None:
            return list(self._events)
        return [e for e in self._events if e["event_type"] == event_type]

    def get_timings(self) -> Dict[str, List[float]]:
        """Get all recorded duration samples."""
        return {name: list(values) for name, values in self._timings.items()}

    def clear(self) -> None:
        """Clear all recorded events and timings."""
        self._events.clear()
        self._timings.clear()
