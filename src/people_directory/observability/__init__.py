"""
Observability Package - Structured Event Logging.

    - ObservabilityManager: structlog events with a session correlation ID

Design Principles:
    - Plain `logging` for module diagnostics, structlog for domain events
    - Correlation ID propagation across one directory session
"""

from people_directory.observability.observability_manager import (
    ObservabilityManager,
    get_correlation_id,
)

__all__ = ["ObservabilityManager", "get_correlation_id"]
