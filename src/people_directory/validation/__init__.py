"""
Validation Package - Input Validation.

    - PageRequestValidator: Validate page requests before fetching

Design Principles:
    - Fail fast on invalid input
    - Clear, actionable error messages
"""

from people_directory.validation.request_validator import (
    UPSTREAM_MAX_PAGE_SIZE,
    PageRequestValidator,
)

__all__ = ["PageRequestValidator", "UPSTREAM_MAX_PAGE_SIZE"]
