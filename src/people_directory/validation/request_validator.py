"""
Request Validator - Validate Page Requests.

Validates page requests before anything goes over the wire:
    - Page is 1-based
    - Page size within the upstream maximum
    - Seed is non-empty

Design Notes:
    - Fail-fast principle
    - All problems reported at once
"""

from __future__ import annotations

import logging
from typing import List, Optional

from people_directory.resilience.errors import PageRequestError

logger = logging.getLogger(__name__)

# The Random User API serves at most this many results per request
UPSTREAM_MAX_PAGE_SIZE = 5000


class PageRequestValidator:
    """Validates (page, page_size, seed) before fetching."""

    def __init__(self, max_page_size: int = UPSTREAM_MAX_PAGE_SIZE) -> None:
        """
        Initialize page request validator.

        Args:
            max_page_size: Largest page size accepted
        """
        if max_page_size < 1:
            raise ValueError("max_page_size must be >= 1")
        self.max_page_size = max_page_size

    def validate(self, page: int, page_size: int, seed: Optional[str] = None) -> None:
        """
        Validate a page request.

        Args:
            page: 1-based page number
            page_size: Requested number of records
            seed: Session seed (None skips the check)

        Raises:
            PageRequestError: If validation fails
        """
        errors: List[str] = []

        if page < 1:
            errors.append(f"page must be >= 1, got {page}")

        if page_size < 1:
            errors.append(f"page_size must be >= 1, got {page_size}")
        elif page_size > self.max_page_size:
            errors.append(f"page_size {page_size} exceeds maximum {self.max_page_size}")

        if seed is not None and not seed.strip():
            errors.append("seed must not be blank")

        if errors:
            error_message = "; ".join(errors)
            logger.error(f"Page request validation failed: {error_message}")
            raise PageRequestError(error_message)
