"""
Pagination Package - Paged Acquisition.

    - PaginationController: Page-by-page loading with rate-limit handling
    - AutoContinuationPolicy: Follow-up loading when the first load is small
"""

from people_directory.pagination.auto_continuation import AutoContinuationPolicy
from people_directory.pagination.controller import PaginationController

__all__ = ["AutoContinuationPolicy", "PaginationController"]
