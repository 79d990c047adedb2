"""
Record Source Protocol.

Defines the abstract interface for paged access to raw person records.
All data sources (HTTP API, deterministic mock) implement this protocol to
be used by the pagination controller.

The source is responsible for:
    - Fetching one page for (page, page_size, seed)
    - Raising a classified UpstreamError subclass on failure
    - Releasing its transport on close()

Design Notes:
    - Uses typing.Protocol for structural subtyping
    - The seed is fixed for a session so pages are reproducible
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from people_directory.domain.value_objects import ApiPage


@runtime_checkable
class RecordSource(Protocol):
    """Abstract interface for paged record access."""

    async def fetch_page(self, page: int, page_size: int, seed: str) -> "ApiPage":
        """
        Fetch one page of raw records.

        Args:
            page: 1-based page number
            page_size: Requested number of records
            seed: Session seed for reproducible results

        Returns:
            ApiPage with raw results and info block

        Raises:
            UpstreamError: Classified failure (rate limit, network, ...)
        """
        ...

    async def close(self) -> None:
        """Release any underlying connections."""
        ...
