"""
Value Objects for Domain Layer.

Value objects are immutable objects that describe state or upstream payloads
but have no conceptual identity.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

# Raw upstream record, kept as plain structural data
RawRecord = Dict[str, Any]


class PaginationState(BaseModel):
    """Progress of paged acquisition."""

    page: int = Field(default=1, ge=1, description="Next page to fetch (1-based)")
    page_size: int = Field(default=5000, ge=1)
    has_more: bool = True
    loading: bool = False
    error: Optional[str] = None

    model_config = {"frozen": True}

    def evolve(self, **changes: Any) -> "PaginationState":
        """Copy with the given fields replaced."""
        return self.model_copy(update=changes)


class ApiInfo(BaseModel):
    """The `info` block of an upstream page."""

    seed: str = ""
    results: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    version: Optional[str] = None


class ApiPage(BaseModel):
    """One page as returned by the upstream record source."""

    results: List[RawRecord] = Field(default_factory=list)
    info: ApiInfo = Field(default_factory=ApiInfo)
