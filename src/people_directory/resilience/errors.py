"""
Error Taxonomy.

Upstream-fetch errors carry enough context (status code, body detail) for
`classify_error` to produce a user-facing message. Background-computation
errors are logged by the grouping coordinator and never surfaced as state.
"""

from __future__ import annotations

from typing import Optional


class DirectoryError(Exception):
    """Base class for all People Directory errors."""


# =============================================================================
# Upstream fetch errors
# =============================================================================


class UpstreamError(DirectoryError):
    """Fetching a page from the record source failed."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(UpstreamError):
    """The upstream asked us to stop (HTTP 429 or a rate-limit body)."""


class NetworkError(UpstreamError):
    """No response was received."""


class ServerError(UpstreamError):
    """Upstream answered with a 5xx status."""


class EndpointNotFoundError(UpstreamError):
    """Upstream answered 404."""


class HttpStatusError(UpstreamError):
    """Any other non-success status."""


class ApiBodyError(UpstreamError):
    """The response body carried an `error` field instead of results."""


class MalformedResponseError(UpstreamError):
    """The response could not be decoded or validated."""


# =============================================================================
# Request / lifecycle errors
# =============================================================================


class PageRequestError(DirectoryError, ValueError):
    """Invalid page or page size."""


class CoordinatorClosedError(DirectoryError, RuntimeError):
    """A grouping request was issued after teardown."""


class GroupingBackendError(DirectoryError):
    """The background grouping computation failed."""


class DirectoryClosedError(DirectoryError, RuntimeError):
    """An operation was issued on a closed directory session."""


class ConfigError(DirectoryError, ValueError):
    """A configuration file or profile could not be used."""
