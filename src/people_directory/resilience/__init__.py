"""
Resilience Package - Error Taxonomy and Classification.

This package defines how failures are represented and reported:
    - Exception hierarchy rooted at DirectoryError
    - classify_error: maps a fetch failure to a user-facing message

Design Principles:
    - Fetch failures stop pagination (no automatic retry)
    - Rate limiting is recognised and explained to the user
    - The last accumulated data always stays usable
"""

from people_directory.resilience.error_classifier import (
    ErrorClassification,
    ErrorKind,
    classify_error,
    is_rate_limit_text,
)
from people_directory.resilience.errors import (
    ApiBodyError,
    ConfigError,
    CoordinatorClosedError,
    DirectoryClosedError,
    DirectoryError,
    EndpointNotFoundError,
    GroupingBackendError,
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
    PageRequestError,
    RateLimitError,
    ServerError,
    UpstreamError,
)

__all__ = [
    "ErrorClassification",
    "ErrorKind",
    "classify_error",
    "is_rate_limit_text",
    "ApiBodyError",
    "ConfigError",
    "CoordinatorClosedError",
    "DirectoryClosedError",
    "DirectoryError",
    "EndpointNotFoundError",
    "GroupingBackendError",
    "HttpStatusError",
    "MalformedResponseError",
    "NetworkError",
    "PageRequestError",
    "RateLimitError",
    "ServerError",
    "UpstreamError",
]
