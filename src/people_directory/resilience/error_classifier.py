"""
Error Classifier - Map Fetch Failures to User-Facing Messages.

Provides:
    - Rate-limit detection (HTTP 429 or marker phrases in the body)
    - One classification per failure with a human-readable message

Design Notes:
    - Every failure is a hard stop for pagination; nothing here retries
    - Rate limiting is distinguished so the message can suggest waiting
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from people_directory.resilience.errors import (
    EndpointNotFoundError,
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
    RateLimitError,
    ServerError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

# Phrases the Random User API uses when throttling in the response body
RATE_LIMIT_MARKERS = ("ease up", "bandwidth")

RATE_LIMIT_STATUS_MESSAGE = (
    "API rate limit exceeded. The Random User API limits requests for large "
    "datasets. Try refreshing in a moment."
)
RATE_LIMIT_BODY_MESSAGE = (
    "API rate limit exceeded. Too many requests have been made recently. "
    "Please wait a few minutes and refresh the page."
)
NETWORK_MESSAGE = "Network connection failed. Please check your internet connection."
SERVER_MESSAGE = "Server temporarily unavailable. Please try again later."
NOT_FOUND_MESSAGE = "API endpoint not found. Please verify the service is available."
MALFORMED_MESSAGE = "Received a malformed response from the API."


class ErrorKind(Enum):
    """Category of an upstream failure."""
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    SERVER = "server"
    NOT_FOUND = "not_found"
    HTTP = "http"
    API = "api"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ErrorClassification:
    """Classified failure ready to be shown to the user."""
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    @property
    def is_rate_limit(self) -> bool:
        return self.kind is ErrorKind.RATE_LIMIT


def is_rate_limit_text(text: Optional[str]) -> bool:
    """Check whether an error text carries one of the throttling markers."""
    if not text:
        return False
    lowered = text.lower()
    return any(marker in lowered for marker in RATE_LIMIT_MARKERS)


def classify_error(error: BaseException) -> ErrorClassification:
    """
    Classify any exception raised while fetching a page.

    Args:
        error: The exception raised by the record source

    Returns:
        ErrorClassification with kind, message and status code (if any)
    """
    status = getattr(error, "status_code", None)
    detail = str(error) or "Unknown error occurred"

    if isinstance(error, RateLimitError) or status == 429:
        message = RATE_LIMIT_STATUS_MESSAGE if status == 429 else RATE_LIMIT_BODY_MESSAGE
        return ErrorClassification(ErrorKind.RATE_LIMIT, message, status)

    if isinstance(error, NetworkError):
        return ErrorClassification(ErrorKind.NETWORK, NETWORK_MESSAGE, status)

    if isinstance(error, ServerError) or status in (500, 502, 503):
        return ErrorClassification(ErrorKind.SERVER, SERVER_MESSAGE, status)

    if isinstance(error, EndpointNotFoundError) or status == 404:
        return ErrorClassification(ErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE, status)

    if isinstance(error, MalformedResponseError):
        return ErrorClassification(ErrorKind.MALFORMED, MALFORMED_MESSAGE, status)

    if isinstance(error, HttpStatusError) or (
        isinstance(error, UpstreamError) and status is not None
    ):
        return ErrorClassification(ErrorKind.HTTP, f"Request failed: {detail}", status)

    if is_rate_limit_text(detail):
        logger.debug(f"Rate-limit marker found in {type(error).__name__}: {detail}")
        return ErrorClassification(ErrorKind.RATE_LIMIT, RATE_LIMIT_BODY_MESSAGE)

    return ErrorClassification(ErrorKind.API, f"API Error: {detail}", status)
