"""
Random User API client.

Thin async wrapper around https://randomuser.me/api/. Maps every failure
onto the UpstreamError hierarchy so the pagination controller can classify
it; never retries on its own.

Throttling shows up either as HTTP 429 or as a JSON body of the form
{"error": "Uh oh, something has gone wrong. ... ease up ..."}.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from people_directory.config.models import ApiConfig
from people_directory.domain.value_objects import ApiPage
from people_directory.resilience.error_classifier import is_rate_limit_text
from people_directory.resilience.errors import (
    ApiBodyError,
    EndpointNotFoundError,
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
    RateLimitError,
    ServerError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://randomuser.me/api/"


class RandomUserClient:
    """Async client for one Random User API session."""

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        user_agent: str = "people-directory/0.1",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            follow_redirects=True,
        )

    @classmethod
    def from_config(cls, config: ApiConfig) -> "RandomUserClient":
        return cls(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            user_agent=config.user_agent,
        )

    async def fetch_page(self, page: int, page_size: int, seed: str) -> ApiPage:
        """Fetch one page of raw user records.

        Raises:
            RateLimitError: 429, or a throttling message in the body
            NetworkError: No response (connection failure, timeout)
            UpstreamError: Any other request failure (redirect loop, decoding)
            ServerError / EndpointNotFoundError / HttpStatusError: Other statuses
            ApiBodyError: Body carried a non-throttling error
            MalformedResponseError: Body was not the expected JSON shape
        """
        try:
            resp = await self.client.get(
                self.base_url, params=page_params(page, page_size, seed)
            )
        except httpx.TransportError as e:
            raise NetworkError(f"{type(e).__name__}: {e}") from e
        except httpx.RequestError as e:
            # Redirect loops, undecodable content encodings
            raise UpstreamError(f"{type(e).__name__}: {e}") from e

        if resp.status_code >= 400:
            self._raise_for_status(resp)

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Response body is not JSON", status_code=resp.status_code
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}")

        error = data.get("error")
        if error:
            detail = str(error)
            logger.error(f"API returned error in response body: {detail}")
            if is_rate_limit_text(detail):
                raise RateLimitError(detail)
            raise ApiBodyError(detail)

        try:
            api_page = ApiPage.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected page shape: {e.error_count()} errors") from e

        logger.debug(
            f"Page {api_page.info.page} received: {len(api_page.results)} results "
            f"(seed={api_page.info.seed})"
        )
        return api_page

    def _raise_for_status(self, resp: httpx.Response) -> None:
        status = resp.status_code
        detail = self._error_detail(resp)

        if status == 429:
            raise RateLimitError(detail, status_code=status)
        if is_rate_limit_text(detail):
            raise RateLimitError(detail, status_code=status)
        if status == 404:
            raise EndpointNotFoundError(detail, status_code=status)
        if status >= 500:
            raise ServerError(detail, status_code=status)
        raise HttpStatusError(detail, status_code=status)

    @staticmethod
    def _error_detail(resp: httpx.Response) -> str:
        """Best-effort error text: JSON `error` field, else status line."""
        try:
            body: Any = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"{resp.status_code} {resp.reason_phrase}".strip()

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "RandomUserClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


def page_params(page: int, page_size: int, seed: str) -> Dict[str, Any]:
    """Query parameters for one page request."""
    return {"page": page, "results": page_size, "seed": seed}
