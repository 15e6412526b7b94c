import asyncio
from typing import Any, Callable, Dict, Optional

import httpx
from loguru import logger

from nfl_hq.config.settings import settings
from nfl_hq.utils.retry import RetryPolicy, SleepFn, retry_async


class ScraperError(Exception):
    """Custom exception for scraper-related errors."""

    pass


class AuthenticationError(ScraperError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class RateLimitError(ScraperError):
    """Exception raised for rate limit errors (429)."""

    pass


class UpstreamStatusError(ScraperError):
    """Exception raised for any other non-success HTTP status."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"Upstream returned {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class RequestTimeoutError(ScraperError):
    """Exception raised when a single attempt exceeds its time budget."""

    pass


# Everything that counts as a failed attempt and is worth another try
RETRYABLE_ERRORS = (ScraperError, httpx.RequestError)


class BaseScraper:
    """Base class for upstream JSON sources with bounded retries."""

    source_name: str = "upstream"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: Optional[float] = None,
        sleep: Optional[SleepFn] = None,
    ):
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self.retry_policy = retry_policy or RetryPolicy.from_settings()
        self._sleep = sleep
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
        )

    async def _request_once(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Performs one attempt and maps failure statuses onto scraper errors."""
        logger.debug("Making request", method=method, url=url, params=params)
        response = await self.client.request(
            method, url, params=params, headers=headers
        )

        if response.status_code in {401, 403}:
            logger.warning(
                f"Authentication error ({response.status_code}) for {self.source_name} at {url}."
            )
            raise AuthenticationError(
                f"Authentication failed ({response.status_code}) for {self.source_name}"
            )

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            logger.warning(
                f"Rate limit hit (429) for {self.source_name} at {url}. Retry-After: {retry_after}"
            )
            raise RateLimitError(f"Rate limited by {self.source_name}")

        if not response.is_success:
            raise UpstreamStatusError(response.status_code, url)

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response

    async def _fetch_json_once(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        parse: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        try:
            response = await asyncio.wait_for(
                self._request_once("GET", url, params=params, headers=headers),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError(
                f"Request to {url} exceeded {self.timeout}s"
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.debug(f"Raw response content: {response.text[:200]}")
            raise ScraperError(f"Invalid JSON from {self.source_name} at {url}") from e

        if parse is None:
            return data
        try:
            return parse(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ScraperError(
                f"Unexpected payload shape from {self.source_name} at {url}: {e}"
            ) from e

    async def _get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        parse: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """GETs and decodes JSON, retrying each failed attempt under the policy.

        ``parse`` runs inside the attempt, so a malformed payload is retried
        like a network error. Raises the last attempt's exception once the
        policy is exhausted.
        """
        return await retry_async(
            lambda: self._fetch_json_once(
                url, params=params, headers=headers, parse=parse
            ),
            self.retry_policy,
            retry_on=RETRYABLE_ERRORS,
            sleep=self._sleep,
            description=f"{self.source_name} request to {url}",
        )

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.source_name}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
