from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


class ResilientFetcher:
    """Single gateway for outbound HTTP.

    Rate-limited (429) responses and transport failures are retried with a
    linear backoff of ``attempt`` seconds, up to ``retry_limit`` retries. Any
    other non-success status, or a body that cannot be decoded, is given up on
    at once. Giving up is signalled by returning ``None``; request errors never
    escape.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        retry_limit: int = 3,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._client = client
        self.retry_limit = retry_limit
        self._sleep = sleep

    async def get(self, url: str, **kwargs: Any) -> httpx.Response | None:
        return await self.fetch("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response | None:
        return await self.fetch("POST", url, **kwargs)

    async def fetch(
        self, method: str, url: str, attempt: int = 1, **kwargs: Any
    ) -> httpx.Response | None:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            if attempt <= self.retry_limit:
                logger.warning(
                    "Network error on %s %s (%s). Retry #%d in %ds",
                    method,
                    url,
                    exc,
                    attempt,
                    attempt,
                )
                await self._sleep(attempt)
                return await self.fetch(method, url, attempt + 1, **kwargs)
            logger.error("Network failed after %d retries: %s %s", self.retry_limit, method, url)
            return None
        except httpx.RequestError as exc:
            logger.error("Request failed: %s %s (%s)", method, url, exc)
            return None

        if response.status_code == 429:
            if attempt <= self.retry_limit:
                logger.warning("Rate limited (429). Retry #%d in %ds", attempt, attempt)
                await self._sleep(attempt)
                return await self.fetch(method, url, attempt + 1, **kwargs)
            logger.error("Still rate limited after %d retries. Skipping %s", self.retry_limit, url)
            return None

        if not response.is_success:
            logger.error(
                "Fetch error %d %s: %s %s",
                response.status_code,
                response.reason_phrase,
                method,
                url,
            )
            return None

        return response
