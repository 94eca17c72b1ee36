from __future__ import annotations

import logging

from .fetcher import ResilientFetcher
from .types import CanonicalOrderPayload, ForwardResult

logger = logging.getLogger(__name__)


class OrderForwarder:
    def __init__(self, fetcher: ResilientFetcher, backend_url: str) -> None:
        self.fetcher = fetcher
        self._url = f"{backend_url.rstrip('/')}/order"

    async def forward(self, payload: CanonicalOrderPayload) -> ForwardResult:
        response = await self.fetcher.post(
            self._url,
            json=payload.to_json(),
            headers={"Content-Type": "application/json"},
        )
        if response is None:
            return ForwardResult.FAILED

        try:
            data = response.json()
        except ValueError:
            logger.error("Backend JSON error for order %s", payload.order_hash)
            return ForwardResult.INVALID_RESPONSE

        if not isinstance(data, dict) or not data.get("success"):
            logger.warning("Backend rejected order %s: %s", payload.order_hash, data)
            return ForwardResult.REJECTED

        logger.info("Saved token %s (%s ETH)", payload.token_id, payload.price)
        return ForwardResult.ACCEPTED
