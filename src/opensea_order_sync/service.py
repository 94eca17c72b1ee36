from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from .assets import AssetPageReader
from .config import Settings
from .dedupe import OrderDedupStore
from .fetcher import ResilientFetcher
from .forwarder import OrderForwarder
from .normalizer import OrderNormalizer
from .types import ForwardResult, PageStatus

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    RUNNING = "running"
    DRAINING_PAGE = "draining_page"
    FINISHED = "finished"


@dataclass
class SyncCounters:
    total_nft: int = 0
    total_orders: int = 0
    pages_read: int = 0
    orders_accepted: int = 0
    orders_rejected: int = 0
    orders_failed: int = 0


def build_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.request_timeout_seconds,
        follow_redirects=True,
        transport=transport,
    )


class SyncService:
    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings
        self.state = SyncState.RUNNING
        self.counters = SyncCounters()
        self.store = OrderDedupStore()
        self._owns_client = client is None
        self.client = client or build_client(settings)
        self.fetcher = ResilientFetcher(self.client, retry_limit=settings.retry_limit)
        self.reader = AssetPageReader(
            self.fetcher,
            api_base=settings.opensea_api_base,
            contract_address=settings.nft_contract_address,
            page_size=settings.page_size,
            api_key=settings.opensea_api_key,
        )
        self.normalizer = OrderNormalizer(self.store, settings.marketplace_contract_address)
        self.forwarder = OrderForwarder(self.fetcher, settings.backend_url)

    async def run(self) -> SyncCounters:
        logger.info("OpenSea sync started contract=%s", self.settings.nft_contract_address)
        started = time.monotonic()
        offset = 0
        try:
            while self.state is not SyncState.FINISHED:
                offset = await self._drain_page(offset)
        finally:
            if self._owns_client:
                await self.client.aclose()

        logger.info(
            "Sync finished total_nft=%d total_orders=%d accepted=%d rejected=%d failed=%d elapsed=%.2fs",
            self.counters.total_nft,
            self.counters.total_orders,
            self.counters.orders_accepted,
            self.counters.orders_rejected,
            self.counters.orders_failed,
            time.monotonic() - started,
        )
        return self.counters

    async def _drain_page(self, offset: int) -> int:
        self.state = SyncState.DRAINING_PAGE
        logger.info("Loading assets offset=%d", offset)
        batch_started = time.monotonic()

        page = await self.reader.read_page(offset)
        if not page.assets:
            if page.status is PageStatus.FAILED:
                logger.warning("Asset page offset=%d could not be read; ending sync", offset)
            else:
                logger.info("No more assets.")
            self.state = SyncState.FINISHED
            return offset

        self.counters.pages_read += 1
        for asset in page.assets:
            await self._handle_asset(asset)

        logger.info("Batch completed in %.1fs", time.monotonic() - batch_started)
        self.state = SyncState.RUNNING
        return offset + self.settings.page_size

    async def _handle_asset(self, asset: dict[str, Any]) -> None:
        self.counters.total_nft += 1

        orders = asset.get("sell_orders")
        if not isinstance(orders, list) or not orders:
            return

        for order in orders:
            if not isinstance(order, dict):
                continue
            payload = self.normalizer.normalize(asset, order)
            if payload is None:
                continue

            self.counters.total_orders += 1
            result = await self.forwarder.forward(payload)
            if result is ForwardResult.ACCEPTED:
                self.counters.orders_accepted += 1
            elif result is ForwardResult.FAILED:
                self.counters.orders_failed += 1
            else:
                self.counters.orders_rejected += 1
