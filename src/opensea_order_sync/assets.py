from __future__ import annotations

import logging
from typing import Any

from .fetcher import ResilientFetcher
from .types import AssetPage, PageStatus

logger = logging.getLogger(__name__)


class AssetPageReader:
    def __init__(
        self,
        fetcher: ResilientFetcher,
        api_base: str,
        contract_address: str,
        page_size: int = 50,
        api_key: str | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.api_base = api_base.rstrip("/")
        self.contract_address = contract_address
        self.page_size = page_size
        self.api_key = api_key

    async def fetch_page(self, offset: int) -> list[dict[str, Any]]:
        page = await self.read_page(offset)
        return page.assets

    async def read_page(self, offset: int) -> AssetPage:
        response = await self.fetcher.get(
            f"{self.api_base}/assets",
            params=self._params(offset),
            headers=self._headers(),
        )
        if response is None:
            return AssetPage(offset=offset, status=PageStatus.FAILED)

        try:
            data = response.json()
        except ValueError:
            logger.error("JSON parse error for assets page offset=%d", offset)
            return AssetPage(offset=offset, status=PageStatus.FAILED)

        assets = extract_assets(data)
        status = PageStatus.OK if assets else PageStatus.EMPTY
        return AssetPage(offset=offset, status=status, assets=assets)

    def _params(self, offset: int) -> dict[str, Any]:
        return {
            "asset_contract_address": self.contract_address,
            "order_direction": "desc",
            "offset": offset,
            "limit": self.page_size,
        }

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-KEY"] = self.api_key
        return headers


def extract_assets(data: Any) -> list[dict[str, Any]]:
    if not isinstance(data, dict):
        return []
    assets = data.get("assets")
    if not isinstance(assets, list):
        return []
    return [asset for asset in assets if isinstance(asset, dict)]
