from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Any

from .dedupe import OrderDedupStore
from .types import CanonicalOrderPayload

logger = logging.getLogger(__name__)

WEI_PER_ETH = Decimal(10) ** 18


def protocol_parameters(order: dict[str, Any]) -> dict[str, Any] | None:
    protocol_data = order.get("protocol_data")
    if not isinstance(protocol_data, dict):
        return None
    parameters = protocol_data.get("parameters")
    if not isinstance(parameters, dict) or not parameters:
        return None
    return parameters


def maker_address(order: dict[str, Any]) -> str | None:
    maker = order.get("maker")
    if not isinstance(maker, dict):
        return None
    address = maker.get("address")
    return str(address) if address else None


def dedupe_key(asset: dict[str, Any], order: dict[str, Any]) -> str:
    order_hash = order.get("order_hash")
    if order_hash:
        return str(order_hash)
    return f"{asset.get('token_id')}-{maker_address(order) or 'unknown'}"


def wei_to_eth(raw: Any) -> float:
    if not raw:
        return 0.0
    try:
        value = float(Decimal(str(raw).strip()) / WEI_PER_ETH)
    except (ArithmeticError, ValueError):
        return 0.0
    # inf/nan cannot be sent as JSON.
    return value if math.isfinite(value) else 0.0


def seller_address(order: dict[str, Any], parameters: dict[str, Any]) -> str:
    return maker_address(order) or parameters.get("offerer") or "unknown"


def image_reference(asset: dict[str, Any]) -> str | None:
    if asset.get("image_url"):
        return asset["image_url"]
    metadata = asset.get("metadata")
    if isinstance(metadata, dict) and metadata.get("image"):
        return metadata["image"]
    return None


class OrderNormalizer:
    def __init__(self, store: OrderDedupStore, marketplace_contract: str) -> None:
        self.store = store
        self.marketplace_contract = marketplace_contract

    def normalize(
        self, asset: dict[str, Any], order: dict[str, Any]
    ) -> CanonicalOrderPayload | None:
        parameters = protocol_parameters(order)
        if parameters is None:
            return None

        key = dedupe_key(asset, order)
        if self.store.has(key):
            logger.debug("Skipped duplicate order %s", key)
            return None
        # Recorded before forwarding so a failed post is not retried this run.
        self.store.record(key)

        token_id = asset.get("token_id")
        return CanonicalOrderPayload(
            token_id=str(token_id) if token_id is not None else None,
            price=wei_to_eth(order.get("current_price")),
            seller_address=seller_address(order, parameters),
            seaport_order=order["protocol_data"],
            order_hash=key,
            image=image_reference(asset),
            marketplace_contract=self.marketplace_contract,
        )
