from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PageStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


class ForwardResult(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    FAILED = "failed"
    INVALID_RESPONSE = "invalid_response"


@dataclass(frozen=True)
class AssetPage:
    offset: int
    status: PageStatus
    assets: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class CanonicalOrderPayload:
    token_id: str | None
    price: float
    seller_address: str
    seaport_order: dict[str, Any]
    order_hash: str
    image: str | None
    marketplace_contract: str

    def to_json(self) -> dict[str, Any]:
        return {
            "tokenId": self.token_id,
            "price": self.price,
            "sellerAddress": self.seller_address,
            "seaportOrder": self.seaport_order,
            "orderHash": self.order_hash,
            "image": self.image,
            "marketplaceContract": self.marketplace_contract,
        }
