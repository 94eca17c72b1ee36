from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_NFT_CONTRACT_ADDRESS = "0x54a88333F6e7540eA982261301309048aC431eD5"
DEFAULT_MARKETPLACE_CONTRACT_ADDRESS = "0x9656448941C76B79A39BC4ad68f6fb9F01181EC7"


@dataclass(frozen=True)
class Settings:
    backend_url: str
    nft_contract_address: str = DEFAULT_NFT_CONTRACT_ADDRESS
    marketplace_contract_address: str = DEFAULT_MARKETPLACE_CONTRACT_ADDRESS
    opensea_api_base: str = "https://api.opensea.io/api/v1"
    opensea_api_key: str | None = None
    page_size: int = 50
    retry_limit: int = 3
    request_timeout_seconds: float = 15.0
    log_level: str = "INFO"


def _required(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def _optional_str(name: str, default: str) -> str:
    return os.getenv(name, "").strip() or default


def _optional_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _optional_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def load_settings() -> Settings:
    load_dotenv()
    settings = Settings(
        backend_url=_required("BACKEND_URL").rstrip("/"),
        nft_contract_address=_optional_str("NFT_CONTRACT_ADDRESS", DEFAULT_NFT_CONTRACT_ADDRESS),
        marketplace_contract_address=_optional_str(
            "MARKETPLACE_CONTRACT_ADDRESS", DEFAULT_MARKETPLACE_CONTRACT_ADDRESS
        ),
        opensea_api_base=_optional_str("OPENSEA_API_BASE", "https://api.opensea.io/api/v1").rstrip("/"),
        opensea_api_key=os.getenv("OPENSEA_API_KEY", "").strip() or None,
        page_size=_optional_int("PAGE_SIZE", 50),
        retry_limit=_optional_int("RETRY_LIMIT", 3),
        request_timeout_seconds=_optional_float("REQUEST_TIMEOUT_SECONDS", 15.0),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
    if settings.page_size <= 0:
        raise ValueError("PAGE_SIZE must be a positive integer")
    if settings.retry_limit < 0:
        raise ValueError("RETRY_LIMIT must not be negative")
    return settings
