from opensea_order_sync.dedupe import OrderDedupStore
from opensea_order_sync.normalizer import (
    OrderNormalizer,
    dedupe_key,
    image_reference,
    seller_address,
    wei_to_eth,
)

MARKETPLACE = "0x9656448941C76B79A39BC4ad68f6fb9F01181EC7"


def _order(**overrides):
    order = {
        "order_hash": "0xhash",
        "maker": {"address": "0xmaker"},
        "current_price": "1000000000000000000",
        "protocol_data": {"parameters": {"offerer": "0xofferer"}, "signature": "0xsig"},
    }
    order.update(overrides)
    return order


def test_wei_to_eth() -> None:
    assert wei_to_eth("1000000000000000000") == 1.0
    assert wei_to_eth("2500000000000000000") == 2.5
    assert wei_to_eth(None) == 0
    assert wei_to_eth("") == 0
    assert wei_to_eth("0") == 0
    assert wei_to_eth("not-a-number") == 0


def test_dedupe_key_prefers_order_hash() -> None:
    assert dedupe_key({"token_id": "7"}, _order()) == "0xhash"
    assert dedupe_key({"token_id": "7"}, _order(order_hash=None)) == "7-0xmaker"
    assert dedupe_key({"token_id": "7"}, _order(order_hash=None, maker=None)) == "7-unknown"


def test_seller_address_fallback_tiers() -> None:
    params = {"offerer": "0xofferer"}
    assert seller_address(_order(), params) == "0xmaker"
    assert seller_address(_order(maker={}), params) == "0xofferer"
    assert seller_address(_order(maker=None), {"zone": "0x0"}) == "unknown"


def test_image_reference_fallbacks() -> None:
    assert image_reference({"image_url": "https://img/1.png"}) == "https://img/1.png"
    assert image_reference({"metadata": {"image": "ipfs://x"}}) == "ipfs://x"
    assert image_reference({}) is None


def test_normalize_builds_payload() -> None:
    normalizer = OrderNormalizer(OrderDedupStore(), MARKETPLACE)
    asset = {"token_id": "42", "image_url": "https://img/42.png"}

    payload = normalizer.normalize(asset, _order())

    assert payload is not None
    assert payload.to_json() == {
        "tokenId": "42",
        "price": 1.0,
        "sellerAddress": "0xmaker",
        "seaportOrder": {"parameters": {"offerer": "0xofferer"}, "signature": "0xsig"},
        "orderHash": "0xhash",
        "image": "https://img/42.png",
        "marketplaceContract": MARKETPLACE,
    }


def test_normalize_skips_orders_without_parameters() -> None:
    store = OrderDedupStore()
    normalizer = OrderNormalizer(store, MARKETPLACE)
    asset = {"token_id": "1"}

    assert normalizer.normalize(asset, _order(protocol_data=None)) is None
    assert normalizer.normalize(asset, _order(protocol_data={"parameters": {}})) is None
    assert len(store) == 0


def test_normalize_forwards_first_occurrence_only() -> None:
    store = OrderDedupStore()
    normalizer = OrderNormalizer(store, MARKETPLACE)
    asset = {"token_id": "1"}

    assert normalizer.normalize(asset, _order()) is not None
    assert store.has("0xhash")
    assert normalizer.normalize(asset, _order()) is None
    assert normalizer.normalize({"token_id": "2"}, _order()) is None


def test_wei_to_eth_out_of_float_range_is_zero() -> None:
    assert wei_to_eth("1e400") == 0
    assert wei_to_eth("1e1000000") == 0
    assert wei_to_eth("NaN") == 0
    assert wei_to_eth("sNaN") == 0
