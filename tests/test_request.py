import dataclasses
import json
from decimal import Decimal

import pytest

from fxdx.errors import InvalidRequestError
from fxdx.request import (
    Balances,
    BatchCancelOrders,
    BatchPendingOrders,
    CancelOrder,
    Depth,
    Kline,
    Nonce,
    OrderById,
    OrderByPage,
    OrderType,
    PendingOrder,
    Prefix,
    Scale,
    Symbols,
    Token,
)


def _order(**overrides):
    fields = dict(order_type="0", symbol="ETHUSDT", price=1.5, amount=10)
    fields.update(overrides)
    return PendingOrder(**fields)


ALL_VARIANTS = [
    Nonce(),
    Token("n", "pk", "sig"),
    _order(),
    BatchPendingOrders((_order(),)),
    CancelOrder("ETHUSDT", "1"),
    BatchCancelOrders("ETHUSDT", ("1", "2")),
    OrderById("ETHUSDT", "1"),
    OrderByPage("ETHUSDT", 1, 20, True),
    Balances(),
    Depth("ETHUSDT"),
    Kline("ETHUSDT", Scale.HOUR4),
    Symbols(),
]


class TestMethod:
    @pytest.mark.parametrize(
        "request_value, verb",
        [
            (Nonce(), "POST"),
            (Token("n", "pk", "sig"), "POST"),
            (_order(), "POST"),
            (BatchPendingOrders((_order(),)), "POST"),
            (CancelOrder("ETHUSDT", "1"), "DELETE"),
            (BatchCancelOrders("ETHUSDT", ("1", "2")), "DELETE"),
            (OrderById("ETHUSDT", "1"), "GET"),
            (OrderByPage("ETHUSDT", 1, 20, False), "GET"),
            (Balances(), "GET"),
            (Depth("ETHUSDT"), "GET"),
            (Kline("ETHUSDT", Scale.DAY), "GET"),
            (Symbols(), "GET"),
        ],
    )
    def test_verb_per_variant(self, request_value, verb):
        assert request_value.method() == verb


class TestUri:
    @pytest.mark.parametrize(
        "request_value, path",
        [
            (Token("n", "pk", "sig"), "/token"),
            (_order(), "/order"),
            (BatchPendingOrders((_order(),)), "/orders"),
            (CancelOrder("ETHUSDT", "1"), "/order/ETHUSDT/1"),
            (BatchCancelOrders("ETHUSDT", ("1", "2", "3")), "/order/ETHUSDT/1|2|3"),
            (OrderById("ETHUSDT", "7"), "/order/ETHUSDT/7"),
            (OrderByPage("ETHUSDT", 2, 50, True), "/orders/ETHUSDT/2/50/true"),
            (OrderByPage("ETHUSDT", 1, 10, False), "/orders/ETHUSDT/1/10/false"),
            (Balances(), "/balances"),
            (Depth("ETHUSDT"), "/depth/ETHUSDT"),
            (Kline("ETHUSDT", Scale.MINUTE_15), "/kline/ETHUSDT/MINUTE_15"),
            (Symbols(), "/symbols"),
        ],
    )
    @pytest.mark.parametrize("prefix", [Prefix.PRIV_PUB, Prefix.SR25519])
    def test_path_is_rooted_at_prefix(self, request_value, path, prefix):
        assert request_value.uri(prefix) == prefix.value + path

    def test_default_prefix_is_maker(self):
        assert Symbols().uri() == "/maker/symbols"

    @pytest.mark.parametrize("prefix", [Prefix.PRIV_PUB, Prefix.SR25519])
    def test_nonce_ignores_prefix(self, prefix):
        assert Nonce().uri(prefix) == "/maker/nonce"

    def test_single_cancel_has_no_separator(self):
        assert "|" not in BatchCancelOrders("ETHUSDT", ("9",)).uri(Prefix.PRIV_PUB)

    @pytest.mark.parametrize("request_value", ALL_VARIANTS)
    def test_uri_is_deterministic(self, request_value):
        assert request_value.uri(Prefix.SR25519) == request_value.uri(Prefix.SR25519)


class TestFormalize:
    def test_pending_order_field_order(self):
        assert _order().formalize() == "10,1.5,ETHUSDT,0"

    def test_batch_joins_inner_fragments_in_order(self):
        a = _order()
        b = _order(order_type=OrderType.BID, symbol="BTCUSDT", price="30000.25", amount="0.01")
        batch = BatchPendingOrders((a, b))
        assert batch.formalize() == a.formalize() + "," + b.formalize()
        assert batch.formalize() == "10,1.5,ETHUSDT,0,0.01,30000.25,BTCUSDT,1"

    def test_order_id_fragments(self):
        assert CancelOrder("ETHUSDT", "1").formalize() == "1,ETHUSDT"
        assert OrderById("ETHUSDT", "42").formalize() == "42,ETHUSDT"
        assert BatchCancelOrders("ETHUSDT", ("1", "2")).formalize() == "1|2,ETHUSDT"

    def test_order_by_page_field_order(self):
        assert OrderByPage("ETHUSDT", 3, 20, True).formalize() == "3,true,20,ETHUSDT"

    def test_market_fragments(self):
        assert Depth("ETHUSDT").formalize() == "ETHUSDT"
        assert Kline("ETHUSDT", Scale.WEEK).formalize() == "WEEK,ETHUSDT"

    @pytest.mark.parametrize(
        "request_value", [Nonce(), Token("n", "pk", "s"), Balances(), Symbols()]
    )
    def test_variants_without_fragment(self, request_value):
        assert request_value.formalize() is None

    def test_decimals_render_positionally(self):
        order = PendingOrder("1", "ETHUSDT", Decimal("1E+2"), Decimal("2.50"))
        assert order.formalize() == "2.50,100,ETHUSDT,1"

    def test_smuggled_non_order_in_batch_is_reported(self):
        batch = BatchPendingOrders((_order(),))
        object.__setattr__(batch, "orders", (CancelOrder("ETHUSDT", "1"),))
        with pytest.raises(InvalidRequestError) as info:
            batch.formalize()
        assert info.value.request == CancelOrder("ETHUSDT", "1")


class TestPayload:
    def test_pending_order_body(self):
        assert json.loads(_order().payload()) == {
            "type": "0",
            "symbol": "ETHUSDT",
            "price": "1.5",
            "amount": "10",
        }

    def test_body_is_compact(self):
        assert " " not in _order().payload()

    def test_batch_body_is_array_of_orders(self):
        body = json.loads(BatchPendingOrders((_order(), _order(symbol="BTCUSDT"))).payload())
        assert [o["symbol"] for o in body] == ["ETHUSDT", "BTCUSDT"]

    def test_token_body(self):
        assert json.loads(Token("abc", "0xpub", "0xsig").payload()) == {
            "nonce": "abc",
            "pubkey": "0xpub",
            "signature": "0xsig",
        }

    @pytest.mark.parametrize(
        "request_value",
        [Nonce(), CancelOrder("ETHUSDT", "1"), OrderById("ETHUSDT", "1"), Balances(), Symbols()],
    )
    def test_queries_have_no_body(self, request_value):
        assert request_value.payload() is None


class TestConstruction:
    def test_batch_rejects_non_order_elements(self):
        cancel = CancelOrder("ETHUSDT", "1")
        with pytest.raises(InvalidRequestError) as info:
            BatchPendingOrders((_order(), cancel))
        assert info.value.request is cancel

    def test_batch_accepts_list(self):
        batch = BatchPendingOrders([_order()])
        assert isinstance(batch.orders, tuple)

    def test_order_type_enum_is_wire_coded(self):
        assert _order(order_type=OrderType.BID).order_type == "1"
        assert _order(order_type=0).order_type == "0"
        assert _order(order_type="1").order_type == "1"

    @pytest.mark.parametrize("bad", [5, -1, "BID", "2", "x", "", True, 1.0, None])
    def test_unknown_order_type_is_rejected(self, bad):
        with pytest.raises(InvalidRequestError) as info:
            _order(order_type=bad)
        assert info.value.request == bad

    def test_invalid_price_is_rejected(self):
        with pytest.raises(InvalidRequestError):
            _order(price="abc")

    def test_infinite_amount_is_rejected(self):
        with pytest.raises(InvalidRequestError):
            _order(amount="Infinity")

    def test_batch_cancel_requires_ids(self):
        with pytest.raises(InvalidRequestError):
            BatchCancelOrders("ETHUSDT", ())

    def test_batch_cancel_rejects_bare_string(self):
        with pytest.raises(InvalidRequestError):
            BatchCancelOrders("ETHUSDT", "12")

    def test_kline_accepts_scale_name(self):
        assert Kline("ETHUSDT", "HOUR").scale is Scale.HOUR

    def test_kline_rejects_unknown_scale(self):
        with pytest.raises(InvalidRequestError):
            Kline("ETHUSDT", "FORTNIGHT")

    def test_requests_are_immutable_values(self):
        order = _order()
        assert order == _order()
        with pytest.raises(dataclasses.FrozenInstanceError):
            order.symbol = "BTCUSDT"

    def test_variants_without_fields_are_distinct(self):
        assert Balances() != Symbols()
