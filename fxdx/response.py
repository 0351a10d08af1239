"""
Response records returned by the FXDX API.

Every body has the shape ``{"code": int, "data": ...}``; ``code == 200``
means the server accepted the request.  These are plain decode-only
records: the dispatch pipeline never looks inside them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, TypeVar

from .errors import FxdxAPIError
from .request import OrderStatus, OrderType

SUCCESS_CODE = 200

T = TypeVar("T")


class Direction(IntEnum):
    ASK = 0
    BID = 1


def _dec(value: Any) -> Decimal:
    return Decimal(str(value))


def _flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected a JSON boolean, got {value!r}")
    return value


def _opt(data: Any, parse: Callable[[Any], T]) -> Optional[T]:
    return None if data is None else parse(data)


# ── envelope ───────────────────────────────────────────────────────────────


@dataclass
class Response:
    code: int
    data: Any = None

    @property
    def is_success(self) -> bool:
        return self.code == SUCCESS_CODE

    def raise_for_code(self) -> "Response":
        """Raise ``FxdxAPIError`` unless ``code`` is 200; return ``self``."""
        if not self.is_success:
            message = self.data if isinstance(self.data, str) else ""
            raise FxdxAPIError(self.code, message, self.data)
        return self

    @classmethod
    def _parse_data(cls, data: Any) -> Any:
        return data

    @classmethod
    def from_dict(cls, body: Dict[str, Any]):
        code = int(body.get("code", -1))
        data = body.get("data")
        # Error bodies may carry a message string where a record is expected.
        if code != SUCCESS_CODE:
            return cls(code=code, data=data)
        return cls(code=code, data=_opt(data, cls._parse_data))


class NonceResponse(Response):
    """``data`` is the server-issued nonce."""


class TokenResponse(Response):
    """``data`` is the session token."""


class PendingOrderResponse(Response):
    """``data`` is the new order id."""


class BatchPendingOrdersResponse(Response):
    """``data`` is the list of new order ids, in request order."""

    @classmethod
    def _parse_data(cls, data: Any) -> List[str]:
        return [str(order_id) for order_id in data]


class CancelOrderResponse(Response):
    pass


class BatchCancelOrdersResponse(Response):
    pass


# ── orders ─────────────────────────────────────────────────────────────────


@dataclass
class Trade:
    base: int
    quote: int
    ask_or_bid: Direction
    price: Decimal
    amount: Decimal
    quote_amount: Decimal
    quote_fee: Decimal
    base_fee: Decimal
    timestamp: int

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Trade":
        return cls(
            base=int(raw["base"]),
            quote=int(raw["quote"]),
            ask_or_bid=Direction(raw["ask_or_bid"]),
            price=_dec(raw["price"]),
            amount=_dec(raw["amount"]),
            quote_amount=_dec(raw["quote_amount"]),
            quote_fee=_dec(raw["quote_fee"]),
            base_fee=_dec(raw["base_fee"]),
            timestamp=int(raw["timestamp"]),
        )


@dataclass
class QueryOrder:
    symbol: str
    order_id: str
    order_type: OrderType
    direction: Direction
    amount: Decimal
    price: Decimal
    filled_base: Decimal
    filled_quote: Decimal
    avg_price: Decimal
    status: OrderStatus
    trades: List[Trade] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "QueryOrder":
        return cls(
            symbol=raw["symbol"],
            order_id=str(raw["order_id"]),
            order_type=OrderType(raw["order_type"]),
            direction=Direction(raw["direction"]),
            amount=_dec(raw["amount"]),
            price=_dec(raw["price"]),
            filled_base=_dec(raw["filled_base"]),
            filled_quote=_dec(raw["filled_quote"]),
            avg_price=_dec(raw["avg_price"]),
            status=OrderStatus(raw["status"]),
            trades=[Trade.from_dict(t) for t in raw.get("trades") or []],
        )


class QueryByIdResponse(Response):
    @classmethod
    def _parse_data(cls, data: Any) -> QueryOrder:
        return QueryOrder.from_dict(data)


class QueryByPageResponse(Response):
    @classmethod
    def _parse_data(cls, data: Any) -> List[QueryOrder]:
        return [QueryOrder.from_dict(item) for item in data]


# ── account & market ───────────────────────────────────────────────────────


@dataclass
class Balance:
    name: str
    available: Decimal
    frozen: Decimal

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Balance":
        return cls(
            name=raw["name"],
            available=_dec(raw["available"]),
            frozen=_dec(raw["frozen"]),
        )


class BalancesResponse(Response):
    """``data`` is a list of balances; a single object is wrapped in a list."""

    @classmethod
    def _parse_data(cls, data: Any) -> List[Balance]:
        if isinstance(data, dict):
            data = [data]
        return [Balance.from_dict(item) for item in data]


@dataclass
class Depth:
    depth: int
    bids: List[List[Decimal]]
    asks: List[List[Decimal]]

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Depth":
        return cls(
            depth=int(raw["depth"]),
            bids=[[_dec(v) for v in level] for level in raw.get("bids") or []],
            asks=[[_dec(v) for v in level] for level in raw.get("asks") or []],
        )


class DepthResponse(Response):
    @classmethod
    def _parse_data(cls, data: Any) -> Depth:
        return Depth.from_dict(data)


@dataclass
class Kline:
    id: int
    open: Decimal
    close: Decimal
    high: Decimal
    low: Decimal
    vol: Decimal

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Kline":
        return cls(
            id=int(raw["id"]),
            open=_dec(raw["open"]),
            close=_dec(raw["close"]),
            high=_dec(raw["high"]),
            low=_dec(raw["low"]),
            vol=_dec(raw["vol"]),
        )


class KlineResponse(Response):
    @classmethod
    def _parse_data(cls, data: Any) -> List[Kline]:
        return [Kline.from_dict(item) for item in data]


@dataclass
class Symbol:
    base: int
    quote: int
    base_name: str
    quote_name: str
    base_scale: int
    quote_scale: int
    taker_fee: Decimal
    make_fee: Decimal
    min_amount: Decimal
    min_vol: Decimal
    enable_marker_order: bool

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Symbol":
        return cls(
            base=int(raw["base"]),
            quote=int(raw["quote"]),
            base_name=raw["base_name"],
            quote_name=raw["quote_name"],
            base_scale=int(raw["base_scale"]),
            quote_scale=int(raw["quote_scale"]),
            taker_fee=_dec(raw["taker_fee"]),
            make_fee=_dec(raw["make_fee"]),
            min_amount=_dec(raw["min_amount"]),
            min_vol=_dec(raw["min_vol"]),
            enable_marker_order=_flag(raw["enable_marker_order"]),
        )


class SymbolsResponse(Response):
    @classmethod
    def _parse_data(cls, data: Any) -> List[Symbol]:
        return [Symbol.from_dict(item) for item in data]
