"""
Request model for the FXDX REST API.

Every supported API operation is one frozen dataclass deriving from
``Request``.  The base class derives the four facts the dispatch pipeline
needs from a request value:

method     HTTP verb
uri        request path under the bound route prefix
formalize  canonical signing fragment (or ``None``)
payload    JSON body for write operations (or ``None``)

Each of those is a single exhaustive branch over the variants, so adding an
operation means touching this module only.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Tuple, Union

from .errors import InvalidRequestError

# ── Route prefixes ─────────────────────────────────────────────────────────


class Prefix(str, Enum):
    """Base route namespace bound to a client."""

    PRIV_PUB = "/maker"
    SR25519 = "/api"


PrivPub = Prefix.PRIV_PUB
Sr25519 = Prefix.SR25519

# The nonce endpoint lives under /maker whichever prefix is bound.
NONCE_URI = "/maker/nonce"

# ── Enumerations ───────────────────────────────────────────────────────────


class OrderType(IntEnum):
    ASK = 0
    BID = 1


# Wire codes accepted for PendingOrder.order_type
_ORDER_TYPE_CODES = ("0", "1")


class OrderStatus(IntEnum):
    UNDEAL = 1
    CANCEL = 2
    DEALED = 3
    PARTIAL_DEALED = 4


class Scale(str, Enum):
    """Candlestick granularity, string-coded on the wire."""

    MINUTE = "MINUTE"
    MINUTE_5 = "MINUTE_5"
    MINUTE_15 = "MINUTE_15"
    MINUTE_30 = "MINUTE_30"
    HOUR = "HOUR"
    HOUR4 = "HOUR4"
    DAY = "DAY"
    WEEK = "WEEK"


# ── helpers ────────────────────────────────────────────────────────────────

DecimalLike = Union[Decimal, str, int, float]


def _to_decimal(value: DecimalLike, field: str) -> Decimal:
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidRequestError(value, f"invalid {field}")
    if not number.is_finite():
        raise InvalidRequestError(value, f"invalid {field}")
    return number


def _plain(number: Decimal) -> str:
    """Render a decimal positionally (``1E+1`` becomes ``10``)."""
    return format(number, "f")


def _bool(value: bool) -> str:
    return "true" if value else "false"


# ── Request variants ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class Request:
    """Base of the closed set of FXDX request variants."""

    def method(self) -> str:
        """Return the HTTP verb for this operation."""
        try:
            return _METHODS[type(self)]
        except KeyError:
            raise TypeError(f"unknown request variant {type(self).__name__}") from None

    def uri(self, prefix: Prefix = Prefix.PRIV_PUB) -> str:
        """Return the request path rooted at *prefix*."""
        base = Prefix(prefix).value

        if isinstance(self, Nonce):
            return NONCE_URI
        if isinstance(self, Token):
            return f"{base}/token"
        if isinstance(self, PendingOrder):
            return f"{base}/order"
        if isinstance(self, BatchPendingOrders):
            return f"{base}/orders"
        if isinstance(self, (CancelOrder, OrderById)):
            return f"{base}/order/{self.symbol}/{self.order_id}"
        if isinstance(self, BatchCancelOrders):
            return f"{base}/order/{self.symbol}/{'|'.join(self.order_ids)}"
        if isinstance(self, OrderByPage):
            return (
                f"{base}/orders/{self.symbol}/{self.page}/{self.size}/"
                f"{_bool(self.pending)}"
            )
        if isinstance(self, Balances):
            return f"{base}/balances"
        if isinstance(self, Depth):
            return f"{base}/depth/{self.symbol}"
        if isinstance(self, Kline):
            return f"{base}/kline/{self.symbol}/{self.scale.value}"
        if isinstance(self, Symbols):
            return f"{base}/symbols"
        raise TypeError(f"unknown request variant {type(self).__name__}")

    def formalize(self) -> Optional[str]:
        """
        Return the canonical signing fragment, or ``None``.

        Field order is fixed per variant and must match what the server
        rebuilds, e.g. a pending order is ``amount,price,symbol,type``.
        """
        if isinstance(self, PendingOrder):
            return ",".join(
                (_plain(self.amount), _plain(self.price), self.symbol, self.order_type)
            )
        if isinstance(self, BatchPendingOrders):
            fragments = []
            for order in self.orders:
                if not isinstance(order, PendingOrder):
                    raise InvalidRequestError(order, "batch may only contain PendingOrder")
                fragments.append(order.formalize())
            return ",".join(fragments)
        if isinstance(self, (CancelOrder, OrderById)):
            return f"{self.order_id},{self.symbol}"
        if isinstance(self, BatchCancelOrders):
            return f"{'|'.join(self.order_ids)},{self.symbol}"
        if isinstance(self, OrderByPage):
            return f"{self.page},{_bool(self.pending)},{self.size},{self.symbol}"
        if isinstance(self, Depth):
            return self.symbol
        if isinstance(self, Kline):
            return f"{self.scale.value},{self.symbol}"
        return None

    def payload(self) -> Optional[str]:
        """Return the compact JSON body for write operations, else ``None``."""
        body: Any
        if isinstance(self, (Token, PendingOrder)):
            body = self._fields()
        elif isinstance(self, BatchPendingOrders):
            body = [order._fields() for order in self.orders]
        else:
            return None
        return json.dumps(body, separators=(",", ":"))


@dataclass(frozen=True)
class Nonce(Request):
    pass


@dataclass(frozen=True)
class Token(Request):
    nonce: str
    pubkey: str
    signature: str

    def _fields(self) -> Dict[str, Any]:
        return {"nonce": self.nonce, "pubkey": self.pubkey, "signature": self.signature}


@dataclass(frozen=True)
class PendingOrder(Request):
    """
    A limit order to place.

    ``order_type`` is the wire code of the side (``"0"`` ask, ``"1"`` bid);
    an ``OrderType`` or the ints 0/1 are converted, anything else is an
    ``InvalidRequestError``.  ``price`` and ``amount`` accept
    anything ``Decimal(str(x))`` accepts.
    """

    order_type: Union[str, OrderType]
    symbol: str
    price: DecimalLike
    amount: DecimalLike

    def __post_init__(self) -> None:
        order_type = self.order_type
        try:
            if isinstance(order_type, str) and order_type in _ORDER_TYPE_CODES:
                order_type = OrderType(int(order_type))
            if isinstance(order_type, bool) or not isinstance(order_type, int):
                raise ValueError(order_type)
            order_type = OrderType(order_type)
        except ValueError:
            raise InvalidRequestError(self.order_type, "invalid order type") from None
        object.__setattr__(self, "order_type", str(int(order_type)))
        object.__setattr__(self, "price", _to_decimal(self.price, "price"))
        object.__setattr__(self, "amount", _to_decimal(self.amount, "amount"))

    def _fields(self) -> Dict[str, Any]:
        return {
            "type": self.order_type,
            "symbol": self.symbol,
            "price": _plain(self.price),
            "amount": _plain(self.amount),
        }


@dataclass(frozen=True)
class BatchPendingOrders(Request):
    orders: Tuple[PendingOrder, ...]

    def __post_init__(self) -> None:
        orders = tuple(self.orders)
        for order in orders:
            if not isinstance(order, PendingOrder):
                raise InvalidRequestError(order, "batch may only contain PendingOrder")
        object.__setattr__(self, "orders", orders)


@dataclass(frozen=True)
class CancelOrder(Request):
    symbol: str
    order_id: str


@dataclass(frozen=True)
class BatchCancelOrders(Request):
    symbol: str
    order_ids: Tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.order_ids, str):
            raise InvalidRequestError(self.order_ids, "order_ids must be a sequence")
        order_ids = tuple(str(order_id) for order_id in self.order_ids)
        if not order_ids:
            raise InvalidRequestError(self, "no order ids to cancel")
        object.__setattr__(self, "order_ids", order_ids)


@dataclass(frozen=True)
class OrderById(Request):
    symbol: str
    order_id: str


@dataclass(frozen=True)
class OrderByPage(Request):
    symbol: str
    page: int
    size: int
    pending: bool


@dataclass(frozen=True)
class Balances(Request):
    pass


@dataclass(frozen=True)
class Depth(Request):
    symbol: str


@dataclass(frozen=True)
class Kline(Request):
    symbol: str
    scale: Scale

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "scale", Scale(self.scale))
        except ValueError:
            raise InvalidRequestError(self.scale, "unknown kline scale")


@dataclass(frozen=True)
class Symbols(Request):
    pass


_METHODS = {
    Nonce: "POST",
    Token: "POST",
    PendingOrder: "POST",
    BatchPendingOrders: "POST",
    CancelOrder: "DELETE",
    BatchCancelOrders: "DELETE",
    OrderById: "GET",
    OrderByPage: "GET",
    Balances: "GET",
    Depth: "GET",
    Kline: "GET",
    Symbols: "GET",
}
