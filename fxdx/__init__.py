"""
fxdx — Signed-request client for the FXDX exchange REST API.

Submodules
----------
request         Request variants, route prefixes and wire enumerations.
signer          HMAC-SHA1 signer and canonical signing message.
builder         Two-phase client construction (static secret / sr25519).
client          Dispatch pipeline and the typed API operations.
response        Decode-only response records.
errors          Exception types.
orders          Order-placement helpers and response formatting.
validators      Input validation for CLI parameters.
logging_config  Dual-output logging (console + rotating file).
"""

from fxdx.builder import FxdxBuilder
from fxdx.client import FxdxClient
from fxdx.errors import (
    FxdxAPIError,
    FxdxError,
    InvalidRequestError,
    ModeConflictError,
    SigningError,
    UnsupportedModeError,
)
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
    OrderStatus,
    OrderType,
    PendingOrder,
    Prefix,
    PrivPub,
    Request,
    Scale,
    Sr25519,
    Symbols,
    Token,
)
from fxdx.signer import Signer, SigningScheme

__all__ = [
    "FxdxBuilder",
    "FxdxClient",
    "Signer",
    "SigningScheme",
    # requests
    "Request",
    "Nonce",
    "Token",
    "PendingOrder",
    "BatchPendingOrders",
    "CancelOrder",
    "BatchCancelOrders",
    "OrderById",
    "OrderByPage",
    "Balances",
    "Depth",
    "Kline",
    "Symbols",
    "Prefix",
    "PrivPub",
    "Sr25519",
    "OrderType",
    "OrderStatus",
    "Scale",
    # errors
    "FxdxError",
    "FxdxAPIError",
    "InvalidRequestError",
    "ModeConflictError",
    "SigningError",
    "UnsupportedModeError",
]
