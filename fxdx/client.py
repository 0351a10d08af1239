"""
FXDX REST client.

Turns ``Request`` values into signed HTTP calls.  A client is immutable
once built and may be shared by any number of concurrent tasks; every call
reads the clock and signs independently.  Build clients with
``fxdx.builder.FxdxBuilder``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, Type, TypeVar

import httpx

from . import request as rq
from . import response as rs
from .errors import InvalidRequestError, UnsupportedModeError
from .request import Prefix, Request
from .signer import Signer, SigningScheme

logger = logging.getLogger("fxdx")

R = TypeVar("R", bound=rs.Response)


class FxdxClient:
    """Signed-request client bound to one endpoint, account and prefix."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        endpoint: str,
        address: str = "",
        signer: Optional[Signer] = None,
        token: Optional[str] = None,
        prefix: Prefix = Prefix.PRIV_PUB,
        signing_scheme: SigningScheme = SigningScheme.FULL,
    ):
        if (signer is None) == (token is None):
            raise ValueError("exactly one of signer or token must be given")
        self._http = http
        self._endpoint = endpoint.rstrip("/")
        self._address = address
        self._signer = signer
        self._token = token
        self._prefix = Prefix(prefix)
        self._signing_scheme = SigningScheme(signing_scheme)

    # ── context-manager support ────────────────────────────────────────

    async def __aenter__(self) -> "FxdxClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP transport."""
        await self._http.aclose()

    # ── read-only state ────────────────────────────────────────────────

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def address(self) -> str:
        return self._address

    @property
    def prefix(self) -> Prefix:
        return self._prefix

    @property
    def signing_scheme(self) -> SigningScheme:
        return self._signing_scheme

    # ── dispatch pipeline ──────────────────────────────────────────────

    def build_request(self, request: Request) -> httpx.Request:
        """
        Build the signed ``httpx.Request`` for *request* without sending it.

        The timestamp is read once and used both for ``X-Timestamp`` and
        inside the signed message.

        Raises
        ------
        UnsupportedModeError
            If the client holds an sr25519 session token.
        SigningError
            If the HMAC cannot be computed.
        """
        if self._signer is None:
            raise UnsupportedModeError("sr25519 token authentication is not supported yet")

        uri = request.uri(self._prefix)
        timestamp = str(int(time.time()))
        message = self._signer.canonical_message(
            self._signing_scheme, timestamp, uri, request.formalize()
        )
        headers = {
            "X-Timestamp": timestamp,
            "X-Address": self._address,
            "X-Signature": self._signer.hexdigest(message),
        }
        body = request.payload()
        if body is not None:
            headers["Content-Type"] = "application/json"

        url = f"{self._endpoint}{uri}"
        logger.debug(
            "API request  -> %s %s timestamp=%s body=%s",
            request.method(),
            url,
            timestamp,
            body,
        )
        return self._http.build_request(request.method(), url, headers=headers, content=body)

    async def dispatch(self, request: Request) -> httpx.Response:
        """
        Sign and send *request*, returning the raw response.

        Raises
        ------
        httpx.HTTPStatusError
            On a non-2xx response.
        httpx.RequestError
            On network-level failures (timeout, DNS, etc.).
        """
        http_request = self.build_request(request)
        response = await self._http.send(http_request)

        logger.debug(
            "API response <- %s %s (%.1f KB)",
            response.status_code,
            type(request).__name__,
            len(response.content) / 1024,
        )
        response.raise_for_status()
        return response

    async def _call(
        self,
        request: Request,
        expected: Type[Request],
        response_type: Type[R],
    ) -> R:
        if not isinstance(request, expected):
            raise InvalidRequestError(request, f"expected a {expected.__name__} request")
        response = await self.dispatch(request)
        return response_type.from_dict(response.json())

    async def fresh(self) -> None:
        """Refresh the sr25519 session token (not supported yet)."""
        raise UnsupportedModeError("sr25519 token refresh is not supported yet")

    # ── public API methods ─────────────────────────────────────────────

    async def nonce(self, request: Request = rq.Nonce()) -> rs.NonceResponse:
        """Fetch a handshake nonce (``POST /maker/nonce``)."""
        return await self._call(request, rq.Nonce, rs.NonceResponse)

    async def token(self, request: Request) -> rs.TokenResponse:
        """Exchange a signed nonce for a session token (``POST {P}/token``)."""
        return await self._call(request, rq.Token, rs.TokenResponse)

    async def pending_order(self, request: Request) -> rs.PendingOrderResponse:
        """Place a limit order (``POST {P}/order``)."""
        return await self._call(request, rq.PendingOrder, rs.PendingOrderResponse)

    async def batch_pending_orders(self, request: Request) -> rs.BatchPendingOrdersResponse:
        """Place several limit orders at once (``POST {P}/orders``)."""
        return await self._call(request, rq.BatchPendingOrders, rs.BatchPendingOrdersResponse)

    async def cancel_order(self, request: Request) -> rs.CancelOrderResponse:
        """Cancel one order (``DELETE {P}/order/{symbol}/{id}``)."""
        return await self._call(request, rq.CancelOrder, rs.CancelOrderResponse)

    async def batch_cancel_orders(self, request: Request) -> rs.BatchCancelOrdersResponse:
        """Cancel several orders (``DELETE {P}/order/{symbol}/{id|id|…}``)."""
        return await self._call(request, rq.BatchCancelOrders, rs.BatchCancelOrdersResponse)

    async def query_order_by_id(self, request: Request) -> rs.QueryByIdResponse:
        return await self._call(request, rq.OrderById, rs.QueryByIdResponse)

    async def query_orders_by_page(self, request: Request) -> rs.QueryByPageResponse:
        return await self._call(request, rq.OrderByPage, rs.QueryByPageResponse)

    async def query_account_balance(self, request: Request = rq.Balances()) -> rs.BalancesResponse:
        return await self._call(request, rq.Balances, rs.BalancesResponse)

    async def query_depth(self, request: Request) -> rs.DepthResponse:
        return await self._call(request, rq.Depth, rs.DepthResponse)

    async def query_kline(self, request: Request) -> rs.KlineResponse:
        return await self._call(request, rq.Kline, rs.KlineResponse)

    async def query_symbols(self, request: Request = rq.Symbols()) -> rs.SymbolsResponse:
        return await self._call(request, rq.Symbols, rs.SymbolsResponse)
