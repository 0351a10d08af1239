"""
Two-phase construction of ``FxdxClient``.

The builder holds exactly one authentication mode at a time:

unset          no credentials yet
static secret  HMAC shared secret (fully supported)
handshake      sr25519 address + key awaiting a nonce/token exchange

``build()`` is terminal and single-use.  The handshake mode is declared
but not implemented: building in that mode fetches a nonce and then
raises ``UnsupportedModeError`` instead of returning a client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from .client import FxdxClient
from .errors import ModeConflictError, UnsupportedModeError
from .request import NONCE_URI, Prefix
from .response import NonceResponse
from .signer import Signer, SigningScheme

logger = logging.getLogger("fxdx")

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class _StaticSecret:
    key: Union[str, bytes]


@dataclass(frozen=True)
class _Handshake:
    address: str
    key: Union[str, bytes]


class FxdxBuilder:
    """
    Collects endpoint, credentials and options for an ``FxdxClient``.

    Example::

        client = await (
            FxdxBuilder.endpoint("https://api.fxdx.example")
            .address("0xabc")
            .secret(b"my-secret")
            .build()
        )
    """

    def __init__(self, endpoint: str = ""):
        self._endpoint = endpoint.rstrip("/")
        self._mode: Optional[Union[_StaticSecret, _Handshake]] = None
        self._address = ""
        self._prefix = Prefix.PRIV_PUB
        self._signing_scheme = SigningScheme.FULL
        self._timeout = DEFAULT_TIMEOUT
        self._transport: Optional[httpx.AsyncBaseTransport] = None
        self._built = False

    @classmethod
    def endpoint(cls, url: str) -> "FxdxBuilder":
        """Start a builder for the API at *url*."""
        return cls(url)

    # ── authentication mode ────────────────────────────────────────────

    def secret(self, key: Union[str, bytes]) -> "FxdxBuilder":
        """Use static HMAC authentication with *key*."""
        if isinstance(self._mode, _Handshake):
            raise ModeConflictError("could not set registered secret in sr25519 mode")
        self._mode = _StaticSecret(key)
        return self

    def sr25519(self, address: str, private_key: Union[str, bytes]) -> "FxdxBuilder":
        """Use the sr25519 handshake mode for *address* (build is unsupported)."""
        self._mode = _Handshake(address, private_key)
        self._address = address
        return self

    # ── options ────────────────────────────────────────────────────────

    def address(self, address: str) -> "FxdxBuilder":
        """Account identifier sent as ``X-Address``."""
        self._address = address
        return self

    def prefix(self, prefix: Prefix) -> "FxdxBuilder":
        self._prefix = Prefix(prefix)
        return self

    def signing_scheme(self, scheme: SigningScheme) -> "FxdxBuilder":
        self._signing_scheme = SigningScheme(scheme)
        return self

    def timeout(self, seconds: float) -> "FxdxBuilder":
        self._timeout = seconds
        return self

    def transport(self, transport: httpx.AsyncBaseTransport) -> "FxdxBuilder":
        """Send through *transport* instead of the default network stack."""
        self._transport = transport
        return self

    # ── terminal step ──────────────────────────────────────────────────

    async def build(self) -> FxdxClient:
        """
        Resolve the authentication mode and return a ready client.

        Raises
        ------
        SigningError
            If the secret is missing or empty.
        UnsupportedModeError
            In sr25519 mode, after the nonce has been fetched.
        RuntimeError
            If the builder was already used.
        """
        if self._built:
            raise RuntimeError("FxdxBuilder.build() may only be called once")
        self._built = True

        if isinstance(self._mode, _Handshake):
            await self._handshake()

        signer = Signer(self._mode.key if self._mode is not None else b"")
        client = FxdxClient(
            self._http_client(),
            self._endpoint,
            address=self._address,
            signer=signer,
            prefix=self._prefix,
            signing_scheme=self._signing_scheme,
        )
        logger.info(
            "FXDX client ready – endpoint=%s prefix=%s scheme=%s",
            self._endpoint,
            self._prefix.value,
            self._signing_scheme.value,
        )
        return client

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _handshake(self) -> None:
        async with self._http_client() as http:
            response = await http.post(f"{self._endpoint}{NONCE_URI}")
            response.raise_for_status()
            nonce = NonceResponse.from_dict(response.json())

        logger.warning(
            "sr25519 handshake requested for %s – nonce received (code=%s) "
            "but the token exchange is not implemented",
            self._address,
            nonce.code,
        )
        raise UnsupportedModeError(
            "sr25519 handshake mode is not supported yet", nonce=nonce.data
        )
