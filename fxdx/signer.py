"""
HMAC-SHA1 request signing.

The server rebuilds the canonical message from the request line and
headers, so ``canonical_message`` must stay byte-for-byte stable.
"""

from __future__ import annotations

import hashlib
import hmac
from enum import Enum
from typing import Optional, Union

from .errors import SigningError


class SigningScheme(str, Enum):
    """What the HMAC is computed over.

    FULL      ``secret,timestamp,uri[,fragment]``
    FRAGMENT  ``fragment`` alone (empty for variants without one)
    """

    FULL = "full"
    FRAGMENT = "fragment"


def _as_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    raise SigningError(f"key material must be str or bytes, got {type(value).__name__}")


class Signer:
    """Holds a secret key and signs canonical messages with HMAC-SHA1."""

    def __init__(self, secret: Union[str, bytes]):
        key = _as_bytes(secret)
        if not key:
            raise SigningError("secret key is empty")
        self._secret = key

    def __repr__(self) -> str:
        return "Signer(secret=[REDACTED])"

    @property
    def secret(self) -> bytes:
        return self._secret

    def sign(self, message: Union[str, bytes]) -> bytes:
        """Return the raw HMAC-SHA1 digest of *message*."""
        try:
            return hmac.new(self._secret, _as_bytes(message), hashlib.sha1).digest()
        except ValueError as exc:
            raise SigningError(f"HMAC-SHA1 digest failed: {exc}") from exc

    def hexdigest(self, message: Union[str, bytes]) -> str:
        """Header-safe (lowercase hex) form of ``sign``."""
        return self.sign(message).hex()

    def canonical_message(
        self,
        scheme: SigningScheme,
        timestamp: str,
        uri: str,
        fragment: Optional[str],
    ) -> bytes:
        """
        Assemble the bytes the signature is computed over.

        Parameters
        ----------
        scheme : SigningScheme
            ``FULL`` embeds the secret, timestamp and URI; ``FRAGMENT``
            signs the request's formalized fields only.
        timestamp : str
            Decimal Unix seconds; the same value goes into ``X-Timestamp``.
        uri : str
            Request path, without the endpoint.
        fragment : str or None
            Output of ``Request.formalize()``.
        """
        if scheme is SigningScheme.FRAGMENT:
            return (fragment or "").encode("utf-8")

        parts = [self._secret, timestamp.encode("utf-8"), uri.encode("utf-8")]
        if fragment is not None:
            parts.append(fragment.encode("utf-8"))
        return b",".join(parts)
