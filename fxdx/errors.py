"""
Exception types raised by the FXDX client.

Transport failures (timeouts, DNS, non-2xx status) are not wrapped: they
surface as the ``httpx`` exceptions the transport raised.
"""

from __future__ import annotations

from typing import Any, Optional


class FxdxError(Exception):
    """Base class for recoverable client errors."""


class InvalidRequestError(FxdxError):
    """Raised when a request value does not fit the operation it is used for."""

    def __init__(self, request: Any, reason: str = "invalid request"):
        self.request = request
        self.reason = reason
        super().__init__(f"{reason}: {request!r}")


class SigningError(FxdxError):
    """Raised when the HMAC key cannot be loaded or the digest fails."""


class UnsupportedModeError(FxdxError):
    """Raised when the sr25519 handshake mode is built or used."""

    def __init__(self, message: str, nonce: Optional[str] = None):
        self.nonce = nonce
        super().__init__(message)


class FxdxAPIError(FxdxError):
    """Raised when a decoded response carries a non-success ``code``."""

    def __init__(self, code: int, message: str = "", data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"FXDX error {code}: {message or 'request rejected'}")


class ModeConflictError(RuntimeError):
    """Raised when the builder is asked to mix the two authentication modes.

    Signals an incorrect call sequence in the integrating code; it is not
    an ``FxdxError`` and callers should not catch it.
    """
