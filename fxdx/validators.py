"""
Input validators for FXDX CLI parameters.

Every public function raises ``ValueError`` with a human-readable message
when validation fails.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import List, Sequence, Union

from .request import OrderType, Prefix, Scale

# FXDX symbols are uppercase alphanumeric pairs (e.g. ETHUSDT).
_SYMBOL_RE = re.compile(r"^[A-Z0-9]{2,20}$")

# Order ids travel inside the URL path and are joined with '|' for batches.
_ORDER_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

VALID_SIDES = ("ASK", "BID")
VALID_PREFIXES = ("maker", "api")


def validate_symbol(symbol: str) -> str:
    """Return the uppercased symbol or raise on invalid format."""
    symbol = symbol.strip().upper()
    if not _SYMBOL_RE.match(symbol):
        raise ValueError(
            f"Invalid symbol '{symbol}'. "
            "Expected uppercase alphanumeric (e.g. ETHUSDT)."
        )
    return symbol


def validate_side(side: str) -> OrderType:
    """Return the ``OrderType`` for ASK/BID (or the wire codes 0/1)."""
    side = str(side).strip().upper()
    if side in ("0", "1"):
        return OrderType(int(side))
    if side not in VALID_SIDES:
        raise ValueError(
            f"Invalid side '{side}'. Must be one of: {', '.join(VALID_SIDES)}."
        )
    return OrderType[side]


def _positive_decimal(value: Union[str, float, Decimal], name: str) -> Decimal:
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Invalid {name} '{value}'. Must be a positive number.")
    if not number.is_finite() or number <= 0:
        raise ValueError(f"{name.capitalize()} must be positive, got {value}.")
    return number


def validate_amount(amount: Union[str, float, Decimal]) -> Decimal:
    """Return a positive ``Decimal`` amount or raise."""
    return _positive_decimal(amount, "amount")


def validate_price(price: Union[str, float, Decimal]) -> Decimal:
    """Return a positive ``Decimal`` price or raise."""
    return _positive_decimal(price, "price")


def validate_order_ids(order_ids: Sequence[str]) -> List[str]:
    """
    Return the stripped order ids or raise.

    Raises
    ------
    ValueError
        If no id is given, or an id would break the request path.
    """
    cleaned = [str(order_id).strip() for order_id in order_ids]
    if not cleaned:
        raise ValueError("At least one order id is required.")
    for order_id in cleaned:
        if not _ORDER_ID_RE.match(order_id):
            raise ValueError(f"Invalid order id '{order_id}'.")
    return cleaned


def validate_page(page: Union[str, int], size: Union[str, int]) -> tuple:
    """Return ``(page, size)`` as ints; page starts at 1, size at least 1."""
    try:
        v_page, v_size = int(page), int(size)
    except (TypeError, ValueError):
        raise ValueError(f"Page and size must be integers, got '{page}' and '{size}'.")
    if v_page < 1 or v_size < 1:
        raise ValueError(f"Page and size must be positive, got {v_page} and {v_size}.")
    return v_page, v_size


def validate_scale(scale: str) -> Scale:
    """Return the ``Scale`` named by *scale* (case-insensitive)."""
    try:
        return Scale(scale.strip().upper())
    except ValueError:
        raise ValueError(
            f"Invalid scale '{scale}'. Must be one of: "
            f"{', '.join(s.value for s in Scale)}."
        )


def validate_prefix(prefix: str) -> Prefix:
    """Map ``maker``/``api`` to the route prefix."""
    prefix = prefix.strip().lower().lstrip("/")
    if prefix not in VALID_PREFIXES:
        raise ValueError(
            f"Invalid prefix '{prefix}'. Must be one of: {', '.join(VALID_PREFIXES)}."
        )
    return Prefix.PRIV_PUB if prefix == "maker" else Prefix.SR25519


def validate_order(
    symbol: str,
    side: str,
    price: Union[str, float, Decimal],
    amount: Union[str, float, Decimal],
) -> dict:
    """
    Run the order validators and return a clean parameter dict.

    Returns
    -------
    dict
        Keys: ``symbol``, ``side``, ``price``, ``amount``.

    Raises
    ------
    ValueError
        If any individual parameter is invalid.
    """
    return {
        "symbol": validate_symbol(symbol),
        "side": validate_side(side),
        "price": validate_price(price),
        "amount": validate_amount(amount),
    }
