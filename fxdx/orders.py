"""
Order-placement helpers.

Bridges validated user input and ``FxdxClient``, and renders responses
for CLI output.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Sequence, Union

from .client import FxdxClient
from .request import BatchCancelOrders, CancelOrder, OrderType, PendingOrder
from .response import (
    BatchCancelOrdersResponse,
    CancelOrderResponse,
    PendingOrderResponse,
    QueryOrder,
)

logger = logging.getLogger("fxdx")


async def place_order(
    client: FxdxClient,
    symbol: str,
    side: OrderType,
    price: Decimal,
    amount: Decimal,
) -> PendingOrderResponse:
    """
    Build a ``PendingOrder`` and forward it to ``client.pending_order``.

    Parameters
    ----------
    client : FxdxClient
        Authenticated API client.
    symbol, side, price, amount
        Already-validated trading parameters.
    """
    request = PendingOrder(side, symbol, price, amount)

    logger.info("Placing %s order: %s %s @ %s", side.name, amount, symbol, price)

    response = await client.pending_order(request)

    logger.info("Order placed  – code=%s orderId=%s", response.code, response.data)
    logger.debug("Full order response: %s", response)
    return response


async def cancel_orders(
    client: FxdxClient, symbol: str, order_ids: Sequence[str]
) -> Union[CancelOrderResponse, BatchCancelOrdersResponse]:
    """Cancel one order, or several in a single batch request."""
    logger.info("Cancelling %d order(s) on %s: %s", len(order_ids), symbol, ", ".join(order_ids))
    if len(order_ids) == 1:
        response = await client.cancel_order(CancelOrder(symbol, order_ids[0]))
    else:
        response = await client.batch_cancel_orders(BatchCancelOrders(symbol, tuple(order_ids)))
    logger.info("Cancel result – code=%s", response.code)
    return response


def format_order_response(response: PendingOrderResponse) -> str:
    """Return a multi-line summary of a placement response."""
    status = "accepted" if response.is_success else "rejected"
    lines = [
        "─── Order Response ───────────────────────────",
        f"  Code          : {response.code} ({status})",
        f"  Order ID      : {response.data if response.is_success else 'N/A'}",
        "───────────────────────────────────────────────",
    ]
    return "\n".join(lines)


def format_query_order(order: QueryOrder) -> str:
    """
    Return a human-friendly multi-line summary of a queried order.

    Extracts the most useful fields and formats them for CLI output.
    """
    lines: List[str] = [
        "─── Order ────────────────────────────────────",
        f"  Order ID      : {order.order_id}",
        f"  Symbol        : {order.symbol}",
        f"  Side          : {order.direction.name}",
        f"  Type          : {order.order_type.name}",
        f"  Status        : {order.status.name}",
        f"  Amount        : {order.amount}",
        f"  Price         : {order.price}",
        f"  Filled Base   : {order.filled_base}",
        f"  Filled Quote  : {order.filled_quote}",
        f"  Avg Price     : {order.avg_price}",
        f"  Trades        : {len(order.trades)}",
        "───────────────────────────────────────────────",
    ]
    return "\n".join(lines)
