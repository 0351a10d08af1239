#!/usr/bin/env python3
"""
CLI entry point for the FXDX signed-request client.

Credentials are read from the environment (or a ``.env`` file next to
this script): ``FXDX_ENDPOINT``, ``FXDX_SECRET``, ``FXDX_ADDRESS`` and
optionally ``FXDX_PREFIX`` (``maker`` or ``api``) and ``FXDX_LOG_LEVEL``.

Usage examples
--------------
List symbols::

    python cli.py symbols

Place a bid::

    python cli.py order --symbol ETHUSDT --side BID --price 1.5 --amount 10

Cancel two orders::

    python cli.py cancel ETHUSDT 1001 1002
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import List, Optional

import httpx
from dotenv import load_dotenv

# ── Bootstrap ──────────────────────────────────────────────────────────────
# Ensure the project root is on sys.path so ``fxdx`` can be imported when this
# script is executed directly (``python cli.py …``).
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
if SCRIPT_DIR not in sys.path:
    sys.path.insert(0, SCRIPT_DIR)

from fxdx import request as rq  # noqa: E402
from fxdx.builder import FxdxBuilder  # noqa: E402
from fxdx.client import FxdxClient  # noqa: E402
from fxdx.errors import FxdxError  # noqa: E402
from fxdx.logging_config import setup_logging  # noqa: E402
from fxdx.orders import (  # noqa: E402
    cancel_orders,
    format_order_response,
    format_query_order,
    place_order,
)
from fxdx.validators import (  # noqa: E402
    validate_order,
    validate_order_ids,
    validate_page,
    validate_prefix,
    validate_scale,
    validate_symbol,
)

# ── Argument parser ────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Send signed requests to the FXDX REST API.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python cli.py symbols\n"
            "  python cli.py depth ETHUSDT\n"
            "  python cli.py order --symbol ETHUSDT --side BID --price 1.5 --amount 10\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("symbols", help="List tradable symbols")
    sub.add_parser("balances", help="Show account balances")

    depth = sub.add_parser("depth", help="Order book depth for a symbol")
    depth.add_argument("symbol")

    kline = sub.add_parser("kline", help="Candlesticks for a symbol")
    kline.add_argument("symbol")
    kline.add_argument("--scale", default="MINUTE", help="MINUTE, MINUTE_5, … HOUR4, DAY, WEEK")

    order = sub.add_parser("order", help="Place a limit order")
    order.add_argument("--symbol", required=True, help="Trading pair (e.g. ETHUSDT)")
    order.add_argument("--side", required=True, help="ASK or BID")
    order.add_argument("--price", required=True, help="Limit price")
    order.add_argument("--amount", required=True, help="Order amount")

    cancel = sub.add_parser("cancel", help="Cancel one or more orders")
    cancel.add_argument("symbol")
    cancel.add_argument("order_ids", nargs="+")

    query = sub.add_parser("query", help="Show one order")
    query.add_argument("symbol")
    query.add_argument("order_id")

    orders = sub.add_parser("orders", help="List orders page by page")
    orders.add_argument("symbol")
    orders.add_argument("--page", default=1)
    orders.add_argument("--size", default=20)
    orders.add_argument("--pending", action="store_true", help="Only open orders")
    return parser


def request_from_args(args: argparse.Namespace) -> rq.Request:
    """
    Validate parsed arguments and build the matching request.

    Raises
    ------
    ValueError
        If any parameter is invalid.
    """
    command = args.command
    if command == "symbols":
        return rq.Symbols()
    if command == "balances":
        return rq.Balances()
    if command == "depth":
        return rq.Depth(validate_symbol(args.symbol))
    if command == "kline":
        return rq.Kline(validate_symbol(args.symbol), validate_scale(args.scale))
    if command == "order":
        params = validate_order(args.symbol, args.side, args.price, args.amount)
        return rq.PendingOrder(params["side"], params["symbol"], params["price"], params["amount"])
    if command == "cancel":
        symbol = validate_symbol(args.symbol)
        order_ids = validate_order_ids(args.order_ids)
        if len(order_ids) == 1:
            return rq.CancelOrder(symbol, order_ids[0])
        return rq.BatchCancelOrders(symbol, tuple(order_ids))
    if command == "query":
        return rq.OrderById(validate_symbol(args.symbol), validate_order_ids([args.order_id])[0])
    if command == "orders":
        page, size = validate_page(args.page, args.size)
        return rq.OrderByPage(validate_symbol(args.symbol), page, size, bool(args.pending))
    raise ValueError(f"Unknown command '{command}'.")


async def execute(client: FxdxClient, request: rq.Request) -> str:
    """Send *request* with the matching client operation and render the result."""
    if isinstance(request, rq.PendingOrder):
        side = rq.OrderType(int(request.order_type))
        response = await place_order(client, request.symbol, side, request.price, request.amount)
        return format_order_response(response)
    if isinstance(request, (rq.CancelOrder, rq.BatchCancelOrders)):
        ids = request.order_ids if isinstance(request, rq.BatchCancelOrders) else (request.order_id,)
        response = await cancel_orders(client, request.symbol, list(ids))
        return f"Cancel {'accepted' if response.is_success else 'rejected'} (code={response.code})"
    if isinstance(request, rq.OrderById):
        response = await client.query_order_by_id(request)
        if response.is_success and response.data is not None:
            return format_query_order(response.data)
        return f"Order not found (code={response.code})"
    if isinstance(request, rq.OrderByPage):
        response = await client.query_orders_by_page(request)
        return "\n".join(format_query_order(o) for o in response.data or []) or "No orders."
    if isinstance(request, rq.Symbols):
        response = await client.query_symbols(request)
        return "\n".join(f"  {s.base_name}/{s.quote_name}" for s in response.data or [])
    if isinstance(request, rq.Balances):
        response = await client.query_account_balance(request)
        return "\n".join(
            f"  {b.name:<8} available={b.available} frozen={b.frozen}" for b in response.data or []
        )
    if isinstance(request, rq.Depth):
        response = await client.query_depth(request)
        book = response.data
        if book is None:
            return f"No depth (code={response.code})"
        return f"  bids={len(book.bids)} asks={len(book.asks)} depth={book.depth}"
    if isinstance(request, rq.Kline):
        response = await client.query_kline(request)
        return "\n".join(
            f"  {k.id} o={k.open} h={k.high} l={k.low} c={k.close} v={k.vol}"
            for k in response.data or []
        )
    raise ValueError(f"No CLI rendering for {type(request).__name__}.")


async def _run(builder: FxdxBuilder, request: rq.Request) -> str:
    async with await builder.build() as client:
        return await execute(client, request)


# ── Main ───────────────────────────────────────────────────────────────────


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv(os.path.join(SCRIPT_DIR, ".env"))

    # --- Read credentials ---------------------------------------------------
    endpoint = os.getenv("FXDX_ENDPOINT")
    secret = os.getenv("FXDX_SECRET")
    address = os.getenv("FXDX_ADDRESS", "")

    try:
        logger = setup_logging(secrets=[secret or ""])
    except ValueError as exc:
        print(f"✗ {exc}", file=sys.stderr)
        sys.exit(1)

    args = build_parser().parse_args(argv)

    if not endpoint or not secret:
        logger.error(
            "Missing FXDX configuration. Set FXDX_ENDPOINT and FXDX_SECRET "
            "in a .env file or as environment variables."
        )
        sys.exit(1)

    # --- Validate inputs ----------------------------------------------------
    try:
        prefix = validate_prefix(os.getenv("FXDX_PREFIX", "maker"))
        request = request_from_args(args)
    except (ValueError, FxdxError) as exc:
        logger.error("Validation error: %s", exc)
        sys.exit(1)

    builder = FxdxBuilder.endpoint(endpoint).address(address).secret(secret).prefix(prefix)

    # --- Dispatch -----------------------------------------------------------
    try:
        output = asyncio.run(_run(builder, request))
    except FxdxError as exc:
        logger.error("FXDX error: %s", exc)
        print(f"\n✗ Request FAILED – {exc}")
        sys.exit(1)
    except httpx.HTTPError as exc:
        logger.error("HTTP error: %s", exc)
        print(f"\n✗ Request FAILED – {exc}")
        sys.exit(1)
    except Exception as exc:
        logger.exception("Unexpected error while handling '%s'", args.command)
        print(f"\n✗ Request FAILED – {exc}")
        sys.exit(1)

    print(output)


if __name__ == "__main__":
    main()
