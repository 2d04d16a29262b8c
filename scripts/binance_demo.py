"""
Command-line helper for calling Binance REST endpoints.

Usage examples:
    python scripts/binance_demo.py depth --symbol ETHBTC --limit 5
    python scripts/binance_demo.py klines --symbol ETHBTC --interval 1d
    python scripts/binance_demo.py account
    python scripts/binance_demo.py order --symbol ETHBTC --side BUY \
        --type LIMIT --quantity 0.1 --price 0.05 --option timeInForce=GTC

Environment variables (private commands only):
    BINANCE_API_KEY
    BINANCE_API_SECRET
    BINANCE_BASE_URL (optional)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure repository root is importable when executed as a script.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from exchanges.binance import BinanceClient, BinanceClientError, BinanceConfig, LoggingBinanceClient
from exchanges.binance.logging_client import redact_signature

PRIVATE_COMMANDS = {"historical-trades", "account", "open-orders", "all-orders", "my-trades", "order", "cancel"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Binance REST helper")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("ping", help="Test connectivity")
    subparsers.add_parser("time", help="Print the server time")
    subparsers.add_parser("exchange-info", help="Print exchange information")

    for command, help_text in (
        ("depth", "Order book"),
        ("trades", "Recent trades"),
        ("historical-trades", "Older trades (API key required)"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("--symbol", required=True)
        sub.add_argument("--limit", type=int)
        if command == "historical-trades":
            sub.add_argument("--from-id", type=int)

    klines = subparsers.add_parser("klines", help="Candlestick bars")
    klines.add_argument("--symbol", required=True)
    klines.add_argument("--interval", required=True, help="e.g. 1m, 1h, 1d")
    klines.add_argument("--limit", type=int)
    klines.add_argument("--start-time", type=int)
    klines.add_argument("--end-time", type=int)

    ticker = subparsers.add_parser("ticker", help="24hr / price / book ticker")
    ticker.add_argument("--kind", choices=["24hr", "price", "book"], default="price")
    ticker.add_argument("--symbol")

    account = subparsers.add_parser("account", help="Account information")
    account.add_argument("--recv-window", type=int)

    open_orders = subparsers.add_parser("open-orders", help="Open orders")
    open_orders.add_argument("--symbol")
    open_orders.add_argument("--recv-window", type=int)

    all_orders = subparsers.add_parser("all-orders", help="All orders")
    all_orders.add_argument("--symbol")
    all_orders.add_argument("--order-id", type=int)
    all_orders.add_argument("--limit", type=int)
    all_orders.add_argument("--recv-window", type=int)

    my_trades = subparsers.add_parser("my-trades", help="Account trades")
    my_trades.add_argument("--symbol", required=True)
    my_trades.add_argument("--limit", type=int)
    my_trades.add_argument("--from-id", type=int)
    my_trades.add_argument("--recv-window", type=int)

    order = subparsers.add_parser("order", help="Submit an order")
    order.add_argument("--symbol", required=True)
    order.add_argument("--side", required=True, choices=["BUY", "SELL"])
    order.add_argument("--type", required=True, help="LIMIT, MARKET, ...")
    order.add_argument("--quantity", required=True)
    order.add_argument("--price")
    order.add_argument("--recv-window", type=int)
    order.add_argument(
        "--option",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra order option, e.g. timeInForce=GTC (repeatable)",
    )

    cancel = subparsers.add_parser("cancel", help="Cancel an order")
    cancel.add_argument("--symbol", required=True)
    cancel.add_argument("--order-id", type=int)
    cancel.add_argument("--orig-client-order-id")
    cancel.add_argument("--recv-window", type=int)

    return parser


def dispatch(client: BinanceClient | LoggingBinanceClient, args: argparse.Namespace):
    command = args.command
    if command == "ping":
        client.ping()
        return {}
    if command == "time":
        return {"serverTime": client.get_time()}
    if command == "exchange-info":
        return client.get_exchange_info()
    if command == "depth":
        return client.get_depth(args.symbol, args.limit)
    if command == "trades":
        return client.get_trades(args.symbol, args.limit)
    if command == "historical-trades":
        return client.get_historical_trades(args.symbol, args.from_id, args.limit)
    if command == "klines":
        return client.get_klines(args.symbol, args.interval, args.limit, args.start_time, args.end_time)
    if command == "ticker":
        if args.kind == "24hr":
            return client.get_ticker_24hr(args.symbol)
        if args.kind == "book":
            return client.get_ticker_book_ticker(args.symbol)
        return client.get_ticker_price(args.symbol)
    if command == "account":
        return client.get_account(args.recv_window)
    if command == "open-orders":
        return client.get_open_orders(args.symbol, args.recv_window)
    if command == "all-orders":
        return client.get_all_orders(args.symbol, args.order_id, args.limit, args.recv_window)
    if command == "my-trades":
        return client.get_my_trades(args.symbol, args.limit, args.from_id, args.recv_window)
    if command == "order":
        return client.send_order(
            args.symbol,
            args.side,
            args.type,
            args.quantity,
            args.price,
            args.recv_window,
            **_parse_options(args.option),
        )
    if command == "cancel":
        return client.cancel_order(args.symbol, args.order_id, args.orig_client_order_id, args.recv_window)
    raise ValueError(f"Unknown command {command}")


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config = BinanceConfig.from_env()
    if args.command in PRIVATE_COMMANDS and config.credentials is None:
        print("Environment variables BINANCE_API_KEY and BINANCE_API_SECRET are required", file=sys.stderr)
        sys.exit(2)

    client = LoggingBinanceClient(BinanceClient.from_config(config))
    try:
        if args.command in {"order", "cancel"}:
            client.set_server_time()
        result = dispatch(client, args)
    except (BinanceClientError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        client.close()

    request = client.last_request
    if request is not None:
        print(f"URI: {redact_signature(request.url)}")
    print(json.dumps(result, indent=2))


def _parse_options(raw_options: list[str]) -> dict[str, str]:
    options: dict[str, str] = {}
    for item in raw_options:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid --option value '{item}', expected KEY=VALUE")
        options[key] = value
    return options


if __name__ == "__main__":
    main()
