#!/usr/bin/env python3
"""
Kraken command-line client

Usage:
  kraken-client time
  kraken-client ticker --pair XBTUSD --pair ETHUSD
  kraken-client ohlc --pair XBTUSD --interval 60
  kraken-client balance                      # needs KRAKEN_API_KEY / KRAKEN_API_SECRET
  kraken-client closed-orders --trades --start 1616492376

Results are printed as JSON. Exit codes:
  0 success, 1 usage/credential error, 2 API error, 3 protocol error,
  4 deserialization error, 5 transport error
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Callable, Dict, Optional, Sequence

from pydantic_core import to_jsonable_python

from kraken_client.config import Settings
from kraken_client.exceptions import APIError, DeserializationError, ProtocolError, TransportError
from kraken_client.kraken_api.order_api import CLOSE_TIMES
from kraken_client.kraken_api.public_market_data import OHLC_INTERVALS
from kraken_client.kraken_api.transaction_api import LEDGER_TYPES, TRADE_TYPES
from kraken_client.kraken_client import KrakenClient

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_API = 2
EXIT_PROTOCOL = 3
EXIT_DESERIALIZATION = 4
EXIT_TRANSPORT = 5

# Commands that sign requests and therefore need a credential
PRIVATE_COMMANDS = {
    "balance",
    "balance-ex",
    "trade-balance",
    "trade-volume",
    "open-orders",
    "closed-orders",
    "query-orders",
    "trades-history",
    "query-trades",
    "open-positions",
    "ledgers",
    "query-ledgers",
}


def _depth_count(value: str) -> int:
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("count is not a valid integer")
    if count < 0 or count > 500:
        raise argparse.ArgumentTypeError("count must be between 0 and 500")
    return count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kraken-client", description="Kraken REST API client")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override LOG_LEVEL",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # Public
    sub.add_parser("time", help="Server time")
    sub.add_parser("system-status", help="Exchange status")

    p = sub.add_parser("assets", help="Asset info")
    p.add_argument("--asset", action="append", default=[])
    p.add_argument("--aclass")

    p = sub.add_parser("asset-pairs", help="Tradable asset pairs")
    p.add_argument("--pair", action="append", default=[])
    p.add_argument("--info", choices=["info", "leverage", "fees", "margin"])

    p = sub.add_parser("ticker", help="Ticker info")
    p.add_argument("--pair", action="append", required=True)

    p = sub.add_parser("ohlc", help="OHLC candles")
    p.add_argument("--pair", required=True)
    p.add_argument("--interval", type=int, choices=OHLC_INTERVALS)
    p.add_argument("--since", type=int)

    p = sub.add_parser("depth", help="Order book")
    p.add_argument("--pair", required=True)
    p.add_argument("--count", type=_depth_count)

    p = sub.add_parser("trades", help="Recent trades")
    p.add_argument("--pair", required=True)
    p.add_argument("--since")
    p.add_argument("--count", type=int)

    p = sub.add_parser("spread", help="Recent spreads")
    p.add_argument("--pair", required=True)
    p.add_argument("--since", type=int)

    # Private
    sub.add_parser("balance", help="Account balance")
    sub.add_parser("balance-ex", help="Extended balance")

    p = sub.add_parser("trade-balance", help="Margin trade balance")
    p.add_argument("--asset")

    p = sub.add_parser("trade-volume", help="30-day volume and fees")
    p.add_argument("--pair", action="append", default=[])

    p = sub.add_parser("open-orders", help="Open orders")
    p.add_argument("--trades", action="store_true", default=None)
    p.add_argument("--userref", type=int)

    p = sub.add_parser("closed-orders", help="Closed orders")
    p.add_argument("--trades", action="store_true", default=None)
    p.add_argument("--userref", type=int)
    p.add_argument("--start", type=int)
    p.add_argument("--end", type=int)
    p.add_argument("--ofs", type=int)
    p.add_argument("--closetime", choices=CLOSE_TIMES)

    p = sub.add_parser("query-orders", help="Specific orders")
    p.add_argument("--txid", action="append", required=True)
    p.add_argument("--trades", action="store_true", default=None)
    p.add_argument("--userref", type=int)

    p = sub.add_parser("trades-history", help="Trade history")
    p.add_argument("--type", choices=TRADE_TYPES)
    p.add_argument("--trades", action="store_true", default=None)
    p.add_argument("--start", type=int)
    p.add_argument("--end", type=int)
    p.add_argument("--ofs", type=int)

    p = sub.add_parser("query-trades", help="Specific trades")
    p.add_argument("--txid", action="append", required=True)
    p.add_argument("--trades", action="store_true", default=None)

    p = sub.add_parser("open-positions", help="Open margin positions")
    p.add_argument("--txid", action="append", default=[])
    p.add_argument("--docalcs", action="store_true", default=None)
    p.add_argument("--consolidation")

    p = sub.add_parser("ledgers", help="Ledger entries")
    p.add_argument("--asset", action="append", default=[])
    p.add_argument("--aclass")
    p.add_argument("--type", choices=LEDGER_TYPES)
    p.add_argument("--start", type=int)
    p.add_argument("--end", type=int)
    p.add_argument("--ofs", type=int)

    p = sub.add_parser("query-ledgers", help="Specific ledger entries")
    p.add_argument("--id", action="append", required=True)
    p.add_argument("--trades", action="store_true", default=None)

    return parser


COMMANDS: Dict[str, Callable[[KrakenClient, argparse.Namespace], Any]] = {
    "time": lambda c, a: c.get_server_time(),
    "system-status": lambda c, a: c.get_system_status(),
    "assets": lambda c, a: c.get_assets(a.asset, a.aclass),
    "asset-pairs": lambda c, a: c.get_asset_pairs(a.pair, a.info),
    "ticker": lambda c, a: c.get_ticker(a.pair),
    "ohlc": lambda c, a: c.get_ohlc(a.pair, a.interval, a.since),
    "depth": lambda c, a: c.get_depth(a.pair, a.count),
    "trades": lambda c, a: c.get_recent_trades(a.pair, a.since, a.count),
    "spread": lambda c, a: c.get_recent_spreads(a.pair, a.since),
    "balance": lambda c, a: c.get_balance(),
    "balance-ex": lambda c, a: c.get_extended_balance(),
    "trade-balance": lambda c, a: c.get_trade_balance(a.asset),
    "trade-volume": lambda c, a: c.get_trade_volume(a.pair),
    "open-orders": lambda c, a: c.get_open_orders(a.trades, a.userref),
    "closed-orders": lambda c, a: c.get_closed_orders(
        trades=a.trades, userref=a.userref, start=a.start, end=a.end, ofs=a.ofs, closetime=a.closetime
    ),
    "query-orders": lambda c, a: c.query_orders(a.txid, a.trades, a.userref),
    "trades-history": lambda c, a: c.get_trades_history(
        type=a.type, trades=a.trades, start=a.start, end=a.end, ofs=a.ofs
    ),
    "query-trades": lambda c, a: c.query_trades(a.txid, a.trades),
    "open-positions": lambda c, a: c.get_open_positions(a.txid, a.docalcs, a.consolidation),
    "ledgers": lambda c, a: c.get_ledgers(
        assets=a.asset, aclass=a.aclass, type=a.type, start=a.start, end=a.end, ofs=a.ofs
    ),
    "query-ledgers": lambda c, a: c.query_ledgers(a.id, a.trades),
}


def format_result(result: Any) -> str:
    return json.dumps(to_jsonable_python(result, by_alias=True), indent=2)


async def run(args: argparse.Namespace, settings: Settings) -> Any:
    async with KrakenClient.from_settings(settings) as client:
        return await COMMANDS[args.command](client, args)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    if args.command in PRIVATE_COMMANDS and not settings.has_credentials():
        print("Error: KRAKEN_API_KEY and KRAKEN_API_SECRET must be set", file=sys.stderr)
        return EXIT_USAGE

    try:
        result = asyncio.run(run(args, settings))
    except APIError as e:
        for error in e.errors:
            print(f"API error: {error}", file=sys.stderr)
        return EXIT_API
    except ProtocolError as e:
        print(f"Protocol error: {e}", file=sys.stderr)
        return EXIT_PROTOCOL
    except DeserializationError as e:
        print(f"Unexpected response: {e}", file=sys.stderr)
        return EXIT_DESERIALIZATION
    except TransportError as e:
        print(f"Network error: {e}", file=sys.stderr)
        return EXIT_TRANSPORT
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    print(format_result(result))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
