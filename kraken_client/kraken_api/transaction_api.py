"""
Trade, position and ledger history for Kraken API
"""

from typing import Callable, Dict, Optional, Sequence

from kraken_client.kraken_api import endpoints
from kraken_client.kraken_api.endpoints import build_params
from kraken_client.schemas import LedgerEntry, Ledgers, OpenPosition, Trade, TradesHistory

TRADE_TYPES = ("all", "any position", "closed position", "closing position", "no position")
LEDGER_TYPES = (
    "all",
    "trade",
    "deposit",
    "withdrawal",
    "transfer",
    "margin",
    "rollover",
    "spend",
    "receive",
    "settled",
    "adjustment",
    "staking",
    "credit",
)


async def get_trades_history(
    request_func: Callable,
    type: Optional[str] = None,
    trades: Optional[bool] = None,
    start: Optional[int] = None,
    end: Optional[int] = None,
    ofs: Optional[int] = None,
) -> TradesHistory:
    """
    Trade history, 50 per page, newest first

    Args:
        request_func: Endpoint dispatcher
        type: One of TRADE_TYPES (server default: all)
        trades: Include trades related to positions
        start: Starting unix timestamp or trade txid (exclusive)
        end: Ending unix timestamp or trade txid (inclusive)
        ofs: Result offset for paging
    """
    if type is not None and type not in TRADE_TYPES:
        raise ValueError(f"Invalid trade type: {type}")
    params = build_params(type=type, trades=trades, start=start, end=end, ofs=ofs)
    return await request_func(endpoints.TRADES_HISTORY, params)


async def query_trades(
    request_func: Callable,
    txids: Sequence[str],
    trades: Optional[bool] = None,
) -> Dict[str, Trade]:
    """Info about specific trades (up to 20 txids)"""
    if not txids:
        raise ValueError("At least one trade txid is required")
    return await request_func(endpoints.QUERY_TRADES, build_params(txid=txids, trades=trades))


async def get_open_positions(
    request_func: Callable,
    txids: Optional[Sequence[str]] = None,
    docalcs: Optional[bool] = None,
    consolidation: Optional[str] = None,
) -> Dict[str, OpenPosition]:
    """Open margin positions; docalcs adds value and net P/L"""
    params = build_params(txid=txids, docalcs=docalcs, consolidation=consolidation)
    return await request_func(endpoints.OPEN_POSITIONS, params)


async def get_ledgers(
    request_func: Callable,
    assets: Optional[Sequence[str]] = None,
    aclass: Optional[str] = None,
    type: Optional[str] = None,
    start: Optional[int] = None,
    end: Optional[int] = None,
    ofs: Optional[int] = None,
) -> Ledgers:
    """Ledger entries, 50 per page"""
    if type is not None and type not in LEDGER_TYPES:
        raise ValueError(f"Invalid ledger type: {type}")
    params = build_params(asset=assets, aclass=aclass, type=type, start=start, end=end, ofs=ofs)
    return await request_func(endpoints.LEDGERS, params)


async def query_ledgers(
    request_func: Callable,
    ids: Sequence[str],
    trades: Optional[bool] = None,
) -> Dict[str, LedgerEntry]:
    """Specific ledger entries (up to 20 ids)"""
    if not ids:
        raise ValueError("At least one ledger id is required")
    return await request_func(endpoints.QUERY_LEDGERS, build_params(id=ids, trades=trades))
