"""
Public (unauthenticated) Kraken market data API.

These endpoints need no API credentials. Every function takes a request_func
(an async callable taking an Endpoint and its params) so the same code runs
from the KrakenClient facade or from a bare call_endpoint wrapper.

Public endpoints used:
  GET /0/public/Time
  GET /0/public/SystemStatus
  GET /0/public/Assets
  GET /0/public/AssetPairs
  GET /0/public/Ticker
  GET /0/public/OHLC
  GET /0/public/Depth
  GET /0/public/Trades
  GET /0/public/Spread
"""

from typing import Callable, Dict, Optional, Sequence, Union

from kraken_client.kraken_api import endpoints
from kraken_client.kraken_api.endpoints import build_params
from kraken_client.schemas import (
    Asset,
    AssetPair,
    DepthBook,
    OHLCResult,
    SpreadResult,
    SystemStatus,
    Ticker,
    Time,
    TradesResult,
)

# Candle widths (minutes) accepted by /0/public/OHLC
OHLC_INTERVALS = (1, 5, 15, 30, 60, 240, 1440, 10080, 21600)

PairArg = Union[str, Sequence[str]]


async def get_server_time(request_func: Callable) -> Time:
    """Server time, handy for checking clock drift before private calls."""
    return await request_func(endpoints.TIME, [])


async def get_system_status(request_func: Callable) -> SystemStatus:
    return await request_func(endpoints.SYSTEM_STATUS, [])


async def get_assets(
    request_func: Callable,
    assets: Optional[Sequence[str]] = None,
    aclass: Optional[str] = None,
) -> Dict[str, Asset]:
    """Asset info, for every asset when none are named."""
    return await request_func(endpoints.ASSETS, build_params(asset=assets, aclass=aclass))


async def get_asset_pairs(
    request_func: Callable,
    pairs: Optional[Sequence[str]] = None,
    info: Optional[str] = None,
) -> Dict[str, AssetPair]:
    """
    Tradable asset pairs

    Args:
        request_func: Endpoint dispatcher
        pairs: Pairs to fetch, all when omitted
        info: One of info, leverage, fees, margin (server default: info)
    """
    if info is not None and info not in ("info", "leverage", "fees", "margin"):
        raise ValueError(f"Invalid info level: {info}")
    return await request_func(endpoints.ASSET_PAIRS, build_params(pair=pairs, info=info))


async def get_ticker(request_func: Callable, pairs: PairArg) -> Dict[str, Ticker]:
    return await request_func(endpoints.TICKER, build_params(pair=pairs))


async def get_ohlc(
    request_func: Callable,
    pair: str,
    interval: Optional[int] = None,
    since: Optional[int] = None,
) -> OHLCResult:
    """
    OHLC candles for one pair

    The result is keyed by pair name plus "last", the cursor to pass as
    since= on the next call.
    """
    if interval is not None and interval not in OHLC_INTERVALS:
        raise ValueError(f"Invalid OHLC interval: {interval}")
    return await request_func(endpoints.OHLC, build_params(pair=pair, interval=interval, since=since))


async def get_depth(request_func: Callable, pair: str, count: Optional[int] = None) -> Dict[str, DepthBook]:
    """Order book; count caps the levels per side (0-500, server default 100)."""
    if count is not None and not 0 <= count <= 500:
        raise ValueError("count must be between 0 and 500")
    return await request_func(endpoints.DEPTH, build_params(pair=pair, count=count))


async def get_recent_trades(
    request_func: Callable,
    pair: str,
    since: Optional[Union[int, str]] = None,
    count: Optional[int] = None,
) -> TradesResult:
    return await request_func(endpoints.TRADES, build_params(pair=pair, since=since, count=count))


async def get_recent_spreads(
    request_func: Callable,
    pair: str,
    since: Optional[int] = None,
) -> SpreadResult:
    return await request_func(endpoints.SPREAD, build_params(pair=pair, since=since))
