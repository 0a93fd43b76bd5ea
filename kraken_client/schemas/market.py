"""Public market-data result schemas"""
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel


class KrakenModel(BaseModel):
    """Base for exchange results; unknown fields are kept, not rejected."""

    class Config:
        extra = "allow"
        populate_by_name = True


class Time(KrakenModel):
    unixtime: int
    rfc1123: str


class SystemStatus(KrakenModel):
    status: str
    timestamp: str


class Asset(KrakenModel):
    aclass: str
    altname: str
    decimals: int
    display_decimals: int
    collateral_value: Optional[Decimal] = None
    status: Optional[str] = None


class AssetPair(KrakenModel):
    altname: Optional[str] = None
    wsname: Optional[str] = None
    aclass_base: Optional[str] = None
    base: Optional[str] = None
    aclass_quote: Optional[str] = None
    quote: Optional[str] = None
    lot: Optional[str] = None
    pair_decimals: Optional[int] = None
    lot_decimals: Optional[int] = None
    lot_multiplier: Optional[int] = None
    leverage_buy: Optional[List[int]] = None
    leverage_sell: Optional[List[int]] = None
    fees: Optional[List[List[Decimal]]] = None
    fees_maker: Optional[List[List[Decimal]]] = None
    fee_volume_currency: Optional[str] = None
    margin_call: Optional[int] = None
    margin_stop: Optional[int] = None
    ordermin: Optional[Decimal] = None


class Ticker(KrakenModel):
    a: List[Decimal]  # ask [price, whole lot volume, lot volume]
    b: List[Decimal]  # bid
    c: List[Decimal]  # last trade closed [price, lot volume]
    v: List[Decimal]  # volume [today, last 24h]
    p: List[Decimal]  # vwap
    t: List[int]      # number of trades
    l: List[Decimal]  # noqa: E741 - low
    h: List[Decimal]  # high
    o: Decimal        # today's opening price


# [time, open, high, low, close, vwap, volume, count]
OHLCRow = Tuple[int, Decimal, Decimal, Decimal, Decimal, Decimal, Decimal, int]

# [price, volume, timestamp]
DepthRow = Tuple[Decimal, Decimal, int]

# [time, bid, ask]
SpreadRow = Tuple[int, Decimal, Decimal]


class DepthBook(KrakenModel):
    asks: List[DepthRow]
    bids: List[DepthRow]


# Keyed by pair name, plus a "last" cursor for the next since= call
OHLCResult = Dict[str, Union[List[OHLCRow], int]]
SpreadResult = Dict[str, Union[List[SpreadRow], int]]

# Trade rows are [price, volume, time, side, type, misc, trade_id]; the
# trailing id only exists on newer API versions so rows stay untyped.
TradesResult = Dict[str, Union[List[List[Any]], str]]
