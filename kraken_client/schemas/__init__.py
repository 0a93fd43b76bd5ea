"""Pydantic schemas for Kraken API results"""

from .account import (
    BalanceEx,
    BalanceResult,
    ClosedOrders,
    FeeTier,
    LedgerEntry,
    Ledgers,
    OpenOrders,
    OpenPosition,
    Order,
    OrderDescription,
    Trade,
    TradeBalanceResult,
    TradesHistory,
    TradeVolume,
)
from .market import (
    Asset,
    AssetPair,
    DepthBook,
    KrakenModel,
    OHLCResult,
    SpreadResult,
    SystemStatus,
    Ticker,
    Time,
    TradesResult,
)

__all__ = [
    "KrakenModel",
    # Market schemas
    "Time",
    "SystemStatus",
    "Asset",
    "AssetPair",
    "Ticker",
    "DepthBook",
    "OHLCResult",
    "SpreadResult",
    "TradesResult",
    # Account schemas
    "BalanceResult",
    "BalanceEx",
    "TradeBalanceResult",
    "TradeVolume",
    "FeeTier",
    # Order / trade schemas
    "OrderDescription",
    "Order",
    "OpenOrders",
    "ClosedOrders",
    "Trade",
    "TradesHistory",
    "OpenPosition",
    # Ledger schemas
    "LedgerEntry",
    "Ledgers",
]
