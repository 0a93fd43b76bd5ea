"""
Account balance operations for Kraken API
Handles balances, extended balances, margin trade balance and fee volume
"""

from typing import Callable, Dict, Optional, Sequence

from kraken_client.kraken_api import endpoints
from kraken_client.kraken_api.endpoints import build_params
from kraken_client.schemas import BalanceEx, BalanceResult, TradeBalanceResult, TradeVolume


async def get_balance(request_func: Callable) -> BalanceResult:
    """Cash balances, net of pending withdrawals, keyed by asset"""
    return await request_func(endpoints.BALANCE, [])


async def get_extended_balance(request_func: Callable) -> Dict[str, BalanceEx]:
    """Balances including credit and amounts held by open orders"""
    return await request_func(endpoints.BALANCE_EX, [])


async def get_trade_balance(request_func: Callable, asset: Optional[str] = None) -> TradeBalanceResult:
    """
    Margin trade balance summary

    Args:
        request_func: Endpoint dispatcher
        asset: Base asset for the figures (server default: ZUSD)
    """
    return await request_func(endpoints.TRADE_BALANCE, build_params(asset=asset))


async def get_trade_volume(request_func: Callable, pairs: Optional[Sequence[str]] = None) -> TradeVolume:
    """30-day volume, plus fee tiers for the given pairs"""
    return await request_func(endpoints.TRADE_VOLUME, build_params(pair=pairs))
