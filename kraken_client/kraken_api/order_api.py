"""
Order queries for Kraken API
Handles open, closed and specific-order lookups
"""

from typing import Callable, Dict, Optional, Sequence

from kraken_client.kraken_api import endpoints
from kraken_client.kraken_api.endpoints import build_params
from kraken_client.schemas import ClosedOrders, OpenOrders, Order

# Which timestamp start/end filter on for closed orders
CLOSE_TIMES = ("open", "close", "both")


async def get_open_orders(
    request_func: Callable,
    trades: Optional[bool] = None,
    userref: Optional[int] = None,
) -> OpenOrders:
    """
    Orders currently open

    Args:
        request_func: Endpoint dispatcher
        trades: Include related trade IDs
        userref: Only orders with this user reference
    """
    return await request_func(endpoints.OPEN_ORDERS, build_params(trades=trades, userref=userref))


async def get_closed_orders(
    request_func: Callable,
    trades: Optional[bool] = None,
    userref: Optional[int] = None,
    start: Optional[int] = None,
    end: Optional[int] = None,
    ofs: Optional[int] = None,
    closetime: Optional[str] = None,
) -> ClosedOrders:
    """
    Closed orders, 50 per page

    start and end are unix timestamps or order txids; ofs is the result
    offset for paging.
    """
    if closetime is not None and closetime not in CLOSE_TIMES:
        raise ValueError(f"Invalid closetime: {closetime}")

    params = build_params(
        trades=trades,
        userref=userref,
        start=start,
        end=end,
        ofs=ofs,
        closetime=closetime,
    )
    return await request_func(endpoints.CLOSED_ORDERS, params)


async def query_orders(
    request_func: Callable,
    txids: Sequence[str],
    trades: Optional[bool] = None,
    userref: Optional[int] = None,
) -> Dict[str, Order]:
    """Info about specific orders (up to 50 txids)"""
    if not txids:
        raise ValueError("At least one order txid is required")
    return await request_func(endpoints.QUERY_ORDERS, build_params(txid=txids, trades=trades, userref=userref))
