"""
Endpoint descriptors and the generic routine that dispatches them

Each Kraken operation is declared once as an Endpoint (path, access level,
allowed parameters, result type). call_endpoint() validates the parameters
against the descriptor, picks public or private dispatch, and decodes the
envelope into the declared result type.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import httpx

from kraken_client.kraken_api.auth import Credential, NonceGenerator, Params
from kraken_client.kraken_api.envelope import decode
from kraken_client.kraken_api.request import private_request, public_request
from kraken_client.schemas import (
    Asset,
    AssetPair,
    BalanceEx,
    BalanceResult,
    ClosedOrders,
    DepthBook,
    LedgerEntry,
    Ledgers,
    OHLCResult,
    OpenOrders,
    OpenPosition,
    Order,
    SpreadResult,
    SystemStatus,
    Ticker,
    Time,
    Trade,
    TradeBalanceResult,
    TradesHistory,
    TradesResult,
    TradeVolume,
)

logger = logging.getLogger(__name__)


class Access(str, Enum):
    PUBLIC = "public"    # GET, query string, no auth
    PRIVATE = "private"  # POST, signed form body


@dataclass(frozen=True)
class Endpoint:
    name: str
    path: str
    access: Access
    result_type: Any = None
    required: Tuple[str, ...] = ()
    optional: Tuple[str, ...] = ()

    @property
    def method(self) -> str:
        return "GET" if self.access == Access.PUBLIC else "POST"

    def validate(self, params: Params) -> None:
        """Reject parameter names the endpoint does not declare, and missing required ones."""
        allowed = set(self.required) | set(self.optional)
        names = [name for name, _ in params]

        unknown = [name for name in names if name not in allowed]
        if unknown:
            raise ValueError(f"{self.name}: unknown parameter(s) {', '.join(unknown)}")

        missing = [name for name in self.required if name not in names]
        if missing:
            raise ValueError(f"{self.name}: missing required parameter(s) {', '.join(missing)}")


def _to_param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def build_params(**kwargs: Any) -> List[Tuple[str, str]]:
    """
    Marshal keyword arguments into ordered (name, value) string pairs

    None and empty sequences are omitted, booleans become "true"/"false",
    sequences are comma-joined. Keyword order is kept.
    """
    params = []
    for name, value in kwargs.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)) and not value:
            continue
        params.append((name, _to_param(value)))
    return params


async def call_endpoint(
    endpoint: Endpoint,
    params: Params = (),
    *,
    credential: Optional[Credential] = None,
    client: Optional[httpx.AsyncClient] = None,
    base_url: Optional[str] = None,
    nonce_generator: Optional[NonceGenerator] = None,
) -> Any:
    """
    Dispatch one endpoint and decode its envelope

    Args:
        endpoint: Endpoint descriptor
        params: Ordered parameters (see build_params)
        credential: Required for private endpoints
        client: Optional caller-supplied httpx client
        base_url: API origin override
        nonce_generator: Nonce source for private endpoints

    Returns:
        Result decoded into endpoint.result_type
    """
    endpoint.validate(params)

    if endpoint.access == Access.PRIVATE:
        if credential is None:
            raise ValueError(f"{endpoint.name} is a private endpoint and needs a credential")
        body = await private_request(
            credential,
            endpoint.path,
            params,
            client=client,
            base_url=base_url,
            nonce_generator=nonce_generator,
        )
    else:
        body = await public_request(endpoint.method, endpoint.path, params, client=client, base_url=base_url)

    return decode(body, endpoint.result_type)


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------

TIME = Endpoint("Time", "/0/public/Time", Access.PUBLIC, Time)
SYSTEM_STATUS = Endpoint("SystemStatus", "/0/public/SystemStatus", Access.PUBLIC, SystemStatus)
ASSETS = Endpoint("Assets", "/0/public/Assets", Access.PUBLIC, Dict[str, Asset], optional=("asset", "aclass"))
ASSET_PAIRS = Endpoint(
    "AssetPairs", "/0/public/AssetPairs", Access.PUBLIC, Dict[str, AssetPair], optional=("pair", "info")
)
TICKER = Endpoint("Ticker", "/0/public/Ticker", Access.PUBLIC, Dict[str, Ticker], required=("pair",))
OHLC = Endpoint(
    "OHLC", "/0/public/OHLC", Access.PUBLIC, OHLCResult, required=("pair",), optional=("interval", "since")
)
DEPTH = Endpoint("Depth", "/0/public/Depth", Access.PUBLIC, Dict[str, DepthBook], required=("pair",), optional=("count",))
TRADES = Endpoint(
    "Trades", "/0/public/Trades", Access.PUBLIC, TradesResult, required=("pair",), optional=("since", "count")
)
SPREAD = Endpoint("Spread", "/0/public/Spread", Access.PUBLIC, SpreadResult, required=("pair",), optional=("since",))

# ---------------------------------------------------------------------------
# Private endpoints
# ---------------------------------------------------------------------------

BALANCE = Endpoint("Balance", "/0/private/Balance", Access.PRIVATE, BalanceResult)
BALANCE_EX = Endpoint("BalanceEx", "/0/private/BalanceEx", Access.PRIVATE, Dict[str, BalanceEx])
TRADE_BALANCE = Endpoint(
    "TradeBalance", "/0/private/TradeBalance", Access.PRIVATE, TradeBalanceResult, optional=("asset",)
)
TRADE_VOLUME = Endpoint("TradeVolume", "/0/private/TradeVolume", Access.PRIVATE, TradeVolume, optional=("pair",))
OPEN_ORDERS = Endpoint(
    "OpenOrders", "/0/private/OpenOrders", Access.PRIVATE, OpenOrders, optional=("trades", "userref")
)
CLOSED_ORDERS = Endpoint(
    "ClosedOrders",
    "/0/private/ClosedOrders",
    Access.PRIVATE,
    ClosedOrders,
    optional=("trades", "userref", "start", "end", "ofs", "closetime"),
)
QUERY_ORDERS = Endpoint(
    "QueryOrders",
    "/0/private/QueryOrders",
    Access.PRIVATE,
    Dict[str, Order],
    required=("txid",),
    optional=("trades", "userref"),
)
TRADES_HISTORY = Endpoint(
    "TradesHistory",
    "/0/private/TradesHistory",
    Access.PRIVATE,
    TradesHistory,
    optional=("type", "trades", "start", "end", "ofs"),
)
QUERY_TRADES = Endpoint(
    "QueryTrades", "/0/private/QueryTrades", Access.PRIVATE, Dict[str, Trade], required=("txid",), optional=("trades",)
)
OPEN_POSITIONS = Endpoint(
    "OpenPositions",
    "/0/private/OpenPositions",
    Access.PRIVATE,
    Dict[str, OpenPosition],
    optional=("txid", "docalcs", "consolidation"),
)
LEDGERS = Endpoint(
    "Ledgers",
    "/0/private/Ledgers",
    Access.PRIVATE,
    Ledgers,
    optional=("asset", "aclass", "type", "start", "end", "ofs"),
)
QUERY_LEDGERS = Endpoint(
    "QueryLedgers",
    "/0/private/QueryLedgers",
    Access.PRIVATE,
    Dict[str, LedgerEntry],
    required=("id",),
    optional=("trades",),
)

ENDPOINTS: Dict[str, Endpoint] = {
    ep.name: ep
    for ep in (
        TIME,
        SYSTEM_STATUS,
        ASSETS,
        ASSET_PAIRS,
        TICKER,
        OHLC,
        DEPTH,
        TRADES,
        SPREAD,
        BALANCE,
        BALANCE_EX,
        TRADE_BALANCE,
        TRADE_VOLUME,
        OPEN_ORDERS,
        CLOSED_ORDERS,
        QUERY_ORDERS,
        TRADES_HISTORY,
        QUERY_TRADES,
        OPEN_POSITIONS,
        LEDGERS,
        QUERY_LEDGERS,
    )
}
