"""
Kraken REST API Client

Holds the pieces every call needs (credential, HTTP transport, API origin,
nonce source) and exposes one coroutine per endpoint. The endpoint modules
under kraken_api/ do the parameter marshaling; this class only supplies the
request function they dispatch through.
"""

import logging
from typing import Any, Dict, Optional, Sequence

import httpx

from kraken_client.config import Settings, get_settings
from kraken_client.kraken_api import (
    account_balance_api,
    order_api,
    public_market_data,
    transaction_api,
)
from kraken_client.kraken_api.auth import Credential, NonceGenerator, Params
from kraken_client.kraken_api.endpoints import Endpoint, call_endpoint
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


class KrakenClient:
    """
    Async Kraken REST client

    Public endpoints work without a credential; private ones raise
    ValueError when called on a client that has none.

    Use as an async context manager to share one connection pool across
    calls. Without one (and without a caller-supplied http_client) each
    request opens a short-lived httpx client.
    """

    def __init__(
        self,
        credential: Optional[Credential] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        settings: Optional[Settings] = None,
        nonce_generator: Optional[NonceGenerator] = None,
    ):
        self.credential = credential
        self.settings = settings or get_settings()
        self.base_url = self.settings.kraken_api_url
        self.nonce_generator = nonce_generator
        self._http_client = http_client
        self._owns_http_client = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs: Any) -> "KrakenClient":
        """Build a client, loading the credential from settings when both key and secret are set"""
        settings = settings or get_settings()
        credential = None
        if settings.has_credentials():
            credential = Credential.from_settings(settings)
            logger.info("Loaded Kraken credential from settings")
        else:
            logger.info("No Kraken credential configured, only public endpoints available")
        return cls(credential, settings=settings, **kwargs)

    async def __aenter__(self) -> "KrakenClient":
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.settings.kraken_request_timeout)
            self._owns_http_client = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance opened it"""
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
            self._owns_http_client = False

    # ===== Dispatch =====

    async def public(self, method: str, path: str, params: Params = ()) -> str:
        """Raw public call, returns the body text"""
        return await public_request(method, path, params, client=self._http_client, base_url=self.base_url)

    async def private(self, method: str, path: str, params: Params = ()) -> str:
        """Raw signed call, returns the body text"""
        return await private_request(
            self._require_credential(path),
            path,
            params,
            method=method,
            client=self._http_client,
            base_url=self.base_url,
            nonce_generator=self.nonce_generator,
        )

    async def call(self, endpoint: Endpoint, params: Params = ()) -> Any:
        """Dispatch an endpoint descriptor and decode its result"""
        return await call_endpoint(
            endpoint,
            params,
            credential=self.credential,
            client=self._http_client,
            base_url=self.base_url,
            nonce_generator=self.nonce_generator,
        )

    def _require_credential(self, path: str) -> Credential:
        if self.credential is None:
            raise ValueError(f"{path} requires a credential")
        return self.credential

    # ===== Public market data =====

    async def get_server_time(self) -> Time:
        return await public_market_data.get_server_time(self.call)

    async def get_system_status(self) -> SystemStatus:
        return await public_market_data.get_system_status(self.call)

    async def get_assets(self, assets: Optional[Sequence[str]] = None, aclass: Optional[str] = None) -> Dict[str, Asset]:
        return await public_market_data.get_assets(self.call, assets, aclass)

    async def get_asset_pairs(
        self, pairs: Optional[Sequence[str]] = None, info: Optional[str] = None
    ) -> Dict[str, AssetPair]:
        return await public_market_data.get_asset_pairs(self.call, pairs, info)

    async def get_ticker(self, pairs: public_market_data.PairArg) -> Dict[str, Ticker]:
        return await public_market_data.get_ticker(self.call, pairs)

    async def get_ohlc(self, pair: str, interval: Optional[int] = None, since: Optional[int] = None) -> OHLCResult:
        return await public_market_data.get_ohlc(self.call, pair, interval, since)

    async def get_depth(self, pair: str, count: Optional[int] = None) -> Dict[str, DepthBook]:
        return await public_market_data.get_depth(self.call, pair, count)

    async def get_recent_trades(self, pair: str, since: Optional[int] = None, count: Optional[int] = None) -> TradesResult:
        return await public_market_data.get_recent_trades(self.call, pair, since, count)

    async def get_recent_spreads(self, pair: str, since: Optional[int] = None) -> SpreadResult:
        return await public_market_data.get_recent_spreads(self.call, pair, since)

    # ===== Account balances =====

    async def get_balance(self) -> BalanceResult:
        return await account_balance_api.get_balance(self.call)

    async def get_extended_balance(self) -> Dict[str, BalanceEx]:
        return await account_balance_api.get_extended_balance(self.call)

    async def get_trade_balance(self, asset: Optional[str] = None) -> TradeBalanceResult:
        return await account_balance_api.get_trade_balance(self.call, asset)

    async def get_trade_volume(self, pairs: Optional[Sequence[str]] = None) -> TradeVolume:
        return await account_balance_api.get_trade_volume(self.call, pairs)

    # ===== Orders =====

    async def get_open_orders(self, trades: Optional[bool] = None, userref: Optional[int] = None) -> OpenOrders:
        return await order_api.get_open_orders(self.call, trades, userref)

    async def get_closed_orders(
        self,
        trades: Optional[bool] = None,
        userref: Optional[int] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
        ofs: Optional[int] = None,
        closetime: Optional[str] = None,
    ) -> ClosedOrders:
        return await order_api.get_closed_orders(
            self.call, trades=trades, userref=userref, start=start, end=end, ofs=ofs, closetime=closetime
        )

    async def query_orders(
        self, txids: Sequence[str], trades: Optional[bool] = None, userref: Optional[int] = None
    ) -> Dict[str, Order]:
        return await order_api.query_orders(self.call, txids, trades, userref)

    # ===== Trades, positions, ledgers =====

    async def get_trades_history(
        self,
        type: Optional[str] = None,
        trades: Optional[bool] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
        ofs: Optional[int] = None,
    ) -> TradesHistory:
        return await transaction_api.get_trades_history(
            self.call, type=type, trades=trades, start=start, end=end, ofs=ofs
        )

    async def query_trades(self, txids: Sequence[str], trades: Optional[bool] = None) -> Dict[str, Trade]:
        return await transaction_api.query_trades(self.call, txids, trades)

    async def get_open_positions(
        self,
        txids: Optional[Sequence[str]] = None,
        docalcs: Optional[bool] = None,
        consolidation: Optional[str] = None,
    ) -> Dict[str, OpenPosition]:
        return await transaction_api.get_open_positions(self.call, txids, docalcs, consolidation)

    async def get_ledgers(
        self,
        assets: Optional[Sequence[str]] = None,
        aclass: Optional[str] = None,
        type: Optional[str] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
        ofs: Optional[int] = None,
    ) -> Ledgers:
        return await transaction_api.get_ledgers(
            self.call, assets=assets, aclass=aclass, type=type, start=start, end=end, ofs=ofs
        )

    async def query_ledgers(self, ids: Sequence[str], trades: Optional[bool] = None) -> Dict[str, LedgerEntry]:
        return await transaction_api.query_ledgers(self.call, ids, trades)
