"""Private account / order / ledger result schemas"""
from decimal import Decimal
from typing import Dict, List, Optional, Union

from pydantic import Field

from .market import KrakenModel


class BalanceEx(KrakenModel):
    balance: Decimal
    hold_trade: Decimal
    credit: Optional[Decimal] = None
    credit_used: Optional[Decimal] = None


class OrderDescription(KrakenModel):
    pair: str
    type_: str = Field(alias="type")
    ordertype: str
    price: Decimal
    price2: Decimal
    leverage: str
    order: str
    close: Optional[str] = None


class Order(KrakenModel):
    refid: Optional[str] = None
    userref: Optional[Union[int, str]] = None
    status: str
    opentm: float
    starttm: float
    expiretm: float
    closetm: Optional[float] = None
    descr: OrderDescription
    vol: Decimal
    vol_exec: Decimal
    cost: Decimal
    fee: Decimal
    price: Decimal
    stopprice: Decimal
    limitprice: Decimal
    misc: str
    oflags: str
    reason: Optional[str] = None
    trades: Optional[List[str]] = None


class OpenOrders(KrakenModel):
    open: Dict[str, Order]


class ClosedOrders(KrakenModel):
    closed: Dict[str, Order]
    count: Optional[int] = None


class Trade(KrakenModel):
    ordertxid: str
    postxid: Optional[str] = None
    pair: str
    time: float
    type_: str = Field(alias="type")
    ordertype: str
    price: Decimal
    cost: Decimal
    fee: Decimal
    vol: Decimal
    margin: Decimal
    misc: str


class TradesHistory(KrakenModel):
    trades: Dict[str, Trade]
    count: int


class OpenPosition(KrakenModel):
    ordertxid: str
    posstatus: str
    pair: str
    time: float
    type_: str = Field(alias="type")
    ordertype: str
    cost: Decimal
    fee: Decimal
    vol: Decimal
    vol_closed: Decimal
    margin: Decimal
    # value and net are only present when docalcs=true
    value: Optional[Decimal] = None
    net: Optional[Decimal] = None
    terms: Optional[str] = None
    rollovertm: Optional[str] = None
    misc: str
    oflags: str


class LedgerEntry(KrakenModel):
    refid: str
    time: float
    type_: str = Field(alias="type")
    subtype: Optional[str] = None
    aclass: str
    asset: str
    amount: Decimal
    fee: Decimal
    balance: Decimal


class Ledgers(KrakenModel):
    ledger: Dict[str, LedgerEntry]
    count: int


class FeeTier(KrakenModel):
    fee: Optional[Decimal] = None
    minfee: Optional[Decimal] = None
    maxfee: Optional[Decimal] = None
    nextfee: Optional[Decimal] = None
    nextvolume: Optional[Decimal] = None
    tiervolume: Optional[Decimal] = None


class TradeVolume(KrakenModel):
    currency: str
    volume: Decimal
    fees: Optional[Dict[str, FeeTier]] = None
    fees_maker: Optional[Dict[str, FeeTier]] = None


# Balance and TradeBalance are flat {name: amount} maps
BalanceResult = Dict[str, Decimal]
TradeBalanceResult = Dict[str, Decimal]
