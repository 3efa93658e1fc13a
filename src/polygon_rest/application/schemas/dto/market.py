# src/polygon_rest/application/schemas/dto/market.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Market data DTOs shared by the stocks and options endpoints.

Synopsis:
    Pydantic v2 mirrors of the upstream JSON. Single-letter keys used by the
    v2 endpoints are exposed under descriptive names with the upstream key
    as alias. v3 tick endpoints (trades/quotes) already use snake_case.

Timestamps:
    * Aggregate bars and v2 snapshot fields are Unix milliseconds.
    * v3 ticks and v2 last trade/quote are Unix nanoseconds.
    Each model exposes a ``market_*`` property in ``America/New_York``.

Layer:
    application/schemas/dto
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, Field

from polygon_rest.application.schemas.dto.base import PolygonModel
from polygon_rest.application.schemas.dto.common import Volume, from_epoch_ms, from_epoch_ns


class Bar(PolygonModel):
    """Aggregate OHLC bar (``/v2/aggs``).

    Attributes:
        ticker: Ticker symbol (``T``); present on grouped-daily results.
        volume: Traded volume (``v``).
        vwap: Volume-weighted average price (``vw``).
        open: Open price (``o``).
        close: Close price (``c``).
        high: High price (``h``).
        low: Low price (``l``).
        timestamp: Window start, Unix ms (``t``).
        transactions: Number of trades in the window (``n``).
    """

    ticker: str | None = Field(default=None, alias="T")
    volume: Volume | None = Field(default=None, alias="v")
    vwap: Decimal | None = Field(default=None, alias="vw")
    open: Decimal | None = Field(default=None, alias="o")
    close: Decimal | None = Field(default=None, alias="c")
    high: Decimal | None = Field(default=None, alias="h")
    low: Decimal | None = Field(default=None, alias="l")
    timestamp: int | None = Field(default=None, alias="t")
    transactions: int | None = Field(default=None, alias="n")

    @property
    def market_timestamp(self) -> datetime | None:
        return from_epoch_ms(self.timestamp)


class DailyOpenClose(PolygonModel):
    """Daily open/close summary (``/v1/open-close``)."""

    status: str | None = None
    from_: str | None = Field(default=None, alias="from")
    symbol: str | None = None
    open: Decimal | None = None
    high: Decimal | None = None
    low: Decimal | None = None
    close: Decimal | None = None
    volume: Volume | None = None
    after_hours: Decimal | None = Field(default=None, alias="afterHours")
    pre_market: Decimal | None = Field(default=None, alias="preMarket")


class Trade(PolygonModel):
    """Tick-level trade (``/v3/trades``)."""

    conditions: list[int] | None = None
    correction: int | None = None
    exchange: int | None = None
    id: str | None = None
    participant_timestamp: int | None = None
    price: Decimal | None = None
    sequence_number: int | None = None
    sip_timestamp: int | None = None
    size: Decimal | None = None
    tape: int | None = None
    trf_id: int | None = None
    trf_timestamp: int | None = None

    @property
    def market_timestamp(self) -> datetime | None:
        return from_epoch_ns(self.sip_timestamp)


class Quote(PolygonModel):
    """Tick-level NBBO quote (``/v3/quotes``)."""

    ask_exchange: int | None = None
    ask_price: Decimal | None = None
    ask_size: Decimal | None = None
    bid_exchange: int | None = None
    bid_price: Decimal | None = None
    bid_size: Decimal | None = None
    conditions: list[int] | None = None
    indicators: list[int] | None = None
    participant_timestamp: int | None = None
    sequence_number: int | None = None
    sip_timestamp: int | None = None
    tape: int | None = None
    trf_timestamp: int | None = None

    @property
    def market_timestamp(self) -> datetime | None:
        return from_epoch_ns(self.sip_timestamp)


class LastTrade(PolygonModel):
    """Most recent trade (``/v2/last/trade``)."""

    ticker: str | None = Field(default=None, alias="T")
    conditions: list[int] | None = Field(default=None, alias="c")
    correction: int | None = Field(default=None, alias="e")
    trf_timestamp: int | None = Field(default=None, alias="f")
    id: str | None = Field(default=None, alias="i")
    price: Decimal | None = Field(default=None, alias="p")
    sequence: int | None = Field(default=None, alias="q")
    trf_id: int | None = Field(default=None, alias="r")
    size: Decimal | None = Field(default=None, alias="s")
    timestamp: int | None = Field(default=None, alias="t")
    exchange: int | None = Field(default=None, alias="x")
    participant_timestamp: int | None = Field(default=None, alias="y")
    tape: int | None = Field(default=None, alias="z")

    @property
    def market_timestamp(self) -> datetime | None:
        return from_epoch_ns(self.timestamp)


class LastQuote(PolygonModel):
    """Most recent NBBO quote (``/v2/last/nbbo``)."""

    ticker: str | None = Field(default=None, alias="T")
    bid_price: Decimal | None = Field(default=None, alias="P")
    ask_price: Decimal | None = Field(default=None, alias="p")
    bid_size: int | None = Field(default=None, alias="S")
    ask_size: int | None = Field(default=None, alias="s")
    bid_exchange: int | None = Field(default=None, alias="X")
    ask_exchange: int | None = Field(default=None, alias="x")
    tape: int | None = Field(default=None, alias="z")
    timestamp: int | None = Field(default=None, alias="t")
    participant_timestamp: int | None = Field(default=None, alias="y")
    sequence: int | None = Field(default=None, alias="q")
    indicators: list[int] | None = Field(default=None, alias="i")
    conditions: list[int] | None = Field(default=None, alias="c")

    @property
    def spread(self) -> Decimal | None:
        """Ask minus bid, when both sides are present."""
        if self.ask_price is None or self.bid_price is None:
            return None
        return self.ask_price - self.bid_price

    @property
    def market_timestamp(self) -> datetime | None:
        return from_epoch_ns(self.timestamp)


# --------------------------------------------------------------------------- #
# Stock snapshots                                                             #
# --------------------------------------------------------------------------- #
class SnapshotDay(PolygonModel):
    """Daily (or previous-day) OHLCV inside a stock snapshot."""

    close: Decimal | None = Field(default=None, alias="c")
    high: Decimal | None = Field(default=None, alias="h")
    low: Decimal | None = Field(default=None, alias="l")
    open: Decimal | None = Field(default=None, alias="o")
    volume: Volume | None = Field(default=None, alias="v")
    vwap: Decimal | None = Field(default=None, alias="vw")


class SnapshotMinute(PolygonModel):
    """Most recent minute bar inside a stock snapshot."""

    accumulated_volume: Volume | None = Field(default=None, alias="av")
    close: Decimal | None = Field(default=None, alias="c")
    high: Decimal | None = Field(default=None, alias="h")
    low: Decimal | None = Field(default=None, alias="l")
    open: Decimal | None = Field(default=None, alias="o")
    timestamp: int | None = Field(default=None, alias="t")
    volume: Volume | None = Field(default=None, alias="v")
    vwap: Decimal | None = Field(default=None, alias="vw")
    transactions: int | None = Field(default=None, alias="n")

    @property
    def market_timestamp(self) -> datetime | None:
        return from_epoch_ms(self.timestamp)


class SnapshotLastQuote(PolygonModel):
    bid_price: Decimal | None = Field(default=None, alias="P")
    bid_size: int | None = Field(default=None, alias="S")
    ask_price: Decimal | None = Field(default=None, alias="p")
    ask_size: int | None = Field(default=None, alias="s")
    timestamp: int | None = Field(default=None, alias="t")


class SnapshotLastTrade(PolygonModel):
    conditions: list[int] | None = Field(default=None, alias="c")
    id: str | None = Field(default=None, alias="i")
    price: Decimal | None = Field(default=None, alias="p")
    size: Decimal | None = Field(default=None, alias="s")
    timestamp: int | None = Field(default=None, alias="t")
    exchange: int | None = Field(default=None, alias="x")


class StockSnapshot(PolygonModel):
    """Current-day snapshot of a single stock ticker.

    The upstream uses camelCase for the nested quote/trade blocks; the
    snake_case spelling is accepted as well.
    """

    ticker: str | None = None
    value: Decimal | None = None
    day: SnapshotDay | None = None
    last_quote: SnapshotLastQuote | None = Field(
        default=None,
        validation_alias=AliasChoices("lastQuote", "last_quote"),
        serialization_alias="lastQuote",
    )
    last_trade: SnapshotLastTrade | None = Field(
        default=None,
        validation_alias=AliasChoices("lastTrade", "last_trade"),
        serialization_alias="lastTrade",
    )
    min: SnapshotMinute | None = None
    prev_day: SnapshotDay | None = Field(default=None, alias="prevDay")
    updated: int | None = None
    todays_change_perc: Decimal | None = Field(default=None, alias="todaysChangePerc")
    todays_change: Decimal | None = Field(default=None, alias="todaysChange")

    @property
    def market_updated(self) -> datetime | None:
        return from_epoch_ns(self.updated)


class StockSnapshotResponse(PolygonModel):
    """Envelope of the single-ticker snapshot endpoint."""

    ticker: StockSnapshot | None = None
    status: str | None = None
    request_id: str | None = None


class StockSnapshotsResponse(PolygonModel):
    """Envelope of the full-market snapshot endpoint."""

    tickers: list[StockSnapshot] = Field(default_factory=list)
    status: str | None = None
    request_id: str | None = None
    count: int | None = None
