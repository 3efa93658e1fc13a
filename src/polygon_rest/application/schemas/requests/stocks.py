# src/polygon_rest/application/schemas/requests/stocks.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Stocks endpoint request models.

Layer:
    application/schemas/requests
"""

from __future__ import annotations

from typing import Final

from pydantic import Field

from polygon_rest.application.schemas.requests.base import (
    BaseRequest,
    IsoDate,
    StockTicker,
    TimestampRangeRequest,
)
from polygon_rest.domain.enums.market import AggregateInterval, SortOrder

MAX_BARS_LIMIT: Final[int] = 50_000


class GetStockBarsRequest(BaseRequest):
    """Aggregate bars for a stock.

    Attributes:
        ticker: Stock symbol (``AAPL``).
        multiplier: Size of the timespan multiplier.
        timespan: Bar timespan.
        from_: Window start, ``YYYY-MM-DD``.
        to: Window end, ``YYYY-MM-DD``.
        adjusted: Whether results are split-adjusted.
        sort: Sort by timestamp.
        limit: Base aggregates queried, at most 50000.
    """

    ticker: StockTicker
    multiplier: int = Field(default=1, gt=0)
    timespan: AggregateInterval = AggregateInterval.DAY
    from_: IsoDate
    to: IsoDate
    adjusted: bool | None = None
    sort: SortOrder | None = None
    limit: int | None = Field(default=None, gt=0, le=MAX_BARS_LIMIT)


class GetPreviousCloseRequest(BaseRequest):
    ticker: StockTicker
    adjusted: bool | None = None


class GetGroupedDailyRequest(BaseRequest):
    """Daily bars for the entire US stock market on one date."""

    date: IsoDate
    adjusted: bool | None = None
    include_otc: bool | None = None


class GetDailyOpenCloseRequest(BaseRequest):
    ticker: StockTicker
    date: IsoDate
    adjusted: bool | None = None


class GetStockTradesRequest(TimestampRangeRequest):
    ticker: StockTicker


class GetStockQuotesRequest(TimestampRangeRequest):
    ticker: StockTicker


class GetLastTradeRequest(BaseRequest):
    ticker: StockTicker


class GetLastQuoteRequest(BaseRequest):
    ticker: StockTicker


class GetSnapshotRequest(BaseRequest):
    ticker: StockTicker


class GetMarketSnapshotRequest(BaseRequest):
    """Snapshot of all (or the listed) US stock tickers."""

    tickers: list[StockTicker] | None = None
    include_otc: bool | None = None
