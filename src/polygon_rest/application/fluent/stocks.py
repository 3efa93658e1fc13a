# src/polygon_rest/application/fluent/stocks.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Fluent builders for the stocks endpoints.

Layer:
    application/fluent
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Self

from polygon_rest.application.fluent.base import (
    AggregateQueryBuilder,
    QueryBuilder,
    TickerQueryBuilder,
    TickQueryBuilder,
)
from polygon_rest.application.schemas.dto.common import PolygonResponse
from polygon_rest.application.schemas.dto.market import (
    Bar,
    DailyOpenClose,
    LastQuote,
    LastTrade,
    Quote,
    StockSnapshotResponse,
    StockSnapshotsResponse,
    Trade,
)
from polygon_rest.application.schemas.requests.stocks import (
    GetDailyOpenCloseRequest,
    GetGroupedDailyRequest,
    GetLastQuoteRequest,
    GetLastTradeRequest,
    GetMarketSnapshotRequest,
    GetPreviousCloseRequest,
    GetSnapshotRequest,
    GetStockBarsRequest,
    GetStockQuotesRequest,
    GetStockTradesRequest,
)


class StockBarsQuery(AggregateQueryBuilder[GetStockBarsRequest, PolygonResponse[list[Bar]]]):
    request_type = GetStockBarsRequest


class PreviousCloseQuery(TickerQueryBuilder[GetPreviousCloseRequest, PolygonResponse[list[Bar]]]):
    request_type = GetPreviousCloseRequest

    def adjusted(self, value: bool = True) -> Self:
        return self._set(adjusted=value)


class GroupedDailyQuery(QueryBuilder[GetGroupedDailyRequest, PolygonResponse[list[Bar]]]):
    request_type = GetGroupedDailyRequest

    def on(self, value: str | date | datetime) -> Self:
        return self._set(date=value)

    def adjusted(self, value: bool = True) -> Self:
        return self._set(adjusted=value)

    def include_otc(self, value: bool = True) -> Self:
        return self._set(include_otc=value)


class DailyOpenCloseQuery(TickerQueryBuilder[GetDailyOpenCloseRequest, DailyOpenClose]):
    request_type = GetDailyOpenCloseRequest

    def on(self, value: str | date | datetime) -> Self:
        return self._set(date=value)

    def adjusted(self, value: bool = True) -> Self:
        return self._set(adjusted=value)


class StockTradesQuery(TickQueryBuilder[GetStockTradesRequest, PolygonResponse[list[Trade]]]):
    request_type = GetStockTradesRequest


class StockQuotesQuery(TickQueryBuilder[GetStockQuotesRequest, PolygonResponse[list[Quote]]]):
    request_type = GetStockQuotesRequest


class LastTradeQuery(TickerQueryBuilder[GetLastTradeRequest, PolygonResponse[LastTrade]]):
    request_type = GetLastTradeRequest


class LastQuoteQuery(TickerQueryBuilder[GetLastQuoteRequest, PolygonResponse[LastQuote]]):
    request_type = GetLastQuoteRequest


class SnapshotQuery(TickerQueryBuilder[GetSnapshotRequest, StockSnapshotResponse]):
    request_type = GetSnapshotRequest


class MarketSnapshotQuery(QueryBuilder[GetMarketSnapshotRequest, StockSnapshotsResponse]):
    request_type = GetMarketSnapshotRequest

    def for_tickers(self, *tickers: str) -> Self:
        return self._set(tickers=list(tickers))

    def include_otc(self, value: bool = True) -> Self:
        return self._set(include_otc=value)
