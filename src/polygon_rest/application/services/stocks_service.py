# src/polygon_rest/application/services/stocks_service.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Stocks service.

Purpose:
    Application entry point for the stocks endpoints (aggregates, ticks,
    last trade/quote and snapshots). Each method accepts a request model or
    its fields as keyword arguments.

Layer:
    application/services
"""

from __future__ import annotations

from typing import Any

from polygon_rest.application.fluent.stocks import (
    DailyOpenCloseQuery,
    GroupedDailyQuery,
    LastQuoteQuery,
    LastTradeQuery,
    MarketSnapshotQuery,
    PreviousCloseQuery,
    SnapshotQuery,
    StockBarsQuery,
    StockQuotesQuery,
    StockTradesQuery,
)
from polygon_rest.application.interfaces.polygon_api import StocksApi
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
from polygon_rest.application.services.base import resolve_request


class StocksService:
    """Stock market data operations."""

    def __init__(self, api: StocksApi) -> None:
        self._api = api

    async def get_bars(
        self, request: GetStockBarsRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[Bar]]:
        """Return aggregate bars for a ticker over a date range.

        Raises:
            PolygonValidationError: On invalid parameters (e.g. ``limit`` above
                50000 or a malformed date).
        """
        req = resolve_request(GetStockBarsRequest, request, params)
        return await self._api.get_bars(req)

    async def get_previous_close(
        self, request: GetPreviousCloseRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[Bar]]:
        req = resolve_request(GetPreviousCloseRequest, request, params)
        return await self._api.get_previous_close(req)

    async def get_grouped_daily(
        self, request: GetGroupedDailyRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[Bar]]:
        req = resolve_request(GetGroupedDailyRequest, request, params)
        return await self._api.get_grouped_daily(req)

    async def get_daily_open_close(
        self, request: GetDailyOpenCloseRequest | None = None, /, **params: Any
    ) -> DailyOpenClose:
        req = resolve_request(GetDailyOpenCloseRequest, request, params)
        return await self._api.get_daily_open_close(req)

    async def get_trades(
        self, request: GetStockTradesRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[Trade]]:
        req = resolve_request(GetStockTradesRequest, request, params)
        return await self._api.get_trades(req)

    async def get_quotes(
        self, request: GetStockQuotesRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[Quote]]:
        req = resolve_request(GetStockQuotesRequest, request, params)
        return await self._api.get_quotes(req)

    async def get_last_trade(
        self, request: GetLastTradeRequest | None = None, /, **params: Any
    ) -> PolygonResponse[LastTrade]:
        req = resolve_request(GetLastTradeRequest, request, params)
        return await self._api.get_last_trade(req)

    async def get_last_quote(
        self, request: GetLastQuoteRequest | None = None, /, **params: Any
    ) -> PolygonResponse[LastQuote]:
        req = resolve_request(GetLastQuoteRequest, request, params)
        return await self._api.get_last_quote(req)

    async def get_snapshot(
        self, request: GetSnapshotRequest | None = None, /, **params: Any
    ) -> StockSnapshotResponse:
        req = resolve_request(GetSnapshotRequest, request, params)
        return await self._api.get_snapshot(req)

    async def get_market_snapshot(
        self, request: GetMarketSnapshotRequest | None = None, /, **params: Any
    ) -> StockSnapshotsResponse:
        req = resolve_request(GetMarketSnapshotRequest, request, params)
        return await self._api.get_market_snapshot(req)

    # ------------------------------------------------------------------ #
    # Fluent queries                                                     #
    # ------------------------------------------------------------------ #
    def query_bars(self, ticker: str | None = None) -> StockBarsQuery:
        query = StockBarsQuery(self.get_bars)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_previous_close(self, ticker: str | None = None) -> PreviousCloseQuery:
        query = PreviousCloseQuery(self.get_previous_close)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_grouped_daily(self) -> GroupedDailyQuery:
        return GroupedDailyQuery(self.get_grouped_daily)

    def query_daily_open_close(self, ticker: str | None = None) -> DailyOpenCloseQuery:
        query = DailyOpenCloseQuery(self.get_daily_open_close)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_trades(self, ticker: str | None = None) -> StockTradesQuery:
        query = StockTradesQuery(self.get_trades)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_quotes(self, ticker: str | None = None) -> StockQuotesQuery:
        query = StockQuotesQuery(self.get_quotes)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_last_trade(self, ticker: str | None = None) -> LastTradeQuery:
        query = LastTradeQuery(self.get_last_trade)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_last_quote(self, ticker: str | None = None) -> LastQuoteQuery:
        query = LastQuoteQuery(self.get_last_quote)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_snapshot(self, ticker: str | None = None) -> SnapshotQuery:
        query = SnapshotQuery(self.get_snapshot)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_market_snapshot(self) -> MarketSnapshotQuery:
        return MarketSnapshotQuery(self.get_market_snapshot)
