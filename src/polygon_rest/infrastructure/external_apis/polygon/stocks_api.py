# src/polygon_rest/infrastructure/external_apis/polygon/stocks_api.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Stocks endpoints over :class:`PolygonTransport`."""

from __future__ import annotations

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
from polygon_rest.infrastructure.external_apis.polygon.base import (
    PolygonEndpointApi,
    path_segment,
    tick_params,
)

_SNAPSHOT_ROOT = "/v2/snapshot/locale/us/markets/stocks/tickers"


class PolygonStocksApi(PolygonEndpointApi):
    """httpx implementation of the stocks endpoints."""

    async def get_bars(self, request: GetStockBarsRequest) -> PolygonResponse[list[Bar]]:
        path = (
            f"/v2/aggs/ticker/{path_segment(request.ticker)}"
            f"/range/{request.multiplier}/{request.timespan.value}/{request.from_}/{request.to}"
        )
        return await self._get(
            "stocks.bars",
            path,
            PolygonResponse[list[Bar]],
            {"adjusted": request.adjusted, "sort": request.sort, "limit": request.limit},
        )

    async def get_previous_close(
        self, request: GetPreviousCloseRequest
    ) -> PolygonResponse[list[Bar]]:
        return await self._get(
            "stocks.previous_close",
            f"/v2/aggs/ticker/{path_segment(request.ticker)}/prev",
            PolygonResponse[list[Bar]],
            {"adjusted": request.adjusted},
        )

    async def get_grouped_daily(
        self, request: GetGroupedDailyRequest
    ) -> PolygonResponse[list[Bar]]:
        return await self._get(
            "stocks.grouped_daily",
            f"/v2/aggs/grouped/locale/us/market/stocks/{request.date}",
            PolygonResponse[list[Bar]],
            {"adjusted": request.adjusted, "include_otc": request.include_otc},
        )

    async def get_daily_open_close(self, request: GetDailyOpenCloseRequest) -> DailyOpenClose:
        return await self._get(
            "stocks.daily_open_close",
            f"/v1/open-close/{path_segment(request.ticker)}/{request.date}",
            DailyOpenClose,
            {"adjusted": request.adjusted},
        )

    async def get_trades(self, request: GetStockTradesRequest) -> PolygonResponse[list[Trade]]:
        return await self._get(
            "stocks.trades",
            f"/v3/trades/{path_segment(request.ticker)}",
            PolygonResponse[list[Trade]],
            tick_params(request),
        )

    async def get_quotes(self, request: GetStockQuotesRequest) -> PolygonResponse[list[Quote]]:
        return await self._get(
            "stocks.quotes",
            f"/v3/quotes/{path_segment(request.ticker)}",
            PolygonResponse[list[Quote]],
            tick_params(request),
        )

    async def get_last_trade(self, request: GetLastTradeRequest) -> PolygonResponse[LastTrade]:
        return await self._get(
            "stocks.last_trade",
            f"/v2/last/trade/{path_segment(request.ticker)}",
            PolygonResponse[LastTrade],
        )

    async def get_last_quote(self, request: GetLastQuoteRequest) -> PolygonResponse[LastQuote]:
        return await self._get(
            "stocks.last_quote",
            f"/v2/last/nbbo/{path_segment(request.ticker)}",
            PolygonResponse[LastQuote],
        )

    async def get_snapshot(self, request: GetSnapshotRequest) -> StockSnapshotResponse:
        return await self._get(
            "stocks.snapshot",
            f"{_SNAPSHOT_ROOT}/{path_segment(request.ticker)}",
            StockSnapshotResponse,
        )

    async def get_market_snapshot(
        self, request: GetMarketSnapshotRequest
    ) -> StockSnapshotsResponse:
        tickers = ",".join(request.tickers) if request.tickers else None
        return await self._get(
            "stocks.market_snapshot",
            _SNAPSHOT_ROOT,
            StockSnapshotsResponse,
            {"tickers": tickers, "include_otc": request.include_otc},
        )
