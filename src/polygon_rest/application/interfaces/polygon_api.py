# src/polygon_rest/application/interfaces/polygon_api.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Application-level Polygon.io endpoint interfaces.

Synopsis:
    Application-facing abstraction over the REST endpoints. Services in
    ``application/services`` depend on these protocols; the concrete httpx
    implementations live in ``infrastructure/external_apis/polygon``.

    Every method takes an already-validated request model and returns the
    parsed response DTO. Implementations raise the
    :class:`~polygon_rest.domain.exceptions.polygon.PolygonError` family.

Layer:
    application/interfaces
"""

from __future__ import annotations

from typing import Protocol

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
from polygon_rest.application.schemas.dto.options import OptionsContract, OptionSnapshot
from polygon_rest.application.schemas.dto.reference import (
    ConditionCode,
    Exchange,
    MarketHoliday,
    MarketStatus,
    TickerInfo,
    TickerType,
)
from polygon_rest.application.schemas.requests.options import (
    GetChainSnapshotRequest,
    GetContractDetailsRequest,
    GetOptionBarsRequest,
    GetOptionDailyOpenCloseRequest,
    GetOptionLastTradeRequest,
    GetOptionPreviousDayBarRequest,
    GetOptionQuotesRequest,
    GetOptionSnapshotRequest,
    GetOptionTradesRequest,
)
from polygon_rest.application.schemas.requests.reference import (
    GetConditionCodesRequest,
    GetExchangesRequest,
    GetMarketHolidaysRequest,
    GetMarketStatusRequest,
    GetTickerDetailsRequest,
    GetTickersRequest,
    GetTickerTypesRequest,
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


class OptionsApi(Protocol):
    """Options endpoints."""

    async def get_contract_details(
        self, request: GetContractDetailsRequest
    ) -> PolygonResponse[OptionsContract]: ...

    async def get_snapshot(
        self, request: GetOptionSnapshotRequest
    ) -> PolygonResponse[OptionSnapshot]: ...

    async def get_chain_snapshot(
        self, request: GetChainSnapshotRequest
    ) -> PolygonResponse[list[OptionSnapshot]]: ...

    async def get_last_trade(
        self, request: GetOptionLastTradeRequest
    ) -> PolygonResponse[LastTrade]: ...

    async def get_quotes(self, request: GetOptionQuotesRequest) -> PolygonResponse[list[Quote]]: ...

    async def get_trades(self, request: GetOptionTradesRequest) -> PolygonResponse[list[Trade]]: ...

    async def get_bars(self, request: GetOptionBarsRequest) -> PolygonResponse[list[Bar]]: ...

    async def get_daily_open_close(
        self, request: GetOptionDailyOpenCloseRequest
    ) -> DailyOpenClose: ...

    async def get_previous_day_bar(
        self, request: GetOptionPreviousDayBarRequest
    ) -> PolygonResponse[list[Bar]]: ...


class StocksApi(Protocol):
    """Stocks endpoints."""

    async def get_bars(self, request: GetStockBarsRequest) -> PolygonResponse[list[Bar]]: ...

    async def get_previous_close(
        self, request: GetPreviousCloseRequest
    ) -> PolygonResponse[list[Bar]]: ...

    async def get_grouped_daily(
        self, request: GetGroupedDailyRequest
    ) -> PolygonResponse[list[Bar]]: ...

    async def get_daily_open_close(self, request: GetDailyOpenCloseRequest) -> DailyOpenClose: ...

    async def get_trades(self, request: GetStockTradesRequest) -> PolygonResponse[list[Trade]]: ...

    async def get_quotes(self, request: GetStockQuotesRequest) -> PolygonResponse[list[Quote]]: ...

    async def get_last_trade(self, request: GetLastTradeRequest) -> PolygonResponse[LastTrade]: ...

    async def get_last_quote(self, request: GetLastQuoteRequest) -> PolygonResponse[LastQuote]: ...

    async def get_snapshot(self, request: GetSnapshotRequest) -> StockSnapshotResponse: ...

    async def get_market_snapshot(
        self, request: GetMarketSnapshotRequest
    ) -> StockSnapshotsResponse: ...


class ReferenceApi(Protocol):
    """Reference data endpoints."""

    async def get_tickers(
        self, request: GetTickersRequest
    ) -> PolygonResponse[list[TickerInfo]]: ...

    async def get_ticker_details(
        self, request: GetTickerDetailsRequest
    ) -> PolygonResponse[TickerInfo]: ...

    async def get_market_status(self, request: GetMarketStatusRequest) -> MarketStatus: ...

    async def get_market_holidays(
        self, request: GetMarketHolidaysRequest
    ) -> list[MarketHoliday]: ...

    async def get_ticker_types(
        self, request: GetTickerTypesRequest
    ) -> PolygonResponse[list[TickerType]]: ...

    async def get_condition_codes(
        self, request: GetConditionCodesRequest
    ) -> PolygonResponse[list[ConditionCode]]: ...

    async def get_exchanges(
        self, request: GetExchangesRequest
    ) -> PolygonResponse[list[Exchange]]: ...
