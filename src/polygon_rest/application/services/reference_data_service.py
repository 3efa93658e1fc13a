# src/polygon_rest/application/services/reference_data_service.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Reference data service (tickers, exchanges, conditions, market status).

Layer:
    application/services
"""

from __future__ import annotations

from typing import Any

from polygon_rest.application.fluent.reference import (
    ConditionCodesQuery,
    ExchangesQuery,
    MarketHolidaysQuery,
    MarketStatusQuery,
    TickerDetailsQuery,
    TickersQuery,
    TickerTypesQuery,
)
from polygon_rest.application.interfaces.polygon_api import ReferenceApi
from polygon_rest.application.schemas.dto.common import PolygonResponse
from polygon_rest.application.schemas.dto.reference import (
    ConditionCode,
    Exchange,
    MarketHoliday,
    MarketStatus,
    TickerInfo,
    TickerType,
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
from polygon_rest.application.services.base import resolve_request


class ReferenceDataService:
    """Reference data operations."""

    def __init__(self, api: ReferenceApi) -> None:
        self._api = api

    async def get_tickers(
        self, request: GetTickersRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[TickerInfo]]:
        """Search tickers; at most 1000 per page, follow ``next_cursor`` for more."""
        req = resolve_request(GetTickersRequest, request, params)
        return await self._api.get_tickers(req)

    async def get_ticker_details(
        self, request: GetTickerDetailsRequest | None = None, /, **params: Any
    ) -> PolygonResponse[TickerInfo]:
        req = resolve_request(GetTickerDetailsRequest, request, params)
        return await self._api.get_ticker_details(req)

    async def get_market_status(
        self, request: GetMarketStatusRequest | None = None, /, **params: Any
    ) -> MarketStatus:
        req = resolve_request(GetMarketStatusRequest, request, params)
        return await self._api.get_market_status(req)

    async def get_market_holidays(
        self, request: GetMarketHolidaysRequest | None = None, /, **params: Any
    ) -> list[MarketHoliday]:
        req = resolve_request(GetMarketHolidaysRequest, request, params)
        return await self._api.get_market_holidays(req)

    async def get_ticker_types(
        self, request: GetTickerTypesRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[TickerType]]:
        req = resolve_request(GetTickerTypesRequest, request, params)
        return await self._api.get_ticker_types(req)

    async def get_condition_codes(
        self, request: GetConditionCodesRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[ConditionCode]]:
        req = resolve_request(GetConditionCodesRequest, request, params)
        return await self._api.get_condition_codes(req)

    async def get_exchanges(
        self, request: GetExchangesRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[Exchange]]:
        req = resolve_request(GetExchangesRequest, request, params)
        return await self._api.get_exchanges(req)

    # ------------------------------------------------------------------ #
    # Fluent queries                                                     #
    # ------------------------------------------------------------------ #
    def query_tickers(self) -> TickersQuery:
        return TickersQuery(self.get_tickers)

    def query_ticker_details(self, ticker: str | None = None) -> TickerDetailsQuery:
        query = TickerDetailsQuery(self.get_ticker_details)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_market_status(self) -> MarketStatusQuery:
        return MarketStatusQuery(self.get_market_status)

    def query_market_holidays(self) -> MarketHolidaysQuery:
        return MarketHolidaysQuery(self.get_market_holidays)

    def query_ticker_types(self) -> TickerTypesQuery:
        return TickerTypesQuery(self.get_ticker_types)

    def query_condition_codes(self) -> ConditionCodesQuery:
        return ConditionCodesQuery(self.get_condition_codes)

    def query_exchanges(self) -> ExchangesQuery:
        return ExchangesQuery(self.get_exchanges)
