# src/polygon_rest/infrastructure/external_apis/polygon/reference_api.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Reference data endpoints over :class:`PolygonTransport`."""

from __future__ import annotations

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
from polygon_rest.infrastructure.external_apis.polygon.base import (
    PolygonEndpointApi,
    path_segment,
    range_params,
)


class PolygonReferenceApi(PolygonEndpointApi):
    """httpx implementation of the reference data endpoints."""

    async def get_tickers(self, request: GetTickersRequest) -> PolygonResponse[list[TickerInfo]]:
        params = {
            "ticker": request.ticker,
            **range_params(
                "ticker",
                lt=request.ticker_lt,
                lte=request.ticker_lte,
                gt=request.ticker_gt,
                gte=request.ticker_gte,
            ),
            "type": request.type,
            "market": request.market,
            "exchange": request.exchange,
            "cusip": request.cusip,
            "cik": request.cik,
            "date": request.date,
            "search": request.search,
            "active": request.active,
            "sort": request.sort,
            "order": request.order,
            "limit": request.limit,
            "cursor": request.cursor,
        }
        return await self._get(
            "reference.tickers",
            "/v3/reference/tickers",
            PolygonResponse[list[TickerInfo]],
            params,
        )

    async def get_ticker_details(
        self, request: GetTickerDetailsRequest
    ) -> PolygonResponse[TickerInfo]:
        return await self._get(
            "reference.ticker_details",
            f"/v3/reference/tickers/{path_segment(request.ticker)}",
            PolygonResponse[TickerInfo],
            {"date": request.date},
        )

    async def get_market_status(self, request: GetMarketStatusRequest) -> MarketStatus:
        return await self._get("reference.market_status", "/v1/marketstatus/now", MarketStatus)

    async def get_market_holidays(self, request: GetMarketHolidaysRequest) -> list[MarketHoliday]:
        return await self._get(
            "reference.market_holidays", "/v1/marketstatus/upcoming", list[MarketHoliday]
        )

    async def get_ticker_types(
        self, request: GetTickerTypesRequest
    ) -> PolygonResponse[list[TickerType]]:
        return await self._get(
            "reference.ticker_types",
            "/v3/reference/tickers/types",
            PolygonResponse[list[TickerType]],
            {"asset_class": request.asset_class, "locale": request.locale},
        )

    async def get_condition_codes(
        self, request: GetConditionCodesRequest
    ) -> PolygonResponse[list[ConditionCode]]:
        params = {
            "asset_class": request.asset_class,
            "data_type": request.data_type,
            "id": request.id,
            "sip_mapping": request.sip_mapping,
            "order": request.order,
            "limit": request.limit,
            "sort": request.sort,
        }
        return await self._get(
            "reference.condition_codes",
            "/v3/reference/conditions",
            PolygonResponse[list[ConditionCode]],
            params,
        )

    async def get_exchanges(self, request: GetExchangesRequest) -> PolygonResponse[list[Exchange]]:
        return await self._get(
            "reference.exchanges",
            "/v3/reference/exchanges",
            PolygonResponse[list[Exchange]],
            {"asset_class": request.asset_class, "locale": request.locale},
        )
