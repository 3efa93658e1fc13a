# src/polygon_rest/application/fluent/reference.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Fluent builders for the reference data endpoints.

Layer:
    application/fluent
"""

from __future__ import annotations

from datetime import date
from typing import Self

from polygon_rest.application.fluent.base import QueryBuilder, TickerQueryBuilder
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
from polygon_rest.domain.enums.market import (
    AssetClass,
    ConditionCodeSortField,
    DataType,
    Locale,
    Market,
    SipMappingType,
    SortOrder,
    TickerSortField,
)


class TickersQuery(QueryBuilder[GetTickersRequest, PolygonResponse[list[TickerInfo]]]):
    request_type = GetTickersRequest

    def ticker(self, value: str) -> Self:
        return self._set(ticker=value)

    def ticker_gt(self, value: str) -> Self:
        return self._set(ticker_gt=value)

    def ticker_gte(self, value: str) -> Self:
        return self._set(ticker_gte=value)

    def ticker_lt(self, value: str) -> Self:
        return self._set(ticker_lt=value)

    def ticker_lte(self, value: str) -> Self:
        return self._set(ticker_lte=value)

    def of_type(self, value: str) -> Self:
        return self._set(type=value)

    def in_market(self, value: Market | str) -> Self:
        return self._set(market=value)

    def on_exchange(self, value: str) -> Self:
        return self._set(exchange=value)

    def cusip(self, value: str) -> Self:
        return self._set(cusip=value)

    def cik(self, value: str) -> Self:
        return self._set(cik=value)

    def as_of(self, value: str | date) -> Self:
        return self._set(date=value)

    def search(self, text: str) -> Self:
        return self._set(search=text)

    def active(self, value: bool = True) -> Self:
        return self._set(active=value)

    def sort_by(self, field: TickerSortField | str) -> Self:
        return self._set(sort=field)

    def ascending(self) -> Self:
        return self._set(order=SortOrder.ASC)

    def descending(self) -> Self:
        return self._set(order=SortOrder.DESC)

    def limit(self, value: int) -> Self:
        return self._set(limit=value)

    def cursor(self, value: str | None) -> Self:
        return self._set(cursor=value)


class TickerDetailsQuery(TickerQueryBuilder[GetTickerDetailsRequest, PolygonResponse[TickerInfo]]):
    request_type = GetTickerDetailsRequest

    def as_of(self, value: str | date) -> Self:
        return self._set(date=value)


class MarketStatusQuery(QueryBuilder[GetMarketStatusRequest, MarketStatus]):
    request_type = GetMarketStatusRequest


class MarketHolidaysQuery(QueryBuilder[GetMarketHolidaysRequest, list[MarketHoliday]]):
    request_type = GetMarketHolidaysRequest


class TickerTypesQuery(QueryBuilder[GetTickerTypesRequest, PolygonResponse[list[TickerType]]]):
    request_type = GetTickerTypesRequest

    def asset_class(self, value: AssetClass | str) -> Self:
        return self._set(asset_class=value)

    def locale(self, value: Locale | str) -> Self:
        return self._set(locale=value)


class ConditionCodesQuery(
    QueryBuilder[GetConditionCodesRequest, PolygonResponse[list[ConditionCode]]]
):
    request_type = GetConditionCodesRequest

    def asset_class(self, value: AssetClass | str) -> Self:
        return self._set(asset_class=value)

    def data_type(self, value: DataType | str) -> Self:
        return self._set(data_type=value)

    def condition_id(self, value: int) -> Self:
        return self._set(id=value)

    def sip_mapping(self, value: SipMappingType | str) -> Self:
        return self._set(sip_mapping=value)

    def sort_by(self, field: ConditionCodeSortField | str) -> Self:
        return self._set(sort=field)

    def ascending(self) -> Self:
        return self._set(order=SortOrder.ASC)

    def descending(self) -> Self:
        return self._set(order=SortOrder.DESC)

    def limit(self, value: int) -> Self:
        return self._set(limit=value)


class ExchangesQuery(QueryBuilder[GetExchangesRequest, PolygonResponse[list[Exchange]]]):
    request_type = GetExchangesRequest

    def asset_class(self, value: AssetClass | str) -> Self:
        return self._set(asset_class=value)

    def locale(self, value: Locale | str) -> Self:
        return self._set(locale=value)
