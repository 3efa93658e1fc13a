# src/polygon_rest/application/schemas/requests/reference.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Reference data endpoint request models.

Layer:
    application/schemas/requests
"""

from __future__ import annotations

from typing import Final

from pydantic import Field

from polygon_rest.application.schemas.requests.base import (
    BaseRequest,
    IsoDate,
    PositiveLimit,
    StockTicker,
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

MAX_TICKERS_LIMIT: Final[int] = 1_000


class GetTickersRequest(BaseRequest):
    """Search and list tickers.

    Range filters (``ticker_gt``...) compare lexically on the symbol.
    """

    ticker: str | None = None
    ticker_lt: str | None = None
    ticker_lte: str | None = None
    ticker_gt: str | None = None
    ticker_gte: str | None = None
    type: str | None = None
    market: Market | None = None
    exchange: str | None = None
    cusip: str | None = None
    cik: str | None = None
    date: IsoDate | None = None
    search: str | None = None
    active: bool | None = None
    sort: TickerSortField | None = None
    order: SortOrder | None = None
    limit: int | None = Field(default=None, gt=0, le=MAX_TICKERS_LIMIT)
    cursor: str | None = None


class GetTickerDetailsRequest(BaseRequest):
    ticker: StockTicker
    date: IsoDate | None = None


class GetMarketStatusRequest(BaseRequest):
    """No parameters; present so every endpoint has a request type."""


class GetMarketHolidaysRequest(BaseRequest):
    """No parameters."""


class GetTickerTypesRequest(BaseRequest):
    asset_class: AssetClass | None = None
    locale: Locale | None = None


class GetConditionCodesRequest(BaseRequest):
    asset_class: AssetClass | None = None
    data_type: DataType | None = None
    id: int | None = None
    sip_mapping: SipMappingType | None = None
    order: SortOrder | None = None
    limit: PositiveLimit | None = None
    sort: ConditionCodeSortField | None = None


class GetExchangesRequest(BaseRequest):
    asset_class: AssetClass | None = None
    locale: Locale | None = None
