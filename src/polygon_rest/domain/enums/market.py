# src/polygon_rest/domain/enums/market.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Market data enumerations.

Purpose:
    Stable, string-valued enums for the query parameters accepted by the
    Polygon.io REST API. Each value is the literal sent on the wire.

Layer:
    domain
"""

from __future__ import annotations

from enum import Enum


class AggregateInterval(str, Enum):
    """Bar timespan for aggregate endpoints."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class AssetClass(str, Enum):
    STOCKS = "stocks"
    OPTIONS = "options"
    CRYPTO = "crypto"
    FX = "fx"


class DataType(str, Enum):
    TRADE = "trade"
    QUOTE = "quote"


class Locale(str, Enum):
    US = "us"
    GLOBAL = "global"


class Market(str, Enum):
    """Market filter for reference endpoints."""

    STOCKS = "stocks"
    CRYPTO = "crypto"
    FX = "fx"
    OTC = "otc"
    INDICES = "indices"


class SipMappingType(str, Enum):
    """Securities Information Processor feeds used in condition mappings."""

    CTA = "CTA"
    UTP = "UTP"
    FINRA_TDDS = "FINRA_TDDS"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TickerSortField(str, Enum):
    """Sortable fields of the tickers reference endpoint."""

    TICKER = "ticker"
    NAME = "name"
    MARKET = "market"
    LOCALE = "locale"
    PRIMARY_EXCHANGE = "primary_exchange"
    TYPE = "type"
    ACTIVE = "active"
    CURRENCY_SYMBOL = "currency_symbol"
    CIK = "cik"
    COMPOSITE_FIGI = "composite_figi"
    SHARE_CLASS_FIGI = "share_class_figi"
    LAST_UPDATED_UTC = "last_updated_utc"


class ConditionCodeSortField(str, Enum):
    """Sortable fields of the condition codes reference endpoint."""

    ASSET_CLASS = "asset_class"
    DATA_TYPE = "data_type"
    ID = "id"
    TYPE = "type"
    NAME = "name"
