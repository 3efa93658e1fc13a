# src/polygon_rest/application/schemas/requests/options.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Options endpoint request models.

Layer:
    application/schemas/requests
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from polygon_rest.application.schemas.requests.base import (
    MAX_TICKER_LENGTH,
    BaseRequest,
    IsoDate,
    OptionsTickerStr,
    PositiveLimit,
    StockTicker,
    TimestampRangeRequest,
)
from polygon_rest.domain.enums.market import AggregateInterval, SortOrder
from polygon_rest.domain.enums.options import ContractKind

# Shortest OCC symbol without prefix: 1 letter + YYMMDD + type + 8 digits.
MIN_OPTION_CONTRACT_LENGTH = 15


class GetContractDetailsRequest(BaseRequest):
    """Reference data for one contract.

    Attributes:
        options_ticker: OCC ticker (``O:SPY251219C00650000``).
        as_of: Look up the contract as of this date (for expired contracts).
    """

    options_ticker: OptionsTickerStr
    as_of: IsoDate | None = None


class GetOptionSnapshotRequest(BaseRequest):
    """Snapshot of one contract, addressed by underlying and OCC symbol.

    Attributes:
        underlying_asset: Underlying symbol (``SPY``).
        option_contract: OCC symbol without the ``O:`` prefix.
    """

    underlying_asset: StockTicker
    option_contract: str = Field(min_length=MIN_OPTION_CONTRACT_LENGTH)


class GetChainSnapshotRequest(BaseRequest):
    """Snapshot of every contract on an underlying, optionally filtered."""

    underlying_asset: str = Field(min_length=1, max_length=MAX_TICKER_LENGTH)
    strike_price: Decimal | None = Field(default=None, gt=0)
    contract_type: ContractKind | None = None
    expiration_date: IsoDate | None = None
    expiration_date_gte: IsoDate | None = None
    expiration_date_lte: IsoDate | None = None
    limit: PositiveLimit | None = None
    order: SortOrder | None = None
    sort: str | None = None
    cursor: str | None = None


class GetOptionLastTradeRequest(BaseRequest):
    options_ticker: OptionsTickerStr


class GetOptionQuotesRequest(TimestampRangeRequest):
    """Tick-level quotes for one contract (paginated via ``cursor``)."""

    options_ticker: OptionsTickerStr


class GetOptionTradesRequest(TimestampRangeRequest):
    """Tick-level trades for one contract (paginated via ``cursor``)."""

    options_ticker: OptionsTickerStr


class GetOptionBarsRequest(BaseRequest):
    """Aggregate bars for one contract.

    Attributes:
        options_ticker: OCC ticker.
        multiplier: Size of the timespan multiplier (``5`` + ``minute``).
        timespan: Bar timespan.
        from_: Window start, ``YYYY-MM-DD``.
        to: Window end, ``YYYY-MM-DD``.
        adjusted: Whether results are split-adjusted (upstream default true).
        sort: Sort by timestamp.
        limit: Maximum number of base aggregates queried.
    """

    options_ticker: OptionsTickerStr
    multiplier: int = Field(default=1, gt=0)
    timespan: AggregateInterval = AggregateInterval.DAY
    from_: IsoDate
    to: IsoDate
    adjusted: bool | None = None
    sort: SortOrder | None = None
    limit: PositiveLimit | None = None


class GetOptionDailyOpenCloseRequest(BaseRequest):
    options_ticker: OptionsTickerStr
    date: IsoDate


class GetOptionPreviousDayBarRequest(BaseRequest):
    options_ticker: OptionsTickerStr
    adjusted: bool | None = None
