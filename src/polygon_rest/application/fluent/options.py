# src/polygon_rest/application/fluent/options.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Fluent builders for the options endpoints.

Layer:
    application/fluent
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Self

from polygon_rest.application.fluent.base import (
    AggregateQueryBuilder,
    QueryBuilder,
    TickerQueryBuilder,
    TickQueryBuilder,
)
from polygon_rest.application.schemas.dto.common import PolygonResponse
from polygon_rest.application.schemas.dto.market import Bar, DailyOpenClose, LastTrade, Quote, Trade
from polygon_rest.application.schemas.dto.options import OptionsContract, OptionSnapshot
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
from polygon_rest.domain.enums.market import SortOrder
from polygon_rest.domain.enums.options import ContractKind
from polygon_rest.domain.value_objects.options_ticker import OptionsTicker


class ContractDetailsQuery(
    TickerQueryBuilder[GetContractDetailsRequest, PolygonResponse[OptionsContract]]
):
    request_type = GetContractDetailsRequest
    ticker_field = "options_ticker"

    def as_of(self, value: str | date) -> Self:
        return self._set(as_of=value)


class OptionSnapshotQuery(
    QueryBuilder[GetOptionSnapshotRequest, PolygonResponse[OptionSnapshot]]
):
    request_type = GetOptionSnapshotRequest

    def for_underlying(self, underlying: str) -> Self:
        return self._set(underlying_asset=underlying)

    def for_contract(self, contract: str | OptionsTicker) -> Self:
        """Set the contract; a full OCC ticker also sets the underlying."""
        if isinstance(contract, str):
            contract = OptionsTicker.try_parse(contract).value or contract
        if isinstance(contract, OptionsTicker):
            return self._set(
                underlying_asset=contract.underlying,
                option_contract=contract.occ_symbol,
            )
        return self._set(option_contract=contract)


class ChainSnapshotQuery(
    QueryBuilder[GetChainSnapshotRequest, PolygonResponse[list[OptionSnapshot]]]
):
    request_type = GetChainSnapshotRequest

    def for_underlying(self, underlying: str) -> Self:
        return self._set(underlying_asset=underlying)

    def strike_price(self, value: Decimal | int | float | str) -> Self:
        return self._set(strike_price=value)

    def contract_type(self, kind: ContractKind | str) -> Self:
        return self._set(contract_type=kind)

    def calls_only(self) -> Self:
        return self.contract_type(ContractKind.CALL)

    def puts_only(self) -> Self:
        return self.contract_type(ContractKind.PUT)

    def expiring_on(self, value: str | date) -> Self:
        return self._set(expiration_date=value)

    def expiring_after(self, value: str | date) -> Self:
        """Expiration on or after ``value``."""
        return self._set(expiration_date_gte=value)

    def expiring_before(self, value: str | date) -> Self:
        """Expiration on or before ``value``."""
        return self._set(expiration_date_lte=value)

    def expiring_between(self, start: str | date, end: str | date) -> Self:
        return self._set(expiration_date_gte=start, expiration_date_lte=end)

    def ascending(self) -> Self:
        return self._set(order=SortOrder.ASC)

    def descending(self) -> Self:
        return self._set(order=SortOrder.DESC)

    def sort_by(self, field: str) -> Self:
        return self._set(sort=field)

    def limit(self, value: int) -> Self:
        return self._set(limit=value)

    def cursor(self, value: str | None) -> Self:
        return self._set(cursor=value)


class OptionLastTradeQuery(
    TickerQueryBuilder[GetOptionLastTradeRequest, PolygonResponse[LastTrade]]
):
    request_type = GetOptionLastTradeRequest
    ticker_field = "options_ticker"


class OptionQuotesQuery(TickQueryBuilder[GetOptionQuotesRequest, PolygonResponse[list[Quote]]]):
    request_type = GetOptionQuotesRequest
    ticker_field = "options_ticker"


class OptionTradesQuery(TickQueryBuilder[GetOptionTradesRequest, PolygonResponse[list[Trade]]]):
    request_type = GetOptionTradesRequest
    ticker_field = "options_ticker"


class OptionBarsQuery(AggregateQueryBuilder[GetOptionBarsRequest, PolygonResponse[list[Bar]]]):
    request_type = GetOptionBarsRequest
    ticker_field = "options_ticker"


class OptionDailyOpenCloseQuery(
    TickerQueryBuilder[GetOptionDailyOpenCloseRequest, DailyOpenClose]
):
    request_type = GetOptionDailyOpenCloseRequest
    ticker_field = "options_ticker"

    def on(self, value: str | date | datetime) -> Self:
        return self._set(date=value)


class OptionPreviousDayBarQuery(
    TickerQueryBuilder[GetOptionPreviousDayBarRequest, PolygonResponse[list[Bar]]]
):
    request_type = GetOptionPreviousDayBarRequest
    ticker_field = "options_ticker"

    def adjusted(self, value: bool = True) -> Self:
        return self._set(adjusted=value)
