# src/polygon_rest/application/services/options_service.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Options service.

Purpose:
    Application entry point for the options endpoints. Each endpoint method
    accepts a request model *or* the same fields as keyword arguments and
    forwards the validated request to an :class:`OptionsApi`.

    On top of the raw endpoints the service offers contract discovery
    helpers (lookup by components, available strikes and expirations) and
    fluent query factories.

Layer:
    application/services
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from polygon_rest.application.fluent.options import (
    ChainSnapshotQuery,
    ContractDetailsQuery,
    OptionBarsQuery,
    OptionDailyOpenCloseQuery,
    OptionLastTradeQuery,
    OptionPreviousDayBarQuery,
    OptionQuotesQuery,
    OptionSnapshotQuery,
    OptionTradesQuery,
)
from polygon_rest.application.interfaces.polygon_api import OptionsApi
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
from polygon_rest.application.services.base import resolve_request
from polygon_rest.domain.enums.market import SortOrder
from polygon_rest.domain.enums.options import ContractKind
from polygon_rest.domain.value_objects.options_ticker import OptionsTicker

logger = logging.getLogger(__name__)

# Chain scans used by the discovery helpers fetch one large page.
_DISCOVERY_PAGE_SIZE = 1000


class OptionsService:
    """Options market data operations."""

    def __init__(self, api: OptionsApi) -> None:
        self._api = api

    # ------------------------------------------------------------------ #
    # Endpoints                                                          #
    # ------------------------------------------------------------------ #
    async def get_contract_details(
        self, request: GetContractDetailsRequest | None = None, /, **params: Any
    ) -> PolygonResponse[OptionsContract]:
        """Return reference data for one contract.

        Raises:
            PolygonValidationError: If the ticker is not a valid OCC ticker.
            PolygonApiError: If Polygon.io rejects the call.
        """
        req = resolve_request(GetContractDetailsRequest, request, params)
        return await self._api.get_contract_details(req)

    async def get_snapshot(
        self, request: GetOptionSnapshotRequest | None = None, /, **params: Any
    ) -> PolygonResponse[OptionSnapshot]:
        req = resolve_request(GetOptionSnapshotRequest, request, params)
        return await self._api.get_snapshot(req)

    async def get_chain_snapshot(
        self, request: GetChainSnapshotRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[OptionSnapshot]]:
        """Return snapshots for every contract on an underlying.

        Use ``response.next_cursor`` with the ``cursor`` field to fetch the
        next page.
        """
        req = resolve_request(GetChainSnapshotRequest, request, params)
        return await self._api.get_chain_snapshot(req)

    async def get_last_trade(
        self, request: GetOptionLastTradeRequest | None = None, /, **params: Any
    ) -> PolygonResponse[LastTrade]:
        req = resolve_request(GetOptionLastTradeRequest, request, params)
        return await self._api.get_last_trade(req)

    async def get_quotes(
        self, request: GetOptionQuotesRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[Quote]]:
        req = resolve_request(GetOptionQuotesRequest, request, params)
        return await self._api.get_quotes(req)

    async def get_trades(
        self, request: GetOptionTradesRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[Trade]]:
        req = resolve_request(GetOptionTradesRequest, request, params)
        return await self._api.get_trades(req)

    async def get_bars(
        self, request: GetOptionBarsRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[Bar]]:
        req = resolve_request(GetOptionBarsRequest, request, params)
        return await self._api.get_bars(req)

    async def get_daily_open_close(
        self, request: GetOptionDailyOpenCloseRequest | None = None, /, **params: Any
    ) -> DailyOpenClose:
        req = resolve_request(GetOptionDailyOpenCloseRequest, request, params)
        return await self._api.get_daily_open_close(req)

    async def get_previous_day_bar(
        self, request: GetOptionPreviousDayBarRequest | None = None, /, **params: Any
    ) -> PolygonResponse[list[Bar]]:
        req = resolve_request(GetOptionPreviousDayBarRequest, request, params)
        return await self._api.get_previous_day_bar(req)

    # ------------------------------------------------------------------ #
    # Contract discovery                                                 #
    # ------------------------------------------------------------------ #
    async def get_contract_by_components(
        self,
        underlying: str,
        expiration: date,
        kind: ContractKind | str,
        strike: Decimal | int | float | str,
    ) -> PolygonResponse[OptionsContract]:
        """Look up contract details from its components.

        Raises:
            InvalidOptionsTickerArgument: If a component is invalid.
        """
        ticker = OptionsTicker(underlying, expiration, kind, strike)  # type: ignore[arg-type]
        return await self.get_contract_details(GetContractDetailsRequest(options_ticker=ticker))

    async def get_snapshot_by_components(
        self,
        underlying: str,
        expiration: date,
        kind: ContractKind | str,
        strike: Decimal | int | float | str,
    ) -> PolygonResponse[OptionSnapshot]:
        """Fetch a contract snapshot from its components.

        Raises:
            InvalidOptionsTickerArgument: If a component is invalid.
        """
        ticker = OptionsTicker(underlying, expiration, kind, strike)  # type: ignore[arg-type]
        return await self.get_snapshot_for_ticker(ticker)

    async def get_snapshot_for_ticker(
        self, ticker: OptionsTicker | str
    ) -> PolygonResponse[OptionSnapshot]:
        """Fetch a contract snapshot for an OCC ticker.

        Raises:
            OptionsTickerFormatError: If ``ticker`` is a malformed string.
        """
        parsed = ticker if isinstance(ticker, OptionsTicker) else OptionsTicker.parse(ticker)
        return await self.get_snapshot(
            GetOptionSnapshotRequest(
                underlying_asset=parsed.underlying,
                option_contract=parsed.occ_symbol,
            )
        )

    async def get_available_strikes(
        self,
        underlying: str,
        kind: ContractKind | str | None = None,
        *,
        expiration_date_gte: str | date | None = None,
        expiration_date_lte: str | date | None = None,
    ) -> list[Decimal]:
        """Return the distinct strikes listed for an underlying, ascending.

        Only the first page of the chain (up to 1000 contracts) is scanned.

        Args:
            underlying: Underlying symbol (``SPY``).
            kind: Restrict to calls or puts; both when omitted.
            expiration_date_gte: Only contracts expiring on/after this date.
            expiration_date_lte: Only contracts expiring on/before this date.

        Returns:
            list[Decimal]: Sorted unique strikes; empty when nothing matches.
        """
        response = await self.get_chain_snapshot(
            GetChainSnapshotRequest(
                underlying_asset=underlying,
                contract_type=kind,
                expiration_date_gte=expiration_date_gte,
                expiration_date_lte=expiration_date_lte,
                limit=_DISCOVERY_PAGE_SIZE,
                sort="strike_price",
                order=SortOrder.ASC,
            )
        )
        strikes = {
            snapshot.details.strike_price
            for snapshot in response.results or []
            if snapshot.details is not None and snapshot.details.strike_price is not None
        }
        logger.debug(
            "polygon.options.available_strikes",
            extra={"underlying": underlying, "count": len(strikes)},
        )
        return sorted(strikes)

    async def get_expiration_dates(
        self,
        underlying: str,
        kind: ContractKind | str | None = None,
        *,
        strike_price: Decimal | int | float | str | None = None,
    ) -> list[date]:
        """Return the distinct expiration dates listed for an underlying, ascending.

        Only the first page of the chain (up to 1000 contracts) is scanned.

        Args:
            underlying: Underlying symbol.
            kind: Restrict to calls or puts; both when omitted.
            strike_price: Restrict to one strike.

        Returns:
            list[date]: Sorted unique expirations; empty when nothing matches.
        """
        response = await self.get_chain_snapshot(
            GetChainSnapshotRequest(
                underlying_asset=underlying,
                contract_type=kind,
                strike_price=strike_price,
                limit=_DISCOVERY_PAGE_SIZE,
                sort="expiration_date",
                order=SortOrder.ASC,
            )
        )
        dates = {
            snapshot.details.expiration
            for snapshot in response.results or []
            if snapshot.details is not None and snapshot.details.expiration is not None
        }
        logger.debug(
            "polygon.options.expiration_dates",
            extra={"underlying": underlying, "count": len(dates)},
        )
        return sorted(dates)  # type: ignore[type-var]

    # ------------------------------------------------------------------ #
    # Fluent queries                                                     #
    # ------------------------------------------------------------------ #
    def query_contract_details(
        self, ticker: str | OptionsTicker | None = None
    ) -> ContractDetailsQuery:
        query = ContractDetailsQuery(self.get_contract_details)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_snapshot(self, contract: str | OptionsTicker | None = None) -> OptionSnapshotQuery:
        query = OptionSnapshotQuery(self.get_snapshot)
        return query.for_contract(contract) if contract is not None else query

    def query_chain_snapshot(self, underlying: str | None = None) -> ChainSnapshotQuery:
        query = ChainSnapshotQuery(self.get_chain_snapshot)
        return query.for_underlying(underlying) if underlying is not None else query

    def query_last_trade(self, ticker: str | OptionsTicker | None = None) -> OptionLastTradeQuery:
        query = OptionLastTradeQuery(self.get_last_trade)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_quotes(self, ticker: str | OptionsTicker | None = None) -> OptionQuotesQuery:
        query = OptionQuotesQuery(self.get_quotes)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_trades(self, ticker: str | OptionsTicker | None = None) -> OptionTradesQuery:
        query = OptionTradesQuery(self.get_trades)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_bars(self, ticker: str | OptionsTicker | None = None) -> OptionBarsQuery:
        query = OptionBarsQuery(self.get_bars)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_daily_open_close(
        self, ticker: str | OptionsTicker | None = None
    ) -> OptionDailyOpenCloseQuery:
        query = OptionDailyOpenCloseQuery(self.get_daily_open_close)
        return query.for_ticker(ticker) if ticker is not None else query

    def query_previous_day_bar(
        self, ticker: str | OptionsTicker | None = None
    ) -> OptionPreviousDayBarQuery:
        query = OptionPreviousDayBarQuery(self.get_previous_day_bar)
        return query.for_ticker(ticker) if ticker is not None else query
