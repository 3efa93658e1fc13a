# src/polygon_rest/infrastructure/external_apis/polygon/options_api.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Options endpoints over :class:`PolygonTransport`."""

from __future__ import annotations

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
from polygon_rest.infrastructure.external_apis.polygon.base import (
    PolygonEndpointApi,
    path_segment,
    range_params,
    tick_params,
)


class PolygonOptionsApi(PolygonEndpointApi):
    """httpx implementation of the options endpoints."""

    async def get_contract_details(
        self, request: GetContractDetailsRequest
    ) -> PolygonResponse[OptionsContract]:
        return await self._get(
            "options.contract_details",
            f"/v3/reference/options/contracts/{path_segment(request.options_ticker)}",
            PolygonResponse[OptionsContract],
            {"as_of": request.as_of},
        )

    async def get_snapshot(
        self, request: GetOptionSnapshotRequest
    ) -> PolygonResponse[OptionSnapshot]:
        return await self._get(
            "options.snapshot",
            f"/v3/snapshot/options/{path_segment(request.underlying_asset)}"
            f"/{path_segment(request.option_contract)}",
            PolygonResponse[OptionSnapshot],
        )

    async def get_chain_snapshot(
        self, request: GetChainSnapshotRequest
    ) -> PolygonResponse[list[OptionSnapshot]]:
        params = {
            "strike_price": request.strike_price,
            "contract_type": request.contract_type,
            "expiration_date": request.expiration_date,
            **range_params(
                "expiration_date",
                gte=request.expiration_date_gte,
                lte=request.expiration_date_lte,
            ),
            "limit": request.limit,
            "order": request.order,
            "sort": request.sort,
            "cursor": request.cursor,
        }
        return await self._get(
            "options.chain_snapshot",
            f"/v3/snapshot/options/{path_segment(request.underlying_asset)}",
            PolygonResponse[list[OptionSnapshot]],
            params,
        )

    async def get_last_trade(
        self, request: GetOptionLastTradeRequest
    ) -> PolygonResponse[LastTrade]:
        return await self._get(
            "options.last_trade",
            f"/v2/last/trade/{path_segment(request.options_ticker)}",
            PolygonResponse[LastTrade],
        )

    async def get_quotes(self, request: GetOptionQuotesRequest) -> PolygonResponse[list[Quote]]:
        return await self._get(
            "options.quotes",
            f"/v3/quotes/{path_segment(request.options_ticker)}",
            PolygonResponse[list[Quote]],
            tick_params(request),
        )

    async def get_trades(self, request: GetOptionTradesRequest) -> PolygonResponse[list[Trade]]:
        return await self._get(
            "options.trades",
            f"/v3/trades/{path_segment(request.options_ticker)}",
            PolygonResponse[list[Trade]],
            tick_params(request),
        )

    async def get_bars(self, request: GetOptionBarsRequest) -> PolygonResponse[list[Bar]]:
        path = (
            f"/v2/aggs/ticker/{path_segment(request.options_ticker)}"
            f"/range/{request.multiplier}/{request.timespan.value}/{request.from_}/{request.to}"
        )
        return await self._get(
            "options.bars",
            path,
            PolygonResponse[list[Bar]],
            {"adjusted": request.adjusted, "sort": request.sort, "limit": request.limit},
        )

    async def get_daily_open_close(self, request: GetOptionDailyOpenCloseRequest) -> DailyOpenClose:
        return await self._get(
            "options.daily_open_close",
            f"/v1/open-close/{path_segment(request.options_ticker)}/{request.date}",
            DailyOpenClose,
        )

    async def get_previous_day_bar(
        self, request: GetOptionPreviousDayBarRequest
    ) -> PolygonResponse[list[Bar]]:
        return await self._get(
            "options.previous_day_bar",
            f"/v2/aggs/ticker/{path_segment(request.options_ticker)}/prev",
            PolygonResponse[list[Bar]],
            {"adjusted": request.adjusted},
        )
