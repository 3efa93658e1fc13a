from __future__ import annotations

from typing import Any

import pytest

from polygon_rest.application.schemas.requests.reference import (
    GetMarketStatusRequest,
    GetTickersRequest,
)
from polygon_rest.application.schemas.requests.stocks import (
    GetDailyOpenCloseRequest,
    GetMarketSnapshotRequest,
    GetStockBarsRequest,
)
from polygon_rest.application.services.reference_data_service import ReferenceDataService
from polygon_rest.application.services.stocks_service import StocksService
from polygon_rest.domain.enums.market import AggregateInterval, Market, SortOrder
from polygon_rest.domain.exceptions.polygon import PolygonValidationError


class _RecordingApi:
    """Answers any endpoint call with a sentinel and remembers the request."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("get_"):
            raise AttributeError(name)

        async def endpoint(request: Any) -> Any:
            self.calls.append((name, request))
            return {"endpoint": name}

        return endpoint


@pytest.mark.anyio
async def test_stock_bars_from_kwargs() -> None:
    api = _RecordingApi()
    result = await StocksService(api).get_bars(  # type: ignore[arg-type]
        ticker="AAPL", from_="2024-01-02", to="2024-01-31", timespan="week", limit=10
    )

    assert result == {"endpoint": "get_bars"}
    ((name, req),) = api.calls
    assert name == "get_bars"
    assert isinstance(req, GetStockBarsRequest)
    assert req.timespan is AggregateInterval.WEEK


@pytest.mark.anyio
async def test_stock_bars_limit_is_enforced() -> None:
    api = _RecordingApi()
    with pytest.raises(PolygonValidationError) as info:
        await StocksService(api).get_bars(  # type: ignore[arg-type]
            ticker="AAPL", from_="2024-01-02", to="2024-01-31", limit=50_001
        )
    assert info.value.errors[0].field == "limit"
    assert api.calls == []


@pytest.mark.anyio
async def test_each_stock_endpoint_is_forwarded() -> None:
    api = _RecordingApi()
    svc = StocksService(api)  # type: ignore[arg-type]

    await svc.get_previous_close(ticker="AAPL")
    await svc.get_grouped_daily(date="2024-01-02", include_otc=True)
    await svc.get_daily_open_close(GetDailyOpenCloseRequest(ticker="AAPL", date="2024-01-02"))
    await svc.get_trades(ticker="AAPL", limit=5)
    await svc.get_quotes(ticker="AAPL", order="asc")
    await svc.get_last_trade(ticker="AAPL")
    await svc.get_last_quote(ticker="AAPL")
    await svc.get_snapshot(ticker="AAPL")
    await svc.get_market_snapshot(GetMarketSnapshotRequest(tickers=["AAPL", "MSFT"]))

    assert [name for name, _ in api.calls] == [
        "get_previous_close",
        "get_grouped_daily",
        "get_daily_open_close",
        "get_trades",
        "get_quotes",
        "get_last_trade",
        "get_last_quote",
        "get_snapshot",
        "get_market_snapshot",
    ]
    assert api.calls[4][1].order is SortOrder.ASC


@pytest.mark.anyio
async def test_stock_fluent_queries() -> None:
    api = _RecordingApi()
    svc = StocksService(api)  # type: ignore[arg-type]

    await svc.query_bars("AAPL").minutely(5).between("2024-01-02", "2024-01-03").execute()
    await svc.query_market_snapshot().for_tickers("AAPL", "MSFT").include_otc().execute()
    await svc.query_grouped_daily().on("2024-01-02").adjusted(False).execute()

    bars_req = api.calls[0][1]
    assert (bars_req.multiplier, bars_req.timespan) == (5, AggregateInterval.MINUTE)
    snapshot_req = api.calls[1][1]
    assert snapshot_req.tickers == ["AAPL", "MSFT"]
    assert snapshot_req.include_otc is True
    grouped_req = api.calls[2][1]
    assert grouped_req.adjusted is False


@pytest.mark.anyio
async def test_reference_endpoints_are_forwarded() -> None:
    api = _RecordingApi()
    svc = ReferenceDataService(api)  # type: ignore[arg-type]

    await svc.get_tickers(market="stocks", search="apple", active=True)
    await svc.get_ticker_details(ticker="AAPL", date="2024-01-02")
    await svc.get_market_status(GetMarketStatusRequest())
    await svc.get_market_holidays()
    await svc.get_ticker_types(asset_class="stocks", locale="us")
    await svc.get_condition_codes(asset_class="stocks", sip_mapping="CTA")
    await svc.get_exchanges(asset_class="options")

    names = [name for name, _ in api.calls]
    assert names == [
        "get_tickers",
        "get_ticker_details",
        "get_market_status",
        "get_market_holidays",
        "get_ticker_types",
        "get_condition_codes",
        "get_exchanges",
    ]
    tickers_req = api.calls[0][1]
    assert isinstance(tickers_req, GetTickersRequest)
    assert tickers_req.market is Market.STOCKS


@pytest.mark.anyio
async def test_reference_fluent_queries() -> None:
    api = _RecordingApi()
    svc = ReferenceDataService(api)  # type: ignore[arg-type]

    await (
        svc.query_tickers()
        .ticker_gte("A")
        .ticker_lt("B")
        .in_market("stocks")
        .sort_by("ticker")
        .descending()
        .limit(100)
        .execute()
    )
    await svc.query_ticker_details("MSFT").as_of("2024-01-02").execute()

    tickers_req = api.calls[0][1]
    assert (tickers_req.ticker_gte, tickers_req.ticker_lt) == ("A", "B")
    assert tickers_req.order is SortOrder.DESC
    assert tickers_req.limit == 100
    details_req = api.calls[1][1]
    assert (details_req.ticker, details_req.date) == ("MSFT", "2024-01-02")


@pytest.mark.anyio
async def test_reference_validation_errors() -> None:
    svc = ReferenceDataService(_RecordingApi())  # type: ignore[arg-type]
    with pytest.raises(PolygonValidationError):
        await svc.get_tickers(limit=5000)
    with pytest.raises(PolygonValidationError):
        await svc.get_exchanges(asset_class="bonds")
