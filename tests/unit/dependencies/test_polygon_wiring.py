from __future__ import annotations

import httpx
import pytest
import respx

from polygon_rest.application.services.options_service import OptionsService
from polygon_rest.application.services.reference_data_service import ReferenceDataService
from polygon_rest.application.services.stocks_service import StocksService
from polygon_rest.dependencies.polygon import build_polygon_client, get_polygon_settings
from polygon_rest.domain.exceptions.polygon import PolygonConfigurationError
from polygon_rest.infrastructure.external_apis.polygon.settings import PolygonSettings
from polygon_rest.infrastructure.resilience.retry import RetryPolicy


def test_settings_require_an_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("POLYGON_API_KEY", raising=False)
    with pytest.raises(PolygonConfigurationError) as info:
        get_polygon_settings()
    assert "api_key" in info.value.details["fields"]


def test_settings_are_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLYGON_API_KEY", "from-env")
    first = get_polygon_settings()
    assert get_polygon_settings() is first
    assert first.api_key.get_secret_value() == "from-env"


def test_build_client_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLYGON_API_KEY", "from-env")
    client = build_polygon_client()
    assert isinstance(client.stocks, StocksService)
    assert isinstance(client.options, OptionsService)
    assert isinstance(client.reference, ReferenceDataService)


def test_build_client_without_key_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("POLYGON_API_KEY", raising=False)
    with pytest.raises(PolygonConfigurationError):
        build_polygon_client()


@pytest.mark.anyio
@respx.mock
async def test_wired_client_round_trip(
    polygon_settings: PolygonSettings, no_retry: RetryPolicy
) -> None:
    route = respx.get(
        f"{polygon_settings.base_url}/v3/reference/options/contracts/O:SPY251219C00650000"
    ).mock(
        return_value=httpx.Response(
            200,
            json={
                "status": "OK",
                "request_id": "r1",
                "results": {
                    "contract_type": "call",
                    "expiration_date": "2025-12-19",
                    "strike_price": 650,
                    "ticker": "O:SPY251219C00650000",
                    "underlying_ticker": "SPY",
                },
            },
        )
    )

    async with httpx.AsyncClient() as http:
        async with build_polygon_client(
            polygon_settings, http=http, retry_policy=no_retry
        ) as client:
            response = await client.options.get_contract_details(
                options_ticker="O:SPY251219C00650000"
            )
        assert not http.is_closed

    assert route.called
    assert response.request_id == "r1"
    assert response.results is not None
    assert response.results.underlying_ticker == "SPY"
