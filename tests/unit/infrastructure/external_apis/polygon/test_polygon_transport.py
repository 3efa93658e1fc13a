from __future__ import annotations

from decimal import Decimal

import anyio
import httpx
import pytest
import respx
from pydantic import SecretStr

from polygon_rest.domain.enums.market import SortOrder
from polygon_rest.domain.exceptions.polygon import (
    PolygonApiError,
    PolygonConfigurationError,
    PolygonHttpError,
    PolygonResponseError,
)
from polygon_rest.infrastructure.external_apis.polygon import client as client_module
from polygon_rest.infrastructure.external_apis.polygon.client import (
    PolygonTransport,
    _parse_retry_after,
    build_query,
)
from polygon_rest.infrastructure.external_apis.polygon.settings import PolygonSettings
from polygon_rest.infrastructure.resilience.circuit_breaker import CircuitBreaker
from polygon_rest.infrastructure.resilience.retry import RetryPolicy

PATH = "/v1/marketstatus/now"


def test_build_query_renders_values() -> None:
    assert build_query(None) == {}
    assert build_query(
        {
            "adjusted": True,
            "include_otc": False,
            "limit": None,
            "order": SortOrder.DESC,
            "strike_price": Decimal("650.500"),
            "count": 10,
        }
    ) == {
        "adjusted": "true",
        "include_otc": "false",
        "order": "desc",
        "strike_price": "650.5",
        "count": "10",
    }


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, None), ("", None), ("2", 2.0), ("1.5", 1.5), ("-3", 0.0), ("soon", None)],
)
def test_parse_retry_after(raw: str | None, expected: float | None) -> None:
    assert _parse_retry_after(raw) == expected


def test_blank_api_key_is_rejected() -> None:
    with pytest.raises(PolygonConfigurationError):
        PolygonTransport(PolygonSettings(api_key=SecretStr("   ")))


@pytest.mark.anyio
@respx.mock
async def test_sends_bearer_token_and_query(
    polygon_settings: PolygonSettings, no_retry: RetryPolicy
) -> None:
    route = respx.get(f"{polygon_settings.base_url}{PATH}").mock(
        return_value=httpx.Response(200, json={"market": "open"})
    )
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(polygon_settings, http=http, retry_policy=no_retry)
        payload = await transport.get_json(
            "reference.market_status", PATH, {"adjusted": True, "limit": None}
        )

    assert payload == {"market": "open"}
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"] == "polygon-rest-python/1.0"
    assert dict(request.url.params) == {"adjusted": "true"}


@pytest.mark.anyio
@respx.mock
async def test_request_id_is_propagated(
    monkeypatch: pytest.MonkeyPatch,
    polygon_settings: PolygonSettings,
    no_retry: RetryPolicy,
) -> None:
    monkeypatch.setattr(client_module, "get_request_id", lambda: "rid-123")
    route = respx.get(f"{polygon_settings.base_url}{PATH}").mock(
        return_value=httpx.Response(200, json={})
    )
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(polygon_settings, http=http, retry_policy=no_retry)
        await transport.get_json("reference.market_status", PATH)

    assert route.calls.last.request.headers["X-Request-ID"] == "rid-123"


@pytest.mark.anyio
@respx.mock
async def test_not_found_maps_to_api_error(
    polygon_settings: PolygonSettings, fast_retry: RetryPolicy
) -> None:
    route = respx.get(f"{polygon_settings.base_url}/v3/reference/tickers/ZZZZ").mock(
        return_value=httpx.Response(404, json={"status": "NOT_FOUND"})
    )
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(polygon_settings, http=http, retry_policy=fast_retry)
        with pytest.raises(PolygonApiError) as info:
            await transport.get_json(
                "reference.ticker_details", "/v3/reference/tickers/ZZZZ", {"date": "2024-01-02"}
            )

    err = info.value
    assert err.is_not_found
    assert err.request_url == "/v3/reference/tickers/ZZZZ?date=2024-01-02"
    assert err.response_content is not None and "NOT_FOUND" in err.response_content
    assert route.call_count == 1


@pytest.mark.anyio
@respx.mock
async def test_rate_limit_and_server_errors_are_retried(
    polygon_settings: PolygonSettings, fast_retry: RetryPolicy
) -> None:
    route = respx.get(f"{polygon_settings.base_url}{PATH}").mock(
        side_effect=[
            httpx.Response(429, headers={"Retry-After": "0"}),
            httpx.Response(503),
            httpx.Response(200, json={"market": "closed"}),
        ]
    )
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(polygon_settings, http=http, retry_policy=fast_retry)
        payload = await transport.get_json("reference.market_status", PATH)

    assert payload == {"market": "closed"}
    assert route.call_count == 3


@pytest.mark.anyio
@respx.mock
async def test_retry_budget_is_bounded(
    polygon_settings: PolygonSettings, fast_retry: RetryPolicy
) -> None:
    route = respx.get(f"{polygon_settings.base_url}{PATH}").mock(return_value=httpx.Response(500))
    breaker = CircuitBreaker(failure_threshold=10, recovery_timeout_s=60.0)
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(
            polygon_settings, http=http, retry_policy=fast_retry, breaker=breaker
        )
        with pytest.raises(PolygonApiError) as info:
            await transport.get_json("reference.market_status", PATH)

    assert info.value.is_server_error
    assert route.call_count == fast_retry.total + 1


@pytest.mark.anyio
@respx.mock
async def test_timeout_is_not_retried(
    polygon_settings: PolygonSettings, fast_retry: RetryPolicy
) -> None:
    route = respx.get(f"{polygon_settings.base_url}{PATH}").mock(
        side_effect=httpx.ReadTimeout("slow")
    )
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(polygon_settings, http=http, retry_policy=fast_retry)
        with pytest.raises(PolygonHttpError) as info:
            await transport.get_json("reference.market_status", PATH)

    assert info.value.is_timeout
    assert route.call_count == 1


@pytest.mark.anyio
@respx.mock
async def test_network_error_is_retried_then_surfaced(
    polygon_settings: PolygonSettings, fast_retry: RetryPolicy
) -> None:
    route = respx.get(f"{polygon_settings.base_url}{PATH}").mock(
        side_effect=httpx.ConnectError("refused")
    )
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(polygon_settings, http=http, retry_policy=fast_retry)
        with pytest.raises(PolygonHttpError) as info:
            await transport.get_json("reference.market_status", PATH)

    assert not info.value.is_timeout
    assert info.value.details == {"error": "ConnectError"}
    assert route.call_count == fast_retry.total + 1


@pytest.mark.anyio
@respx.mock
async def test_invalid_json_maps_to_response_error(
    polygon_settings: PolygonSettings, no_retry: RetryPolicy
) -> None:
    respx.get(f"{polygon_settings.base_url}{PATH}").mock(
        return_value=httpx.Response(200, content=b"<html>not json</html>")
    )
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(polygon_settings, http=http, retry_policy=no_retry)
        with pytest.raises(PolygonResponseError) as info:
            await transport.get_json("reference.market_status", PATH)

    assert info.value.details["endpoint"] == PATH


@pytest.mark.anyio
@respx.mock
async def test_open_circuit_fails_fast(
    polygon_settings: PolygonSettings, no_retry: RetryPolicy
) -> None:
    route = respx.get(f"{polygon_settings.base_url}{PATH}").mock(return_value=httpx.Response(502))
    breaker = CircuitBreaker(failure_threshold=1, recovery_timeout_s=60.0)
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(
            polygon_settings, http=http, retry_policy=no_retry, breaker=breaker
        )
        with pytest.raises(PolygonApiError):
            await transport.get_json("reference.market_status", PATH)
        assert breaker.state == "OPEN"

        with pytest.raises(PolygonHttpError) as info:
            await transport.get_json("reference.market_status", PATH)

    assert info.value.details == {"breaker_state": "open"}
    assert route.call_count == 1


@pytest.mark.anyio
@respx.mock
async def test_client_errors_do_not_trip_the_breaker(
    polygon_settings: PolygonSettings, no_retry: RetryPolicy
) -> None:
    respx.get(f"{polygon_settings.base_url}{PATH}").mock(return_value=httpx.Response(401))
    breaker = CircuitBreaker(failure_threshold=1, recovery_timeout_s=60.0)
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(
            polygon_settings, http=http, retry_policy=no_retry, breaker=breaker
        )
        for _ in range(3):
            with pytest.raises(PolygonApiError) as info:
                await transport.get_json("reference.market_status", PATH)
            assert info.value.is_unauthorized

    assert breaker.state == "CLOSED"


@pytest.mark.anyio
async def test_aclose_only_closes_owned_client(polygon_settings: PolygonSettings) -> None:
    owned = PolygonTransport(polygon_settings)
    await owned.aclose()
    assert owned._client.is_closed

    async with httpx.AsyncClient() as http:
        shared = PolygonTransport(polygon_settings, http=http)
        await shared.aclose()
        assert not http.is_closed


def test_base_url_is_normalized() -> None:
    settings = PolygonSettings(api_key=SecretStr("k"), base_url="https://api.polygon.test/")
    assert PolygonTransport(settings).base_url == "https://api.polygon.test"


@pytest.mark.anyio
@respx.mock
async def test_injected_client_headers_are_left_untouched(
    polygon_settings: PolygonSettings, no_retry: RetryPolicy
) -> None:
    respx.get(f"{polygon_settings.base_url}{PATH}").mock(return_value=httpx.Response(200, json={}))
    async with httpx.AsyncClient() as http:
        before = dict(http.headers)
        transport = PolygonTransport(polygon_settings, http=http, retry_policy=no_retry)
        await transport.get_json("reference.market_status", PATH)
        assert dict(http.headers) == before


@pytest.mark.anyio
@respx.mock
async def test_retry_after_is_skipped_when_no_attempt_follows(
    polygon_settings: PolygonSettings, no_retry: RetryPolicy
) -> None:
    route = respx.get(f"{polygon_settings.base_url}{PATH}").mock(
        return_value=httpx.Response(429, headers={"Retry-After": "120"})
    )
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(polygon_settings, http=http, retry_policy=no_retry)
        with anyio.fail_after(2), pytest.raises(PolygonApiError) as info:
            await transport.get_json("reference.market_status", PATH)

    assert info.value.is_rate_limited
    assert route.call_count == 1


@pytest.mark.anyio
@respx.mock
async def test_retry_after_is_capped_by_the_policy(
    polygon_settings: PolygonSettings,
) -> None:
    route = respx.get(f"{polygon_settings.base_url}{PATH}").mock(
        side_effect=[
            httpx.Response(429, headers={"Retry-After": "120"}),
            httpx.Response(200, json={"market": "open"}),
        ]
    )
    policy = RetryPolicy(total=1, base=0.0, cap=0.01, jitter=False)
    async with httpx.AsyncClient() as http:
        transport = PolygonTransport(polygon_settings, http=http, retry_policy=policy)
        with anyio.fail_after(2):
            payload = await transport.get_json("reference.market_status", PATH)

    assert payload == {"market": "open"}
    assert route.call_count == 2
