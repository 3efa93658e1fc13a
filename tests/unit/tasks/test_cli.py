from __future__ import annotations

import json

import httpx
import pytest
import respx
from typer.testing import CliRunner

from polygon_rest.tasks.cli import app

runner = CliRunner()

BASE = "https://api.polygon.test"


@pytest.fixture
def polygon_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POLYGON_API_KEY", "cli-key")
    monkeypatch.setenv("POLYGON_BASE_URL", BASE)
    monkeypatch.setenv("POLYGON_MAX_RETRIES", "0")


def test_encode() -> None:
    result = runner.invoke(
        app,
        [
            "occ",
            "encode",
            "--underlying",
            "spy",
            "--expiration",
            "2025-12-19",
            "--kind",
            "call",
            "--strike",
            "650",
        ],
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "O:SPY251219C00650000"


def test_encode_rejects_invalid_component() -> None:
    result = runner.invoke(
        app,
        [
            "occ",
            "encode",
            "--underlying",
            "SPY1",
            "--expiration",
            "2025-12-19",
            "--kind",
            "put",
            "--strike",
            "650",
        ],
    )
    assert result.exit_code == 2
    assert "only letters" in result.output


def test_decode() -> None:
    result = runner.invoke(app, ["occ", "decode", "O:UBER220121C00050000"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "ticker": "O:UBER220121C00050000",
        "underlying": "UBER",
        "expiration": "2022-01-21",
        "kind": "call",
        "strike": "50",
    }


def test_decode_rejects_malformed_ticker() -> None:
    result = runner.invoke(app, ["occ", "decode", "SPY251219C00650000"])
    assert result.exit_code == 2
    assert "not in valid OCC format" in result.output


def test_contract_rejects_malformed_ticker_before_any_call() -> None:
    result = runner.invoke(app, ["options", "contract", "O:SPY"])
    assert result.exit_code == 2


@respx.mock
def test_contract_lookup(polygon_env: None) -> None:
    route = respx.get(f"{BASE}/v3/reference/options/contracts/O:SPY251219C00650000").mock(
        return_value=httpx.Response(
            200,
            json={
                "status": "OK",
                "results": {"ticker": "O:SPY251219C00650000", "strike_price": 650},
            },
        )
    )
    result = runner.invoke(app, ["options", "contract", "O:SPY251219C00650000"])

    assert result.exit_code == 0, result.output
    assert route.calls.last.request.headers["Authorization"] == "Bearer cli-key"
    assert '"ticker": "O:SPY251219C00650000"' in result.output


@respx.mock
def test_strikes(polygon_env: None) -> None:
    route = respx.get(f"{BASE}/v3/snapshot/options/SPY").mock(
        return_value=httpx.Response(
            200,
            json={
                "status": "OK",
                "results": [
                    {"details": {"strike_price": 655}},
                    {"details": {"strike_price": 642.5}},
                    {"details": {"strike_price": 655}},
                ],
            },
        )
    )
    result = runner.invoke(app, ["options", "strikes", "spy", "--kind", "put"])

    assert result.exit_code == 0, result.output
    assert '"642.5"' in result.output and '"655"' in result.output
    assert result.output.index("642.5") < result.output.index("655")
    params = route.calls.last.request.url.params
    assert params["contract_type"] == "put"
    assert params["limit"] == "1000"


@respx.mock
def test_upstream_error_exits_with_one(polygon_env: None) -> None:
    respx.get(f"{BASE}/v1/marketstatus/now").mock(return_value=httpx.Response(403))
    result = runner.invoke(app, ["reference", "market-status"])
    assert result.exit_code == 1
    assert "403 Forbidden" in result.output


def test_missing_api_key_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("POLYGON_API_KEY", raising=False)
    result = runner.invoke(app, ["reference", "market-status"])
    assert result.exit_code == 1
    assert "POLYGON_API_KEY" in result.output


def test_invalid_filter_exits_with_two(polygon_env: None) -> None:
    result = runner.invoke(app, ["options", "strikes", "SPY", "--expires-after", "2025-13-01"])
    assert result.exit_code == 2
    assert "YYYY-MM-DD" in result.output
