# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator

import pytest
from pydantic import SecretStr

from polygon_rest.dependencies.polygon import get_polygon_settings
from polygon_rest.infrastructure.external_apis.polygon.settings import PolygonSettings
from polygon_rest.infrastructure.resilience.retry import RetryPolicy

BASE_URL = "https://api.polygon.test"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Force pytest-anyio to use asyncio (not trio)."""
    return "asyncio"


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Keep env-driven settings from bleeding across tests."""
    get_polygon_settings.cache_clear()
    yield
    get_polygon_settings.cache_clear()


@pytest.fixture
def polygon_settings() -> PolygonSettings:
    return PolygonSettings(api_key=SecretStr("test-key"), base_url=BASE_URL, timeout_s=5.0)


@pytest.fixture
def no_retry() -> RetryPolicy:
    return RetryPolicy(total=0, base=0.0, cap=0.0, jitter=False)


@pytest.fixture
def fast_retry() -> RetryPolicy:
    return RetryPolicy(total=2, base=0.0, cap=0.0, jitter=False)
