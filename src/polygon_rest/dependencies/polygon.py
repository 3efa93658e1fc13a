# src/polygon_rest/dependencies/polygon.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Dependency wiring for the Polygon.io client.

Overview:
    Composition root: settings -> transport -> endpoint adapters -> services
    -> :class:`PolygonClient` facade. Application code depends only on the
    services and protocols; this is the one place that knows about httpx.

Layer:
    dependencies
"""

from __future__ import annotations

import logging
from functools import lru_cache

import httpx
from pydantic import ValidationError

from polygon_rest.application.services.options_service import OptionsService
from polygon_rest.application.services.polygon_client import PolygonClient
from polygon_rest.application.services.reference_data_service import ReferenceDataService
from polygon_rest.application.services.stocks_service import StocksService
from polygon_rest.domain.exceptions.polygon import PolygonConfigurationError
from polygon_rest.infrastructure.external_apis.polygon.client import PolygonTransport
from polygon_rest.infrastructure.external_apis.polygon.options_api import PolygonOptionsApi
from polygon_rest.infrastructure.external_apis.polygon.reference_api import PolygonReferenceApi
from polygon_rest.infrastructure.external_apis.polygon.settings import PolygonSettings
from polygon_rest.infrastructure.external_apis.polygon.stocks_api import PolygonStocksApi
from polygon_rest.infrastructure.resilience.circuit_breaker import CircuitBreaker
from polygon_rest.infrastructure.resilience.retry import RetryPolicy

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_polygon_settings() -> PolygonSettings:
    """Return cached settings loaded from ``POLYGON_*`` environment variables.

    Raises:
        PolygonConfigurationError: If the environment is missing the API key
            or holds an invalid value.
    """
    try:
        return PolygonSettings()  # type: ignore[call-arg]
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise PolygonConfigurationError(
            "Invalid Polygon configuration; set POLYGON_API_KEY and check POLYGON_* variables.",
            details={"fields": fields},
        ) from exc


def build_polygon_client(
    settings: PolygonSettings | None = None,
    *,
    http: httpx.AsyncClient | None = None,
    retry_policy: RetryPolicy | None = None,
    breaker: CircuitBreaker | None = None,
) -> PolygonClient:
    """Build a fully wired :class:`PolygonClient`.

    Args:
        settings: Explicit settings; loaded from the environment when omitted.
        http: Shared ``httpx.AsyncClient`` (left open on close when injected).
        retry_policy: Retry override (tests pass ``total=0``).
        breaker: Circuit breaker override.

    Returns:
        PolygonClient: Facade over the stocks, options and reference services.

    Raises:
        PolygonConfigurationError: If no usable API key is configured.
    """
    resolved = settings or get_polygon_settings()
    transport = PolygonTransport(resolved, http=http, retry_policy=retry_policy, breaker=breaker)
    logger.debug("polygon.client.built", extra={"base_url": transport.base_url})
    return PolygonClient(
        stocks=StocksService(PolygonStocksApi(transport)),
        options=OptionsService(PolygonOptionsApi(transport)),
        reference=ReferenceDataService(PolygonReferenceApi(transport)),
        on_close=transport.aclose,
    )
