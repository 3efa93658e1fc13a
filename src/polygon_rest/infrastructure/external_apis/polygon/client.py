# src/polygon_rest/infrastructure/external_apis/polygon/client.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Polygon.io Transport Client: resilient, instrumented, async.

This transport is framework-agnostic and provides:

* Async HTTP (httpx) with bearer authentication and per-request timeout.
* Jittered exponential retries (bounded) on 429, 5xx and network failures;
  honors ``Retry-After`` seconds.
* Circuit breaker (CLOSED / OPEN / HALF-OPEN) fed by transport failures and
  5xx responses.
* Deterministic mapping to domain errors (``PolygonApiError``,
  ``PolygonHttpError``, ``PolygonResponseError``).
* Prometheus metrics and JSON logs with request-id propagation.

Only ``GET`` is used by the Polygon.io REST endpoints covered here.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping
from contextlib import suppress
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Final

import httpx

from polygon_rest.domain.exceptions.polygon import (
    PolygonApiError,
    PolygonConfigurationError,
    PolygonError,
    PolygonHttpError,
    PolygonResponseError,
)
from polygon_rest.infrastructure.external_apis.polygon.settings import PolygonSettings
from polygon_rest.infrastructure.logging.logger import (
    get_json_logger,
    get_request_id,
    get_trace_id,
)
from polygon_rest.infrastructure.observability.metrics_polygon import (
    get_polygon_breaker_events_total,
    get_polygon_errors_total,
    get_polygon_http_status_total,
    get_polygon_request_latency_seconds,
    get_polygon_response_bytes,
    get_polygon_retries_total,
)
from polygon_rest.infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitOpenError,
)
from polygon_rest.infrastructure.resilience.retry import RetryPolicy, retry_async

logger = get_json_logger(__name__)

_PROVIDER: Final[str] = "polygon"

_DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json",
    "User-Agent": "polygon-rest-python/1.0",
}


def _parse_retry_after(val: str | None) -> float | None:
    """Parse the HTTP ``Retry-After`` header (seconds form only).

    Args:
        val: Header value as a string, or ``None``.

    Returns:
        The seconds to wait as a float if parseable, otherwise ``None``.
    """
    if not val:
        return None
    try:
        return max(0.0, float(val))
    except ValueError:
        return None


def _query_value(value: Any) -> str:
    """Render a single query value the way Polygon.io expects it."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    return str(value)


def build_query(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Drop ``None`` values and render the rest as query strings.

    Args:
        params: Raw query mapping (enums, booleans, dates, numbers).

    Returns:
        A new mapping of string values, in insertion order.
    """
    if not params:
        return {}
    return {key: _query_value(value) for key, value in params.items() if value is not None}


def _is_retryable(exc: Exception) -> bool:
    """Return True for 429, 5xx and non-timeout network failures."""
    if isinstance(exc, PolygonApiError):
        return exc.is_rate_limited or exc.is_server_error
    if isinstance(exc, PolygonHttpError):
        return not exc.is_timeout and "breaker_state" not in exc.details
    return False


class PolygonTransport:
    """Resilient, instrumented transport for the Polygon.io REST API."""

    def __init__(
        self,
        settings: PolygonSettings,
        *,
        http: httpx.AsyncClient | None = None,
        retry_policy: RetryPolicy | None = None,
        breaker: CircuitBreaker | None = None,
    ) -> None:
        """Initialize the transport client.

        Args:
            settings: Provider settings loaded from environment or DI.
            http: Optional shared ``httpx.AsyncClient``. If omitted, a client
                is created and owned by this instance.
            retry_policy: Optional retry configuration. When omitted, a
                jittered exponential policy is built from the settings.
            breaker: Circuit breaker instance to use; created if omitted.

        Raises:
            PolygonConfigurationError: If the API key is missing or blank.
        """
        api_key = settings.api_key.get_secret_value().strip() if settings.api_key else ""
        if not api_key:
            raise PolygonConfigurationError("Polygon API key is not configured.")

        self._settings = settings
        self._base_url = settings.base_url.rstrip("/")
        self._timeout = float(settings.timeout_s)

        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(
            timeout=self._timeout,
            headers=_DEFAULT_HEADERS.copy(),
        )
        self._auth_header = f"Bearer {api_key}"

        self._retry = retry_policy or RetryPolicy(
            total=settings.max_retries,
            base=settings.retry_delay_s,
            cap=settings.retry_max_delay_s,
            jitter=True,
        )
        self._breaker = breaker or CircuitBreaker(
            failure_threshold=settings.breaker_failure_threshold,
            recovery_timeout_s=settings.breaker_recovery_timeout_s,
            half_open_max_calls=1,
        )

        self._latency = get_polygon_request_latency_seconds()
        self._errors = get_polygon_errors_total()
        self._status_total = get_polygon_http_status_total()
        self._resp_bytes = get_polygon_response_bytes()
        self._retries_total = get_polygon_retries_total()
        self._breaker_events_total = get_polygon_breaker_events_total()

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    # ---------------------------- Public API ----------------------------- #

    async def get_json(
        self,
        op: str,
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """GET ``path`` and return the decoded JSON body.

        Args:
            op: Stable endpoint label used for metrics and logs
                (e.g. ``"options.contract_details"``).
            path: Absolute API path starting with ``/``.
            params: Query parameters; ``None`` values are dropped.

        Returns:
            The parsed JSON payload.

        Raises:
            PolygonApiError: Upstream answered with a non-success status.
            PolygonHttpError: Network failure, timeout, or open circuit.
            PolygonResponseError: The body is not valid JSON.
        """
        query = build_query(params)
        encoded = str(httpx.QueryParams(query))
        request_url = f"{path}?{encoded}" if encoded else path
        url = f"{self._base_url}{path}"

        headers: dict[str, str] = {**_DEFAULT_HEADERS, "Authorization": self._auth_header}
        request_id = get_request_id()
        trace_id = get_trace_id()
        if request_id:
            headers.setdefault("X-Request-ID", request_id)
        if trace_id:
            headers.setdefault("x-trace-id", trace_id)

        calls = 0

        async def _call() -> Any:
            """Execute a single HTTP GET under breaker control."""
            nonlocal calls
            calls += 1
            retries_left = calls <= self._retry.total
            try:
                async with self._breaker.guard(_PROVIDER):
                    response = await self._client.get(
                        url,
                        params=query,
                        headers=headers,
                        timeout=self._timeout,
                    )
                    with suppress(Exception):
                        self._status_total.labels(op, str(response.status_code)).inc()
                    # Server errors count against the breaker.
                    if response.status_code >= 500:
                        await self._raise_for_status(
                            response, request_url, retries_left=retries_left
                        )
            except CircuitOpenError as cb_exc:
                with suppress(Exception):
                    self._breaker_events_total.labels(op, cb_exc.state).inc()
                raise PolygonHttpError.circuit_open(cb_exc.state) from cb_exc
            except httpx.TimeoutException as exc:
                raise PolygonHttpError.from_timeout(exc) from exc
            except httpx.RequestError as exc:
                raise PolygonHttpError.from_request_error(exc) from exc

            if not response.is_success:
                await self._raise_for_status(response, request_url, retries_left=retries_left)

            with suppress(Exception):
                length = response.headers.get("Content-Length")
                size = int(length) if length and length.isdigit() else len(response.content)
                self._resp_bytes.labels(op).observe(float(size))

            try:
                return response.json()
            except ValueError as exc:
                raise PolygonResponseError(
                    "Polygon.io returned a response that is not valid JSON.",
                    details={"endpoint": request_url, "error": str(exc)},
                ) from exc

        attempts = 0

        def _retry_predicate_with_metrics(exc: Exception) -> bool:
            """Return True for retryable failures and record the retry."""
            nonlocal attempts
            retryable = _is_retryable(exc)
            if retryable and attempts < self._retry.total:
                attempts += 1
                with suppress(Exception):
                    self._retries_total.labels(op, type(exc).__name__).inc()
                logger.warning(
                    "polygon.retry",
                    extra={
                        "endpoint": op,
                        "attempt": attempts,
                        "reason": type(exc).__name__,
                        "error": str(exc),
                    },
                )
            return retryable

        start = time.perf_counter()
        error_reason: str | None = None
        try:
            return await retry_async(
                _call, policy=self._retry, retry_on=_retry_predicate_with_metrics
            )
        except PolygonError as exc:
            error_reason = type(exc).__name__
            logger.warning(
                "polygon.request_failed",
                extra={"endpoint": op, "path": request_url, "reason": error_reason},
            )
            raise
        finally:
            elapsed = time.perf_counter() - start
            with suppress(Exception):
                outcome = "error" if error_reason else "success"
                self._latency.labels(endpoint=op, outcome=outcome).observe(elapsed)
                if error_reason:
                    self._errors.labels(endpoint=op, reason=error_reason).inc()

    # --------------------------- Internal helpers ------------------------- #

    async def _raise_for_status(
        self, response: httpx.Response, request_url: str, *, retries_left: bool
    ) -> None:
        """Raise :class:`PolygonApiError`.

        A retryable status waits out ``Retry-After`` (capped at the retry
        policy's maximum delay) only when another attempt will follow.
        """
        error = PolygonApiError(
            response.status_code,
            request_url=request_url,
            reason=response.reason_phrase or None,
            response_content=response.text or None,
        )
        if retries_left and (error.is_rate_limited or error.is_server_error):
            retry_after = _parse_retry_after(response.headers.get("Retry-After"))
            if retry_after:
                await asyncio.sleep(min(retry_after, self._retry.cap))
        raise error
