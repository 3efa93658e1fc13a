# src/polygon_rest/infrastructure/observability/metrics_polygon.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Polygon.io transport metrics (Prometheus).

Collectors (names are stable):

* ``polygon_rest_request_latency_seconds`` (Histogram)
* ``polygon_rest_errors_total`` (Counter)
* ``polygon_rest_http_status_total`` (Counter)
* ``polygon_rest_retries_total`` (Counter)
* ``polygon_rest_breaker_events_total`` (Counter)
* ``polygon_rest_response_bytes`` (Histogram)

All collectors are created against the *current* default registry
(:data:`prometheus_client.REGISTRY`). If a collector with the same name is
already registered it is reused, so module re-imports and tests that swap the
registry do not fail with ``Duplicated timeseries``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import prometheus_client as prom
from prometheus_client import Counter, Histogram

_C = TypeVar("_C", Counter, Histogram)

_BYTES_BUCKETS = (256, 1024, 4096, 16384, 65536, 262144, 1048576, 4194304)


def _get_or_create(
    kind: type[_C],
    name: str,
    doc: str,
    labelnames: Sequence[str],
    **kwargs: object,
) -> _C:
    """Return a collector of ``kind`` bound to the current default registry.

    Args:
        kind: ``Counter`` or ``Histogram``.
        name: Metric name.
        doc: Human-readable metric description.
        labelnames: Label names.
        **kwargs: Extra constructor arguments (e.g. ``buckets``).

    Returns:
        The existing collector when already registered, otherwise a new one.
    """
    registry = prom.REGISTRY
    # Counters register under their base name without the ``_total`` suffix.
    lookup = name.removesuffix("_total")
    mapping = getattr(registry, "_names_to_collectors", {})
    existing = mapping.get(name) or mapping.get(lookup)
    if isinstance(existing, kind):
        return existing

    try:
        return kind(  # type: ignore[arg-type]
            name, doc, tuple(labelnames), registry=registry, **kwargs
        )
    except ValueError as exc:
        if "Duplicated timeseries" in str(exc):
            mapping = getattr(registry, "_names_to_collectors", {})
            again = mapping.get(name) or mapping.get(lookup)
            if isinstance(again, kind):
                return again
        raise


def get_polygon_request_latency_seconds() -> Histogram:
    """Latency of upstream Polygon calls including retries (seconds)."""
    return _get_or_create(
        Histogram,
        "polygon_rest_request_latency_seconds",
        "Latency of upstream Polygon.io calls (seconds).",
        ("endpoint", "outcome"),
    )


def get_polygon_errors_total() -> Counter:
    """Failed Polygon calls by exception type."""
    return _get_or_create(
        Counter,
        "polygon_rest_errors_total",
        "Total errors encountered when calling Polygon.io.",
        ("endpoint", "reason"),
    )


def get_polygon_http_status_total() -> Counter:
    """HTTP responses received from Polygon by status code."""
    return _get_or_create(
        Counter,
        "polygon_rest_http_status_total",
        "HTTP responses from Polygon.io by status code.",
        ("endpoint", "code"),
    )


def get_polygon_retries_total() -> Counter:
    """Retries scheduled after retryable failures."""
    return _get_or_create(
        Counter,
        "polygon_rest_retries_total",
        "Retries performed against Polygon.io.",
        ("endpoint", "reason"),
    )


def get_polygon_breaker_events_total() -> Counter:
    """Calls refused by the circuit breaker."""
    return _get_or_create(
        Counter,
        "polygon_rest_breaker_events_total",
        "Circuit breaker rejections for Polygon.io calls.",
        ("endpoint", "state"),
    )


def get_polygon_response_bytes() -> Histogram:
    """Size of successful Polygon response bodies."""
    return _get_or_create(
        Histogram,
        "polygon_rest_response_bytes",
        "Size of Polygon.io response bodies (bytes).",
        ("endpoint",),
        buckets=_BYTES_BUCKETS,
    )
