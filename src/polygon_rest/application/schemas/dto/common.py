# src/polygon_rest/application/schemas/dto/common.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Shared response envelope and field types.

Synopsis:
    * :class:`PolygonResponse`: the generic envelope most endpoints return.
    * :class:`PolygonErrorResponse`: body of an upstream error.
    * :data:`Volume`: integer volume that tolerates scientific notation.
    * Epoch helpers converting upstream timestamps to US market time.

Layer:
    application/schemas/dto
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Final, Generic, TypeVar
from urllib.parse import parse_qs, urlsplit
from zoneinfo import ZoneInfo

from pydantic import BeforeValidator, Field

from polygon_rest.application.schemas.dto.base import PolygonModel

T = TypeVar("T")

MARKET_TZ: Final[ZoneInfo] = ZoneInfo("America/New_York")


def _coerce_volume(value: Any) -> Any:
    """Accept integral values written in scientific notation (``1.2e+07``)."""
    if isinstance(value, bool) or value is None or isinstance(value, int):
        return value
    if isinstance(value, float | str):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"invalid volume: {value!r}") from exc
        if not number.is_finite() or number != number.to_integral_value():
            raise ValueError(f"volume must be an integral number: {value!r}")
        return int(number)
    return value


Volume = Annotated[int, BeforeValidator(_coerce_volume)]


def from_epoch_ms(value: int | None) -> datetime | None:
    """Convert Unix milliseconds to an ``America/New_York`` datetime."""
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1_000, tz=MARKET_TZ)


def from_epoch_ns(value: int | None) -> datetime | None:
    """Convert Unix nanoseconds to an ``America/New_York`` datetime.

    Sub-microsecond precision is truncated.
    """
    if value is None:
        return None
    seconds, nanos = divmod(int(value), 1_000_000_000)
    return datetime.fromtimestamp(seconds, tz=MARKET_TZ).replace(microsecond=nanos // 1_000)


class PolygonResponse(PolygonModel, Generic[T]):
    """Generic Polygon.io response envelope.

    Attributes:
        ticker: Ticker the response relates to (aggregate endpoints).
        query_count: Number of base aggregates queried.
        results_count: Number of results returned.
        adjusted: Whether results are split-adjusted.
        results: Endpoint payload (object or list).
        status: Upstream status string (``"OK"``, ``"DELAYED"``...).
        request_id: Upstream request identifier.
        count: Result count reported by v3 endpoints.
        next_url: Absolute URL of the next page, if any.
    """

    ticker: str | None = None
    query_count: int | None = Field(default=None, alias="queryCount")
    results_count: int | None = Field(default=None, alias="resultsCount")
    adjusted: bool | None = None
    results: T | None = None
    status: str | None = None
    request_id: str | None = None
    count: int | None = None
    next_url: str | None = None

    @property
    def next_cursor(self) -> str | None:
        """Return the ``cursor`` query parameter of :attr:`next_url`, if any."""
        if not self.next_url:
            return None
        values = parse_qs(urlsplit(self.next_url).query).get("cursor")
        return values[0] if values else None


class PolygonErrorResponse(PolygonModel):
    """Error body returned by Polygon.io alongside non-success statuses."""

    status: str | None = None
    error: str | None = None
    message: str | None = None
    request_id: str | None = None
