# src/polygon_rest/application/fluent/base.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Fluent query builder foundations.

Synopsis:
    Builders accumulate request parameters through chainable setters and
    defer all validation to :meth:`QueryBuilder.build_request`, which
    constructs the endpoint's request model. Missing or invalid parameters
    therefore surface as
    :class:`~polygon_rest.domain.exceptions.polygon.PolygonValidationError`
    from ``build_request()`` or ``execute()``, never from a setter.

Example:
    bars = await (
        client.options.query_bars("O:SPY251219C00650000")
        .daily()
        .from_("2025-01-02")
        .to("2025-01-31")
        .ascending()
        .execute()
    )

Layer:
    application/fluent
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import date, datetime
from typing import Any, ClassVar, Generic, Self, TypeVar

from polygon_rest.application.schemas.requests.base import BaseRequest
from polygon_rest.domain.enums.market import AggregateInterval, SortOrder

RequestT = TypeVar("RequestT", bound=BaseRequest)
ResponseT = TypeVar("ResponseT")


class QueryBuilder(Generic[RequestT, ResponseT]):
    """Base fluent builder bound to one service method.

    Attributes:
        request_type: Request model the builder produces.
    """

    request_type: ClassVar[type[BaseRequest]]

    def __init__(self, execute: Callable[[RequestT], Awaitable[ResponseT]]) -> None:
        """Initialize the builder.

        Args:
            execute: Service coroutine that accepts the built request.
        """
        self._execute = execute
        self._params: dict[str, Any] = {}

    def _set(self, **params: Any) -> Self:
        self._params.update(params)
        return self

    @property
    def params(self) -> dict[str, Any]:
        """Snapshot of the parameters set so far."""
        return dict(self._params)

    def build_request(self) -> RequestT:
        """Validate the accumulated parameters into a request model.

        Raises:
            PolygonValidationError: If a required parameter is missing or a
                value is invalid.
        """
        return self.request_type(**self._params)  # type: ignore[return-value]

    async def execute(self) -> ResponseT:
        """Build the request and send it through the bound service method."""
        return await self._execute(self.build_request())


class TickerQueryBuilder(QueryBuilder[RequestT, ResponseT]):
    """Builder for endpoints addressed by a single ticker."""

    ticker_field: ClassVar[str] = "ticker"

    def for_ticker(self, ticker: Any) -> Self:
        return self._set(**{self.ticker_field: ticker})


class AggregateQueryBuilder(TickerQueryBuilder[RequestT, ResponseT]):
    """Builder for the ``/v2/aggs`` range endpoints."""

    def from_(self, start: str | date | datetime) -> Self:
        return self._set(from_=start)

    def to(self, end: str | date | datetime) -> Self:
        return self._set(to=end)

    def between(self, start: str | date | datetime, end: str | date | datetime) -> Self:
        return self._set(from_=start, to=end)

    def with_interval(self, multiplier: int, timespan: AggregateInterval | str) -> Self:
        return self._set(multiplier=multiplier, timespan=timespan)

    def minutely(self, multiplier: int = 1) -> Self:
        return self.with_interval(multiplier, AggregateInterval.MINUTE)

    def hourly(self, multiplier: int = 1) -> Self:
        return self.with_interval(multiplier, AggregateInterval.HOUR)

    def daily(self, multiplier: int = 1) -> Self:
        return self.with_interval(multiplier, AggregateInterval.DAY)

    def weekly(self, multiplier: int = 1) -> Self:
        return self.with_interval(multiplier, AggregateInterval.WEEK)

    def monthly(self, multiplier: int = 1) -> Self:
        return self.with_interval(multiplier, AggregateInterval.MONTH)

    def quarterly(self, multiplier: int = 1) -> Self:
        return self.with_interval(multiplier, AggregateInterval.QUARTER)

    def yearly(self, multiplier: int = 1) -> Self:
        return self.with_interval(multiplier, AggregateInterval.YEAR)

    def adjusted(self, value: bool = True) -> Self:
        return self._set(adjusted=value)

    def unadjusted(self) -> Self:
        return self.adjusted(False)

    def ascending(self) -> Self:
        return self._set(sort=SortOrder.ASC)

    def descending(self) -> Self:
        return self._set(sort=SortOrder.DESC)

    def limit(self, value: int) -> Self:
        return self._set(limit=value)


class TickQueryBuilder(TickerQueryBuilder[RequestT, ResponseT]):
    """Builder for the v3 tick endpoints (trades and quotes)."""

    def at(self, timestamp: str | date | datetime | int) -> Self:
        return self._set(timestamp=timestamp)

    def timestamp_gt(self, value: str | date | datetime | int) -> Self:
        return self._set(timestamp_gt=value)

    def timestamp_gte(self, value: str | date | datetime | int) -> Self:
        return self._set(timestamp_gte=value)

    def timestamp_lt(self, value: str | date | datetime | int) -> Self:
        return self._set(timestamp_lt=value)

    def timestamp_lte(self, value: str | date | datetime | int) -> Self:
        return self._set(timestamp_lte=value)

    def between(
        self,
        start: str | date | datetime | int,
        end: str | date | datetime | int,
    ) -> Self:
        """Inclusive timestamp window."""
        return self._set(timestamp_gte=start, timestamp_lte=end)

    def ascending(self) -> Self:
        return self._set(order=SortOrder.ASC)

    def descending(self) -> Self:
        return self._set(order=SortOrder.DESC)

    def limit(self, value: int) -> Self:
        return self._set(limit=value)

    def sort_by(self, field: str) -> Self:
        return self._set(sort=field)

    def cursor(self, value: str | None) -> Self:
        return self._set(cursor=value)
