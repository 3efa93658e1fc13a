# src/polygon_rest/application/schemas/requests/base.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Request model base and shared field types.

Synopsis:
    Every endpoint has a request model validated at construction time. A
    failed construction raises :class:`PolygonValidationError` carrying one
    :class:`ValidationIssue` per offending field, so callers never see raw
    pydantic errors and no request is sent with bad parameters.

Shared field types:
    * :data:`StockTicker`: 1-10 characters.
    * :data:`OptionsTickerStr`: valid OCC ticker (an ``OptionsTicker`` is
      accepted and encoded).
    * :data:`IsoDate`: ``YYYY-MM-DD`` (a ``date`` is accepted and formatted).
    * :data:`TimestampFilter`: date, datetime or nanosecond epoch, rendered
      the way the v3 tick endpoints expect.

Layer:
    application/schemas/requests
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from typing import Annotated, Any, Final

from pydantic import AfterValidator, BeforeValidator, ConfigDict, Field, ValidationError

from polygon_rest.application.schemas.dto.base import BaseDTO
from polygon_rest.domain.enums.market import SortOrder
from polygon_rest.domain.exceptions.polygon import PolygonValidationError, ValidationIssue
from polygon_rest.domain.value_objects.options_ticker import OptionsTicker

_ISO_DATE: Final[re.Pattern[str]] = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

MAX_TICKER_LENGTH: Final[int] = 10


def _to_iso_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def _check_iso_date(value: str) -> str:
    try:
        if _ISO_DATE.fullmatch(value) is None:
            raise ValueError(value)
        date.fromisoformat(value)
    except ValueError:
        raise ValueError("Date must be a valid date in YYYY-MM-DD format.") from None
    return value


def _to_occ(value: Any) -> Any:
    return value.encode() if isinstance(value, OptionsTicker) else value


def _check_occ(value: str) -> str:
    if not OptionsTicker.try_parse(value):
        raise ValueError(
            "Options ticker must be in valid OCC format (e.g., 'O:SPY251219C00650000')."
        )
    return value


def _to_timestamp(value: Any) -> Any:
    if isinstance(value, datetime):
        # Aware datetimes are exact; naive ones are taken as UTC.
        aware = value if value.tzinfo else value.replace(tzinfo=UTC)
        seconds = aware.timestamp()
        return str(int(round(seconds * 1_000_000)) * 1_000)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _check_not_blank(value: str) -> str:
    if not value:
        raise ValueError("Value cannot be empty.")
    return value


IsoDate = Annotated[str, BeforeValidator(_to_iso_date), AfterValidator(_check_iso_date)]
OptionsTickerStr = Annotated[str, BeforeValidator(_to_occ), AfterValidator(_check_occ)]
StockTicker = Annotated[
    str,
    AfterValidator(_check_not_blank),
    Field(max_length=MAX_TICKER_LENGTH),
]
TimestampFilter = Annotated[str, BeforeValidator(_to_timestamp), AfterValidator(_check_not_blank)]
PositiveLimit = Annotated[int, Field(gt=0)]


def _issues_from(exc: ValidationError) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "request"
        ctx = err.get("ctx") or {}
        if err.get("type") == "value_error" and "error" in ctx:
            message = str(ctx["error"])
        else:
            message = err.get("msg", "Invalid value.")
        issues.append(ValidationIssue(field, message, err.get("input")))
    return issues


class BaseRequest(BaseDTO):
    """Base class for endpoint request models.

    Instances are immutable once validated.

    Raises:
        PolygonValidationError: On construction with invalid parameters.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise PolygonValidationError(_issues_from(exc)) from exc


class TimestampRangeRequest(BaseRequest):
    """Common filters of the v3 tick endpoints (trades and quotes)."""

    timestamp: TimestampFilter | None = None
    timestamp_lt: TimestampFilter | None = None
    timestamp_lte: TimestampFilter | None = None
    timestamp_gt: TimestampFilter | None = None
    timestamp_gte: TimestampFilter | None = None
    order: SortOrder | None = None
    limit: PositiveLimit | None = None
    sort: str | None = None
    cursor: str | None = None
