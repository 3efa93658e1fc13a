# src/polygon_rest/infrastructure/external_apis/polygon/base.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Shared plumbing for the Polygon.io endpoint adapters.

Each endpoint adapter turns a validated request model into a path and query
mapping, calls :meth:`PolygonTransport.get_json`, and validates the payload
into a response DTO. Payloads that do not match the DTO raise
:class:`PolygonResponseError`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import TypeAdapter, ValidationError

from polygon_rest.application.schemas.requests.base import TimestampRangeRequest
from polygon_rest.domain.exceptions.polygon import PolygonResponseError
from polygon_rest.infrastructure.external_apis.polygon.client import PolygonTransport

T = TypeVar("T")


@lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def path_segment(value: object) -> str:
    """Percent-encode a path parameter, keeping the OCC ``O:`` prefix readable."""
    return quote(str(value), safe=":")


def range_params(prefix: str, **bounds: Any) -> dict[str, Any]:
    """Map ``gte=...`` style keyword bounds to ``prefix.gte`` query keys.

    Example:
        ``range_params("timestamp", gte="2024-01-02")`` returns
        ``{"timestamp.gte": "2024-01-02"}``.
    """
    return {f"{prefix}.{op}": value for op, value in bounds.items() if value is not None}


def tick_params(request: TimestampRangeRequest) -> dict[str, Any]:
    """Query mapping shared by the v3 trades and quotes endpoints."""
    return {
        "timestamp": request.timestamp,
        **range_params(
            "timestamp",
            lt=request.timestamp_lt,
            lte=request.timestamp_lte,
            gt=request.timestamp_gt,
            gte=request.timestamp_gte,
        ),
        "order": request.order,
        "limit": request.limit,
        "sort": request.sort,
        "cursor": request.cursor,
    }


class PolygonEndpointApi:
    """Base for endpoint adapters bound to one transport."""

    def __init__(self, transport: PolygonTransport) -> None:
        self._transport = transport

    async def _get(
        self,
        op: str,
        path: str,
        target: type[T] | Any,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Fetch ``path`` and validate the body into ``target``.

        Args:
            op: Endpoint label for metrics and logs.
            path: API path.
            target: DTO type (or generic alias such as ``list[X]``).
            params: Query parameters.

        Returns:
            The validated DTO.

        Raises:
            PolygonResponseError: If the payload does not match ``target``.
        """
        payload = await self._transport.get_json(op, path, params)
        try:
            return _adapter(target).validate_python(payload)
        except ValidationError as exc:
            raise PolygonResponseError(
                f"Unexpected response shape from Polygon.io endpoint {path}.",
                details={"endpoint": op, "errors": exc.error_count()},
            ) from exc
