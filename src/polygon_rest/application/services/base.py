# src/polygon_rest/application/services/base.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Helpers shared by the endpoint services."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from polygon_rest.application.schemas.requests.base import BaseRequest

RequestT = TypeVar("RequestT", bound=BaseRequest)


def resolve_request(
    request_type: type[RequestT],
    request: RequestT | None,
    params: Mapping[str, Any],
) -> RequestT:
    """Return ``request`` or build one of ``request_type`` from keyword params.

    Service methods accept either a request model or the same fields as
    keyword arguments; mixing the two is ambiguous and rejected.

    Raises:
        TypeError: If both a request object and keyword params are given, or
            the request has the wrong type.
        PolygonValidationError: If building from ``params`` fails validation.
    """
    if request is None:
        return request_type(**params)
    if params:
        raise TypeError("Pass either a request object or keyword parameters, not both.")
    if not isinstance(request, request_type):
        raise TypeError(
            f"Expected {request_type.__name__}, got {type(request).__name__}."
        )
    return request
