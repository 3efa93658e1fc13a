# src/polygon_rest/domain/exceptions/polygon.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Polygon.io Client Exceptions.

Synopsis:
    Error family raised by the REST client. Everything derives from
    :class:`PolygonError`, so callers may catch the whole family or branch on
    the concrete type:

    * :class:`PolygonApiError`: upstream answered with a non-success status.
    * :class:`PolygonHttpError`: the request never produced a response
      (network failure, timeout, open circuit).
    * :class:`PolygonValidationError`: request parameters were rejected
      locally before any I/O.
    * :class:`PolygonResponseError`: upstream payload is not JSON or does not
      match the documented schema.
    * :class:`PolygonConfigurationError`: the client is mis-configured.

Design:
    * Messages are safe to surface; the API key is never part of them.
    * HTTP details are carried as plain attributes (status code, URL path and
      query, raw body) so this module stays transport-agnostic.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from polygon_rest.domain.exceptions.base import DomainError


class PolygonError(DomainError):
    """Root of every error raised while talking to Polygon.io."""

    code = "POLYGON_ERROR"


class PolygonConfigurationError(PolygonError):
    """Client configuration is missing or invalid (e.g. no API key)."""

    code = "POLYGON_CONFIGURATION_ERROR"


class PolygonResponseError(PolygonError):
    """Upstream returned an unexpected or invalid payload shape.

    Indicates a non-JSON body or schema drift.
    """

    code = "UPSTREAM_SCHEMA_ERROR"


def _api_error_message(status_code: int, reason: str, request_url: str) -> str:
    """Return the status-specific message for a non-success response."""
    if status_code == 401:
        return (
            "API authentication failed (401 Unauthorized). "
            f"Please verify your API key is valid. Endpoint: {request_url}"
        )
    if status_code == 403:
        return (
            "API access forbidden (403 Forbidden). Your API key may not have "
            f"permission to access this data. Endpoint: {request_url}"
        )
    if status_code == 404:
        return (
            "API resource not found (404 Not Found). The requested ticker or "
            f"endpoint may be invalid. Endpoint: {request_url}"
        )
    if status_code == 429:
        return (
            "API rate limit exceeded (429 Too Many Requests). "
            f"Please reduce request frequency. Endpoint: {request_url}"
        )
    if status_code >= 500:
        return f"Polygon.io API server error ({status_code} {reason}). Endpoint: {request_url}"
    return f"Polygon.io API error ({status_code} {reason}). Endpoint: {request_url}"


class PolygonApiError(PolygonError):
    """Polygon.io answered with a non-success HTTP status.

    Attributes:
        status_code: HTTP status code returned by the API.
        reason: HTTP reason phrase (``"Unknown error"`` when absent).
        request_url: Path and query of the failing request.
        response_content: Raw response body, if any.
    """

    code = "POLYGON_API_ERROR"

    def __init__(
        self,
        status_code: int,
        *,
        request_url: str = "unknown endpoint",
        reason: str | None = None,
        response_content: str | None = None,
    ) -> None:
        self.status_code = int(status_code)
        self.reason = reason or "Unknown error"
        self.request_url = request_url
        self.response_content = response_content
        super().__init__(
            _api_error_message(self.status_code, self.reason, request_url),
            details={"status": self.status_code, "endpoint": request_url},
        )

    @property
    def is_unauthorized(self) -> bool:
        """True for 401 responses (invalid or missing API key)."""
        return self.status_code == 401

    @property
    def is_forbidden(self) -> bool:
        """True for 403 responses (plan does not cover the resource)."""
        return self.status_code == 403

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600


class PolygonHttpError(PolygonError):
    """The request failed before an HTTP response was received.

    Attributes:
        is_timeout: True when the failure was a timeout.
    """

    code = "POLYGON_HTTP_ERROR"

    def __init__(
        self,
        message: str,
        *,
        is_timeout: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.is_timeout = is_timeout

    @classmethod
    def from_request_error(cls, exc: BaseException) -> PolygonHttpError:
        """Wrap a network-level failure.

        Args:
            exc: The underlying transport exception.

        Returns:
            PolygonHttpError: Non-timeout error with the original message.
        """
        return cls(
            "Network error occurred while communicating with Polygon.io API. "
            "Please check your internet connection and try again. "
            f"Details: {exc}",
            details={"error": type(exc).__name__},
        )

    @classmethod
    def from_timeout(cls, exc: BaseException | None = None) -> PolygonHttpError:
        """Wrap a timeout.

        Args:
            exc: The underlying timeout exception, if any.

        Returns:
            PolygonHttpError: Error flagged with ``is_timeout=True``.
        """
        return cls(
            "Request to Polygon.io API timed out. "
            "The server may be experiencing high load or your connection may be slow. "
            "Please try again later or increase the timeout configuration.",
            is_timeout=True,
            details={"error": type(exc).__name__} if exc is not None else None,
        )

    @classmethod
    def circuit_open(cls, state: str) -> PolygonHttpError:
        """Signal that the circuit breaker short-circuited the call."""
        return cls(
            f"Polygon.io requests are temporarily suspended (circuit {state}).",
            details={"breaker_state": state},
        )


class ValidationSeverity(str, Enum):
    """Severity of a single validation issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single rejected request parameter.

    Attributes:
        field: Name of the offending request field.
        message: Human-readable description of the rule that failed.
        attempted_value: The value that was rejected.
        severity: Issue severity (``error`` for anything that blocks a call).
    """

    field: str
    message: str
    attempted_value: Any = None
    severity: ValidationSeverity = ValidationSeverity.ERROR

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class PolygonValidationError(PolygonError):
    """Request parameters failed local validation; no request was sent.

    Attributes:
        errors: Every issue found, in field order.
    """

    code = "POLYGON_VALIDATION_ERROR"

    def __init__(self, errors: Sequence[ValidationIssue]) -> None:
        self.errors: tuple[ValidationIssue, ...] = tuple(errors)
        super().__init__(
            self._build_message(self.errors),
            details={"errors": [{"field": e.field, "message": e.message} for e in self.errors]},
        )

    @staticmethod
    def _build_message(errors: Sequence[ValidationIssue]) -> str:
        if not errors:
            return "Request validation failed."
        joined = "; ".join(str(e) for e in errors)
        if len(errors) == 1:
            return f"Request validation failed: {joined}"
        return f"Request validation failed with {len(errors)} errors: {joined}"
