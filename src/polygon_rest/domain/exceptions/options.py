# src/polygon_rest/domain/exceptions/options.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Options Ticker Domain Exceptions.

Synopsis:
    Errors raised by the OCC options-ticker codec and its builder. Both derive
    from :class:`ValueError` as well as :class:`DomainError` so plain
    ``except ValueError`` callers keep working.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from typing import Any, Final

from polygon_rest.domain.exceptions.base import DomainError

EXPECTED_OCC_FORMAT: Final[str] = (
    "Expected format: O:[UNDERLYING][YYMMDD][C/P][STRIKE_PRICE_PADDED] "
    "Example: O:UBER220121C00050000"
)


class InvalidOptionsTickerArgument(DomainError, ValueError):
    """A component passed to the options-ticker constructor is invalid.

    Raised for an empty or non-alphabetic underlying, a negative or
    out-of-range strike, or a missing expiration/kind. Values are never
    silently corrected.

    Attributes:
        code: Stable, machine-readable error code.
        field: Name of the offending argument.
    """

    code = "INVALID_OPTIONS_TICKER_ARGUMENT"

    def __init__(self, message: str, *, field: str, value: Any = None) -> None:
        super().__init__(message, details={"field": field, "value": value})
        self.field = field


class OptionsTickerFormatError(DomainError, ValueError):
    """Text handed to the strict decoder is not a valid OCC options ticker.

    Attributes:
        code: Stable, machine-readable error code.
        ticker: The offending input, verbatim.
        expected_format: Human-readable description of the accepted format.
    """

    code = "OPTIONS_TICKER_FORMAT_ERROR"

    def __init__(self, ticker: Any) -> None:
        super().__init__(
            f"The ticker '{ticker}' is not in valid OCC format. {EXPECTED_OCC_FORMAT}",
            details={"ticker": ticker},
        )
        self.ticker = ticker
        self.expected_format = EXPECTED_OCC_FORMAT
