# src/polygon_rest/domain/value_objects/options_ticker.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""OCC Options Ticker Value Object.

Purpose:
    Immutable representation of a listed option contract plus its codec for
    the OCC ticker format used by Polygon.io::

        O:{UNDERLYING}{YYMMDD}{C|P}{STRIKE8}

    ``STRIKE8`` is the strike multiplied by 1000, rounded half-up and
    zero-padded to eight digits. ``O:UBER220121C00050000`` is the UBER call
    expiring 2022-01-21 with a $50 strike.

Design:
    * Every construction path (direct, :meth:`OptionsTicker.parse`, the
      builder) runs the same invariant checks in ``__post_init__``.
    * Two-digit years always decode into the 2000s. Expirations outside
      2000-2099 still encode (year % 100) but decode into the 2000s.
    * Pure and side-effect free; instances are safe to share across tasks.

Layer:
    domain/value_objects
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Final

from polygon_rest.domain.enums.options import ContractKind
from polygon_rest.domain.exceptions.options import (
    InvalidOptionsTickerArgument,
    OptionsTickerFormatError,
)

__all__ = ["OCC_PREFIX", "OptionsTicker", "OptionsTickerParseResult"]

OCC_PREFIX: Final[str] = "O:"

_OCC_PATTERN: Final[re.Pattern[str]] = re.compile(r"O:([A-Za-z]+)([0-9]{6})([CP])([0-9]{8})")
_UNDERLYING_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z]+")
_STRIKE_SCALE: Final[Decimal] = Decimal(1000)
_MAX_STRIKE_FIELD: Final[int] = 99_999_999
_STRIKE_LIMIT: Final[Decimal] = Decimal(100_000)
_CENTURY: Final[int] = 2000


def _strike_field(strike: Decimal) -> int:
    """Return the integer encoded into the 8-digit strike field."""
    return int((strike * _STRIKE_SCALE).to_integral_value(rounding=ROUND_HALF_UP))


def _coerce_strike(value: Any) -> Decimal:
    if value is None:
        raise InvalidOptionsTickerArgument("Strike price is required.", field="strike")
    if isinstance(value, bool):
        raise InvalidOptionsTickerArgument(
            "Strike price must be a number.", field="strike", value=value
        )
    try:
        if isinstance(value, Decimal):
            strike = value
        elif isinstance(value, int):
            strike = Decimal(value)
        elif isinstance(value, float | str):
            strike = Decimal(str(value).strip())
        else:
            raise TypeError(type(value).__name__)
    except (InvalidOperation, TypeError) as exc:
        raise InvalidOptionsTickerArgument(
            "Strike price must be a number.", field="strike", value=value
        ) from exc

    if not strike.is_finite():
        raise InvalidOptionsTickerArgument(
            "Strike price must be a finite number.", field="strike", value=value
        )
    if strike < 0:
        raise InvalidOptionsTickerArgument(
            "Strike price cannot be negative.", field="strike", value=value
        )
    if strike >= _STRIKE_LIMIT or _strike_field(strike) > _MAX_STRIKE_FIELD:
        raise InvalidOptionsTickerArgument(
            "Strike price cannot exceed 99999.999.", field="strike", value=value
        )
    return strike


def _coerce_expiration(value: Any) -> date:
    # datetime is a date subclass; check it first so the time part is dropped.
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise InvalidOptionsTickerArgument(
            "Expiration date is required.", field="expiration", value=value
        )
    return value


def _coerce_kind(value: Any) -> ContractKind:
    if isinstance(value, ContractKind):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text in ("C", "P"):
            return ContractKind.from_occ_code(text)
        try:
            return ContractKind(text.lower())
        except ValueError:
            pass
    raise InvalidOptionsTickerArgument(
        "Contract type must be a call or a put.", field="kind", value=value
    )


def _coerce_underlying(value: Any) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidOptionsTickerArgument(
            "Underlying ticker symbol cannot be null or empty.",
            field="underlying",
            value=value,
        )
    if not isinstance(value, str) or _UNDERLYING_PATTERN.fullmatch(value) is None:
        raise InvalidOptionsTickerArgument(
            "Underlying ticker symbol must contain only letters.",
            field="underlying",
            value=value,
        )
    return value.upper()


@dataclass(frozen=True, slots=True)
class OptionsTicker:
    """An option contract identified by the OCC ticker format.

    Attributes:
        underlying:
            Upper-case underlying symbol (letters only; input is
            case-insensitive).
        expiration:
            Expiration calendar date. A ``datetime`` is truncated to its date.
        kind:
            :class:`ContractKind` (``"call"``/``"put"``/``"C"``/``"P"`` are
            accepted and normalized).
        strike:
            Non-negative strike as :class:`~decimal.Decimal`; ints, floats and
            numeric strings are coerced.

    Raises:
        InvalidOptionsTickerArgument:
            If any component violates the invariants above.
    """

    underlying: str
    expiration: date
    kind: ContractKind
    strike: Decimal

    def __post_init__(self) -> None:
        """Validate and normalize every component."""
        object.__setattr__(self, "underlying", _coerce_underlying(self.underlying))
        object.__setattr__(self, "expiration", _coerce_expiration(self.expiration))
        object.__setattr__(self, "kind", _coerce_kind(self.kind))
        object.__setattr__(self, "strike", _coerce_strike(self.strike))

    # ------------------------------------------------------------------ #
    # Encoding                                                           #
    # ------------------------------------------------------------------ #
    def encode(self) -> str:
        """Return the OCC ticker string (``O:UBER220121C00050000``)."""
        return OCC_PREFIX + self.occ_symbol

    @property
    def occ_symbol(self) -> str:
        """OCC symbol without the ``O:`` prefix (``UBER220121C00050000``)."""
        exp = self.expiration
        return (
            f"{self.underlying}"
            f"{exp.year % 100:02d}{exp.month:02d}{exp.day:02d}"
            f"{self.kind.occ_code}"
            f"{_strike_field(self.strike):08d}"
        )

    @property
    def is_call(self) -> bool:
        return self.kind is ContractKind.CALL

    @property
    def is_put(self) -> bool:
        return self.kind is ContractKind.PUT

    def __str__(self) -> str:
        return self.encode()

    @classmethod
    def create(
        cls,
        underlying: str,
        expiration: date,
        kind: ContractKind | str,
        strike: Decimal | int | float | str,
    ) -> str:
        """Validate the components and return the encoded ticker in one step.

        Raises:
            InvalidOptionsTickerArgument: If any component is invalid.
        """
        return cls(underlying, expiration, kind, strike).encode()  # type: ignore[arg-type]

    # ------------------------------------------------------------------ #
    # Decoding                                                           #
    # ------------------------------------------------------------------ #
    @classmethod
    def parse(cls, text: str) -> OptionsTicker:
        """Decode an OCC ticker string.

        The whole input must match; leading or trailing characters (including
        a trailing newline) are rejected. Letters in the underlying are
        accepted in any case and normalized to upper case.

        Args:
            text: Ticker such as ``"O:SPY251219C00650000"``.

        Returns:
            OptionsTicker: The decoded contract.

        Raises:
            OptionsTickerFormatError: If ``text`` is not a valid OCC ticker or
                names an impossible calendar date.
        """
        ticker = cls._decode(text)
        if ticker is None:
            raise OptionsTickerFormatError(text)
        return ticker

    @classmethod
    def try_parse(cls, text: Any) -> OptionsTickerParseResult:
        """Decode without raising.

        Args:
            text: Candidate ticker; non-string input is reported as a failure.

        Returns:
            OptionsTickerParseResult: Truthy with ``value`` set on success,
            falsy with ``error`` set otherwise.
        """
        ticker = cls._decode(text)
        if ticker is None:
            return OptionsTickerParseResult(error=str(OptionsTickerFormatError(text)))
        return OptionsTickerParseResult(value=ticker)

    @classmethod
    def _decode(cls, text: Any) -> OptionsTicker | None:
        if not isinstance(text, str):
            return None
        match = _OCC_PATTERN.fullmatch(text)
        if match is None:
            return None
        underlying, yymmdd, type_code, strike_digits = match.groups()
        try:
            expiration = date(
                _CENTURY + int(yymmdd[0:2]),
                int(yymmdd[2:4]),
                int(yymmdd[4:6]),
            )
        except ValueError:
            return None
        return cls(
            underlying,
            expiration,
            ContractKind.from_occ_code(type_code),
            Decimal(int(strike_digits)) / _STRIKE_SCALE,
        )


@dataclass(frozen=True, slots=True)
class OptionsTickerParseResult:
    """Outcome of :meth:`OptionsTicker.try_parse`.

    Attributes:
        value: The decoded ticker on success, else ``None``.
        error: Failure description on failure, else ``None``.
    """

    value: OptionsTicker | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.value is not None

    def __bool__(self) -> bool:
        return self.success
