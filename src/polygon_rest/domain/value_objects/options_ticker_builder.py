# src/polygon_rest/domain/value_objects/options_ticker_builder.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Fluent builder for OCC options tickers.

Usage:
    ticker = (
        OptionsTickerBuilder()
        .with_underlying("SPY")
        .with_expiration(2025, 12, 19)
        .as_call()
        .with_strike(650)
        .build()
    )
    # "O:SPY251219C00650000"

Setters never validate; every check happens once, in :class:`OptionsTicker`,
when :meth:`OptionsTickerBuilder.build` or
:meth:`OptionsTickerBuilder.build_ticker` is called. A builder is meant for a
single owner and is not safe to share between tasks.

Layer:
    domain/value_objects
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Self

from polygon_rest.domain.enums.options import ContractKind
from polygon_rest.domain.exceptions.options import InvalidOptionsTickerArgument
from polygon_rest.domain.value_objects.options_ticker import OptionsTicker


class OptionsTickerBuilder:
    """Accumulates the four components of an :class:`OptionsTicker`."""

    def __init__(self) -> None:
        self._underlying: str | None = None
        self._expiration: date | tuple[int, int, int] | None = None
        self._kind: ContractKind | str | None = None
        self._strike: Decimal | int | float | str | None = None

    def with_underlying(self, underlying: str) -> Self:
        self._underlying = underlying
        return self

    def with_expiration(
        self,
        expiration: date | datetime | int,
        month: int | None = None,
        day: int | None = None,
    ) -> Self:
        """Set the expiration from a date or from calendar components.

        Args:
            expiration: A ``date``/``datetime``, or the year when ``month`` and
                ``day`` are also given.
            month: Calendar month (1-12) when passing components.
            day: Day of month when passing components.

        Returns:
            Self: The builder, for chaining.
        """
        if month is not None or day is not None:
            self._expiration = (expiration, month, day)  # type: ignore[assignment]
        else:
            self._expiration = expiration  # type: ignore[assignment]
        return self

    def as_call(self) -> Self:
        self._kind = ContractKind.CALL
        return self

    def as_put(self) -> Self:
        self._kind = ContractKind.PUT
        return self

    def with_kind(self, kind: ContractKind | str) -> Self:
        self._kind = kind
        return self

    def with_strike(self, strike: Decimal | int | float | str) -> Self:
        self._strike = strike
        return self

    def reset(self) -> Self:
        """Clear every component so the builder can be reused."""
        self._underlying = None
        self._expiration = None
        self._kind = None
        self._strike = None
        return self

    def build_ticker(self) -> OptionsTicker:
        """Validate the accumulated components and return the value object.

        The builder keeps its state; call :meth:`reset` to start over.

        Raises:
            InvalidOptionsTickerArgument: If a component is missing or invalid.
        """
        return OptionsTicker(
            self._underlying,  # type: ignore[arg-type]
            self._resolve_expiration(),  # type: ignore[arg-type]
            self._kind,  # type: ignore[arg-type]
            self._strike,  # type: ignore[arg-type]
        )

    def build(self) -> str:
        """Validate the accumulated components and return the OCC string.

        Raises:
            InvalidOptionsTickerArgument: If a component is missing or invalid.
        """
        return self.build_ticker().encode()

    def _resolve_expiration(self) -> Any:
        if not isinstance(self._expiration, tuple):
            return self._expiration
        year, month, day = self._expiration
        try:
            return date(int(year), int(month), int(day))
        except (TypeError, ValueError) as exc:
            raise InvalidOptionsTickerArgument(
                f"Invalid expiration date components: {year}-{month}-{day}.",
                field="expiration",
                value=self._expiration,
            ) from exc
