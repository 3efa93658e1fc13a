# src/polygon_rest/application/schemas/dto/options.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Options DTOs.

Synopsis:
    Contract reference data and snapshot payloads returned by the options
    endpoints. Bars, trades and quotes reuse the shared shapes in
    :mod:`polygon_rest.application.schemas.dto.market`.

Layer:
    application/schemas/dto
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from polygon_rest.application.schemas.dto.base import PolygonModel
from polygon_rest.application.schemas.dto.common import Volume, from_epoch_ns
from polygon_rest.domain.value_objects.options_ticker import OptionsTicker


class OptionsContract(PolygonModel):
    """Reference data for a single options contract.

    Attributes:
        cfi: ISO 10962 Classification of Financial Instruments code.
        contract_type: ``"call"`` or ``"put"``.
        exercise_style: ``"american"``, ``"european"`` or ``"bermudan"``.
        expiration_date: ``YYYY-MM-DD``.
        primary_exchange: MIC of the primary listing exchange.
        shares_per_contract: Deliverable shares per contract.
        strike_price: Strike price.
        ticker: OCC ticker (``O:...``).
        underlying_ticker: Underlying symbol.
    """

    cfi: str | None = None
    contract_type: str | None = None
    exercise_style: str | None = None
    expiration_date: str | None = None
    primary_exchange: str | None = None
    shares_per_contract: int | None = None
    strike_price: Decimal | None = None
    ticker: str | None = None
    underlying_ticker: str | None = None

    @property
    def expiration(self) -> date | None:
        """Parsed :attr:`expiration_date`, if present."""
        return date.fromisoformat(self.expiration_date) if self.expiration_date else None

    def to_options_ticker(self) -> OptionsTicker | None:
        """Decode :attr:`ticker`; ``None`` when absent or not OCC-formatted."""
        return OptionsTicker.try_parse(self.ticker).value


class OptionDayData(PolygonModel):
    change: Decimal | None = None
    change_percent: Decimal | None = None
    close: Decimal | None = None
    high: Decimal | None = None
    last_updated: int | None = None
    low: Decimal | None = None
    open: Decimal | None = None
    previous_close: Decimal | None = None
    volume: Volume | None = None
    vwap: Decimal | None = None


class OptionContractDetails(PolygonModel):
    contract_type: str | None = None
    exercise_style: str | None = None
    expiration_date: str | None = None
    shares_per_contract: int | None = None
    strike_price: Decimal | None = None
    ticker: str | None = None

    @property
    def expiration(self) -> date | None:
        return date.fromisoformat(self.expiration_date) if self.expiration_date else None


class OptionGreeks(PolygonModel):
    delta: Decimal | None = None
    gamma: Decimal | None = None
    theta: Decimal | None = None
    vega: Decimal | None = None


class OptionLastQuote(PolygonModel):
    ask: Decimal | None = None
    ask_size: int | None = None
    ask_exchange: int | None = None
    bid: Decimal | None = None
    bid_size: int | None = None
    bid_exchange: int | None = None
    last_updated: int | None = None
    midpoint: Decimal | None = None
    timeframe: str | None = None


class OptionLastTrade(PolygonModel):
    sip_timestamp: int | None = None
    conditions: list[int] | None = None
    price: Decimal | None = None
    size: int | None = None
    exchange: int | None = None
    timeframe: str | None = None

    @property
    def market_timestamp(self) -> datetime | None:
        return from_epoch_ns(self.sip_timestamp)


class OptionUnderlyingAsset(PolygonModel):
    change_to_break_even: Decimal | None = None
    last_updated: int | None = None
    price: Decimal | None = None
    ticker: str | None = None
    timeframe: str | None = None


class OptionSnapshot(PolygonModel):
    """Point-in-time view of one options contract.

    Attributes:
        break_even_price: Price the underlying must reach to break even.
        day: Current session OHLCV.
        details: Contract terms.
        greeks: Delta/gamma/theta/vega (absent for deep ITM/OTM contracts).
        implied_volatility: Implied volatility.
        last_quote: Latest NBBO.
        last_trade: Latest trade.
        open_interest: Open contracts.
        underlying_asset: Underlying pricing context.
    """

    break_even_price: Decimal | None = None
    day: OptionDayData | None = None
    details: OptionContractDetails | None = None
    greeks: OptionGreeks | None = None
    implied_volatility: Decimal | None = None
    last_quote: OptionLastQuote | None = None
    last_trade: OptionLastTrade | None = None
    open_interest: int | None = None
    underlying_asset: OptionUnderlyingAsset | None = None
