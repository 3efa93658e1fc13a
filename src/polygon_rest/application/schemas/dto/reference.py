# src/polygon_rest/application/schemas/dto/reference.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Reference data DTOs (tickers, exchanges, conditions, market status).

Layer:
    application/schemas/dto
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from polygon_rest.application.schemas.dto.base import PolygonModel


class TickerInfo(PolygonModel):
    """A ticker as returned by the tickers list and ticker details endpoints.

    The list endpoint fills the core identification fields; the details
    endpoint adds the company profile fields (description, market cap...).
    """

    ticker: str | None = None
    name: str | None = None
    market: str | None = None
    locale: str | None = None
    primary_exchange: str | None = None
    type: str | None = None
    active: bool | None = None
    currency_name: str | None = None
    cik: str | None = None
    composite_figi: str | None = None
    share_class_figi: str | None = None
    last_updated_utc: str | None = None
    delisted_utc: str | None = None
    # Details-only fields.
    description: str | None = None
    homepage_url: str | None = None
    list_date: str | None = None
    market_cap: Decimal | None = None
    phone_number: str | None = None
    round_lot: int | None = None
    share_class_shares_outstanding: int | None = None
    sic_code: str | None = None
    sic_description: str | None = None
    ticker_root: str | None = None
    total_employees: int | None = None
    weighted_shares_outstanding: int | None = None


class CurrencyMarketsStatus(PolygonModel):
    fx: str | None = None
    crypto: str | None = None


class ExchangesStatus(PolygonModel):
    nyse: str | None = None
    nasdaq: str | None = None
    otc: str | None = None


class IndicesGroupsStatus(PolygonModel):
    s_and_p: str | None = None
    societe_generale: str | None = None
    msci: str | None = None
    ftse_russell: str | None = None
    mstar: str | None = None
    mstarc: str | None = None
    cccy: str | None = None
    cgi: str | None = None
    nasdaq: str | None = None
    dow_jones: str | None = None
    ice: str | None = None


class MarketStatus(PolygonModel):
    """Current trading status (``/v1/marketstatus/now``).

    Attributes:
        after_hours: Whether the market is in post-market hours.
        early_hours: Whether the market is in pre-market hours.
        market: Overall status (``"open"``, ``"closed"``, ``"extended-hours"``).
        server_time: Server time, RFC 3339.
        currencies: FX and crypto market status.
        exchanges: Status per US exchange.
        indices_groups: Status per index family.
    """

    after_hours: bool | None = Field(default=None, alias="afterHours")
    early_hours: bool | None = Field(default=None, alias="earlyHours")
    market: str | None = None
    server_time: str | None = Field(default=None, alias="serverTime")
    currencies: CurrencyMarketsStatus | None = None
    exchanges: ExchangesStatus | None = None
    indices_groups: IndicesGroupsStatus | None = Field(default=None, alias="indicesGroups")

    @property
    def is_open(self) -> bool:
        return self.market == "open"

    @property
    def server_datetime(self) -> datetime | None:
        """:attr:`server_time` parsed to an aware datetime, if present."""
        return datetime.fromisoformat(self.server_time) if self.server_time else None


class MarketHoliday(PolygonModel):
    """Upcoming holiday or early close (``/v1/marketstatus/upcoming``)."""

    date: str | None = None
    exchange: str | None = None
    name: str | None = None
    status: str | None = None
    open: str | None = None
    close: str | None = None


class TickerType(PolygonModel):
    code: str | None = None
    description: str | None = None
    asset_class: str | None = None
    locale: str | None = None


class SipMapping(PolygonModel):
    """Name of a condition on each SIP feed."""

    cta: str | None = Field(default=None, alias="CTA")
    utp: str | None = Field(default=None, alias="UTP")
    finra_tdds: str | None = Field(default=None, alias="FINRA_TDDS")


class UpdateRule(PolygonModel):
    updates_high_low: bool | None = None
    updates_open_close: bool | None = None
    updates_volume: bool | None = None


class UpdateRules(PolygonModel):
    consolidated: UpdateRule | None = None
    market_center: UpdateRule | None = None


class ConditionCode(PolygonModel):
    """Trade/quote condition definition (``/v3/reference/conditions``)."""

    id: int | None = None
    type: str | None = None
    name: str | None = None
    abbreviation: str | None = None
    description: str | None = None
    asset_class: str | None = None
    sip_mapping: SipMapping | None = None
    update_rules: UpdateRules | None = None
    data_types: list[str] | None = None
    exchange: int | None = None
    legacy: bool | None = None


class Exchange(PolygonModel):
    """Exchange or trade reporting facility (``/v3/reference/exchanges``)."""

    id: int | None = None
    type: str | None = None
    asset_class: str | None = None
    locale: str | None = None
    name: str | None = None
    acronym: str | None = None
    mic: str | None = None
    operating_mic: str | None = None
    participant_id: str | None = None
    url: str | None = None
