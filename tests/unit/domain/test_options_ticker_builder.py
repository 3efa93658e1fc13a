from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from polygon_rest.domain.enums.options import ContractKind
from polygon_rest.domain.exceptions.options import InvalidOptionsTickerArgument
from polygon_rest.domain.value_objects.options_ticker_builder import OptionsTickerBuilder


def test_builder_matches_direct_construction() -> None:
    ticker = (
        OptionsTickerBuilder()
        .with_underlying("uber")
        .with_expiration(date(2022, 1, 21))
        .as_call()
        .with_strike(50)
        .build()
    )
    assert ticker == "O:UBER220121C00050000"


def test_builder_accepts_date_components() -> None:
    ticker = (
        OptionsTickerBuilder()
        .with_underlying("TSLA")
        .with_expiration(2026, 1, 16)
        .as_put()
        .with_strike("250")
        .build_ticker()
    )
    assert ticker.expiration == date(2026, 1, 16)
    assert ticker.kind is ContractKind.PUT
    assert ticker.strike == Decimal("250")


def test_with_kind_accepts_strings() -> None:
    builder = OptionsTickerBuilder().with_underlying("SPY").with_expiration(date(2025, 12, 19))
    assert builder.with_kind("put").with_strike(1).build().endswith("P00001000")
    assert builder.with_kind(ContractKind.CALL).build().endswith("C00001000")


def test_last_setter_wins() -> None:
    ticker = (
        OptionsTickerBuilder()
        .with_underlying("SPY")
        .with_expiration(date(2025, 12, 19))
        .as_call()
        .as_put()
        .with_strike(1)
        .with_strike(2)
        .build_ticker()
    )
    assert ticker.is_put
    assert ticker.strike == Decimal("2")


def test_build_keeps_state_and_reset_clears_it() -> None:
    builder = (
        OptionsTickerBuilder()
        .with_underlying("SPY")
        .with_expiration(date(2025, 12, 19))
        .as_call()
        .with_strike(650)
    )
    assert builder.build() == builder.build()

    builder.reset()
    with pytest.raises(InvalidOptionsTickerArgument) as info:
        builder.build()
    assert info.value.field == "underlying"


@pytest.mark.parametrize(
    ("missing", "field"),
    [
        ("underlying", "underlying"),
        ("expiration", "expiration"),
        ("kind", "kind"),
        ("strike", "strike"),
    ],
)
def test_missing_component_is_reported(missing: str, field: str) -> None:
    builder = OptionsTickerBuilder()
    if missing != "underlying":
        builder.with_underlying("SPY")
    if missing != "expiration":
        builder.with_expiration(date(2025, 12, 19))
    if missing != "kind":
        builder.as_call()
    if missing != "strike":
        builder.with_strike(650)

    with pytest.raises(InvalidOptionsTickerArgument) as info:
        builder.build()
    assert info.value.field == field


def test_invalid_date_components() -> None:
    builder = (
        OptionsTickerBuilder()
        .with_underlying("SPY")
        .with_expiration(2025, 2, 30)
        .as_call()
        .with_strike(1)
    )
    with pytest.raises(InvalidOptionsTickerArgument) as info:
        builder.build()
    assert info.value.field == "expiration"
