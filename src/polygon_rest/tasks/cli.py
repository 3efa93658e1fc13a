# src/polygon_rest/tasks/cli.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""polygon-rest CLI: OCC ticker codec and quick Polygon.io lookups.

Commands:
    occ encode               Build an OCC options ticker from its components.
    occ decode               Split an OCC options ticker into its components.
    options contract         Show reference data for one options contract.
    options strikes          List the strikes listed for an underlying.
    reference market-status  Show the current market status.

Environment:
    POLYGON_API_KEY   Your API key (online commands only).
    POLYGON_BASE_URL  Defaults to https://api.polygon.io
    LOG_LEVEL         Root log level (defaults to INFO).
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, TypeVar

import typer
from pydantic import BaseModel

from polygon_rest.dependencies.polygon import build_polygon_client
from polygon_rest.domain.enums.options import ContractKind
from polygon_rest.domain.exceptions.options import (
    InvalidOptionsTickerArgument,
    OptionsTickerFormatError,
)
from polygon_rest.domain.exceptions.polygon import PolygonError, PolygonValidationError
from polygon_rest.domain.value_objects.options_ticker import OptionsTicker
from polygon_rest.infrastructure.logging.logger import configure_root_logging, get_json_logger

configure_root_logging()
log = get_json_logger(__name__)

T = TypeVar("T")

# Exit code for malformed user input, matching click's usage errors.
EXIT_INVALID_INPUT = 2

app = typer.Typer(add_completion=False, no_args_is_help=True)
occ_app = typer.Typer(no_args_is_help=True, help="Offline OCC ticker codec.")
options_app = typer.Typer(no_args_is_help=True, help="Options lookups.")
reference_app = typer.Typer(no_args_is_help=True, help="Reference data lookups.")
app.add_typer(occ_app, name="occ")
app.add_typer(options_app, name="options")
app.add_typer(reference_app, name="reference")


def _echo_json(payload: Any) -> None:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", exclude_none=True)
    typer.echo(json.dumps(payload, indent=2, default=str))


def _fail(message: str, code: int) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=code)


def _run(call: Callable[[Any], Awaitable[T]]) -> T:
    """Run ``call(client)`` against a freshly built client and close it."""

    async def _main() -> T:
        async with build_polygon_client() as client:
            return await call(client)

    try:
        return asyncio.run(_main())
    except PolygonValidationError as exc:
        raise _fail(str(exc), EXIT_INVALID_INPUT) from exc
    except PolygonError as exc:
        log.error("cli.polygon_error", extra={"code": exc.code, "details": exc.details})
        raise _fail(str(exc), 1) from exc


def _ticker_payload(ticker: OptionsTicker) -> dict[str, Any]:
    return {
        "ticker": ticker.encode(),
        "underlying": ticker.underlying,
        "expiration": ticker.expiration.isoformat(),
        "kind": ticker.kind.value,
        "strike": format(ticker.strike, "f"),
    }


@occ_app.command("encode")
def occ_encode(
    underlying: str = typer.Option(..., help="Underlying symbol (e.g., SPY)."),  # noqa: B008
    expiration: datetime = typer.Option(  # noqa: B008
        ..., formats=["%Y-%m-%d"], help="Expiration date, YYYY-MM-DD."
    ),
    kind: ContractKind = typer.Option(..., help="call or put."),  # noqa: B008
    strike: str = typer.Option(..., help="Strike price (e.g., 650 or 12.5)."),  # noqa: B008
) -> None:
    """Print the OCC ticker for the given components."""
    try:
        ticker = OptionsTicker(underlying, expiration.date(), kind, strike)
    except InvalidOptionsTickerArgument as exc:
        raise _fail(str(exc), EXIT_INVALID_INPUT) from exc
    typer.echo(ticker.encode())


@occ_app.command("decode")
def occ_decode(
    ticker: str = typer.Argument(..., help="OCC ticker, e.g. O:SPY251219C00650000."),  # noqa: B008
) -> None:
    """Print the components of an OCC ticker as JSON."""
    try:
        parsed = OptionsTicker.parse(ticker)
    except OptionsTickerFormatError as exc:
        raise _fail(str(exc), EXIT_INVALID_INPUT) from exc
    _echo_json(_ticker_payload(parsed))


@options_app.command("contract")
def options_contract(ticker: str = typer.Argument(..., help="OCC ticker.")) -> None:  # noqa: B008
    """Show reference data for one options contract."""
    result = OptionsTicker.try_parse(ticker)
    if result.value is None:
        raise _fail(str(result.error), EXIT_INVALID_INPUT)
    parsed = result.value
    response = _run(lambda client: client.options.get_contract_details(options_ticker=parsed))
    _echo_json(response.results if response.results is not None else {})


@options_app.command("strikes")
def options_strikes(
    underlying: str = typer.Argument(..., help="Underlying symbol (e.g., SPY)."),  # noqa: B008
    kind: ContractKind | None = typer.Option(  # noqa: B008
        None, help="call or put (both when omitted)."
    ),
    expires_after: str | None = typer.Option(  # noqa: B008
        None, "--expires-after", help="Only contracts expiring on/after YYYY-MM-DD."
    ),
    expires_before: str | None = typer.Option(  # noqa: B008
        None, "--expires-before", help="Only contracts expiring on/before YYYY-MM-DD."
    ),
) -> None:
    """List the distinct strikes listed for an underlying."""
    strikes = _run(
        lambda client: client.options.get_available_strikes(
            underlying.upper(),
            kind,
            expiration_date_gte=expires_after,
            expiration_date_lte=expires_before,
        )
    )
    _echo_json([format(s, "f") for s in strikes])


@reference_app.command("market-status")
def reference_market_status() -> None:
    """Show the current market status."""
    status = _run(lambda client: client.reference.get_market_status())
    _echo_json(status)


if __name__ == "__main__":
    app()
