# src/polygon_rest/application/services/polygon_client.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Polygon.io client facade.

Purpose:
    Single object grouping the three services. Build one with
    :func:`polygon_rest.dependencies.polygon.build_polygon_client`, use it as
    an async context manager (or call :meth:`PolygonClient.aclose`) so the
    underlying HTTP connection pool is released.

Layer:
    application/services
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Self

from polygon_rest.application.services.options_service import OptionsService
from polygon_rest.application.services.reference_data_service import ReferenceDataService
from polygon_rest.application.services.stocks_service import StocksService


class PolygonClient:
    """Entry point exposing ``stocks``, ``options`` and ``reference`` services."""

    def __init__(
        self,
        *,
        stocks: StocksService,
        options: OptionsService,
        reference: ReferenceDataService,
        on_close: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            stocks: Stocks service.
            options: Options service.
            reference: Reference data service.
            on_close: Coroutine releasing shared resources (HTTP pool).
        """
        self.stocks = stocks
        self.options = options
        self.reference = reference
        self._on_close = on_close

    async def aclose(self) -> None:
        """Release the resources owned by this client."""
        if self._on_close is not None:
            await self._on_close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
