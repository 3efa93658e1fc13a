# src/polygon_rest/application/schemas/dto/base.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Base DTOs (Application Layer).

Purpose:
    Canonical Pydantic bases for application-layer DTOs. Transport-agnostic.

    * :class:`BaseDTO`: strict base for models this package owns (requests).
    * :class:`PolygonModel`: lenient, immutable base for upstream payloads;
      unknown keys are ignored so additive API changes never break parsing.

Layer: application/schemas/dto
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseDTO(BaseModel):
    """Base class for application-layer DTOs.

    Notes:
        - Must not import HTTP-specific bases.
        - Enforces strict fields (`extra='forbid'`).
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class PolygonModel(BaseModel):
    """Base class for models parsed from Polygon.io JSON payloads.

    Field names are snake_case; the upstream key (often a single letter) is
    the alias, and either spelling is accepted on input.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )
