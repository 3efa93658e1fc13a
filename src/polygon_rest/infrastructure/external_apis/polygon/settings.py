# src/polygon_rest/infrastructure/external_apis/polygon/settings.py
# Copyright (c)
# SPDX-License-Identifier: MIT
"""Pydantic settings for the Polygon.io transport client."""

from __future__ import annotations

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PolygonSettings(BaseSettings):
    """Configuration for the Polygon.io REST client.

    Environment variables (with ``model_config.env_prefix``):

    * ``POLYGON_API_KEY``
    * ``POLYGON_BASE_URL``
    * ``POLYGON_TIMEOUT_S``
    * ``POLYGON_MAX_RETRIES``
    * ``POLYGON_RETRY_DELAY_S`` / ``POLYGON_RETRY_MAX_DELAY_S``
    * ``POLYGON_BREAKER_FAILURE_THRESHOLD`` / ``POLYGON_BREAKER_RECOVERY_TIMEOUT_S``
    """

    api_key: SecretStr = Field(
        ...,
        description="Polygon.io API key, sent as a bearer token.",
    )
    base_url: str = Field(
        "https://api.polygon.io",
        description="Base URL for the Polygon.io REST API.",
    )
    timeout_s: float = Field(
        30.0,
        gt=0,
        description="Per-request timeout in seconds.",
    )
    max_retries: int = Field(
        3,
        ge=0,
        description="Maximum number of retry attempts for retryable failures.",
    )
    retry_delay_s: float = Field(
        1.0,
        gt=0,
        description="Base delay of the exponential backoff in seconds.",
    )
    retry_max_delay_s: float = Field(
        10.0,
        gt=0,
        description="Upper bound of a single backoff sleep in seconds.",
    )
    breaker_failure_threshold: int = Field(
        5,
        ge=1,
        description="Consecutive failures before the circuit opens.",
    )
    breaker_recovery_timeout_s: float = Field(
        30.0,
        gt=0,
        description="Seconds the circuit stays open before a probe call.",
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="POLYGON_",
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
