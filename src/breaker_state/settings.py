from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from breaker_state.breaker import CircuitBreaker, CircuitBreakerConfig
from breaker_state.logging import get_log_level_value

DEFAULT_ENV_PREFIX = "CIRCUIT_BREAKER_"


def prefixed_settings_config(prefix: str) -> SettingsConfigDict:
    """Build standard Pydantic settings config for prefixed environments."""
    return SettingsConfigDict(env_prefix=prefix, case_sensitive=False)


class BreakerSettings(BaseSettings):
    """Environment-driven breaker thresholds, read from ``CIRCUIT_BREAKER_*``."""

    model_config = prefixed_settings_config(DEFAULT_ENV_PREFIX)

    name: str = "default"
    max_failures: int = Field(default=3, ge=1)
    reset_timeout_ms: int = Field(default=10_000, ge=0)
    log_level: str = "INFO"

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        normalized = value.strip()
        if not normalized:
            raise ValueError("name must be non-empty")
        return normalized

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            get_log_level_value(value)
            return value.strip().upper()
        return value

    def breaker_config(self) -> CircuitBreakerConfig:
        """Build the breaker configuration these settings describe."""
        return CircuitBreakerConfig(
            max_failures=self.max_failures,
            reset_timeout=self.reset_timeout_ms,
        )


def create_breaker_from_settings(
    settings: BreakerSettings | None = None,
    **kwargs: Any,
) -> CircuitBreaker:
    """Build a breaker from settings, loading them from the environment if omitted.

    Extra keyword arguments (``clock``, ``logger``, ``listeners``) are forwarded
    to ``CircuitBreaker``.
    """
    resolved = BreakerSettings() if settings is None else settings
    return CircuitBreaker(resolved.name, config=resolved.breaker_config(), **kwargs)
