"""
Configuration management for hookwise.

Handles loading signing secrets and server settings from environment
variables and validation.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from hookwise.core.exceptions import ConfigurationError

PROVIDER_RESEND = "resend"
PROVIDER_STRIPE = "stripe"
PROVIDERS = (PROVIDER_RESEND, PROVIDER_STRIPE)

# Stripe's recommended ceiling for webhook bodies
DEFAULT_MAX_BODY_BYTES = 65536
DEFAULT_STRIPE_TOLERANCE = 300


def _get_env_var(name: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.environ.get(name, default)


def _get_secret(*names: str) -> str | None:
    """Return the first non-blank secret among ``names``, stripped of whitespace."""
    for name in names:
        value = (_get_env_var(name) or "").strip()
        if value:
            return value
    return None


def _get_bool(name: str, default: bool = False) -> bool:
    value = _get_env_var(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _get_int(name: str, default: int) -> int:
    value = _get_env_var(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def _split_csv(value: str | None) -> tuple[str, ...] | None:
    if value is None or not value.strip():
        return None
    return tuple(item.strip() for item in value.split(",") if item.strip())


def stripe_families_from_env() -> tuple[str, ...] | None:
    """Stripe families named in HOOKWISE_STRIPE_FAMILIES, or None for all."""
    return _split_csv(_get_env_var("HOOKWISE_STRIPE_FAMILIES"))


@dataclass(frozen=True)
class Config:
    """Receiver configuration."""

    resend_secret: str | None = None
    stripe_secret: str | None = None
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    log_json: bool = False
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    stripe_tolerance: int = DEFAULT_STRIPE_TOLERANCE
    # None enables every built-in Stripe family
    stripe_families: tuple[str, ...] | None = None
    resend_path: str = "/webhook"
    stripe_path: str = "/stripe_webhooks"
    providers: tuple[str, ...] = field(default=PROVIDERS)

    def __post_init__(self) -> None:
        unknown = set(self.providers) - set(PROVIDERS)
        if unknown:
            raise ConfigurationError(
                f"Unknown provider(s): {sorted(unknown)}. Supported: {list(PROVIDERS)}"
            )
        if not self.providers:
            raise ConfigurationError("At least one provider must be enabled")
        if PROVIDER_RESEND in self.providers and not (self.resend_secret or "").strip():
            raise ConfigurationError("missing webhook secret for resend (RESEND_WEBHOOK_SECRET)")
        if PROVIDER_STRIPE in self.providers and not (self.stripe_secret or "").strip():
            raise ConfigurationError("missing webhook secret for stripe (STRIPE_WEBHOOK_SECRET)")
        if self.max_body_bytes <= 0:
            raise ConfigurationError("max_body_bytes must be positive")
        if self.stripe_tolerance <= 0:
            raise ConfigurationError("stripe_tolerance must be positive")

    @classmethod
    def from_env(cls, providers: Iterable[str] = PROVIDERS, **overrides: Any) -> Config:
        """
        Load configuration from environment variables.

        Only the secrets of the requested providers are required.
        """
        values: dict[str, Any] = {
            "resend_secret": _get_secret("RESEND_WEBHOOK_SECRET", "WEBHOOK_SECRET"),
            "stripe_secret": _get_secret("STRIPE_WEBHOOK_SECRET"),
            "host": _get_env_var("HOOKWISE_HOST", cls.host),
            "port": _get_int("HOOKWISE_PORT", cls.port),
            "log_level": (_get_env_var("HOOKWISE_LOG_LEVEL", cls.log_level) or cls.log_level).upper(),
            "log_json": _get_bool("HOOKWISE_LOG_JSON"),
            "max_body_bytes": _get_int("HOOKWISE_MAX_BODY_BYTES", cls.max_body_bytes),
            "stripe_tolerance": _get_int("HOOKWISE_STRIPE_TOLERANCE", cls.stripe_tolerance),
            "stripe_families": stripe_families_from_env(),
            "resend_path": _get_env_var("HOOKWISE_RESEND_PATH", cls.resend_path),
            "stripe_path": _get_env_var("HOOKWISE_STRIPE_PATH", cls.stripe_path),
            "providers": tuple(providers),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_updates(self, **updates: Any) -> Config:
        """Create a new Config with updated values."""
        return replace(self, **updates)

    def is_enabled(self, provider: str) -> bool:
        return provider in self.providers

    @staticmethod
    def masked_secret(secret: str | None) -> str:
        """Return a secret with most characters masked for safe logging."""
        if not secret or len(secret) <= 8:
            return "****"
        return secret[:4] + "..." + secret[-4:]
