"""
Command-line entry point.

Usage:
    hookwise serve                    # both providers
    hookwise serve --provider stripe  # only the Stripe endpoint
    hookwise event-types              # list covered Stripe event types

Environment variables (a .env file in the working directory is loaded):
    RESEND_WEBHOOK_SECRET - Resend (Svix) signing secret, "whsec_..."
    STRIPE_WEBHOOK_SECRET - Stripe endpoint signing secret, "whsec_..."
    HOOKWISE_HOST / HOOKWISE_PORT - bind address (default: 0.0.0.0:8080)
    HOOKWISE_STRIPE_FAMILIES - comma-separated Stripe families to decode
"""

from __future__ import annotations

import sys
import typing as typ

from cyclopts import App
from dotenv import load_dotenv

from hookwise.core.config import PROVIDERS, Config, stripe_families_from_env
from hookwise.core.exceptions import ConfigurationError
from hookwise.core.logging import configure_logging, get_logger
from hookwise.stripe.router import EventRouter

app = App(name="hookwise", help="Verified webhook receiver for Resend and Stripe")

Provider = typ.Literal["resend", "stripe", "all"]


def _providers(provider: Provider) -> tuple[str, ...]:
    return PROVIDERS if provider == "all" else (provider,)


@app.command
def serve(
    *,
    provider: Provider = "all",
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Run the webhook receiver.

    Parameters
    ----------
    provider
        Which provider endpoint(s) to serve.
    host
        Bind address, overrides HOOKWISE_HOST.
    port
        Bind port, overrides HOOKWISE_PORT.
    """
    import uvicorn

    from hookwise.server.app import create_app

    try:
        config = Config.from_env(providers=_providers(provider), host=host, port=port)
        configure_logging(config.log_level, json_format=config.log_json)
        application = create_app(config)
    except ConfigurationError as e:
        get_logger("cli").error(str(e))
        sys.exit(1)

    uvicorn.run(application, host=config.host, port=config.port, log_level=config.log_level.lower())


@app.command
def event_types() -> None:
    """Print the Stripe event types decoded with the current configuration."""
    try:
        router = EventRouter(enabled=stripe_families_from_env())
    except ValueError as e:
        get_logger("cli").error(f"HOOKWISE_STRIPE_FAMILIES: {e}")
        sys.exit(1)
    for family, types in router.covered_types().items():
        print(family)
        for event_type in types:
            print(f"  {event_type}")


def main() -> None:
    load_dotenv()
    app()


if __name__ == "__main__":
    main()
