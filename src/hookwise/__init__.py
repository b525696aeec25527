"""
hookwise - Verified webhook receiver for Resend and Stripe.

Verifies each webhook with the provider's own SDK (svix, stripe), decodes the
payload into a typed structure selected by its event type, and hands it to
your handler in the background.

Usage:
    >>> from hookwise import Config, create_app
    >>> from hookwise.stripe import StripeDispatcher
    >>>
    >>> dispatcher = StripeDispatcher()
    >>>
    >>> @dispatcher.on("charge")
    ... async def on_charge(decoded):
    ...     print(decoded.type, decoded.obj.id)
    >>>
    >>> app = create_app(Config.from_env(providers=["stripe"]), stripe_dispatcher=dispatcher)
"""

__version__ = "0.1.0"

from hookwise.core.config import Config
from hookwise.core.exceptions import (
    ConfigurationError,
    DecodeError,
    HookwiseError,
    TransportError,
    UnhandledEventTypeError,
    VerificationError,
)
from hookwise.core.types import DecodedEvent, SignedRequest, VerifiedEvent
from hookwise.resend import EventType, Payload, ResendDispatcher
from hookwise.server.app import create_app
from hookwise.stripe import EventFamily, EventRouter, StripeDispatcher
from hookwise.verifiers import SignatureVerifier, StripeVerifier, SvixVerifier
from hookwise.worker import EventWorker

__all__ = [
    # Config
    "Config",
    # Exceptions
    "HookwiseError",
    "ConfigurationError",
    "TransportError",
    "VerificationError",
    "UnhandledEventTypeError",
    "DecodeError",
    # Types
    "SignedRequest",
    "VerifiedEvent",
    "DecodedEvent",
    # Resend
    "EventType",
    "Payload",
    "ResendDispatcher",
    # Stripe
    "EventFamily",
    "EventRouter",
    "StripeDispatcher",
    # Verification
    "SignatureVerifier",
    "SvixVerifier",
    "StripeVerifier",
    # Runtime
    "EventWorker",
    "create_app",
]
