"""Signature verifiers, one per provider."""

from hookwise.verifiers.base import SignatureVerifier
from hookwise.verifiers.stripe_signature import StripeVerifier
from hookwise.verifiers.svix_signature import SvixVerifier, new_webhook

__all__ = [
    "SignatureVerifier",
    "StripeVerifier",
    "SvixVerifier",
    "new_webhook",
]
