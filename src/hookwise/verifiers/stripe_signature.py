"""
Stripe signature verification.

Delegates to ``stripe.WebhookSignature.verify_header``, which checks the
``t=...,v1=...`` header against an HMAC-SHA256 of ``"{t}.{body}"``.
"""

from __future__ import annotations

from collections.abc import Mapping

import stripe

from hookwise.core.config import DEFAULT_STRIPE_TOLERANCE
from hookwise.core.exceptions import ConfigurationError, VerificationError
from hookwise.verifiers.base import SignatureVerifier

SIGNATURE_HEADER = "Stripe-Signature"


class StripeVerifier(SignatureVerifier):
    """Verifies Stripe-signed webhook requests."""

    def __init__(self, secret: str, tolerance: int = DEFAULT_STRIPE_TOLERANCE) -> None:
        secret = (secret or "").strip()
        if not secret:
            raise ConfigurationError("missing webhook secret")
        self._secret = secret
        self.tolerance = tolerance

    @property
    def provider(self) -> str:
        return "stripe"

    def verify(self, body: bytes, headers: Mapping[str, str]) -> None:
        lowered = {k.lower(): v for k, v in headers.items()}
        sig_header = lowered.get(SIGNATURE_HEADER.lower())
        if not sig_header:
            raise VerificationError(f"Missing {SIGNATURE_HEADER} header")

        try:
            payload = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise VerificationError(f"Body is not valid UTF-8: {e}") from e

        try:
            stripe.WebhookSignature.verify_header(payload, sig_header, self._secret, self.tolerance)
        except stripe.SignatureVerificationError as e:
            raise VerificationError(str(e)) from e
