"""
Svix signature verification (used by Resend).

Thin wrapper around ``svix.webhooks.Webhook``: the HMAC scheme and the
timestamp tolerance belong to the Svix SDK and are used unmodified. The SDK
is only asked whether the signature holds; the body is parsed here, since
``Webhook.verify`` stopped returning it in svix 2.
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from typing import Any

from svix.webhooks import Webhook, WebhookVerificationError

from hookwise.core.exceptions import ConfigurationError, DecodeError, VerificationError
from hookwise.core.logging import get_logger
from hookwise.verifiers.base import SignatureVerifier

logger = get_logger("verifiers.svix")

SVIX_HEADERS = ("svix-id", "svix-timestamp", "svix-signature")
SECRET_PREFIX = "whsec_"


def _decode_secret(secret: str) -> bytes:
    """Decode the base64 key of a ``whsec_`` secret, padding included."""
    key = secret[len(SECRET_PREFIX):] if secret.startswith(SECRET_PREFIX) else secret
    try:
        return base64.b64decode(key, validate=True)
    except binascii.Error as e:
        raise ConfigurationError(f"error creating webhook instance: {e}") from e


def new_webhook(secret: str) -> Webhook:
    """
    Create a Svix webhook context from a signing secret.

    Raises:
        ConfigurationError: If the secret is empty or not valid base64
    """
    secret = (secret or "").strip()
    if not secret:
        raise ConfigurationError("missing webhook secret")

    # the key must be padded standard base64 and non-empty
    if not _decode_secret(secret):
        raise ConfigurationError("missing webhook secret")

    try:
        return Webhook(secret)
    except (RuntimeError, ValueError) as e:
        raise ConfigurationError(f"error creating webhook instance: {e}") from e


class SvixVerifier(SignatureVerifier):
    """Verifies Svix-signed webhook requests."""

    def __init__(self, secret: str) -> None:
        self._webhook = new_webhook(secret)

    @property
    def provider(self) -> str:
        return "resend"

    def verify(self, body: bytes, headers: Mapping[str, str]) -> Any:
        """
        Validate the payload against the svix signature headers.

        Returns:
            The parsed JSON body

        Raises:
            VerificationError: Missing header, stale timestamp, signature mismatch
                or malformed header/body
            DecodeError: Signature is valid but the body is not JSON
        """
        try:
            self._webhook.verify(body, dict(headers))
        except WebhookVerificationError as e:
            raise VerificationError(str(e)) from e
        except ValueError as e:
            # unpacking a signature without "v1," or a non-UTF-8 body
            raise VerificationError(f"Malformed signature header or body: {e}") from e

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Invalid JSON payload: {e}") from e
