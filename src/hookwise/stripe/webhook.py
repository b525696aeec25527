"""
Stripe webhook handling.

https://docs.stripe.com/webhooks
"""

from __future__ import annotations

from collections.abc import Mapping

from hookwise.core.config import DEFAULT_MAX_BODY_BYTES
from hookwise.core.transport import BodySource, check_content_length, read_limited, require_post
from hookwise.core.types import VerifiedEvent
from hookwise.verifiers.base import SignatureVerifier


async def handle_request(
    method: str,
    headers: Mapping[str, str],
    body: BodySource,
    verifier: SignatureVerifier,
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
) -> VerifiedEvent:
    """
    Validate an incoming Stripe request and build the event.

    The method and the size ceiling are checked before any signature work;
    a body over ``max_body_bytes`` is never handed to the verifier.

    Raises:
        TransportError: 405 for non-POST, 413 for an oversized body
        VerificationError: Missing/malformed header, bad signature, stale timestamp
        DecodeError: Verified body is not a Stripe event envelope
    """
    # stripe webhook events are always POST requests
    require_post(method)

    check_content_length(headers, max_body_bytes)
    raw = await read_limited(body, max_body_bytes)

    verifier.verify(raw, headers)

    return VerifiedEvent.from_envelope(raw)
