"""
Resend webhook handling.

Validates the incoming payload against the svix signature headers using the
webhook signing secret and binds the raw data to a Payload.
"""

from __future__ import annotations

from collections.abc import Mapping

from hookwise.core.exceptions import DecodeError
from hookwise.core.logging import get_logger
from hookwise.core.transport import BodySource, read_limited, require_post
from hookwise.core.types import SignedRequest
from hookwise.resend.models import Payload
from hookwise.verifiers.base import SignatureVerifier

logger = get_logger("resend")


def handle_request(request: SignedRequest, verifier: SignatureVerifier) -> Payload:
    """
    Verify a captured request and decode its payload.

    Raises:
        TransportError: Method is not POST
        VerificationError: Signature check failed
        DecodeError: Signature is valid but the body is not a JSON object
    """
    require_post(request.method)

    data = verifier.verify(request.body, request.headers)
    if not isinstance(data, dict):
        raise DecodeError("Payload must be a JSON object")

    return Payload.from_api_response(data)


async def receive(
    method: str,
    headers: Mapping[str, str],
    body: BodySource,
    verifier: SignatureVerifier,
    max_body_bytes: int | None = None,
) -> Payload:
    """Read the body (optionally under a size ceiling) and handle the request."""
    require_post(method)
    raw = await read_limited(body, max_body_bytes)
    return handle_request(SignedRequest(method=method, headers=headers, body=raw), verifier)
