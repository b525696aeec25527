"""
HTTP transport checks shared by both pipelines.

These run before any signature work: the method is checked first, then
the body is read under a hard size ceiling.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, Mapping
from typing import Union

from hookwise.core.exceptions import TransportError

BodySource = Union[bytes, AsyncIterable[bytes]]


def require_post(method: str) -> None:
    """Raise TransportError(405) for anything but POST."""
    if method.upper() != "POST":
        raise TransportError.method_not_allowed(method)


def check_content_length(headers: Mapping[str, str], max_bytes: int) -> None:
    """Reject early when the declared Content-Length already exceeds the ceiling."""
    lowered = {k.lower(): v for k, v in headers.items()}
    declared = lowered.get("content-length")
    if declared is None:
        return
    try:
        length = int(declared)
    except ValueError:
        return
    if length > max_bytes:
        raise TransportError.too_large(max_bytes)


async def read_limited(body: BodySource, max_bytes: int | None) -> bytes:
    """
    Read a request body, stopping as soon as it crosses ``max_bytes``.

    Args:
        body: Already-buffered bytes or an async stream of chunks
        max_bytes: Size ceiling, or None for no limit

    Raises:
        TransportError: 413 if the body is larger than ``max_bytes``
    """
    if isinstance(body, (bytes, bytearray)):
        if max_bytes is not None and len(body) > max_bytes:
            raise TransportError.too_large(max_bytes)
        return bytes(body)

    buffer = bytearray()
    async for chunk in body:
        buffer.extend(chunk)
        if max_bytes is not None and len(buffer) > max_bytes:
            raise TransportError.too_large(max_bytes)
    return bytes(buffer)
