"""
Type definitions shared by both webhook pipelines.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from hookwise.core.exceptions import DecodeError


def normalize_headers(headers: Mapping[str, str]) -> Mapping[str, str]:
    """Return a read-only view of ``headers`` keyed by lower-cased name."""
    return MappingProxyType({k.lower(): v for k, v in headers.items()})


@dataclass(frozen=True)
class SignedRequest:
    """
    Raw body of an inbound webhook plus its headers.

    Header names are lower-cased on construction, so lookups through
    ``header()`` are case-insensitive.
    """

    method: str
    headers: Mapping[str, str]
    body: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", normalize_headers(self.headers))

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name.lower(), default)


@dataclass(frozen=True)
class VerifiedEvent:
    """
    A Stripe event whose signature has been checked.

    ``raw_payload`` holds the JSON of ``data.object``; its schema is
    determined solely by ``type``.
    """

    type: str
    id: str
    raw_payload: bytes
    created: int | None = None
    livemode: bool = False
    api_version: str | None = None

    @classmethod
    def from_envelope(cls, body: bytes | str) -> VerifiedEvent:
        """Build an event from a Stripe event envelope."""
        try:
            envelope = json.loads(body)
        except (ValueError, TypeError) as e:
            raise DecodeError(f"Invalid JSON payload: {e}") from e

        if not isinstance(envelope, dict):
            raise DecodeError("Event envelope must be a JSON object")

        event_type = envelope.get("type")
        if not isinstance(event_type, str) or not event_type:
            raise DecodeError("Missing 'type' in event envelope")

        data = envelope.get("data")
        if not isinstance(data, dict) or "object" not in data:
            raise DecodeError("Missing 'data.object' in event envelope", event_type=event_type)

        return cls(
            type=event_type,
            id=envelope.get("id") or "",
            raw_payload=json.dumps(data["object"], separators=(",", ":")).encode("utf-8"),
            created=envelope.get("created"),
            livemode=bool(envelope.get("livemode", False)),
            api_version=envelope.get("api_version"),
        )

    def payload(self) -> Any:
        """Parse ``raw_payload``."""
        try:
            return json.loads(self.raw_payload)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON payload: {e}", event_type=self.type) from e


@dataclass(frozen=True)
class DecodedEvent:
    """A Stripe event routed to its family and deserialized."""

    family: str
    obj: Any
    event: VerifiedEvent = field(repr=False)

    @property
    def type(self) -> str:
        return self.event.type
