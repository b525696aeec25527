"""
Resend webhook payload types.

https://resend.com/docs/dashboard/webhooks/event-types
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from hookwise.core.exceptions import DecodeError


class EventType(str, Enum):
    """Event types sent by Resend."""

    # Email lifecycle
    EMAIL_SENT = "email.sent"
    EMAIL_DELIVERED = "email.delivered"
    EMAIL_DELIVERY_DELAYED = "email.delivery_delayed"
    EMAIL_COMPLAINED = "email.complained"
    EMAIL_BOUNCED = "email.bounced"
    EMAIL_OPENED = "email.opened"
    EMAIL_CLICKED = "email.clicked"

    # Contact lifecycle
    CONTACT_CREATED = "contact.created"
    CONTACT_UPDATED = "contact.updated"
    CONTACT_DELETED = "contact.deleted"

    @classmethod
    def from_string(cls, value: str) -> EventType | None:
        for member in cls:
            if member.value == value:
                return member
        return None

    def is_email(self) -> bool:
        return self.value.startswith("email.")

    def is_contact(self) -> bool:
        return self.value.startswith("contact.")


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _addresses(value: Any) -> tuple[str, ...]:
    """Recipients as a tuple; a lone address is accepted as a one-element list."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise DecodeError(f"'to' must be a list of addresses, got {type(value).__name__}")


@dataclass(frozen=True)
class Click:
    """Click details, present only on ``email.clicked``."""

    ip_address: str = ""
    link: str = ""
    timestamp: str = ""
    user_agent: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Click:
        return cls(
            ip_address=_str(data, "ipAddress"),
            link=_str(data, "link"),
            timestamp=_str(data, "timestamp"),
            user_agent=_str(data, "userAgent"),
        )


@dataclass(frozen=True)
class Data:
    """
    Event data.

    Holds the fields of both email events and contact events; whichever
    half does not apply to the event type is left empty.
    """

    # Email events
    created_at: str = ""
    email_id: str = ""
    from_: str = ""
    to: tuple[str, ...] = ()
    subject: str = ""
    click: Click | None = None

    # Contact events
    id: str = ""
    audience_id: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    unsubscribed: bool = False
    updated_at: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Data:
        click = data.get("click")
        return cls(
            created_at=_str(data, "created_at"),
            email_id=_str(data, "email_id"),
            from_=_str(data, "from"),
            to=_addresses(data.get("to")),
            subject=_str(data, "subject"),
            click=Click.from_api_response(click) if isinstance(click, dict) else None,
            id=_str(data, "id"),
            audience_id=_str(data, "audience_id"),
            email=_str(data, "email"),
            first_name=_str(data, "first_name"),
            last_name=_str(data, "last_name"),
            unsubscribed=bool(data.get("unsubscribed", False)),
            updated_at=_str(data, "updated_at"),
        )


@dataclass(frozen=True)
class Payload:
    """A Resend webhook payload."""

    type: str
    created_at: str = ""
    data: Data = field(default_factory=Data)

    @property
    def event_type(self) -> EventType | None:
        """The recognized event type, or None for values outside EventType."""
        return EventType.from_string(self.type)

    @property
    def created(self) -> datetime | None:
        """``created_at`` parsed as an RFC 3339 timestamp, if it parses."""
        if not self.created_at:
            return None
        try:
            return datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        except ValueError:
            return None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Payload:
        inner = data.get("data")
        return cls(
            type=_str(data, "type"),
            created_at=_str(data, "created_at"),
            data=Data.from_api_response(inner) if isinstance(inner, dict) else Data(),
        )
