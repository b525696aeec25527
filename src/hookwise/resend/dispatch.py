"""
Dispatch of decoded Resend payloads.

Resend's event space is flat, so dispatch is by exact event type.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, Union

from hookwise.core.exceptions import UnhandledEventTypeError
from hookwise.core.logging import get_logger
from hookwise.resend.models import EventType, Payload

logger = get_logger("resend.dispatch")

PayloadHandler = Callable[[Payload], Union[Awaitable[Any], Any]]


class ResendDispatcher:
    """Routes payloads to the handler registered for their event type."""

    def __init__(self, handlers: dict[EventType, PayloadHandler] | None = None) -> None:
        self._handlers: dict[EventType, PayloadHandler] = dict(handlers or {})

    def register(self, event_type: EventType | str, handler: PayloadHandler) -> None:
        self._handlers[EventType(event_type)] = handler

    def on(self, *event_types: EventType | str) -> Callable[[PayloadHandler], PayloadHandler]:
        """Decorator form of register()."""

        def decorator(handler: PayloadHandler) -> PayloadHandler:
            for event_type in event_types:
                self.register(event_type, handler)
            return handler

        return decorator

    def covered(self) -> list[EventType]:
        return sorted(self._handlers, key=lambda t: t.value)

    async def dispatch(self, payload: Payload) -> Any:
        """
        Call the handler for ``payload.type``.

        Raises:
            UnhandledEventTypeError: Unknown type, or no handler registered
        """
        event_type = payload.event_type
        handler = self._handlers.get(event_type) if event_type else None
        if handler is None:
            raise UnhandledEventTypeError(payload.type)

        result = handler(payload)
        if inspect.isawaitable(result):
            result = await result
        return result


def log_payload(payload: Payload) -> None:
    """Default handler: log the payload's fields."""
    data = payload.data
    created = payload.created
    when = int(created.timestamp()) if created else payload.created_at
    if payload.event_type and payload.event_type.is_contact():
        logger.info(
            f"{payload.type} contact={data.id} audience={data.audience_id} "
            f"email={data.email} unsubscribed={data.unsubscribed} created={when}"
        )
        return

    logger.info(
        f"{payload.type} email_id={data.email_id} from={data.from_} "
        f"to={list(data.to)} subject={data.subject!r} created={when}"
    )
    if data.click is not None:
        logger.info(
            f"click ip={data.click.ip_address} link={data.click.link} "
            f"timestamp={data.click.timestamp} user_agent={data.click.user_agent!r}"
        )


def default_dispatcher() -> ResendDispatcher:
    """A dispatcher that logs every recognized event type."""
    return ResendDispatcher({event_type: log_payload for event_type in EventType})
