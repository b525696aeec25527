"""
Dispatch of verified Stripe events.

Decodes an event through the router and hands the typed object to the
handler registered for its family.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, Union

from hookwise.core.logging import get_logger
from hookwise.core.types import DecodedEvent, VerifiedEvent
from hookwise.stripe.router import EventRouter

logger = get_logger("stripe.dispatch")

DecodedHandler = Callable[[DecodedEvent], Union[Awaitable[Any], Any]]


def log_decoded(decoded: DecodedEvent) -> None:
    """Default handler: log the family and the object's id."""
    obj_id = getattr(decoded.obj, "id", None)
    logger.info(f"{decoded.type} ({decoded.event.id}) -> {decoded.family} {obj_id or ''}".rstrip())


class StripeDispatcher:
    """Routes decoded events to per-family handlers."""

    def __init__(
        self,
        router: EventRouter | None = None,
        default_handler: DecodedHandler | None = log_decoded,
    ) -> None:
        self.router = router or EventRouter()
        self._default = default_handler
        self._handlers: dict[str, DecodedHandler] = {}

    def register(self, family: str, handler: DecodedHandler) -> None:
        if family not in {f.name for f in self.router.enabled_families()}:
            raise ValueError(f"Event family {family!r} is not enabled")
        self._handlers[family] = handler

    def on(self, *families: str) -> Callable[[DecodedHandler], DecodedHandler]:
        """Decorator form of register()."""

        def decorator(handler: DecodedHandler) -> DecodedHandler:
            for family in families:
                self.register(family, handler)
            return handler

        return decorator

    async def dispatch(self, event: VerifiedEvent) -> Any:
        """
        Decode ``event`` and call its family handler.

        Raises:
            UnhandledEventTypeError: No enabled family accepts event.type
            DecodeError: The event object is malformed
        """
        decoded = self.router.decode(event)
        handler = self._handlers.get(decoded.family, self._default)
        if handler is None:
            return decoded

        result = handler(decoded)
        if inspect.isawaitable(result):
            result = await result
        return result
