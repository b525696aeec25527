"""EventRouter - Routes Stripe events to their family by longest matching prefix."""

from __future__ import annotations

from collections.abc import Iterable

from hookwise.core.exceptions import UnhandledEventTypeError
from hookwise.core.logging import get_logger
from hookwise.core.types import DecodedEvent, VerifiedEvent
from hookwise.stripe.events import FAMILIES, EventFamily


class EventRouter:
    """
    Maps event-type prefixes to event families.

    Prefixes are kept sorted longest first, so ``customer.subscription.*``
    always wins over ``customer.*``. A family can be registered but left
    disabled: its prefix still claims matching types, which then come back
    as unhandled instead of falling through to a broader family.
    """

    def __init__(
        self,
        families: Iterable[EventFamily] = FAMILIES,
        enabled: Iterable[str] | None = None,
    ) -> None:
        self._families: list[EventFamily] = []
        self._disabled: set[str] = set()
        self._logger = get_logger("stripe.router")
        for family in families:
            self.register(family)

        if enabled is not None:
            names = {f.name for f in self._families}
            unknown = set(enabled) - names
            if unknown:
                raise ValueError(
                    f"Unknown event families: {sorted(unknown)}. "
                    f"Supported: {sorted(names)}"
                )
            self._disabled = names - set(enabled)

    def register(self, family: EventFamily, enabled: bool = True) -> None:
        for existing in self._families:
            if existing.prefix == family.prefix or existing.name == family.name:
                raise ValueError(
                    f"Family {family.name!r} ({family.prefix}) conflicts with {existing.name!r}"
                )
        self._families.append(family)
        self._families.sort(key=lambda f: len(f.prefix), reverse=True)
        if not enabled:
            self._disabled.add(family.name)

    def get_families(self) -> list[EventFamily]:
        return list(self._families)

    def enabled_families(self) -> list[EventFamily]:
        return [f for f in self._families if f.name not in self._disabled]

    def match(self, event_type: str) -> EventFamily | None:
        """Return the family with the longest prefix of ``event_type``, enabled or not."""
        for family in self._families:
            if event_type.startswith(family.prefix):
                return family
        return None

    def route(self, event_type: str) -> EventFamily | None:
        """Return the enabled family for ``event_type``, or None."""
        family = self.match(event_type)
        if family is None or family.name in self._disabled:
            return None
        return family

    def covered_types(self) -> dict[str, list[str]]:
        return {f.name: sorted(f.event_types) for f in self.enabled_families()}

    def decode(self, event: VerifiedEvent) -> DecodedEvent:
        """
        Decode an event with the family its type routes to.

        Raises:
            UnhandledEventTypeError: No enabled family claims the type, or the
                family's allowlist does not contain it
            DecodeError: The event's object is malformed
        """
        family = self.route(event.type)
        if family is None:
            matched = self.match(event.type)
            raise UnhandledEventTypeError(
                event.type, family=matched.name if matched else None
            )

        obj = family.decode(event)
        self._logger.debug(f"Decoded {event.type} ({event.id}) as {family.name}")
        return DecodedEvent(family=family.name, obj=obj, event=event)
