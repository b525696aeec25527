"""
Exception hierarchy for hookwise.

All package exceptions inherit from HookwiseError for easy catching.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any


class HookwiseError(Exception):
    """
    Base exception for all hookwise errors.

    Example:
        >>> try:
        ...     verifier.verify(body, headers)
        ... except HookwiseError as e:
        ...     print(f"Webhook rejected: {e}")
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(HookwiseError):
    """
    Configuration is missing or invalid.

    Raised when:
    - A signing secret is not set or is blank after trimming
    - A signing secret cannot be parsed by the provider SDK
    - A configuration value fails validation

    The process should not serve traffic after this error.
    """

    pass


class TransportError(HookwiseError):
    """
    The HTTP request itself is unacceptable.

    Raised when:
    - The method is not POST (405)
    - The body exceeds the size ceiling (413)
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code

    @classmethod
    def method_not_allowed(cls, method: str) -> TransportError:
        return cls(f"invalid request method: {method}", HTTPStatus.METHOD_NOT_ALLOWED)

    @classmethod
    def too_large(cls, limit: int) -> TransportError:
        return cls(
            "request body too large",
            HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
            details={"max_body_bytes": limit},
        )


class VerificationError(HookwiseError):
    """
    Webhook signature verification failed.

    Raised when:
    - A required signature header is missing or malformed
    - The signature timestamp is outside the tolerance window
    - The signature does not match the body
    """

    status_code = HTTPStatus.BAD_REQUEST


class UnhandledEventTypeError(HookwiseError):
    """
    No decoder is registered for the event type.

    Non-fatal: the request is still acknowledged so the provider
    does not redeliver.
    """

    def __init__(
        self,
        event_type: str,
        family: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"unhandled event type: {event_type}", details)
        self.event_type = event_type
        self.family = family


class DecodeError(HookwiseError):
    """
    A verified payload could not be deserialized.

    Raised when the body or the event object is not valid JSON,
    or has the wrong top-level shape.
    """

    def __init__(
        self,
        message: str,
        event_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.event_type = event_type
