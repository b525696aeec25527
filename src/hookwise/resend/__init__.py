"""
Resend webhooks.

https://resend.com/docs/dashboard/webhooks/event-types
"""

from hookwise.resend.dispatch import ResendDispatcher, default_dispatcher, log_payload
from hookwise.resend.models import Click, Data, EventType, Payload
from hookwise.resend.webhook import handle_request, receive

__all__ = [
    "Click",
    "Data",
    "EventType",
    "Payload",
    "ResendDispatcher",
    "default_dispatcher",
    "handle_request",
    "log_payload",
    "receive",
]
