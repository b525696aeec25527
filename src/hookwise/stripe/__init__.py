"""
Stripe webhooks.

Usage:
    >>> from hookwise.stripe import EventRouter, handle_request
    >>> event = await handle_request(method, headers, body, verifier)
    >>> decoded = EventRouter().decode(event)
    >>> decoded.family, decoded.obj.id
    ('charge', 'ch_1')
"""

from hookwise.stripe.events import (
    FAMILIES,
    EventFamily,
    get_family,
    process_balance,
    process_charge,
    process_checkout_session,
    process_coupon,
    process_credit_note,
    process_customer,
    process_customer_discount,
    process_customer_source,
    process_customer_subscription,
    process_customer_tax_id,
    process_invoice,
    process_invoice_item,
    process_mandate,
    process_payment_intent,
    process_payment_link,
    process_payment_method,
    process_plan,
    process_price,
    process_product,
    process_promotion_code,
    process_quote,
    process_setup_intent,
    process_subscription_schedule,
    process_tax_rate,
    process_tax_settings,
)
from hookwise.stripe.dispatch import StripeDispatcher, log_decoded
from hookwise.stripe.router import EventRouter
from hookwise.stripe.webhook import handle_request

__all__ = [
    "FAMILIES",
    "EventFamily",
    "EventRouter",
    "StripeDispatcher",
    "get_family",
    "handle_request",
    "log_decoded",
    "process_balance",
    "process_charge",
    "process_checkout_session",
    "process_coupon",
    "process_credit_note",
    "process_customer",
    "process_customer_discount",
    "process_customer_source",
    "process_customer_subscription",
    "process_customer_tax_id",
    "process_invoice",
    "process_invoice_item",
    "process_mandate",
    "process_payment_intent",
    "process_payment_link",
    "process_payment_method",
    "process_plan",
    "process_price",
    "process_product",
    "process_promotion_code",
    "process_quote",
    "process_setup_intent",
    "process_subscription_schedule",
    "process_tax_rate",
    "process_tax_settings",
]
