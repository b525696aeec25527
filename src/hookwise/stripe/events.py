"""
Stripe event families.

Each family owns a fixed allowlist of exact event types and the Stripe SDK
class its ``data.object`` deserializes into. The ``process_<family>``
functions decode one event with one family and reject anything outside
that family's allowlist.

https://docs.stripe.com/api/events/types
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import stripe

from hookwise.core.exceptions import DecodeError, UnhandledEventTypeError
from hookwise.core.types import VerifiedEvent


@dataclass(frozen=True)
class EventFamily:
    """A group of event types sharing a prefix and an object schema."""

    name: str
    prefix: str
    model: type[stripe.StripeObject]
    event_types: frozenset[str]

    def __post_init__(self) -> None:
        if not self.prefix.endswith("."):
            raise ValueError(f"prefix must end with '.', got {self.prefix!r}")
        stray = sorted(t for t in self.event_types if not t.startswith(self.prefix))
        if stray:
            raise ValueError(f"{self.name}: event types outside prefix {self.prefix!r}: {stray}")

    def handles(self, event_type: str) -> bool:
        return event_type in self.event_types

    def decode(self, event: VerifiedEvent) -> Any:
        """
        Deserialize the event's object into ``model``.

        Raises:
            UnhandledEventTypeError: event.type is not in this family's allowlist
            DecodeError: raw_payload is not a JSON object
        """
        if not self.handles(event.type):
            raise UnhandledEventTypeError(event.type, family=self.name)

        values = event.payload()
        if not isinstance(values, dict):
            raise DecodeError(
                f"{self.name} payload must be a JSON object", event_type=event.type
            )
        return self.model.construct_from(values, None)


def _family(name: str, prefix: str, model: Any, suffixes: Iterable[str]) -> EventFamily:
    return EventFamily(
        name=name,
        prefix=prefix,
        model=model,
        event_types=frozenset(prefix + suffix for suffix in suffixes),
    )


BALANCE = _family("balance", "balance.", stripe.Balance, ["available"])

CHARGE = _family(
    "charge",
    "charge.",
    stripe.Charge,
    [
        "captured",
        "dispute.closed",
        "dispute.created",
        "dispute.funds_reinstated",
        "dispute.funds_withdrawn",
        "dispute.updated",
        "expired",
        "failed",
        "pending",
        "refund.updated",
        "refunded",
        "succeeded",
        "updated",
    ],
)

CHECKOUT_SESSION = _family(
    "checkout_session",
    "checkout.session.",
    stripe.checkout.Session,
    ["async_payment_failed", "async_payment_succeeded", "completed", "expired"],
)

COUPON = _family("coupon", "coupon.", stripe.Coupon, ["created", "deleted", "updated"])

CREDIT_NOTE = _family(
    "credit_note", "credit_note.", stripe.CreditNote, ["created", "updated", "voided"]
)

CUSTOMER = _family("customer", "customer.", stripe.Customer, ["created", "updated", "deleted"])

CUSTOMER_DISCOUNT = _family(
    "customer_discount",
    "customer.discount.",
    stripe.Discount,
    ["created", "deleted", "updated"],
)

CUSTOMER_SOURCE = _family(
    "customer_source",
    "customer.source.",
    stripe.Source,
    ["created", "deleted", "expiring", "updated"],
)

CUSTOMER_SUBSCRIPTION = _family(
    "customer_subscription",
    "customer.subscription.",
    stripe.Subscription,
    [
        "created",
        "deleted",
        "paused",
        "pending_update_applied",
        "pending_update_expired",
        "resumed",
        "trial_will_end",
        "updated",
    ],
)

CUSTOMER_TAX_ID = _family(
    "customer_tax_id", "customer.tax_id.", stripe.TaxId, ["created", "deleted", "updated"]
)

INVOICE = _family(
    "invoice",
    "invoice.",
    stripe.Invoice,
    [
        "created",
        "deleted",
        "finalization_failed",
        "finalized",
        "marked_uncollectible",
        "overdue",
        "paid",
        "payment_action_required",
        "payment_failed",
        "payment_succeeded",
        "sent",
        "upcoming",
        "updated",
        "voided",
        "will_be_due",
    ],
)

INVOICE_ITEM = _family("invoice_item", "invoiceitem.", stripe.InvoiceItem, ["created", "deleted"])

MANDATE = _family("mandate", "mandate.", stripe.Mandate, ["updated"])

PAYMENT_INTENT = _family(
    "payment_intent",
    "payment_intent.",
    stripe.PaymentIntent,
    [
        "amount_capturable_updated",
        "canceled",
        "created",
        "partially_funded",
        "payment_failed",
        "processing",
        "requires_action",
        "succeeded",
    ],
)

PAYMENT_LINK = _family("payment_link", "payment_link.", stripe.PaymentLink, ["created", "updated"])

PAYMENT_METHOD = _family(
    "payment_method",
    "payment_method.",
    stripe.PaymentMethod,
    ["attached", "automatically_updated", "detached", "updated"],
)

PLAN = _family("plan", "plan.", stripe.Plan, ["created", "deleted", "updated"])

PRICE = _family("price", "price.", stripe.Price, ["created", "deleted", "updated"])

PRODUCT = _family("product", "product.", stripe.Product, ["created", "deleted", "updated"])

PROMOTION_CODE = _family(
    "promotion_code", "promotion_code.", stripe.PromotionCode, ["created", "updated"]
)

QUOTE = _family(
    "quote",
    "quote.",
    stripe.Quote,
    ["accepted", "canceled", "created", "finalized", "will_expire"],
)

SETUP_INTENT = _family(
    "setup_intent",
    "setup_intent.",
    stripe.SetupIntent,
    ["canceled", "created", "requires_action", "setup_failed", "succeeded"],
)

SUBSCRIPTION_SCHEDULE = _family(
    "subscription_schedule",
    "subscription_schedule.",
    stripe.SubscriptionSchedule,
    ["aborted", "canceled", "completed", "created", "expiring", "released", "updated"],
)

TAX_RATE = _family("tax_rate", "tax_rate.", stripe.TaxRate, ["created", "updated"])

TAX_SETTINGS = _family("tax_settings", "tax.settings.", stripe.tax.Settings, ["updated"])

FAMILIES: tuple[EventFamily, ...] = (
    BALANCE,
    CHARGE,
    CHECKOUT_SESSION,
    COUPON,
    CREDIT_NOTE,
    CUSTOMER,
    CUSTOMER_DISCOUNT,
    CUSTOMER_SOURCE,
    CUSTOMER_SUBSCRIPTION,
    CUSTOMER_TAX_ID,
    INVOICE,
    INVOICE_ITEM,
    MANDATE,
    PAYMENT_INTENT,
    PAYMENT_LINK,
    PAYMENT_METHOD,
    PLAN,
    PRICE,
    PRODUCT,
    PROMOTION_CODE,
    QUOTE,
    SETUP_INTENT,
    SUBSCRIPTION_SCHEDULE,
    TAX_RATE,
    TAX_SETTINGS,
)


def get_family(name: str) -> EventFamily:
    for family in FAMILIES:
        if family.name == name:
            return family
    raise KeyError(f"Unknown event family: {name}. Supported: {[f.name for f in FAMILIES]}")


def process_balance(event: VerifiedEvent) -> stripe.Balance:
    return BALANCE.decode(event)


def process_charge(event: VerifiedEvent) -> stripe.Charge:
    return CHARGE.decode(event)


def process_checkout_session(event: VerifiedEvent) -> stripe.checkout.Session:
    return CHECKOUT_SESSION.decode(event)


def process_coupon(event: VerifiedEvent) -> stripe.Coupon:
    return COUPON.decode(event)


def process_credit_note(event: VerifiedEvent) -> stripe.CreditNote:
    return CREDIT_NOTE.decode(event)


def process_customer(event: VerifiedEvent) -> stripe.Customer:
    return CUSTOMER.decode(event)


def process_customer_discount(event: VerifiedEvent) -> stripe.Discount:
    return CUSTOMER_DISCOUNT.decode(event)


def process_customer_source(event: VerifiedEvent) -> stripe.Source:
    return CUSTOMER_SOURCE.decode(event)


def process_customer_subscription(event: VerifiedEvent) -> stripe.Subscription:
    return CUSTOMER_SUBSCRIPTION.decode(event)


def process_customer_tax_id(event: VerifiedEvent) -> stripe.TaxId:
    return CUSTOMER_TAX_ID.decode(event)


def process_invoice(event: VerifiedEvent) -> stripe.Invoice:
    return INVOICE.decode(event)


def process_invoice_item(event: VerifiedEvent) -> stripe.InvoiceItem:
    return INVOICE_ITEM.decode(event)


def process_mandate(event: VerifiedEvent) -> stripe.Mandate:
    return MANDATE.decode(event)


def process_payment_intent(event: VerifiedEvent) -> stripe.PaymentIntent:
    return PAYMENT_INTENT.decode(event)


def process_payment_link(event: VerifiedEvent) -> stripe.PaymentLink:
    return PAYMENT_LINK.decode(event)


def process_payment_method(event: VerifiedEvent) -> stripe.PaymentMethod:
    return PAYMENT_METHOD.decode(event)


def process_plan(event: VerifiedEvent) -> stripe.Plan:
    return PLAN.decode(event)


def process_price(event: VerifiedEvent) -> stripe.Price:
    return PRICE.decode(event)


def process_product(event: VerifiedEvent) -> stripe.Product:
    return PRODUCT.decode(event)


def process_promotion_code(event: VerifiedEvent) -> stripe.PromotionCode:
    return PROMOTION_CODE.decode(event)


def process_quote(event: VerifiedEvent) -> stripe.Quote:
    return QUOTE.decode(event)


def process_setup_intent(event: VerifiedEvent) -> stripe.SetupIntent:
    return SETUP_INTENT.decode(event)


def process_subscription_schedule(event: VerifiedEvent) -> stripe.SubscriptionSchedule:
    return SUBSCRIPTION_SCHEDULE.decode(event)


def process_tax_rate(event: VerifiedEvent) -> stripe.TaxRate:
    return TAX_RATE.decode(event)


def process_tax_settings(event: VerifiedEvent) -> stripe.tax.Settings:
    return TAX_SETTINGS.decode(event)
