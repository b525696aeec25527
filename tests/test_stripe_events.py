"""Tests for Stripe event families and the process_<family> decoders."""

import json

import pytest
import stripe

from hookwise.core.exceptions import DecodeError, UnhandledEventTypeError
from hookwise.core.types import VerifiedEvent
from hookwise.stripe import events
from hookwise.stripe.events import FAMILIES, EventFamily, get_family

PROCESSORS = {
    "balance": events.process_balance,
    "charge": events.process_charge,
    "checkout_session": events.process_checkout_session,
    "coupon": events.process_coupon,
    "credit_note": events.process_credit_note,
    "customer": events.process_customer,
    "customer_discount": events.process_customer_discount,
    "customer_source": events.process_customer_source,
    "customer_subscription": events.process_customer_subscription,
    "customer_tax_id": events.process_customer_tax_id,
    "invoice": events.process_invoice,
    "invoice_item": events.process_invoice_item,
    "mandate": events.process_mandate,
    "payment_intent": events.process_payment_intent,
    "payment_link": events.process_payment_link,
    "payment_method": events.process_payment_method,
    "plan": events.process_plan,
    "price": events.process_price,
    "product": events.process_product,
    "promotion_code": events.process_promotion_code,
    "quote": events.process_quote,
    "setup_intent": events.process_setup_intent,
    "subscription_schedule": events.process_subscription_schedule,
    "tax_rate": events.process_tax_rate,
    "tax_settings": events.process_tax_settings,
}


def _event(event_type: str, obj: object) -> VerifiedEvent:
    return VerifiedEvent(type=event_type, id="evt_1", raw_payload=json.dumps(obj).encode("utf-8"))


def test_every_family_has_a_processor():
    assert set(PROCESSORS) == {f.name for f in FAMILIES}
    assert len(FAMILIES) == 25


def test_event_types_are_unique_across_families():
    seen: dict[str, str] = {}
    for family in FAMILIES:
        for event_type in family.event_types:
            assert event_type not in seen, f"{event_type} in {family.name} and {seen[event_type]}"
            seen[event_type] = family.name


def test_charge_succeeded_scenario():
    charge = events.process_charge(_event("charge.succeeded", {"id": "ch_1", "amount": 500}))

    assert isinstance(charge, stripe.Charge)
    assert charge.id == "ch_1"
    assert charge.amount == 500


def test_unknown_fields_are_kept_and_missing_are_absent():
    charge = events.process_charge(_event("charge.captured", {"id": "ch_2", "brand_new_field": 1}))

    assert charge.id == "ch_2"
    assert getattr(charge, "currency", None) is None


def test_nested_checkout_session():
    session = events.process_checkout_session(
        _event(
            "checkout.session.completed",
            {"id": "cs_1", "object": "checkout.session", "customer_details": {"email": "a@b.c"}},
        )
    )

    assert isinstance(session, stripe.checkout.Session)
    assert session.customer_details.email == "a@b.c"


def test_tax_settings():
    settings = events.process_tax_settings(_event("tax.settings.updated", {"status": "active"}))

    assert isinstance(settings, stripe.tax.Settings)
    assert settings.status == "active"


@pytest.mark.parametrize("family", FAMILIES, ids=lambda f: f.name)
def test_process_decodes_own_types(family: EventFamily):
    processor = PROCESSORS[family.name]
    for event_type in sorted(family.event_types):
        obj = processor(_event(event_type, {"id": "obj_1"}))
        assert isinstance(obj, family.model)
        assert obj.id == "obj_1"


@pytest.mark.parametrize("family", FAMILIES, ids=lambda f: f.name)
def test_process_rejects_other_families_types(family: EventFamily):
    processor = PROCESSORS[family.name]
    other = next(f for f in FAMILIES if f.name != family.name)
    foreign_type = sorted(other.event_types)[0]

    with pytest.raises(UnhandledEventTypeError) as exc:
        processor(_event(foreign_type, {"id": "obj_1"}))

    assert exc.value.event_type == foreign_type
    assert exc.value.family == family.name


def test_unlisted_type_within_prefix_is_unhandled():
    with pytest.raises(UnhandledEventTypeError, match="balance.pending"):
        events.process_balance(_event("balance.pending", {}))


def test_broader_family_rejects_nested_type():
    with pytest.raises(UnhandledEventTypeError):
        events.process_customer(_event("customer.subscription.created", {"id": "sub_1"}))


def test_malformed_payload_is_decode_error():
    event = VerifiedEvent(type="charge.succeeded", id="evt_1", raw_payload=b"{not json")

    with pytest.raises(DecodeError) as exc:
        events.process_charge(event)

    assert exc.value.event_type == "charge.succeeded"


def test_non_object_payload_is_decode_error():
    with pytest.raises(DecodeError, match="JSON object"):
        events.process_charge(_event("charge.succeeded", ["ch_1"]))


def test_get_family():
    assert get_family("customer_tax_id").prefix == "customer.tax_id."
    with pytest.raises(KeyError):
        get_family("refund")


def test_family_validates_prefix():
    with pytest.raises(ValueError, match="must end with"):
        EventFamily("refund", "refund", stripe.Refund, frozenset({"refund.created"}))
    with pytest.raises(ValueError, match="outside prefix"):
        EventFamily("refund", "refund.", stripe.Refund, frozenset({"charge.refunded"}))
