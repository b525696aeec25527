import base64
import hashlib
import hmac
import json
import time
from datetime import datetime, timedelta, timezone

import pytest
from svix.webhooks import Webhook

SVIX_SECRET = "whsec_" + base64.b64encode(b"hookwise-test-signing-secret-32b").decode("utf-8")
STRIPE_SECRET = "whsec_test_stripe_signing_secret"


@pytest.fixture
def svix_secret() -> str:
    return SVIX_SECRET


@pytest.fixture
def stripe_secret() -> str:
    return STRIPE_SECRET


@pytest.fixture
def svix_sign():
    """Return a function producing svix headers for a body, signed with the svix SDK."""
    webhook = Webhook(SVIX_SECRET)

    def _sign(body: bytes, msg_id: str = "msg_test_1", age: timedelta = timedelta(0)) -> dict[str, str]:
        timestamp = datetime.now(tz=timezone.utc) - age
        signature = webhook.sign(msg_id=msg_id, timestamp=timestamp, data=body.decode("utf-8"))
        return {
            "svix-id": msg_id,
            "svix-timestamp": str(int(timestamp.timestamp())),
            "svix-signature": signature,
        }

    return _sign


@pytest.fixture
def stripe_sign():
    """Return a function producing a Stripe-Signature header value for a body."""

    def _sign(body: bytes, timestamp: int | None = None, secret: str = STRIPE_SECRET) -> str:
        ts = int(time.time()) if timestamp is None else timestamp
        signed_payload = f"{ts}.".encode("utf-8") + body
        signature = hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()
        return f"t={ts},v1={signature}"

    return _sign


def stripe_event_body(event_type: str, obj: dict, event_id: str = "evt_test_1") -> bytes:
    return json.dumps(
        {
            "id": event_id,
            "object": "event",
            "type": event_type,
            "created": 1700000000,
            "livemode": False,
            "api_version": "2024-06-20",
            "data": {"object": obj},
        }
    ).encode("utf-8")


@pytest.fixture
def make_stripe_body():
    return stripe_event_body


@pytest.fixture
def resend_clicked_body() -> bytes:
    return json.dumps(
        {
            "type": "email.clicked",
            "created_at": "2024-11-22T23:41:12.126Z",
            "data": {
                "created_at": "2024-11-22T23:41:11.894719+00:00",
                "email_id": "56761188-7520-42d8-8898-ff6fc54ce618",
                "from": "Acme <onboarding@resend.dev>",
                "to": ["delivered@resend.dev"],
                "subject": "Sending this example",
                "click": {
                    "ipAddress": "122.115.53.11",
                    "link": "https://resend.com",
                    "timestamp": "2024-11-24T05:00:57.163Z",
                    "userAgent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7)",
                },
            },
        }
    ).encode("utf-8")


@pytest.fixture
def resend_sent_body() -> bytes:
    return json.dumps(
        {
            "type": "email.sent",
            "created_at": "2024-02-22T23:41:12.126Z",
            "data": {
                "created_at": "2024-02-22T23:41:11.894719+00:00",
                "email_id": "56761188-7520-42d8-8898-ff6fc54ce618",
                "from": "Acme <onboarding@resend.dev>",
                "to": ["delivered@resend.dev"],
                "subject": "Sending this example",
            },
        }
    ).encode("utf-8")
