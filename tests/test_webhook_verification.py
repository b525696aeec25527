import json
import time
from datetime import timedelta
from unittest.mock import patch

import pytest
from svix.webhooks import Webhook

from hookwise.core.exceptions import ConfigurationError, DecodeError, VerificationError
from hookwise.verifiers import StripeVerifier, SvixVerifier, new_webhook


def _flip(value: str, index: int) -> str:
    """Replace one character with a different one from the same alphabet."""
    replacement = "B" if value[index] != "B" else "C"
    if value[index].isdigit() or value[index] in "abcdef":
        replacement = "0" if value[index] != "0" else "1"
    return value[:index] + replacement + value[index + 1 :]


@pytest.fixture
def svix_verifier(svix_secret):
    return SvixVerifier(svix_secret)


@pytest.fixture
def stripe_verifier(stripe_secret):
    return StripeVerifier(stripe_secret)


class TestSvixVerifier:
    body = json.dumps({"type": "email.sent", "data": {"email_id": "e_1"}}).encode("utf-8")

    def test_verify_valid(self, svix_verifier, svix_sign):
        data = svix_verifier.verify(self.body, svix_sign(self.body))

        assert data["type"] == "email.sent"
        assert data["data"]["email_id"] == "e_1"

    def test_header_names_are_case_insensitive(self, svix_verifier, svix_sign):
        headers = {k.upper(): v for k, v in svix_sign(self.body).items()}

        assert svix_verifier.verify(self.body, headers)["type"] == "email.sent"

    @pytest.mark.parametrize("index", [0, 10, -2])
    def test_single_byte_body_mutation_fails(self, svix_verifier, svix_sign, index):
        headers = svix_sign(self.body)
        tampered = bytearray(self.body)
        tampered[index] = tampered[index] ^ 0x01

        with pytest.raises(VerificationError):
            svix_verifier.verify(bytes(tampered), headers)

    def test_signature_mutation_fails(self, svix_verifier, svix_sign):
        headers = svix_sign(self.body)
        version, sig = headers["svix-signature"].split(",", 1)
        headers["svix-signature"] = f"{version},{_flip(sig, 0)}"

        with pytest.raises(VerificationError):
            svix_verifier.verify(self.body, headers)

    @pytest.mark.parametrize("missing", ["svix-id", "svix-timestamp", "svix-signature"])
    def test_missing_header(self, svix_verifier, svix_sign, missing):
        headers = svix_sign(self.body)
        del headers[missing]

        with pytest.raises(VerificationError):
            svix_verifier.verify(self.body, headers)

    def test_stale_timestamp(self, svix_verifier, svix_sign):
        headers = svix_sign(self.body, age=timedelta(minutes=30))

        with pytest.raises(VerificationError):
            svix_verifier.verify(self.body, headers)

    def test_malformed_signature_header(self, svix_verifier, svix_sign):
        headers = svix_sign(self.body)
        headers["svix-signature"] = "garbage-without-version"

        with pytest.raises(VerificationError):
            svix_verifier.verify(self.body, headers)

    def test_valid_signature_non_json_body(self, svix_verifier, svix_sign):
        body = b"definitely not json"

        with pytest.raises(DecodeError, match="Invalid JSON payload"):
            svix_verifier.verify(body, svix_sign(body))

    def test_wrong_secret(self, svix_sign):
        other = SvixVerifier("whsec_" + "QUJDREVGR0hJSktMTU5PUFFSU1RVVldYWVo=")

        with pytest.raises(VerificationError):
            other.verify(self.body, svix_sign(self.body))

    @pytest.mark.parametrize("secret", ["", "   "])
    def test_empty_secret_is_configuration_error(self, secret):
        with pytest.raises(ConfigurationError, match="missing webhook secret"):
            new_webhook(secret)

    @pytest.mark.parametrize("secret", ["whsec_abc", "whsec_not*base64!", "whsec_"])
    def test_malformed_secret_is_configuration_error(self, secret):
        with pytest.raises(ConfigurationError):
            SvixVerifier(secret)

    def test_verify_parses_body_itself(self, svix_secret, svix_sign):
        verifier = SvixVerifier(svix_secret)
        headers = svix_sign(self.body)

        with patch.object(Webhook, "verify", return_value=None) as verify:
            data = verifier.verify(self.body, headers)

        verify.assert_called_once()
        assert data == {"type": "email.sent", "data": {"email_id": "e_1"}}

    def test_provider_name(self, svix_verifier):
        assert svix_verifier.provider == "resend"


class TestStripeVerifier:
    body = json.dumps({"id": "evt_1", "type": "charge.succeeded"}).encode("utf-8")

    def test_verify_valid(self, stripe_verifier, stripe_sign):
        headers = {"Stripe-Signature": stripe_sign(self.body)}

        assert stripe_verifier.verify(self.body, headers) is None

    def test_lowercase_header(self, stripe_verifier, stripe_sign):
        headers = {"stripe-signature": stripe_sign(self.body)}

        stripe_verifier.verify(self.body, headers)

    @pytest.mark.parametrize("index", [0, 5, -1])
    def test_single_byte_body_mutation_fails(self, stripe_verifier, stripe_sign, index):
        headers = {"Stripe-Signature": stripe_sign(self.body)}
        tampered = bytearray(self.body)
        tampered[index] = tampered[index] ^ 0x01

        with pytest.raises(VerificationError):
            stripe_verifier.verify(bytes(tampered), headers)

    def test_signature_mutation_fails(self, stripe_verifier, stripe_sign):
        header = stripe_sign(self.body)
        headers = {"Stripe-Signature": _flip(header, len(header) - 1)}

        with pytest.raises(VerificationError):
            stripe_verifier.verify(self.body, headers)

    def test_missing_header(self, stripe_verifier):
        with pytest.raises(VerificationError, match="Missing Stripe-Signature header"):
            stripe_verifier.verify(self.body, {})

    def test_malformed_header(self, stripe_verifier):
        headers = {"Stripe-Signature": "nonsense"}

        with pytest.raises(VerificationError):
            stripe_verifier.verify(self.body, headers)

    def test_stale_timestamp(self, stripe_verifier, stripe_sign):
        headers = {"Stripe-Signature": stripe_sign(self.body, timestamp=int(time.time()) - 3600)}

        with pytest.raises(VerificationError):
            stripe_verifier.verify(self.body, headers)

    def test_wrong_secret(self, stripe_verifier, stripe_sign):
        headers = {"Stripe-Signature": stripe_sign(self.body, secret="whsec_other")}

        with pytest.raises(VerificationError):
            stripe_verifier.verify(self.body, headers)

    def test_non_utf8_body(self, stripe_verifier, stripe_sign):
        body = b"\xff\xfe\xfd"
        headers = {"Stripe-Signature": stripe_sign(body)}

        with pytest.raises(VerificationError, match="UTF-8"):
            stripe_verifier.verify(body, headers)

    def test_empty_secret_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            StripeVerifier("  ")
