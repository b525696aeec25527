"""
Base signature verifier interface.

Each provider's verification routine is injected behind this interface so
tests and alternative deployments can substitute their own signer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class SignatureVerifier(ABC):
    """
    Abstract base class for webhook signature verifiers.

    - SvixVerifier: Resend webhooks (svix-id / svix-timestamp / svix-signature)
    - StripeVerifier: Stripe webhooks (Stripe-Signature)

    Implementations are built once at startup and are read-only afterwards,
    so one instance can be shared by every request.
    """

    @property
    @abstractmethod
    def provider(self) -> str:
        """Return the provider name this verifier handles."""
        ...

    @abstractmethod
    def verify(self, body: bytes, headers: Mapping[str, str]) -> Any:
        """
        Check the signature of a raw webhook body.

        Args:
            body: Raw request body, exactly as received
            headers: Request headers

        Returns:
            Provider-specific result (parsed payload for Svix, None for Stripe)

        Raises:
            VerificationError: If the signature, timestamp or headers are invalid
        """
        ...
