"""
Mock Payment Processor

Simulates card authorization for the payment lifecycle.
Operates on opaque card ids only, never on order or product data.
"""
import hashlib
from typing import Dict, Any, Optional, Protocol
from datetime import datetime, timezone


# Test card ids that trigger specific declines
DECLINE_CARDS = {
    "pm_card_chargeDeclined": "card_declined",
    "pm_card_insufficientFunds": "insufficient_funds",
    "pm_card_expired": "expired_card",
}


class PaymentProcessor(Protocol):
    """Authorization capability consumed by the payment service."""

    def authorize(
        self,
        card_id: str,
        amount: int,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        ...


class MockPaymentProcessor:
    """
    Deterministic processor: cards listed in DECLINE_CARDS are declined,
    every other card is authorized.
    """

    def __init__(self, decline_cards: Optional[Dict[str, str]] = None):
        self._decline_cards = dict(decline_cards if decline_cards is not None else DECLINE_CARDS)

    def authorize(
        self,
        card_id: str,
        amount: int,
        currency: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Process authorization for a vaulted card.

        Args:
            card_id: Opaque card id (pm_*)
            amount: Amount in minor units
            currency: Lower-case currency code
            metadata: Optional metadata (payment_id, order_id)

        Returns:
            Authorization result dictionary:
            - status: "authorized" or "declined"
            - authorization_code: Unique auth code if approved (auth_*)
            - decline_reason: Reason if declined
            - processed_at: Timestamp of processing
        """
        metadata = metadata or {}
        processed_at = datetime.now(timezone.utc)

        if card_id in self._decline_cards:
            return {
                "status": "declined",
                "authorization_code": None,
                "decline_reason": self._decline_cards[card_id],
                "processed_at": processed_at.isoformat(),
                "amount": amount,
                "currency": currency,
                "metadata": metadata,
            }

        auth_code = f"auth_{hashlib.sha256(f'{card_id}:{amount}:{processed_at.isoformat()}'.encode()).hexdigest()[:12]}"

        return {
            "status": "authorized",
            "authorization_code": auth_code,
            "decline_reason": None,
            "processed_at": processed_at.isoformat(),
            "amount": amount,
            "currency": currency,
            "metadata": metadata,
        }


_default_processor = MockPaymentProcessor()


def get_payment_processor() -> PaymentProcessor:
    """FastAPI dependency returning the configured payment processor."""
    return _default_processor
