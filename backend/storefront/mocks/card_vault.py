"""
Mock Card Vault

Simulates the tokenization service that turns an opaque card id
(``pm_*``) into a display-safe card projection plus billing details.
Never stores or returns raw card numbers or CVV.

The payment service depends on the ``CardVault`` protocol only, so a
real vault client or a test double can be swapped in through FastAPI
dependency overrides.
"""
from typing import Any, Dict, Optional, Protocol
from dataclasses import dataclass


@dataclass(frozen=True)
class VaultedCard:
    """Tokenized card record."""
    card_id: str
    brand: str  # "visa", "mastercard", "amex"
    last4: str
    expiry_month: int
    expiry_year: int
    country: str
    cardholder_name: str
    billing_address: Dict[str, str]

    def projection(self) -> Dict[str, Any]:
        """Display-safe card fields exposed on a payment."""
        return {
            "last4": self.last4,
            "brand": self.brand,
            "expiry_month": self.expiry_month,
            "expiry_year": self.expiry_year,
            "country": self.country,
        }


class CardVaultUnavailable(Exception):
    """Raised by a vault implementation when the backing service cannot be reached."""


class CardVault(Protocol):
    """Lookup capability consumed by the payment service."""

    def lookup(self, card_id: str) -> Optional[VaultedCard]:
        """
        Resolve an opaque card id.

        Returns:
            The vaulted card, or None if the id is unknown

        Raises:
            CardVaultUnavailable: vault cannot be reached
        """
        ...


# Card registry - maps opaque card ids to tokenized card records
VAULTED_CARDS: Dict[str, VaultedCard] = {
    "pm_1Nz3Q72eZvKYlo2CvJEwRG4c": VaultedCard(
        card_id="pm_1Nz3Q72eZvKYlo2CvJEwRG4c",
        brand="visa",
        last4="4242",
        expiry_month=12,
        expiry_year=2025,
        country="US",
        cardholder_name="Jenny Rosen",
        billing_address={
            "line1": "510 Townsend St",
            "city": "San Francisco",
            "state": "CA",
            "postal_code": "94103",
            "country": "US",
        },
    ),
    "pm_1Oa8Rk2eZvKYlo2CmC5555aa": VaultedCard(
        card_id="pm_1Oa8Rk2eZvKYlo2CmC5555aa",
        brand="mastercard",
        last4="4444",
        expiry_month=8,
        expiry_year=2027,
        country="US",
        cardholder_name="Sam Lee",
        billing_address={
            "line1": "88 Colin P Kelly Jr St",
            "city": "San Francisco",
            "state": "CA",
            "postal_code": "94107",
            "country": "US",
        },
    ),
    "pm_1Pb2Xy2eZvKYlo2CaX3782ab": VaultedCard(
        card_id="pm_1Pb2Xy2eZvKYlo2CaX3782ab",
        brand="amex",
        last4="0005",
        expiry_month=3,
        expiry_year=2028,
        country="GB",
        cardholder_name="Priya Nair",
        billing_address={
            "line1": "1 Canada Square",
            "city": "London",
            "postal_code": "E14 5AB",
            "country": "GB",
        },
    ),
    # Cards below are always declined by the processor mock (DECLINE_CARDS)
    "pm_card_chargeDeclined": VaultedCard(
        card_id="pm_card_chargeDeclined",
        brand="visa",
        last4="0002",
        expiry_month=1,
        expiry_year=2030,
        country="US",
        cardholder_name="Declined Tester",
        billing_address={
            "line1": "1 Market St",
            "city": "San Francisco",
            "state": "CA",
            "postal_code": "94105",
            "country": "US",
        },
    ),
    "pm_card_insufficientFunds": VaultedCard(
        card_id="pm_card_insufficientFunds",
        brand="visa",
        last4="9995",
        expiry_month=6,
        expiry_year=2030,
        country="US",
        cardholder_name="Insufficient Tester",
        billing_address={
            "line1": "1 Market St",
            "city": "San Francisco",
            "state": "CA",
            "postal_code": "94105",
            "country": "US",
        },
    ),
    "pm_card_expired": VaultedCard(
        card_id="pm_card_expired",
        brand="visa",
        last4="0069",
        expiry_month=2,
        expiry_year=2030,
        country="US",
        cardholder_name="Expired Tester",
        billing_address={
            "line1": "1 Market St",
            "city": "San Francisco",
            "state": "CA",
            "postal_code": "94105",
            "country": "US",
        },
    ),
}


class InMemoryCardVault:
    """Card vault backed by the static registry above."""

    def __init__(self, cards: Optional[Dict[str, VaultedCard]] = None):
        self._cards = dict(cards if cards is not None else VAULTED_CARDS)

    def lookup(self, card_id: str) -> Optional[VaultedCard]:
        return self._cards.get(card_id)


_default_vault = InMemoryCardVault()


def get_card_vault() -> CardVault:
    """FastAPI dependency returning the configured card vault."""
    return _default_vault
