"""
Pydantic Payment Models

Request bodies and the externally serialized Payment projection.
All monetary values are integer minor units; card data is a display-safe
projection resolved from an opaque card id, never a raw PAN.
"""
from enum import Enum
from typing import Dict, FrozenSet, List, Literal, Optional
from pydantic import Field, StrictInt

from .common import Address, CamelModel, OffsetPagination


class PaymentStatus(str, Enum):
    pending = "pending"
    succeeded = "succeeded"
    failed = "failed"
    refunded = "refunded"


# pending -> succeeded | failed; succeeded -> refunded. Nothing returns to pending.
PAYMENT_TRANSITIONS: Dict[PaymentStatus, FrozenSet[PaymentStatus]] = {
    PaymentStatus.pending: frozenset({PaymentStatus.succeeded, PaymentStatus.failed}),
    PaymentStatus.succeeded: frozenset({PaymentStatus.refunded}),
    PaymentStatus.failed: frozenset(),
    PaymentStatus.refunded: frozenset(),
}


class BillingDetails(CamelModel):
    address: Address


# ==================== Requests ====================

class PaymentMethodRequest(CamelModel):
    """Opaque card reference supplied by the client."""
    type: str
    card_id: str = Field(min_length=1)


class CreatePaymentRequest(CamelModel):
    """
    Body of ``POST /api/v1/payments``.

    Amount and currency are validated by the payment service so that the
    dedicated ``invalid_amount`` / ``invalid_currency`` error kinds apply.
    """
    amount: StrictInt
    currency: str
    order_id: str = Field(min_length=1)
    payment_method: PaymentMethodRequest
    billing: Optional[BillingDetails] = None
    description: Optional[str] = None


class CreateRefundRequest(CamelModel):
    """Body of ``POST /api/v1/payments/{id}/refunds``; amount defaults to the remainder."""
    amount: Optional[StrictInt] = None
    reason: Optional[str] = None


# ==================== Projection ====================

class CustomerSummary(CamelModel):
    email: str
    name: Optional[str] = None


class CardDetails(CamelModel):
    """Display-safe card projection from the card vault."""
    last4: str = Field(pattern="^[0-9]{4}$")
    brand: str
    expiry_month: int = Field(ge=1, le=12)
    expiry_year: int
    country: str


class PaymentMethodDetails(CamelModel):
    type: Literal["card"] = "card"
    card: CardDetails


class Refund(CamelModel):
    id: str
    amount: int = Field(gt=0)
    status: Literal["succeeded"] = "succeeded"
    reason: Optional[str] = None
    created_at: str


class RefundSummary(CamelModel):
    """``total`` is always ``len(data)``."""
    total: int
    data: List[Refund]


class PaymentTimestamps(CamelModel):
    created_at: str
    updated_at: str
    succeeded_at: Optional[str] = None


class Payment(CamelModel):
    """
    Externally serialized Payment.

    ``failure_reason`` is populated only when authorization was declined.
    """
    id: str = Field(pattern="^pay_")
    amount: int = Field(gt=0)
    currency: str = Field(min_length=3, max_length=3)
    status: PaymentStatus
    order_id: str
    description: Optional[str] = None
    customer: CustomerSummary
    billing: BillingDetails
    payment_method: PaymentMethodDetails
    refunds: RefundSummary
    timestamps: PaymentTimestamps
    failure_reason: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "pay_1Nz3Q82eZvKYlo2C9EbE7PKr",
                "amount": 2500,
                "currency": "usd",
                "status": "succeeded",
                "orderId": "order_456789",
                "customer": {"email": "jenny.rosen@example.com", "name": "Jenny Rosen"},
                "billing": {"address": {"line1": "510 Townsend St", "city": "San Francisco",
                                        "state": "CA", "postalCode": "94103", "country": "US"}},
                "paymentMethod": {"type": "card", "card": {"last4": "4242", "brand": "visa",
                                                           "expiryMonth": 12, "expiryYear": 2025,
                                                           "country": "US"}},
                "refunds": {"total": 0, "data": []},
                "timestamps": {"createdAt": "2023-10-03T14:21:07Z",
                               "updatedAt": "2023-10-03T14:21:09Z",
                               "succeededAt": "2023-10-03T14:21:09Z"},
            }
        }
    }


class PaymentList(CamelModel):
    data: List[Payment]
    pagination: OffsetPagination

