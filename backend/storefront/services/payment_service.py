"""
Payment Service

Creates payments, runs card authorization, records refunds and serves the
payment ledger.

Lifecycle:
- create: validated, card resolved through the card vault, customer resolved
  from the referenced order, stored as ``pending``
- authorize (background): ``pending`` -> ``succeeded`` (stamps succeededAt
  once) or ``pending`` -> ``failed``
- refund: appends to the refunds sub-collection; the payment becomes
  ``refunded`` once refunds cover the full amount
"""
import json
import uuid
from typing import Optional
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ..config import settings
from ..db.init_db import StoreLocks, get_session_factory
from ..db.models import PaymentModel, RefundModel
from ..exceptions import (
    CollaboratorUnavailableError,
    InvalidAmountError,
    InvalidCurrencyError,
    InvalidRequestError,
    NotFoundError,
)
from ..mocks.card_vault import CardVault, CardVaultUnavailable
from ..mocks.payment_processor import PaymentProcessor
from ..models.common import MAX_MINOR_UNITS, OffsetPagination, check_transition, format_timestamp, utcnow
from ..models.payments import (
    PAYMENT_TRANSITIONS,
    CreatePaymentRequest,
    CreateRefundRequest,
    Payment,
    PaymentList,
    PaymentStatus,
)
from .order_service import get_order_row
from .pagination import offset_window

logger = logging.getLogger(__name__)


# ============================================================================
# Projection
# ============================================================================

def to_payment(row: PaymentModel) -> Payment:
    """Project a payment row (with loaded refunds) into the public Payment shape."""
    refunds = [
        {
            "id": refund.id,
            "amount": refund.amount,
            "status": refund.status,
            "reason": refund.reason,
            "created_at": format_timestamp(refund.created_at),
        }
        for refund in row.refunds
    ]

    return Payment(
        id=row.id,
        amount=row.amount,
        currency=row.currency,
        status=PaymentStatus(row.status),
        order_id=row.order_id,
        description=row.description,
        customer={"email": row.customer_email, "name": row.customer_name},
        billing={"address": json.loads(row.billing_address)},
        payment_method={"type": row.payment_method_type, "card": json.loads(row.card_details)},
        refunds={"total": len(refunds), "data": refunds},
        timestamps={
            "created_at": format_timestamp(row.created_at),
            "updated_at": format_timestamp(row.updated_at),
            "succeeded_at": format_timestamp(row.succeeded_at),
        },
        failure_reason=row.failure_reason,
    )


# ============================================================================
# Validation
# ============================================================================

def validate_amount(amount: int) -> None:
    if amount <= 0 or amount > MAX_MINOR_UNITS:
        raise InvalidAmountError(
            "Amount must be a positive integer in minor units",
            details={"amount": amount, "max": MAX_MINOR_UNITS}
        )


def validate_currency(currency: str) -> str:
    """
    Check a currency code case-insensitively.

    Returns:
        The code exactly as the client sent it

    Raises:
        InvalidCurrencyError: code not in settings.supported_currencies
    """
    if currency.lower() not in settings.supported_currencies:
        raise InvalidCurrencyError(
            f"Unsupported currency: {currency}",
            details={"currency": currency, "supported": settings.supported_currencies}
        )
    return currency


# ============================================================================
# Payment Creation
# ============================================================================

async def create_payment(
    db: AsyncSession,
    locks: StoreLocks,
    request: CreatePaymentRequest,
    vault: CardVault
) -> Payment:
    """
    Create a pending payment.

    Args:
        db: Database session
        locks: Per-store locks
        request: Validated request body
        vault: Card vault used to resolve ``paymentMethod.cardId``

    Returns:
        Created Payment (status ``pending``)

    Raises:
        InvalidAmountError: amount <= 0
        InvalidCurrencyError: unsupported currency
        InvalidRequestError: unsupported method type, unknown order or card
        CollaboratorUnavailableError: card vault unreachable
    """
    validate_amount(request.amount)
    currency = validate_currency(request.currency)

    if request.payment_method.type != "card":
        raise InvalidRequestError(
            f"Unsupported payment method type: {request.payment_method.type}",
            details={"type": request.payment_method.type}
        )

    order = await get_order_row(db, request.order_id)
    if order is None:
        raise InvalidRequestError(
            f"Unknown order: {request.order_id}",
            details={"order_id": request.order_id}
        )

    card_id = request.payment_method.card_id
    try:
        card = vault.lookup(card_id)
    except CardVaultUnavailable as e:
        logger.error(f"Card vault unavailable while resolving {card_id}: {e}")
        raise CollaboratorUnavailableError(
            "Card vault is unavailable",
            details={"collaborator": "card_vault"}
        ) from e

    if card is None:
        raise InvalidRequestError(
            f"Unknown card: {card_id}",
            details={"card_id": card_id}
        )

    if request.billing is not None:
        billing_address = request.billing.address.model_dump()
    else:
        billing_address = dict(card.billing_address)

    payment_id = f"pay_{uuid.uuid4().hex[:24]}"
    now = utcnow()

    row = PaymentModel(
        id=payment_id,
        order_id=order.id,
        amount=request.amount,
        currency=currency,
        status=PaymentStatus.pending.value,
        description=request.description,
        customer_email=order.customer_email,
        customer_name=order.customer_name or card.cardholder_name,
        billing_address=json.dumps(billing_address),
        payment_method_type="card",
        card_id=card.card_id,
        card_details=json.dumps(card.projection()),
        created_at=now,
        updated_at=now,
        refunds=[],
    )

    async with locks.payments:
        db.add(row)
        await db.commit()

    logger.info(
        f"Created payment: {payment_id}, order={order.id}, "
        f"amount={request.amount} {currency}, card=****{card.last4}"
    )

    return to_payment(row)


# ============================================================================
# Authorization
# ============================================================================

async def authorize_payment(
    payment_id: str,
    processor: PaymentProcessor,
    locks: StoreLocks
) -> Optional[Payment]:
    """
    Run authorization for a pending payment and record the outcome.

    Runs after the create response has been sent, so it opens its own
    session. Returns None if the payment vanished or was already settled.
    """
    async with locks.payments:
        async with get_session_factory()() as db:
            row = await get_payment_row(db, payment_id)
            if row is None:
                logger.warning(f"Authorization skipped, payment not found: {payment_id}")
                return None

            current = PaymentStatus(row.status)
            if current is not PaymentStatus.pending:
                logger.info(f"Authorization skipped, payment {payment_id} already {current.value}")
                return None

            result = processor.authorize(
                card_id=row.card_id,
                amount=row.amount,
                currency=row.currency,
                metadata={"payment_id": row.id, "order_id": row.order_id}
            )

            now = utcnow()
            if result["status"] == "authorized":
                check_transition(PAYMENT_TRANSITIONS, current, PaymentStatus.succeeded, "payment")
                row.status = PaymentStatus.succeeded.value
                row.authorization_code = result["authorization_code"]
                row.succeeded_at = now
            else:
                check_transition(PAYMENT_TRANSITIONS, current, PaymentStatus.failed, "payment")
                row.status = PaymentStatus.failed.value
                row.failure_reason = result["decline_reason"]
            row.updated_at = now

            await db.commit()

    logger.info(f"Payment {payment_id} authorization: {row.status}")

    return to_payment(row)


async def authorize_in_background(
    payment_id: str,
    processor: PaymentProcessor,
    locks: StoreLocks
) -> None:
    """Background-task wrapper; failures are logged and the payment stays pending."""
    try:
        await authorize_payment(payment_id, processor, locks)
    except Exception as e:
        logger.error(f"Authorization failed for {payment_id}: {e}", exc_info=True)


# ============================================================================
# Payment Retrieval
# ============================================================================

async def get_payment_row(db: AsyncSession, payment_id: str) -> Optional[PaymentModel]:
    result = await db.execute(select(PaymentModel).where(PaymentModel.id == payment_id))
    return result.scalar_one_or_none()


async def get_payment(db: AsyncSession, payment_id: str) -> Payment:
    """
    Get payment by id.

    Raises:
        NotFoundError: unknown payment id
    """
    row = await get_payment_row(db, payment_id)
    if row is None:
        raise NotFoundError(
            f"No payment found with ID: {payment_id}",
            details={"payment_id": payment_id}
        )
    return to_payment(row)


async def list_payments(
    db: AsyncSession,
    locks: StoreLocks,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    status: Optional[PaymentStatus] = None
) -> PaymentList:
    """List payments in creation order, optionally filtered by status."""
    window = offset_window(limit, offset)

    count_query = select(func.count()).select_from(PaymentModel)
    page_query = select(PaymentModel).order_by(PaymentModel.created_at, PaymentModel.id)
    if status is not None:
        count_query = count_query.where(PaymentModel.status == status.value)
        page_query = page_query.where(PaymentModel.status == status.value)

    async with locks.payments:
        total = (await db.execute(count_query)).scalar_one()
        result = await db.execute(page_query.offset(window.offset).limit(window.limit))
        rows = result.scalars().all()

    return PaymentList(
        data=[to_payment(row) for row in rows],
        pagination=OffsetPagination(limit=window.limit, offset=window.offset, total=total),
    )


# ============================================================================
# Refunds
# ============================================================================

async def refund_payment(
    db: AsyncSession,
    locks: StoreLocks,
    payment_id: str,
    request: CreateRefundRequest
) -> Payment:
    """
    Refund all or part of a succeeded payment.

    Raises:
        NotFoundError: unknown payment id
        InvalidTransitionError: payment is not in ``succeeded``
        InvalidAmountError: amount <= 0 or above the refundable remainder
    """
    async with locks.payments:
        row = await get_payment_row(db, payment_id)
        if row is None:
            raise NotFoundError(
                f"No payment found with ID: {payment_id}",
                details={"payment_id": payment_id}
            )

        current = PaymentStatus(row.status)
        check_transition(PAYMENT_TRANSITIONS, current, PaymentStatus.refunded, "payment")

        refunded = sum(refund.amount for refund in row.refunds)
        remaining = row.amount - refunded
        amount = remaining if request.amount is None else request.amount

        if amount <= 0 or amount > remaining:
            raise InvalidAmountError(
                "Refund amount must be positive and not exceed the refundable remainder",
                details={"amount": amount, "refundable": remaining}
            )

        now = utcnow()
        refund = RefundModel(
            id=f"re_{uuid.uuid4().hex[:24]}",
            payment_id=row.id,
            amount=amount,
            status="succeeded",
            reason=request.reason,
            created_at=now,
        )
        row.refunds.append(refund)
        if refunded + amount == row.amount:
            row.status = PaymentStatus.refunded.value
        row.updated_at = now

        await db.commit()

    logger.info(
        f"Refunded {amount} {row.currency} on payment {payment_id} "
        f"({refunded + amount}/{row.amount}), status={row.status}"
    )

    return to_payment(row)
