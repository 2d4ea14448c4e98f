"""
Payments API Endpoints

Create, read, list and refund payments. Every route requires a bearer token.

Card data:
- Clients send only an opaque card id (``pm_*``)
- Responses carry the vault's display-safe projection, never raw card numbers
"""
from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from ..db.init_db import StoreLocks, get_db, get_store_locks
from ..mocks.card_vault import CardVault, get_card_vault
from ..mocks.payment_processor import PaymentProcessor, get_payment_processor
from ..models.payments import CreatePaymentRequest, CreateRefundRequest, Payment, PaymentList, PaymentStatus
from ..services.auth_guard import require_bearer_token
from ..services.payment_service import (
    authorize_in_background,
    create_payment,
    get_payment,
    list_payments,
    refund_payment,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_bearer_token)])


@router.post("", status_code=201, response_model=Payment)
async def create_payment_endpoint(
    request: CreatePaymentRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    locks: StoreLocks = Depends(get_store_locks),
    vault: CardVault = Depends(get_card_vault),
    processor: PaymentProcessor = Depends(get_payment_processor),
) -> Payment:
    """
    Create a payment for an order.

    Request Body:
        {
            "amount": int,  # minor units, > 0
            "currency": str,  # e.g. "usd"
            "orderId": str,
            "paymentMethod": {"type": "card", "cardId": "pm_..."}
        }

    Returns:
        Payment with status "pending"; authorization runs after the response
        is sent and moves it to "succeeded" or "failed".

    Example:
        POST /api/v1/payments
    """
    logger.info(f"Create payment: order={request.order_id}, amount={request.amount} {request.currency}")

    payment = await create_payment(db, locks, request, vault)

    background_tasks.add_task(authorize_in_background, payment.id, processor, locks)

    return payment


@router.get("", response_model=PaymentList)
async def list_payments_endpoint(
    limit: Optional[int] = Query(None, description="Page size (default 20, capped at 100)"),
    offset: Optional[int] = Query(None, description="Number of payments to skip"),
    status: Optional[PaymentStatus] = Query(None, description="Exact status filter"),
    db: AsyncSession = Depends(get_db),
    locks: StoreLocks = Depends(get_store_locks),
) -> PaymentList:
    """
    List payments in creation order.

    Example:
        GET /api/v1/payments?limit=10&offset=0&status=succeeded
    """
    return await list_payments(db, locks, limit=limit, offset=offset, status=status)


@router.get("/{payment_id}", response_model=Payment)
async def get_payment_endpoint(
    payment_id: str,
    db: AsyncSession = Depends(get_db),
) -> Payment:
    """
    Get payment details including card projection, refunds and timestamps.

    Example:
        GET /api/v1/payments/pay_1Nz3Q82eZvKYlo2C9EbE7PKr
    """
    logger.debug(f"Get payment: {payment_id}")

    return await get_payment(db, payment_id)


@router.post("/{payment_id}/refunds", status_code=201, response_model=Payment)
async def refund_payment_endpoint(
    payment_id: str,
    request: Optional[CreateRefundRequest] = None,
    db: AsyncSession = Depends(get_db),
    locks: StoreLocks = Depends(get_store_locks),
) -> Payment:
    """
    Refund a succeeded payment, fully (no amount) or partially.

    Returns:
        The updated Payment with the new refund appended

    Example:
        POST /api/v1/payments/pay_.../refunds  {"amount": 500, "reason": "damaged"}
    """
    logger.info(f"Refund payment: {payment_id}")

    return await refund_payment(db, locks, payment_id, request or CreateRefundRequest())
