"""
Order Service

Creates, retrieves, lists and advances orders in the order book.

Business rules:
- Orders need at least one line item
- Totals are priced from the product catalog at creation and frozen
- Customer contact details are copied from the customer registry
- Status follows ORDER_TRANSITIONS; nothing else mutates an order
"""
import json
import uuid
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ..db.init_db import StoreLocks
from ..db.models import OrderModel
from ..exceptions import EmptyItemsError, InvalidRequestError, NotFoundError
from ..mocks.customers import get_customer
from ..models.common import MAX_MINOR_UNITS, OffsetPagination, check_transition, format_timestamp, utcnow
from ..models.orders import (
    ORDER_TRANSITIONS,
    CreateOrderRequest,
    Order,
    OrderItemRequest,
    OrderList,
    OrderStatus,
)
from .pagination import offset_window
from .product_catalog import lookup_product

logger = logging.getLogger(__name__)


# ============================================================================
# Pricing
# ============================================================================

def price_items(items: List[OrderItemRequest]) -> Tuple[List[Dict[str, Any]], int, str]:
    """
    Resolve line items against the catalog.

    Returns:
        (priced line items, subtotal in minor units, currency)

    Raises:
        EmptyItemsError: no items
        InvalidRequestError: unknown product, quantity < 1, mixed currencies
    """
    if not items:
        raise EmptyItemsError()

    priced: List[Dict[str, Any]] = []
    subtotal = 0
    currency: Optional[str] = None

    for index, item in enumerate(items):
        if item.quantity < 1:
            raise InvalidRequestError(
                "Item quantity must be at least 1",
                details={"index": index, "quantity": item.quantity}
            )

        product = lookup_product(item.product_id)
        if product is None:
            raise InvalidRequestError(
                f"Unknown product: {item.product_id}",
                details={"index": index, "product_id": item.product_id}
            )

        if currency is None:
            currency = product.currency
        elif product.currency != currency:
            raise InvalidRequestError(
                "All items in an order must share one currency",
                details={"index": index, "currency": product.currency, "expected": currency}
            )

        priced.append({
            "product_id": product.product_id,
            "name": product.name,
            "quantity": item.quantity,
            "unit_amount": product.price_cents,
        })
        subtotal += item.quantity * product.price_cents
        if subtotal > MAX_MINOR_UNITS:
            raise InvalidRequestError(
                "Order total exceeds the largest supported amount",
                details={"index": index, "quantity": item.quantity, "max": MAX_MINOR_UNITS}
            )

    return priced, subtotal, currency


# ============================================================================
# Projection
# ============================================================================

def to_order(row: OrderModel) -> Order:
    """Project an order row into the public Order shape."""
    return Order(
        id=row.id,
        customer_id=row.customer_id,
        status=OrderStatus(row.status),
        customer={"email": row.customer_email, "name": row.customer_name},
        items=json.loads(row.items),
        totals={"subtotal": row.subtotal, "total": row.total, "currency": row.currency},
        shipping={"address": json.loads(row.shipping_address)},
        timestamps={
            "created_at": format_timestamp(row.created_at),
            "updated_at": format_timestamp(row.updated_at),
        },
    )


# ============================================================================
# Order Creation
# ============================================================================

async def create_order(db: AsyncSession, locks: StoreLocks, request: CreateOrderRequest) -> Order:
    """
    Create a pending order.

    Args:
        db: Database session
        locks: Per-store locks
        request: Validated request body

    Returns:
        Created Order

    Raises:
        EmptyItemsError: items is empty
        InvalidRequestError: unknown customer or product, bad quantity
    """
    items, subtotal, currency = price_items(request.items)

    customer = get_customer(request.customer_id)
    if customer is None:
        raise InvalidRequestError(
            f"Unknown customer: {request.customer_id}",
            details={"customer_id": request.customer_id}
        )

    order_id = f"order_{uuid.uuid4().hex[:16]}"
    now = utcnow()

    row = OrderModel(
        id=order_id,
        customer_id=customer.customer_id,
        customer_email=customer.email,
        customer_name=customer.name,
        status=OrderStatus.pending.value,
        items=json.dumps(items),
        subtotal=subtotal,
        total=subtotal,
        currency=currency,
        shipping_address=json.dumps(request.shipping.address.model_dump()),
        created_at=now,
        updated_at=now,
    )

    async with locks.orders:
        db.add(row)
        await db.commit()

    logger.info(
        f"Created order: {order_id}, customer={customer.customer_id}, "
        f"items={len(items)}, total={subtotal} {currency}"
    )

    return to_order(row)


# ============================================================================
# Order Retrieval
# ============================================================================

async def get_order_row(db: AsyncSession, order_id: str) -> Optional[OrderModel]:
    result = await db.execute(select(OrderModel).where(OrderModel.id == order_id))
    return result.scalar_one_or_none()


async def get_order(db: AsyncSession, order_id: str) -> Order:
    """
    Get order by id.

    Raises:
        NotFoundError: unknown order id
    """
    row = await get_order_row(db, order_id)
    if row is None:
        raise NotFoundError(
            f"No order found with ID: {order_id}",
            details={"order_id": order_id}
        )
    return to_order(row)


async def list_orders(
    db: AsyncSession,
    locks: StoreLocks,
    limit: Optional[int] = None,
    offset: Optional[int] = None
) -> OrderList:
    """
    List orders in creation order.

    Count and page are read under the order-book lock so they describe the
    same snapshot.
    """
    window = offset_window(limit, offset)

    async with locks.orders:
        total = (await db.execute(select(func.count()).select_from(OrderModel))).scalar_one()
        result = await db.execute(
            select(OrderModel)
            .order_by(OrderModel.created_at, OrderModel.id)
            .offset(window.offset)
            .limit(window.limit)
        )
        rows = result.scalars().all()

    logger.debug(f"Order list: limit={window.limit}, offset={window.offset}, total={total}")

    return OrderList(
        data=[to_order(row) for row in rows],
        pagination=OffsetPagination(limit=window.limit, offset=window.offset, total=total),
    )


# ============================================================================
# Status Transitions
# ============================================================================

async def update_order_status(
    db: AsyncSession,
    locks: StoreLocks,
    order_id: str,
    status: OrderStatus
) -> Order:
    """
    Move an order along its lifecycle.

    Raises:
        NotFoundError: unknown order id
        InvalidTransitionError: status not reachable from the current one
    """
    async with locks.orders:
        row = await get_order_row(db, order_id)
        if row is None:
            raise NotFoundError(
                f"No order found with ID: {order_id}",
                details={"order_id": order_id}
            )

        current = OrderStatus(row.status)
        check_transition(ORDER_TRANSITIONS, current, status, "order")

        row.status = status.value
        row.updated_at = utcnow()
        await db.commit()

    logger.info(f"Order {order_id} moved {current.value} -> {status.value}")

    return to_order(row)
