"""
Orders API Endpoints

Create, read, list and advance orders. Every route requires a bearer token.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from ..db.init_db import StoreLocks, get_db, get_store_locks
from ..models.orders import CreateOrderRequest, Order, OrderList, UpdateOrderStatusRequest
from ..services.auth_guard import require_bearer_token
from ..services.order_service import create_order, get_order, list_orders, update_order_status

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_bearer_token)])


@router.post("", status_code=201, response_model=Order)
async def create_order_endpoint(
    request: CreateOrderRequest,
    db: AsyncSession = Depends(get_db),
    locks: StoreLocks = Depends(get_store_locks),
) -> Order:
    """
    Create a pending order priced from the product catalog.

    Request Body:
        {
            "customerId": str,
            "items": [{"productId": str, "quantity": int}],  # non-empty
            "shipping": {"address": {...}}
        }

    Example:
        POST /api/v1/orders
    """
    logger.info(f"Create order: customer={request.customer_id}, items={len(request.items)}")

    return await create_order(db, locks, request)


@router.get("", response_model=OrderList)
async def list_orders_endpoint(
    limit: Optional[int] = Query(None, description="Page size (default 20, capped at 100)"),
    offset: Optional[int] = Query(None, description="Number of orders to skip"),
    db: AsyncSession = Depends(get_db),
    locks: StoreLocks = Depends(get_store_locks),
) -> OrderList:
    """
    List orders in creation order.

    Returns:
        {
            "data": List[Order],
            "pagination": {"limit": int, "offset": int, "total": int}
        }

    Example:
        GET /api/v1/orders?limit=50&offset=0
    """
    return await list_orders(db, locks, limit=limit, offset=offset)


@router.get("/{order_id}", response_model=Order)
async def get_order_endpoint(
    order_id: str,
    db: AsyncSession = Depends(get_db),
) -> Order:
    """Get a single order."""
    logger.debug(f"Get order: {order_id}")

    return await get_order(db, order_id)


@router.patch("/{order_id}", response_model=Order)
async def update_order_status_endpoint(
    order_id: str,
    request: UpdateOrderStatusRequest,
    db: AsyncSession = Depends(get_db),
    locks: StoreLocks = Depends(get_store_locks),
) -> Order:
    """
    Advance an order's status.

    Allowed: pending -> paid | cancelled, paid -> shipped | cancelled,
    shipped -> delivered.
    """
    logger.info(f"Update order status: {order_id} -> {request.status.value}")

    return await update_order_status(db, locks, order_id, request.status)
